"""Query-string filter parsing.

Turns list-endpoint query parameters into typed conditions:

    ?averageCost[lte]=10000        -> Condition("averageCost", LTE, ("10000",))
    ?careers[in]=UI/UX,Business    -> Condition("careers", IN, ("UI/UX", "Business"))
    ?housing=true                  -> Condition("housing", EQ, ("true",))

Field names are left unresolved here; the builder maps them onto model
columns and coerces the values.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from devcamper.exceptions import ValidationFailedError

RESERVED_PARAMS = frozenset({"select", "sort", "limit", "page"})

# field, or field[op]; "$" before op is tolerated so "$gt" and "gt" are the same operator
_PARAM_KEY = re.compile(r"^(?P<field>[A-Za-z_][\w.]*)(?:\[\$?(?P<op>[A-Za-z]+)\])?$")


class Operator(StrEnum):
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"


ORDERING_OPERATORS = frozenset({Operator.GT, Operator.GTE, Operator.LT, Operator.LTE})


@dataclass(frozen=True)
class Condition:
    field: str
    operator: Operator
    values: tuple[str, ...]

    @property
    def value(self) -> str:
        return self.values[-1]


def _parse_operator(raw: str | None) -> Operator:
    if raw is None:
        return Operator.EQ
    try:
        return Operator(raw.lower())
    except ValueError:
        raise ValidationFailedError(f"Unsupported filter operator: {raw}") from None


def parse_filters(params: Iterable[tuple[str, str]]) -> list[Condition]:
    """Parse every non-reserved parameter into a Condition.

    Parameters repeated with the same field and operator are merged. A repeated
    bare ``field=value`` becomes a membership test; a repeated ordering
    comparison keeps its last value.
    """
    grouped: dict[tuple[str, Operator], list[str]] = {}
    for key, raw_value in params:
        if key in RESERVED_PARAMS:
            continue
        match = _PARAM_KEY.match(key)
        if match is None:
            raise ValidationFailedError(f"Invalid filter parameter: {key}")
        operator = _parse_operator(match["op"])
        if operator is Operator.IN:
            values = [part.strip() for part in raw_value.split(",") if part.strip()]
        else:
            values = [raw_value]
        grouped.setdefault((match["field"], operator), []).extend(values)

    conditions = []
    for (field, operator), values in grouped.items():
        if operator is Operator.EQ and len(values) > 1:
            operator = Operator.IN
        elif operator in ORDERING_OPERATORS:
            values = values[-1:]
        conditions.append(Condition(field=field, operator=operator, values=tuple(values)))
    return conditions


def split_fields(raw: str | None) -> tuple[str, ...] | None:
    """Split a comma separated ``select``/``sort`` value; None when absent or blank."""
    if raw is None:
        return None
    fields = tuple(part.strip() for part in raw.split(",") if part.strip())
    return fields or None
