"""Generic list-query builder used by every list endpoint.

Steps for one request:

1. drop the reserved ``select``/``sort``/``limit``/``page`` keys and parse the
   rest into typed conditions (see filters.py)
2. resolve each condition onto a model column and coerce its values
3. eager-load the optional expansion (e.g. a course's bootcamp)
4. project onto ``select`` fields, order by ``sort`` (default ``-createdAt``)
5. count every matching row, then fetch the requested page

The count and the page are two separate statements; ``total`` may describe a
slightly different snapshot than ``items``.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from functools import cache
from typing import Any, TypeVar

from pydantic.alias_generators import to_camel
from sqlalchemy import ColumnElement, String, cast, func, inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, selectinload
from sqlalchemy.orm.interfaces import LoaderOption
from sqlalchemy.types import TypeEngine

from devcamper.db.session import Base
from devcamper.db.types import CommaSeparatedList
from devcamper.exceptions import ValidationFailedError
from devcamper.querying.filters import (
    ORDERING_OPERATORS,
    Condition,
    Operator,
    parse_filters,
    split_fields,
)
from devcamper.querying.pagination import (
    MAX_INTEGER,
    PageRequest,
    Paginated,
    parse_page_request,
)

M = TypeVar("M", bound=Base)

DEFAULT_SORT = ("-createdAt",)
DEFAULT_LIMIT = 15

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


@dataclass(frozen=True)
class Expansion:
    """Replace a relationship reference with the related rows.

    ``fields`` limits which columns of the related model are loaded; empty
    means all of them.
    """

    relationship: str
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ListQuery:
    conditions: tuple[Condition, ...] = ()
    select: tuple[str, ...] | None = None
    sort: tuple[str, ...] = DEFAULT_SORT
    page: PageRequest = field(default_factory=lambda: PageRequest(1, DEFAULT_LIMIT))

    @classmethod
    def from_params(
        cls, params: Iterable[tuple[str, str]], default_limit: int = DEFAULT_LIMIT
    ) -> "ListQuery":
        items = list(params)
        # reserved keys are single-valued; the last occurrence wins
        reserved = dict(items)
        return cls(
            conditions=tuple(parse_filters(items)),
            select=split_fields(reserved.get("select")),
            sort=split_fields(reserved.get("sort")) or DEFAULT_SORT,
            page=parse_page_request(reserved.get("page"), reserved.get("limit"), default_limit),
        )


@dataclass(frozen=True)
class _Field:
    attribute: InstrumentedAttribute[Any]
    public_name: str


@cache
def _field_index(model: type[Base]) -> dict[str, _Field]:
    """Every name a client may use for a column: snake_case, camelCase, aliases."""
    index: dict[str, _Field] = {}
    for column_attr in inspect(model).column_attrs:
        entry = _Field(getattr(model, column_attr.key), to_camel(column_attr.key))
        index[column_attr.key] = index[entry.public_name] = entry
    for alias, key in getattr(model, "__field_aliases__", {}).items():
        # dotted aliases address a part of a nested public object, e.g. location.city
        public_name = alias.split(".", 1)[0] if "." in alias else to_camel(key)
        index[alias] = _Field(getattr(model, key), public_name)
    return index


def resolve_field(model: type[Base], name: str) -> _Field:
    entry = _field_index(model).get(name)
    if entry is None:
        raise ValidationFailedError(f"Unknown field: {name}")
    return entry


def _column_type(attribute: InstrumentedAttribute[Any]) -> TypeEngine[Any]:
    return attribute.property.columns[0].type


def _coerce(attribute: InstrumentedAttribute[Any], name: str, raw: str) -> Any:
    python_type = _column_type(attribute).python_type
    try:
        if python_type is bool:
            lowered = raw.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(raw)
        if python_type is datetime:
            return datetime.fromisoformat(raw)
        if python_type is int:
            value = int(raw)
            if abs(value) > MAX_INTEGER:
                raise ValueError(raw)
            return value
        if python_type is float:
            return float(raw)
    except ValueError:
        raise ValidationFailedError(f"Invalid value for {name}: {raw}") from None
    return raw


def _criterion(model: type[Base], condition: Condition) -> ColumnElement[bool]:
    attribute = resolve_field(model, condition.field).attribute

    if isinstance(_column_type(attribute), CommaSeparatedList):
        if condition.operator in ORDERING_OPERATORS:
            raise ValidationFailedError(
                f"Operator {condition.operator} is not supported for list field {condition.field}"
            )
        # match any listed member against the comma-joined storage form
        padded = "," + cast(attribute, String) + ","
        return or_(*(padded.contains(f",{value},", autoescape=True) for value in condition.values))

    values = [_coerce(attribute, condition.field, raw) for raw in condition.values]
    match condition.operator:
        case Operator.EQ:
            return attribute == values[0]
        case Operator.GT:
            return attribute > values[0]
        case Operator.GTE:
            return attribute >= values[0]
        case Operator.LT:
            return attribute < values[0]
        case Operator.LTE:
            return attribute <= values[0]
        case Operator.IN:
            return attribute.in_(values)


def _order_by(model: type[Base], sort: Sequence[str]) -> list[ColumnElement[Any]]:
    clauses: list[ColumnElement[Any]] = []
    for key in sort:
        descending = key.startswith("-")
        attribute = resolve_field(model, key[1:] if descending else key).attribute
        clauses.append(attribute.desc() if descending else attribute.asc())
    # stable order across pages when sort keys tie
    for primary_key in inspect(model).primary_key:
        clauses.append(primary_key.asc())
    return clauses


def _projection(
    model: type[Base], select_fields: Sequence[str] | None, expand: Expansion | None
) -> frozenset[str] | None:
    if select_fields is None:
        return None
    public_names = {"id"}
    for name in select_fields:
        expanded = expand is not None and name == expand.relationship
        if expanded:
            public_names.add(name)
        entry = _field_index(model).get(name)
        if entry is not None:
            public_names.add(entry.public_name)
        elif not expanded:
            raise ValidationFailedError(f"Unknown field: {name}")
    return frozenset(public_names)


def _expansion_loader(model: type[Base], expand: Expansion) -> LoaderOption:
    relationship = inspect(model).relationships[expand.relationship]
    loader = selectinload(getattr(model, expand.relationship))
    if expand.fields:
        target = relationship.mapper.class_
        loader = loader.load_only(*(getattr(target, name) for name in expand.fields))
    return loader


async def run_list_query(
    db: AsyncSession,
    model: type[M],
    query: ListQuery,
    *,
    expand: Expansion | None = None,
    scope: Sequence[ColumnElement[bool]] = (),
) -> Paginated[M]:
    """Filter, project, sort and paginate ``model`` rows.

    ``scope`` adds fixed criteria that the client cannot override, e.g. the
    bootcamp id of a nested ``/bootcamps/{id}/courses`` route.
    """
    criteria = [*scope, *(_criterion(model, condition) for condition in query.conditions)]
    fields = _projection(model, query.select, expand)

    stmt = (
        select(model)
        .where(*criteria)
        .order_by(*_order_by(model, query.sort))
        .offset(query.page.offset)
        .limit(query.page.limit)
        # rows already held by the session are refreshed, never served stale
        .execution_options(populate_existing=True)
    )
    if expand is not None:
        stmt = stmt.options(_expansion_loader(model, expand))

    total = (await db.execute(select(func.count()).select_from(model).where(*criteria))).scalar_one()
    items = list((await db.execute(stmt)).scalars().all())

    return Paginated(
        items=items,
        total=total,
        page=query.page.page,
        limit=query.page.limit,
        fields=fields,
    )
