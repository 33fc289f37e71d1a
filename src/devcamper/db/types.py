from typing import Any

from sqlalchemy import String
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator


class CommaSeparatedList(TypeDecorator[list[str]]):
    """A list of short strings stored as one comma-joined VARCHAR.

    Items must not contain commas. The query builder recognises this type and
    turns equality and ``in`` filters into membership tests.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return ",".join(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str] | None:
        if value is None:
            return None
        return [item for item in value.split(",") if item]
