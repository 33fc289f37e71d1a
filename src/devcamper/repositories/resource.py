"""Data access shared by every resource.

Pure persistence helpers; no HTTP concerns and no not-found policy. Writes
flush immediately so constraint violations surface inside the request
handler rather than at commit.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from devcamper.db.session import Base

M = TypeVar("M", bound=Base)


async def get_by_id(
    db: AsyncSession,
    model: type[M],
    identifier: str,
    options: Sequence[LoaderOption] = (),
) -> M | None:
    """Load one row by primary key, always re-reading it from the database."""
    primary_key = inspect(model).primary_key[0]
    stmt = (
        select(model)
        .where(primary_key == identifier)
        .options(*options)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def add(db: AsyncSession, document: M) -> M:
    db.add(document)
    await db.flush()
    return document


async def apply_changes(db: AsyncSession, document: M, changes: Mapping[str, Any]) -> M:
    for key, value in changes.items():
        setattr(document, key, value)
    await db.flush()
    return document


async def remove(db: AsyncSession, document: Base) -> None:
    await db.delete(document)
    await db.flush()
