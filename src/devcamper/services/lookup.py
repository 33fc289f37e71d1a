from collections.abc import Sequence
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import LoaderOption

from devcamper.db.ids import parse_id
from devcamper.db.session import Base
from devcamper.exceptions import NotFoundError
from devcamper.repositories.resource import get_by_id

M = TypeVar("M", bound=Base)


async def get_or_raise(
    db: AsyncSession,
    model: type[M],
    raw_id: str,
    resource: str,
    options: Sequence[LoaderOption] = (),
) -> M:
    """Load a document by its path identifier.

    Raises BadIdentifierError for a malformed id and NotFoundError when no
    row has it.
    """
    document = await get_by_id(db, model, parse_id(raw_id), options)
    if document is None:
        raise NotFoundError.for_resource(resource, raw_id)
    return document
