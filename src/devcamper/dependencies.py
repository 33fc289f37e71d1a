"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import. Defined
here (not in main.py) to avoid circular imports when routers are registered.
"""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.auth import authenticate
from devcamper.config import settings
from devcamper.db.session import get_db
from devcamper.geocoder import Geocoder
from devcamper.models import User
from devcamper.querying.builder import ListQuery

DB = Annotated[AsyncSession, Depends(get_db)]


async def protect(db: DB, authorization: Annotated[str | None, Header()] = None) -> User:
    """Require a valid bearer token and return its user."""
    return await authenticate(db, authorization)


def get_geocoder(request: Request) -> Geocoder:
    """The geocoder created in the app lifespan."""
    geocoder: Geocoder = request.app.state.geocoder
    return geocoder


def list_query(request: Request) -> ListQuery:
    """Parse the raw query string of a list endpoint.

    Filters are open-ended (any column, with [gt]/[gte]/[lt]/[lte]/[in]), so
    they are read from the request instead of declared as Query parameters.
    """
    return ListQuery.from_params(
        request.query_params.multi_items(), default_limit=settings.default_page_limit
    )


CurrentUser = Annotated[User, Depends(protect)]
GeocoderDep = Annotated[Geocoder, Depends(get_geocoder)]
ListQueryDep = Annotated[ListQuery, Depends(list_query)]
