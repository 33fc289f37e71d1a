"""Page-number pagination shared by all list endpoints.

Paginated[T] is a plain dataclass for service-layer returns; the HTTP
envelope in devcamper.schemas.pagination is built from it in the routers.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from devcamper.exceptions import ValidationFailedError

T = TypeVar("T")

DEFAULT_PAGE = 1

# Largest value a BIGINT column or an OFFSET clause can bind
MAX_INTEGER = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(name: str, raw: str | None, default: int) -> int:
    # Absent or non-numeric falls back to the default; zero, negatives and
    # values past MAX_INTEGER are errors
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if value < 1:
        raise ValidationFailedError(f"{name} must be a positive integer")
    if value > MAX_INTEGER:
        raise ValidationFailedError(f"{name} is too large")
    return value


def parse_page_request(page: str | None, limit: str | None, default_limit: int) -> PageRequest:
    request = PageRequest(
        page=_positive_int("page", page, DEFAULT_PAGE),
        limit=_positive_int("limit", limit, default_limit),
    )
    if request.offset > MAX_INTEGER:
        raise ValidationFailedError("page is too large")
    return request


def pagination_links(page: int, limit: int, total: int) -> dict[str, dict[str, int]]:
    """Describe the neighbouring pages.

    ``next`` is present iff page * limit < total; ``previous`` iff
    (page - 1) * limit > 0.
    """
    links: dict[str, dict[str, int]] = {}
    if page * limit < total:
        links["next"] = {"page": page + 1, "limit": limit}
    if (page - 1) * limit > 0:
        links["previous"] = {"page": page - 1, "limit": limit}
    return links


@dataclass
class Paginated(Generic[T]):
    """One page of documents plus what the envelope needs to describe it.

    ``fields`` holds the public field names a ``select`` projected onto
    (always including ``id``), or None when every field is returned.
    """

    items: list[T]
    total: int
    page: int
    limit: int
    fields: frozenset[str] | None = None

    def links(self) -> dict[str, dict[str, int]]:
        return pagination_links(self.page, self.limit, self.total)
