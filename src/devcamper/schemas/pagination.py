"""Success envelopes shared by every endpoint.

DataResponse[T] : {"success": true, "data": T} for single documents
ListResponse    : {"success": true, "count", "pagination", "data": [...]} for lists

List items are plain dicts because a ``select`` projection can drop any
field the resource schema declares.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

from devcamper.querying.pagination import Paginated

T = TypeVar("T")


class PageLink(BaseModel):
    page: int
    limit: int


class DataResponse(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: T


class ListResponse(BaseModel):
    success: Literal[True] = True
    count: int
    pagination: dict[str, PageLink]
    data: list[dict[str, Any]]

    @classmethod
    def from_page(cls, page: Paginated[Any], schema: type[BaseModel]) -> "ListResponse":
        """Serialize each row through ``schema`` and apply the page's projection."""
        data = []
        for item in page.items:
            document = schema.model_validate(item).model_dump(mode="json", by_alias=True)
            if page.fields is not None:
                document = {key: value for key, value in document.items() if key in page.fields}
            data.append(document)
        return cls(count=len(data), pagination=page.links(), data=data)
