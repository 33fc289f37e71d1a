"""Review endpoints, including the ones nested under a bootcamp."""

from typing import Any

from fastapi import APIRouter

from devcamper.dependencies import DB, CurrentUser, ListQueryDep
from devcamper.schemas.pagination import DataResponse, ListResponse
from devcamper.schemas.review import ReviewCreate, ReviewRead, ReviewUpdate, ReviewWithBootcamp
from devcamper.services import review as service

router = APIRouter(tags=["reviews"])


@router.get("/reviews", response_model=ListResponse)
async def list_reviews(db: DB, query: ListQueryDep) -> ListResponse:
    page = await service.list_reviews(db, query)
    return ListResponse.from_page(page, ReviewWithBootcamp)


@router.get("/bootcamps/{bootcamp_id}/reviews", response_model=ListResponse)
async def list_bootcamp_reviews(db: DB, query: ListQueryDep, bootcamp_id: str) -> ListResponse:
    page = await service.list_reviews(db, query, bootcamp_id=bootcamp_id)
    return ListResponse.from_page(page, ReviewWithBootcamp)


@router.get("/reviews/{review_id}", response_model=DataResponse[ReviewWithBootcamp])
async def get_review(db: DB, review_id: str) -> DataResponse[ReviewWithBootcamp]:
    review = await service.get_review(db, review_id)
    return DataResponse(data=ReviewWithBootcamp.model_validate(review))


@router.post(
    "/bootcamps/{bootcamp_id}/reviews",
    response_model=DataResponse[ReviewRead],
    status_code=201,
)
async def create_review(
    db: DB, user: CurrentUser, bootcamp_id: str, body: ReviewCreate
) -> DataResponse[ReviewRead]:
    review = await service.create_review(db, bootcamp_id, body, user)
    return DataResponse(data=ReviewRead.model_validate(review))


@router.put("/reviews/{review_id}", response_model=DataResponse[ReviewRead])
async def update_review(
    db: DB, user: CurrentUser, review_id: str, body: ReviewUpdate
) -> DataResponse[ReviewRead]:
    review = await service.update_review(db, review_id, body)
    return DataResponse(data=ReviewRead.model_validate(review))


@router.delete("/reviews/{review_id}", response_model=DataResponse[dict[str, Any]])
async def delete_review(db: DB, user: CurrentUser, review_id: str) -> DataResponse[dict[str, Any]]:
    await service.delete_review(db, review_id)
    return DataResponse(data={})
