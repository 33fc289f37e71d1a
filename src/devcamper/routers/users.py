"""User endpoints. Registration is open; changing a user needs a token."""

from typing import Any

from fastapi import APIRouter

from devcamper.dependencies import DB, CurrentUser, ListQueryDep
from devcamper.schemas.pagination import DataResponse, ListResponse
from devcamper.schemas.user import UserCreate, UserRead, UserUpdate
from devcamper.services import user as service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=ListResponse)
async def list_users(db: DB, query: ListQueryDep) -> ListResponse:
    page = await service.list_users(db, query)
    return ListResponse.from_page(page, UserRead)


@router.get("/{user_id}", response_model=DataResponse[UserRead])
async def get_user(db: DB, user_id: str) -> DataResponse[UserRead]:
    user = await service.get_user(db, user_id)
    return DataResponse(data=UserRead.model_validate(user))


@router.post("", response_model=DataResponse[UserRead], status_code=201)
async def create_user(db: DB, body: UserCreate) -> DataResponse[UserRead]:
    user = await service.create_user(db, body)
    return DataResponse(data=UserRead.model_validate(user))


@router.put("/{user_id}", response_model=DataResponse[UserRead])
async def update_user(
    db: DB, caller: CurrentUser, user_id: str, body: UserUpdate
) -> DataResponse[UserRead]:
    user = await service.update_user(db, user_id, body)
    return DataResponse(data=UserRead.model_validate(user))


@router.delete("/{user_id}", response_model=DataResponse[dict[str, Any]])
async def delete_user(db: DB, caller: CurrentUser, user_id: str) -> DataResponse[dict[str, Any]]:
    await service.delete_user(db, user_id)
    return DataResponse(data={})
