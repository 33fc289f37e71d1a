from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.logging import get_logger
from devcamper.models import User
from devcamper.querying.builder import ListQuery, run_list_query
from devcamper.querying.pagination import Paginated
from devcamper.repositories.bootcamp import delete_reviews_by_user, refresh_average_rating
from devcamper.repositories.resource import add, apply_changes, remove
from devcamper.schemas.user import UserCreate, UserUpdate
from devcamper.services.lookup import get_or_raise

logger = get_logger(__name__)


async def list_users(db: AsyncSession, query: ListQuery) -> Paginated[User]:
    return await run_list_query(db, User, query)


async def get_user(db: AsyncSession, user_id: str) -> User:
    return await get_or_raise(db, User, user_id, "User")


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    user = await add(db, User(**data.model_dump()))
    logger.info("user_created", user_id=user.id, role=user.role)
    return user


async def update_user(db: AsyncSession, user_id: str, data: UserUpdate) -> User:
    user = await get_user(db, user_id)
    changes = data.model_dump(exclude_unset=True)
    await apply_changes(db, user, changes)
    logger.info("user_updated", user_id=user.id, fields=sorted(changes))
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    """Delete a user and their reviews, re-rating every bootcamp they reviewed."""
    user = await get_user(db, user_id)
    reviewed = await delete_reviews_by_user(db, user.id)
    await remove(db, user)
    for bootcamp_id in reviewed:
        await refresh_average_rating(db, bootcamp_id)
    logger.info("user_deleted", user_id=user.id, reviews_removed_from=reviewed)
