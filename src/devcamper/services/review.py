"""Review business logic.

A user may review a bootcamp once; the unique constraint on
(bootcamp_id, user_id) enforces it. Every write recomputes the bootcamp's
averageRating.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devcamper.logging import get_logger
from devcamper.models import Bootcamp, Review, User
from devcamper.querying.builder import Expansion, ListQuery, run_list_query
from devcamper.querying.pagination import Paginated
from devcamper.repositories.bootcamp import refresh_average_rating
from devcamper.repositories.resource import add, apply_changes, remove
from devcamper.schemas.review import ReviewCreate, ReviewUpdate
from devcamper.services.lookup import get_or_raise

logger = get_logger(__name__)

LISTING_EXPANSION = Expansion("bootcamp", ("name", "description"))


async def list_reviews(
    db: AsyncSession, query: ListQuery, bootcamp_id: str | None = None
) -> Paginated[Review]:
    scope = []
    if bootcamp_id is not None:
        bootcamp = await get_or_raise(db, Bootcamp, bootcamp_id, "Bootcamp")
        scope.append(Review.bootcamp_id == bootcamp.id)
    return await run_list_query(db, Review, query, expand=LISTING_EXPANSION, scope=scope)


async def get_review(db: AsyncSession, review_id: str) -> Review:
    return await get_or_raise(
        db,
        Review,
        review_id,
        "Review",
        options=[selectinload(Review.bootcamp).load_only(Bootcamp.name, Bootcamp.description)],
    )


async def create_review(
    db: AsyncSession, bootcamp_id: str, data: ReviewCreate, author: User
) -> Review:
    bootcamp = await get_or_raise(db, Bootcamp, bootcamp_id, "Bootcamp")
    review = await add(db, Review(**data.model_dump(), bootcamp_id=bootcamp.id, user_id=author.id))
    average_rating = await refresh_average_rating(db, bootcamp.id)

    logger.info(
        "review_created",
        review_id=review.id,
        bootcamp_id=bootcamp.id,
        average_rating=average_rating,
    )
    return review


async def update_review(db: AsyncSession, review_id: str, data: ReviewUpdate) -> Review:
    review = await get_review(db, review_id)
    changes = data.model_dump(exclude_unset=True)
    await apply_changes(db, review, changes)
    if "rating" in changes:
        await refresh_average_rating(db, review.bootcamp_id)

    logger.info("review_updated", review_id=review.id, fields=sorted(changes))
    return review


async def delete_review(db: AsyncSession, review_id: str) -> None:
    review = await get_review(db, review_id)
    bootcamp_id = review.bootcamp_id
    await remove(db, review)
    await refresh_average_rating(db, bootcamp_id)

    logger.info("review_deleted", review_id=review_id, bootcamp_id=bootcamp_id)
