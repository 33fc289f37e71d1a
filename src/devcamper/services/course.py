"""Course business logic.

Every write recomputes the owning bootcamp's averageCost.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devcamper.logging import get_logger
from devcamper.models import Bootcamp, Course, User
from devcamper.querying.builder import Expansion, ListQuery, run_list_query
from devcamper.querying.pagination import Paginated
from devcamper.repositories.bootcamp import refresh_average_cost
from devcamper.repositories.resource import add, apply_changes, remove
from devcamper.schemas.course import CourseCreate, CourseUpdate
from devcamper.services.lookup import get_or_raise

logger = get_logger(__name__)

LISTING_EXPANSION = Expansion("bootcamp", ("name", "description"))


async def list_courses(
    db: AsyncSession, query: ListQuery, bootcamp_id: str | None = None
) -> Paginated[Course]:
    """List courses, optionally only those of one bootcamp."""
    scope = []
    if bootcamp_id is not None:
        bootcamp = await get_or_raise(db, Bootcamp, bootcamp_id, "Bootcamp")
        scope.append(Course.bootcamp_id == bootcamp.id)
    return await run_list_query(db, Course, query, expand=LISTING_EXPANSION, scope=scope)


async def get_course(db: AsyncSession, course_id: str) -> Course:
    return await get_or_raise(
        db,
        Course,
        course_id,
        "Course",
        options=[selectinload(Course.bootcamp).load_only(Bootcamp.name, Bootcamp.description)],
    )


async def create_course(
    db: AsyncSession, bootcamp_id: str, data: CourseCreate, owner: User
) -> Course:
    bootcamp = await get_or_raise(db, Bootcamp, bootcamp_id, "Bootcamp")
    course = await add(db, Course(**data.model_dump(), bootcamp_id=bootcamp.id, user_id=owner.id))
    average_cost = await refresh_average_cost(db, bootcamp.id)

    logger.info(
        "course_created", course_id=course.id, bootcamp_id=bootcamp.id, average_cost=average_cost
    )
    return course


async def update_course(db: AsyncSession, course_id: str, data: CourseUpdate) -> Course:
    course = await get_course(db, course_id)
    changes = data.model_dump(exclude_unset=True)
    await apply_changes(db, course, changes)
    if "tuition" in changes:
        await refresh_average_cost(db, course.bootcamp_id)

    logger.info("course_updated", course_id=course.id, fields=sorted(changes))
    return course


async def delete_course(db: AsyncSession, course_id: str) -> None:
    course = await get_course(db, course_id)
    bootcamp_id = course.bootcamp_id
    await remove(db, course)
    await refresh_average_cost(db, bootcamp_id)

    logger.info("course_deleted", course_id=course_id, bootcamp_id=bootcamp_id)
