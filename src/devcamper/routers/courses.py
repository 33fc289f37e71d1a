"""Course endpoints, including the ones nested under a bootcamp."""

from typing import Any

from fastapi import APIRouter

from devcamper.dependencies import DB, CurrentUser, ListQueryDep
from devcamper.schemas.course import CourseCreate, CourseRead, CourseUpdate, CourseWithBootcamp
from devcamper.schemas.pagination import DataResponse, ListResponse
from devcamper.services import course as service

router = APIRouter(tags=["courses"])


@router.get("/courses", response_model=ListResponse)
async def list_courses(db: DB, query: ListQueryDep) -> ListResponse:
    page = await service.list_courses(db, query)
    return ListResponse.from_page(page, CourseWithBootcamp)


@router.get("/bootcamps/{bootcamp_id}/courses", response_model=ListResponse)
async def list_bootcamp_courses(db: DB, query: ListQueryDep, bootcamp_id: str) -> ListResponse:
    page = await service.list_courses(db, query, bootcamp_id=bootcamp_id)
    return ListResponse.from_page(page, CourseWithBootcamp)


@router.get("/courses/{course_id}", response_model=DataResponse[CourseWithBootcamp])
async def get_course(db: DB, course_id: str) -> DataResponse[CourseWithBootcamp]:
    course = await service.get_course(db, course_id)
    return DataResponse(data=CourseWithBootcamp.model_validate(course))


@router.post(
    "/bootcamps/{bootcamp_id}/courses",
    response_model=DataResponse[CourseRead],
    status_code=201,
)
async def create_course(
    db: DB, user: CurrentUser, bootcamp_id: str, body: CourseCreate
) -> DataResponse[CourseRead]:
    course = await service.create_course(db, bootcamp_id, body, user)
    return DataResponse(data=CourseRead.model_validate(course))


@router.put("/courses/{course_id}", response_model=DataResponse[CourseRead])
async def update_course(
    db: DB, user: CurrentUser, course_id: str, body: CourseUpdate
) -> DataResponse[CourseRead]:
    course = await service.update_course(db, course_id, body)
    return DataResponse(data=CourseRead.model_validate(course))


@router.delete("/courses/{course_id}", response_model=DataResponse[dict[str, Any]])
async def delete_course(db: DB, user: CurrentUser, course_id: str) -> DataResponse[dict[str, Any]]:
    await service.delete_course(db, course_id)
    return DataResponse(data={})
