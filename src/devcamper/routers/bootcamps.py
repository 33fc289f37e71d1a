"""Bootcamp endpoints."""

from typing import Any

from fastapi import APIRouter

from devcamper.dependencies import DB, CurrentUser, GeocoderDep, ListQueryDep
from devcamper.schemas.bootcamp import (
    BootcampCreate,
    BootcampRead,
    BootcampUpdate,
    RadiusResponse,
    RadiusResults,
)
from devcamper.schemas.course import BootcampWithCourses
from devcamper.schemas.pagination import DataResponse, ListResponse
from devcamper.services import bootcamp as service

router = APIRouter(prefix="/bootcamps", tags=["bootcamps"])


@router.get("", response_model=ListResponse)
async def list_bootcamps(db: DB, query: ListQueryDep) -> ListResponse:
    """List bootcamps with their courses; supports select, sort, page, limit and filters."""
    page = await service.list_bootcamps(db, query)
    return ListResponse.from_page(page, BootcampWithCourses)


@router.get("/radius/{zipcode}/{distance}", response_model=RadiusResponse)
async def bootcamps_in_radius(
    db: DB, geocoder: GeocoderDep, zipcode: str, distance: float
) -> RadiusResponse:
    """Bootcamps within ``distance`` kilometres of ``zipcode``."""
    match = await service.bootcamps_within_radius(db, geocoder, zipcode, distance)
    results = [BootcampRead.model_validate(bootcamp) for bootcamp in match.bootcamps]
    return RadiusResponse(count=len(results), data=RadiusResults(results=results))


@router.get("/{bootcamp_id}", response_model=DataResponse[BootcampRead])
async def get_bootcamp(db: DB, bootcamp_id: str) -> DataResponse[BootcampRead]:
    bootcamp = await service.get_bootcamp(db, bootcamp_id)
    return DataResponse(data=BootcampRead.model_validate(bootcamp))


@router.post("", response_model=DataResponse[BootcampRead], status_code=201)
async def create_bootcamp(
    db: DB, geocoder: GeocoderDep, user: CurrentUser, body: BootcampCreate
) -> DataResponse[BootcampRead]:
    bootcamp = await service.create_bootcamp(db, geocoder, body, user)
    return DataResponse(data=BootcampRead.model_validate(bootcamp))


@router.put("/{bootcamp_id}", response_model=DataResponse[BootcampRead])
async def update_bootcamp(
    db: DB, user: CurrentUser, bootcamp_id: str, body: BootcampUpdate
) -> DataResponse[BootcampRead]:
    bootcamp = await service.update_bootcamp(db, bootcamp_id, body)
    return DataResponse(data=BootcampRead.model_validate(bootcamp))


@router.delete("/{bootcamp_id}", response_model=DataResponse[dict[str, Any]])
async def delete_bootcamp(db: DB, user: CurrentUser, bootcamp_id: str) -> DataResponse[dict[str, Any]]:
    await service.delete_bootcamp(db, bootcamp_id)
    return DataResponse(data={})
