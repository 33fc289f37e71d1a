"""Bootcamp business logic.

Geocodes addresses on create, keeps slugs in sync with names, cascades
deletes to courses and reviews, and answers radius lookups.
"""

import math
import re
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.exceptions import NotFoundError, ValidationFailedError
from devcamper.geo import CenterSphere, radius_for_distance
from devcamper.geocoder import Geocoder, GeoLocation
from devcamper.logging import get_logger
from devcamper.models import Bootcamp, User
from devcamper.querying.builder import Expansion, ListQuery, run_list_query
from devcamper.querying.pagination import Paginated
from devcamper.repositories.bootcamp import delete_children, list_in_bounding_box
from devcamper.repositories.resource import add, apply_changes, remove
from devcamper.schemas.bootcamp import BootcampCreate, BootcampUpdate
from devcamper.services.lookup import get_or_raise

logger = get_logger(__name__)

LISTING_EXPANSION = Expansion("courses")


@dataclass
class RadiusMatch:
    sphere: CenterSphere
    bootcamps: list[Bootcamp]


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _apply_location(bootcamp: Bootcamp, location: GeoLocation | None) -> None:
    bootcamp.longitude = location.longitude if location else None
    bootcamp.latitude = location.latitude if location else None
    bootcamp.formatted_address = location.formatted_address if location else None
    bootcamp.street = location.street if location else None
    bootcamp.city = location.city if location else None
    bootcamp.state = location.state if location else None
    bootcamp.zipcode = location.zipcode if location else None
    bootcamp.country = location.country if location else None


async def list_bootcamps(db: AsyncSession, query: ListQuery) -> Paginated[Bootcamp]:
    return await run_list_query(db, Bootcamp, query, expand=LISTING_EXPANSION)


async def get_bootcamp(db: AsyncSession, bootcamp_id: str) -> Bootcamp:
    return await get_or_raise(db, Bootcamp, bootcamp_id, "Bootcamp")


async def create_bootcamp(
    db: AsyncSession, geocoder: Geocoder, data: BootcampCreate, owner: User
) -> Bootcamp:
    """Insert a bootcamp owned by ``owner``, geocoding its address."""
    locations = await geocoder.geocode(data.address)
    if not locations:
        logger.warning("address_not_geocoded", address=data.address)

    bootcamp = Bootcamp(
        **data.model_dump(),
        slug=slugify(data.name),
        user_id=owner.id,
        average_rating=None,
        average_cost=None,
    )
    _apply_location(bootcamp, locations[0] if locations else None)
    await add(db, bootcamp)

    logger.info("bootcamp_created", bootcamp_id=bootcamp.id, user_id=owner.id)
    return bootcamp


async def update_bootcamp(db: AsyncSession, bootcamp_id: str, data: BootcampUpdate) -> Bootcamp:
    bootcamp = await get_bootcamp(db, bootcamp_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name"):
        changes["slug"] = slugify(changes["name"])
    await apply_changes(db, bootcamp, changes)

    logger.info("bootcamp_updated", bootcamp_id=bootcamp.id, fields=sorted(changes))
    return bootcamp


async def delete_bootcamp(db: AsyncSession, bootcamp_id: str) -> None:
    bootcamp = await get_bootcamp(db, bootcamp_id)
    courses, reviews = await delete_children(db, bootcamp.id)
    await remove(db, bootcamp)

    logger.info("bootcamp_deleted", bootcamp_id=bootcamp.id, courses=courses, reviews=reviews)


async def bootcamps_within_radius(
    db: AsyncSession, geocoder: Geocoder, zipcode: str, distance: float
) -> RadiusMatch:
    """Find bootcamps within ``distance`` km of the first geocoding match for ``zipcode``."""
    if not math.isfinite(distance) or distance < 0:
        raise ValidationFailedError("distance must be a non-negative number")

    locations = await geocoder.geocode(zipcode)
    if not locations:
        raise NotFoundError(f"No location found for zipcode: {zipcode}")
    origin = locations[0]

    sphere = CenterSphere(
        longitude=origin.longitude,
        latitude=origin.latitude,
        radius=radius_for_distance(distance),
    )
    candidates = await list_in_bounding_box(db, sphere.bounding_box())
    bootcamps = [
        bootcamp
        for bootcamp in candidates
        if bootcamp.longitude is not None
        and bootcamp.latitude is not None
        and sphere.contains(bootcamp.longitude, bootcamp.latitude)
    ]
    return RadiusMatch(sphere=sphere, bootcamps=bootcamps)
