"""Bootcamp-specific queries: radius prefilter, derived averages, cascades."""

import math

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.geo import BoundingBox
from devcamper.models import Bootcamp, Course, Review


async def list_in_bounding_box(db: AsyncSession, box: BoundingBox) -> list[Bootcamp]:
    """Return geocoded bootcamps inside a lat/lng rectangle."""
    stmt = (
        select(Bootcamp)
        .where(
            Bootcamp.latitude.between(box.min_latitude, box.max_latitude),
            Bootcamp.longitude.between(box.min_longitude, box.max_longitude),
        )
        .order_by(Bootcamp.created_at.desc(), Bootcamp.id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def refresh_average_cost(db: AsyncSession, bootcamp_id: str) -> int | None:
    """Recompute averageCost: mean tuition rounded up to the next multiple of 10."""
    mean = (
        await db.execute(select(func.avg(Course.tuition)).where(Course.bootcamp_id == bootcamp_id))
    ).scalar_one()
    average_cost = None if mean is None else math.ceil(float(mean) / 10) * 10
    await db.execute(
        update(Bootcamp).where(Bootcamp.id == bootcamp_id).values(average_cost=average_cost)
    )
    return average_cost


async def refresh_average_rating(db: AsyncSession, bootcamp_id: str) -> float | None:
    mean = (
        await db.execute(select(func.avg(Review.rating)).where(Review.bootcamp_id == bootcamp_id))
    ).scalar_one()
    average_rating = None if mean is None else round(float(mean), 1)
    await db.execute(
        update(Bootcamp).where(Bootcamp.id == bootcamp_id).values(average_rating=average_rating)
    )
    return average_rating


async def delete_children(db: AsyncSession, bootcamp_id: str) -> tuple[int, int]:
    """Delete a bootcamp's courses and reviews; returns (courses, reviews) removed."""
    courses = await db.execute(delete(Course).where(Course.bootcamp_id == bootcamp_id))
    reviews = await db.execute(delete(Review).where(Review.bootcamp_id == bootcamp_id))
    return courses.rowcount, reviews.rowcount


async def delete_reviews_by_user(db: AsyncSession, user_id: str) -> list[str]:
    """Delete every review written by ``user_id``; returns the bootcamps they rated."""
    bootcamp_ids = (
        await db.execute(
            select(Review.bootcamp_id).where(Review.user_id == user_id).distinct()
        )
    ).scalars().all()
    await db.execute(delete(Review).where(Review.user_id == user_id))
    return list(bootcamp_ids)
