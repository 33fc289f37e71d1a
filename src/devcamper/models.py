"""SQLAlchemy models.

Every model inherits from Base so Alembic autogenerate and the test fixtures
see it. ``__field_aliases__`` lists extra public names the list-query builder
accepts for filtering and sorting.
"""

from datetime import UTC, datetime
from typing import Any, ClassVar

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from devcamper.db.ids import ID_LENGTH, new_id
from devcamper.db.session import Base
from devcamper.db.types import CommaSeparatedList


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True)
    role: Mapped[str] = mapped_column(String(20), default="user")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class Bootcamp(Base):
    __tablename__ = "bootcamps"
    __table_args__ = (
        CheckConstraint(
            "average_rating IS NULL OR (average_rating >= 1 AND average_rating <= 10)",
            name="average_rating_range",
        ),
        Index("ix_bootcamps_latitude_longitude", "latitude", "longitude"),
    )
    __field_aliases__: ClassVar[dict[str, str]] = {
        "user": "user_id",
        "location.longitude": "longitude",
        "location.latitude": "latitude",
        "location.formattedAddress": "formatted_address",
        "location.street": "street",
        "location.city": "city",
        "location.state": "state",
        "location.zipcode": "zipcode",
        "location.country": "country",
    }

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(50), unique=True)
    slug: Mapped[str] = mapped_column(String(60))
    description: Mapped[str] = mapped_column(String(500))
    website: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(20))
    email: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(String(255))

    # Geocoded from address when the bootcamp is created
    longitude: Mapped[float | None]
    latitude: Mapped[float | None]
    formatted_address: Mapped[str | None] = mapped_column(String(255))
    street: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100), index=True)
    state: Mapped[str | None] = mapped_column(String(100))
    zipcode: Mapped[str | None] = mapped_column(String(20))
    country: Mapped[str | None] = mapped_column(String(100))

    careers: Mapped[list[str]] = mapped_column(CommaSeparatedList(200))
    average_rating: Mapped[float | None]
    average_cost: Mapped[int | None]
    photo: Mapped[str] = mapped_column(String(255), default="no-photo.jpg")
    housing: Mapped[bool] = mapped_column(default=False)
    job_assistance: Mapped[bool] = mapped_column(default=False)
    job_guarantee: Mapped[bool] = mapped_column(default=False)
    accept_gi: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )

    # Children are removed with bulk deletes in the service, never loaded for it
    courses: Mapped[list["Course"]] = relationship(
        back_populates="bootcamp", passive_deletes=True, order_by="Course.created_at"
    )
    reviews: Mapped[list["Review"]] = relationship(
        back_populates="bootcamp", passive_deletes=True
    )

    @property
    def location(self) -> dict[str, Any] | None:
        """GeoJSON point plus the address parts the geocoder returned."""
        if self.longitude is None or self.latitude is None:
            return None
        return {
            "type": "Point",
            "coordinates": [self.longitude, self.latitude],
            "formatted_address": self.formatted_address,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "country": self.country,
        }


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("tuition >= 0", name="tuition_non_negative"),
        CheckConstraint(
            "minimum_skill IN ('beginner', 'intermediate', 'advanced')",
            name="minimum_skill_level",
        ),
    )
    __field_aliases__: ClassVar[dict[str, str]] = {
        "bootcamp": "bootcamp_id",
        "user": "user_id",
    }

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text)
    weeks: Mapped[str] = mapped_column(String(20))
    tuition: Mapped[int]
    minimum_skill: Mapped[str] = mapped_column(String(20))
    scholarship_available: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    bootcamp_id: Mapped[str] = mapped_column(
        ForeignKey("bootcamps.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )

    bootcamp: Mapped["Bootcamp"] = relationship(back_populates="courses")


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("bootcamp_id", "user_id", name="uq_review_bootcamp_user"),
        CheckConstraint("rating >= 1 AND rating <= 10", name="rating_range"),
    )
    __field_aliases__: ClassVar[dict[str, str]] = {
        "bootcamp": "bootcamp_id",
        "user": "user_id",
    }

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(100))
    text: Mapped[str] = mapped_column(Text)
    rating: Mapped[int]
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    bootcamp_id: Mapped[str] = mapped_column(
        ForeignKey("bootcamps.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    bootcamp: Mapped["Bootcamp"] = relationship(back_populates="reviews")
