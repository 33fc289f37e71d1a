"""Bootcamp request and response schemas."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from devcamper.schemas.base import ApiModel

Career = Literal[
    "Web Development",
    "Mobile Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
]

URL_PATTERN = r"^https?://[^\s/$.?#].[^\s]*$"


class BootcampCreate(ApiModel):
    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=URL_PATTERN)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    address: str = Field(min_length=1, max_length=255)
    careers: list[Career] = Field(min_length=1)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class BootcampUpdate(ApiModel):
    """Partial update; only the fields present in the body are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=URL_PATTERN)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    address: str | None = Field(default=None, min_length=1, max_length=255)
    careers: list[Career] | None = Field(default=None, min_length=1)
    photo: str | None = Field(default=None, max_length=255)
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None


class Location(ApiModel):
    type: Literal["Point"] = "Point"
    coordinates: list[float]
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


class BootcampSummary(ApiModel):
    """The bootcamp fields embedded in expanded course and review listings."""

    id: str
    name: str
    description: str


class BootcampRead(ApiModel):
    id: str
    name: str
    slug: str
    description: str
    website: str | None
    phone: str | None
    email: str | None
    address: str
    location: Location | None
    careers: list[str]
    average_rating: float | None
    average_cost: int | None
    photo: str
    housing: bool
    job_assistance: bool
    job_guarantee: bool
    accept_gi: bool
    user_id: str | None
    created_at: datetime


class RadiusResults(ApiModel):
    results: list[BootcampRead]


class RadiusResponse(ApiModel):
    success: Literal[True] = True
    count: int
    data: RadiusResults
