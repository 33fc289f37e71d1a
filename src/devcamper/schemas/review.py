from datetime import datetime

from pydantic import Field

from devcamper.schemas.base import ApiModel
from devcamper.schemas.bootcamp import BootcampSummary


class ReviewCreate(ApiModel):
    title: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1)
    rating: int = Field(ge=1, le=10)


class ReviewUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    text: str | None = Field(default=None, min_length=1)
    rating: int | None = Field(default=None, ge=1, le=10)


class ReviewRead(ApiModel):
    id: str
    title: str
    text: str
    rating: int
    bootcamp_id: str
    user_id: str
    created_at: datetime


class ReviewWithBootcamp(ReviewRead):
    bootcamp: BootcampSummary
