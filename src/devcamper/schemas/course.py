"""Course schemas, plus the bootcamp listing shape that embeds courses."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from devcamper.schemas.base import ApiModel
from devcamper.schemas.bootcamp import BootcampRead, BootcampSummary

SkillLevel = Literal["beginner", "intermediate", "advanced"]


class CourseCreate(ApiModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1)
    weeks: str = Field(min_length=1, max_length=20)
    tuition: int = Field(ge=0)
    minimum_skill: SkillLevel
    scholarship_available: bool = False


class CourseUpdate(ApiModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1)
    weeks: str | None = Field(default=None, min_length=1, max_length=20)
    tuition: int | None = Field(default=None, ge=0)
    minimum_skill: SkillLevel | None = None
    scholarship_available: bool | None = None


class CourseRead(ApiModel):
    id: str
    title: str
    description: str
    weeks: str
    tuition: int
    minimum_skill: str
    scholarship_available: bool
    bootcamp_id: str
    user_id: str | None
    created_at: datetime


class CourseWithBootcamp(CourseRead):
    bootcamp: BootcampSummary


class BootcampWithCourses(BootcampRead):
    courses: list[CourseRead]
