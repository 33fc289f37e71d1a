from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from devcamper.schemas.base import ApiModel

Role = Literal["user", "publisher"]


class UserCreate(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    role: Role = "user"


class UserUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    role: Role | None = None


class UserRead(ApiModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime
