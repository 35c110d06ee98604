"""Identity provider user schemas."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from careerpath.core.auth import Role

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserCreate(BaseModel):
    """Create a user at the identity provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(min_length=1)
    last_name: str | None = None
    email: str
    password: str = Field(min_length=1)
    role: Role

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("Invalid email format")
        return value


class UserResponse(BaseModel):
    """User as reported by the identity provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    first_name: str | None
    last_name: str | None
    full_name: str | None
    role: Role
    created_at: int  # epoch milliseconds


class UserListResponse(BaseModel):
    users: list[UserResponse]
