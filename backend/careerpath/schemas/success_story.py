"""Success story schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class SuccessStoryCreate(BaseModel):
    """Create success story request."""

    model_config = ConfigDict(extra="forbid")

    name: str
    post: str
    batch: int
    followed_roadmap: str  # roadmap title
    connect_link: str
    image_url: str | None = None

    @field_validator("name", "post", "followed_roadmap", "connect_link")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Missing or empty required field")
        return value

    @field_validator("batch")
    @classmethod
    def check_batch(cls, value: int) -> int:
        if value < 1900 or value > datetime.now().year:
            raise ValueError("Invalid batch year")
        return value

    @field_validator("connect_link")
    @classmethod
    def check_connect_link(cls, value: str) -> str:
        if not value.startswith("mailto:"):
            raise ValueError("Connect link must be a valid mailto: link")
        return value

    @field_validator("image_url")
    @classmethod
    def blank_image_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class SuccessStoryDelete(BaseModel):
    """Delete success story request."""

    id: int = Field(gt=0)


class SuccessStoryResponse(BaseModel):
    """Success story response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    post: str
    batch: int
    followed_roadmap: str
    connect_link: str
    image_url: str | None
    created_at: datetime

    @field_serializer("created_at")
    def format_created_at(self, value: datetime) -> str:
        return value.strftime("%m/%d/%Y")
