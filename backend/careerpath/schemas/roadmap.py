"""Roadmap schemas for API requests and responses."""

from datetime import datetime
from typing import Annotated

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

_url_adapter = TypeAdapter(AnyUrl)

NonEmptyStr = Annotated[str, Field(min_length=1)]
StepIndex = Annotated[int, Field(ge=0)]


class RoadmapStep(BaseModel):
    """One stage of a roadmap."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    bullets: list[NonEmptyStr] = Field(min_length=1)
    link: str | None = None

    @field_validator("link")
    @classmethod
    def validate_link(cls, value: str | None) -> str | None:
        # Validate only; keep the URL exactly as the author wrote it
        if value is None:
            return value
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("Step link must be a valid URL") from None
        return value


RoadmapSteps = TypeAdapter(list[RoadmapStep])
CompletedSteps = TypeAdapter(list[StepIndex])


class RoadmapCreate(BaseModel):
    """Create a new roadmap."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    year: int | None = Field(default=None, ge=1, le=4)
    ai_generated: bool = False
    steps: list[RoadmapStep] = Field(min_length=1)


class RoadmapUpdate(BaseModel):
    """Edit roadmap metadata. Steps are immutable."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    year: int | None = Field(default=None, ge=1, le=4)


class ProgressState(BaseModel):
    """Caller's progress attached to a roadmap on read."""

    liked: bool
    completed_steps: list[int]


class RoadmapResponse(BaseModel):
    """Roadmap response."""

    id: int
    title: str
    year: int | None
    ai_generated: bool
    created_by: str
    steps: list[RoadmapStep]
    created_at: datetime
    likes: int
    progress: ProgressState | None = None


class ProgressUpdate(BaseModel):
    """Partial update of one user's progress on one roadmap."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    roadmap_id: int = Field(alias="roadmapId", gt=0)
    liked: bool | None = None
    completed_steps: list[StepIndex] | None = None


class ProgressResponse(BaseModel):
    """Progress after reconciliation, with the roadmap's like counter."""

    user_id: str
    roadmap_id: int
    liked: bool
    completed_steps: list[int]
    likes: int


class RoadmapDataResponse(BaseModel):
    data: RoadmapResponse
    message: str | None = None


class RoadmapListResponse(BaseModel):
    data: list[RoadmapResponse]


class ProgressDataResponse(BaseModel):
    data: ProgressResponse
    message: str
