"""Schemas for the AI drafting endpoints."""

from pydantic import BaseModel, Field

from careerpath.schemas.roadmap import RoadmapStep


class StepsDraftRequest(BaseModel):
    """Ask the model to draft roadmap steps."""

    title: str = Field(min_length=1)
    year: int | None = Field(default=None, ge=1, le=4)


class StepsDraftResponse(BaseModel):
    data: list[RoadmapStep]


class HelperRequest(BaseModel):
    """Question about a specific roadmap."""

    roadmap_id: int = Field(gt=0)
    query: str = Field(min_length=1)


class HelperAnswer(BaseModel):
    answer: str


class HelperResponse(BaseModel):
    data: HelperAnswer
