"""Pydantic schemas."""

from careerpath.schemas.ai import (
    HelperAnswer,
    HelperRequest,
    HelperResponse,
    StepsDraftRequest,
    StepsDraftResponse,
)
from careerpath.schemas.roadmap import (
    ProgressDataResponse,
    ProgressResponse,
    ProgressState,
    ProgressUpdate,
    RoadmapCreate,
    RoadmapDataResponse,
    RoadmapListResponse,
    RoadmapResponse,
    RoadmapStep,
    RoadmapUpdate,
)
from careerpath.schemas.success_story import (
    SuccessStoryCreate,
    SuccessStoryDelete,
    SuccessStoryResponse,
)
from careerpath.schemas.user import UserCreate, UserListResponse, UserResponse

__all__ = [
    "RoadmapStep",
    "RoadmapCreate",
    "RoadmapUpdate",
    "RoadmapResponse",
    "RoadmapDataResponse",
    "RoadmapListResponse",
    "ProgressState",
    "ProgressUpdate",
    "ProgressResponse",
    "ProgressDataResponse",
    "SuccessStoryCreate",
    "SuccessStoryDelete",
    "SuccessStoryResponse",
    "UserCreate",
    "UserResponse",
    "UserListResponse",
    "StepsDraftRequest",
    "StepsDraftResponse",
    "HelperRequest",
    "HelperAnswer",
    "HelperResponse",
]
