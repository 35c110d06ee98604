"""Service layer modules."""

from careerpath.services import (
    ai_service,
    identity_service,
    progress_service,
    roadmap_service,
    success_story_service,
)

__all__ = [
    "ai_service",
    "identity_service",
    "progress_service",
    "roadmap_service",
    "success_story_service",
]
