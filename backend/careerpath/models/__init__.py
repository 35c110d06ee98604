"""Database models."""

from careerpath.models.roadmap import Roadmap, RoadmapProgress
from careerpath.models.success_story import SuccessStory

__all__ = [
    "Roadmap",
    "RoadmapProgress",
    "SuccessStory",
]
