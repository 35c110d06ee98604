"""Roadmap API routes."""

from fastapi import APIRouter, Query, status

from careerpath.api.deps import AlumniContext, AlumniOrAdminContext, CurrentContext, DBSession, StudentContext
from careerpath.core.logging import get_logger
from careerpath.schemas.roadmap import (
    ProgressDataResponse,
    ProgressUpdate,
    RoadmapCreate,
    RoadmapDataResponse,
    RoadmapListResponse,
    RoadmapUpdate,
)
from careerpath.services import progress_service, roadmap_service

logger = get_logger(__name__)
router = APIRouter(prefix="/roadmaps", tags=["roadmaps"])


@router.get("", response_model=RoadmapDataResponse | RoadmapListResponse)
async def get_roadmaps(
    db: DBSession,
    roadmap_id: int | None = Query(default=None, alias="id", gt=0),
    user_id: str | None = Query(default=None, alias="userId"),
) -> dict:
    """List roadmaps, or fetch one with ``?id=``.

    With ``?userId=`` each roadmap carries that user's progress.
    """
    if roadmap_id is not None:
        roadmap = await roadmap_service.get_roadmap(db, roadmap_id, user_id=user_id)
        return {"data": roadmap}

    roadmaps = await roadmap_service.list_roadmaps(db, user_id=user_id)
    return {"data": roadmaps}


@router.post("", response_model=RoadmapDataResponse, status_code=status.HTTP_201_CREATED)
async def create_roadmap(
    data: RoadmapCreate,
    db: DBSession,
    ctx: AlumniContext,
) -> dict:
    """Create a roadmap (alumni only)."""
    roadmap = await roadmap_service.create_roadmap(db, ctx, data)
    return {"data": roadmap, "message": "Roadmap created successfully"}


@router.put("", response_model=ProgressDataResponse)
async def update_progress(
    data: ProgressUpdate,
    db: DBSession,
    ctx: StudentContext,
) -> dict:
    """Like/unlike a roadmap and record completed steps (students only)."""
    progress = await progress_service.update_progress(db, ctx, data)
    return {"data": progress, "message": "Roadmap progress updated successfully"}


@router.patch("", response_model=RoadmapDataResponse)
async def update_roadmap(
    data: RoadmapUpdate,
    db: DBSession,
    ctx: CurrentContext,
    roadmap_id: int = Query(alias="id", gt=0),
) -> dict:
    """Edit a roadmap's title or year (creator or admin)."""
    roadmap = await roadmap_service.update_roadmap(db, ctx, roadmap_id, data)
    return {"data": roadmap, "message": "Roadmap updated successfully"}


@router.delete("")
async def delete_roadmap(
    db: DBSession,
    ctx: AlumniOrAdminContext,
    roadmap_id: int = Query(alias="id", gt=0),
) -> dict:
    """Delete a roadmap (creator or admin)."""
    await roadmap_service.delete_roadmap(db, ctx, roadmap_id)
    return {"message": "Roadmap deleted successfully"}
