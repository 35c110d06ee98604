"""Roadmap service for CRUD operations and stored-data parsing."""

import json
from collections.abc import Iterable

from pydantic import ValidationError
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.core.auth import RequestContext
from careerpath.core.config import get_settings
from careerpath.core.exceptions import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
    StoredDataError,
)
from careerpath.core.logging import get_logger
from careerpath.models.roadmap import Roadmap, RoadmapProgress
from careerpath.schemas.roadmap import (
    CompletedSteps,
    ProgressState,
    RoadmapCreate,
    RoadmapResponse,
    RoadmapStep,
    RoadmapSteps,
    RoadmapUpdate,
)

logger = get_logger(__name__)


# ============================================================================
# Stored Data Serialization
# ============================================================================


def _corrupt_column(column: str, error: Exception, **context: object) -> list:
    """Handle a serialized column that no longer matches its schema.

    With STRICT_STORED_DATA the request fails loudly; otherwise the column
    degrades to an empty list.
    """
    if get_settings().STRICT_STORED_DATA:
        logger.error("Corrupt stored data", column=column, error=str(error), **context)
        raise StoredDataError(f"Stored {column} could not be parsed")

    logger.warning("Corrupt stored data, using empty list", column=column, error=str(error), **context)
    return []


def parse_steps(raw: str | None, *, roadmap_id: int | None = None) -> list[RoadmapStep]:
    """Parse the stored steps column into Step models."""
    if raw is None:
        return _corrupt_column("steps", ValueError("steps is null"), roadmap_id=roadmap_id)
    try:
        return RoadmapSteps.validate_json(raw)
    except ValidationError as e:
        return _corrupt_column("steps", e, roadmap_id=roadmap_id)


def dump_steps(steps: list[RoadmapStep]) -> str:
    return RoadmapSteps.dump_json(steps, exclude_none=True).decode()


def normalize_completed_steps(indices: Iterable[int]) -> list[int]:
    """Completed steps are a set: drop duplicates and sort."""
    return sorted(set(indices))


def parse_completed_steps(
    raw: str | None, *, user_id: str | None = None, roadmap_id: int | None = None
) -> list[int]:
    """Parse the stored completed_steps column."""
    if raw is None:
        return _corrupt_column(
            "completed_steps", ValueError("completed_steps is null"), user_id=user_id, roadmap_id=roadmap_id
        )
    try:
        return normalize_completed_steps(CompletedSteps.validate_json(raw))
    except ValidationError as e:
        return _corrupt_column("completed_steps", e, user_id=user_id, roadmap_id=roadmap_id)


def dump_completed_steps(indices: Iterable[int]) -> str:
    return json.dumps(normalize_completed_steps(indices))


def to_response(roadmap: Roadmap, progress: RoadmapProgress | None = None) -> RoadmapResponse:
    """Build the API representation of a roadmap and, optionally, one user's progress."""
    state = None
    if progress is not None:
        state = ProgressState(
            liked=progress.liked,
            completed_steps=parse_completed_steps(
                progress.completed_steps, user_id=progress.user_id, roadmap_id=roadmap.id
            ),
        )
    return RoadmapResponse(
        id=roadmap.id,
        title=roadmap.title,
        year=roadmap.year,
        ai_generated=roadmap.ai_generated,
        created_by=roadmap.created_by,
        steps=parse_steps(roadmap.steps, roadmap_id=roadmap.id),
        created_at=roadmap.created_at,
        likes=roadmap.likes,
        progress=state,
    )


# ============================================================================
# Read Path
# ============================================================================


async def get_roadmap_or_404(db: AsyncSession, roadmap_id: int) -> Roadmap:
    roadmap = await db.get(Roadmap, roadmap_id)
    if not roadmap:
        raise NotFoundError("Roadmap not found")
    return roadmap


async def get_progress(db: AsyncSession, user_id: str, roadmap_id: int) -> RoadmapProgress | None:
    result = await db.execute(
        select(RoadmapProgress).where(
            RoadmapProgress.user_id == user_id,
            RoadmapProgress.roadmap_id == roadmap_id,
        )
    )
    return result.scalar_one_or_none()


async def list_roadmaps(
    db: AsyncSession,
    user_id: str | None = None,
    created_by: str | None = None,
) -> list[RoadmapResponse]:
    """List roadmaps, newest first.

    Args:
        db: Database session
        user_id: When given, attach this user's progress to each roadmap
        created_by: When given, only roadmaps owned by this user

    Returns:
        Roadmaps with parsed steps
    """
    stmt = select(Roadmap).order_by(Roadmap.created_at.desc(), Roadmap.id.desc())
    if created_by is not None:
        stmt = stmt.where(Roadmap.created_by == created_by)
    roadmaps = (await db.execute(stmt)).scalars().all()

    # One query for all of the user's progress rows
    progress_by_roadmap: dict[int, RoadmapProgress] = {}
    if user_id:
        rows = await db.execute(select(RoadmapProgress).where(RoadmapProgress.user_id == user_id))
        progress_by_roadmap = {p.roadmap_id: p for p in rows.scalars().all()}

    return [to_response(r, progress_by_roadmap.get(r.id)) for r in roadmaps]


async def get_roadmap(
    db: AsyncSession,
    roadmap_id: int,
    user_id: str | None = None,
) -> RoadmapResponse:
    """Get one roadmap, with the user's progress when ``user_id`` is given.

    Raises:
        NotFoundError: Roadmap does not exist
    """
    roadmap = await get_roadmap_or_404(db, roadmap_id)
    progress = await get_progress(db, user_id, roadmap_id) if user_id else None
    return to_response(roadmap, progress)


# ============================================================================
# Write Path
# ============================================================================


async def create_roadmap(
    db: AsyncSession,
    ctx: RequestContext,
    data: RoadmapCreate,
) -> RoadmapResponse:
    """Create a roadmap owned by the caller.

    Note: This function commits the transaction.
    """
    roadmap = Roadmap(
        title=data.title,
        year=data.year,
        ai_generated=data.ai_generated,
        created_by=ctx.user_id,
        steps=dump_steps(data.steps),
        likes=0,
    )
    db.add(roadmap)
    await db.commit()
    await db.refresh(roadmap)

    logger.info(
        "Roadmap created",
        roadmap_id=roadmap.id,
        created_by=ctx.user_id,
        step_count=len(data.steps),
        ai_generated=data.ai_generated,
    )
    return to_response(roadmap)


def _ensure_owner_or_admin(ctx: RequestContext, roadmap: Roadmap, action: str) -> None:
    if not ctx.is_admin and roadmap.created_by != ctx.user_id:
        raise PermissionDeniedError(f"Forbidden: Only the creator or admin can {action} this roadmap")


async def update_roadmap(
    db: AsyncSession,
    ctx: RequestContext,
    roadmap_id: int,
    data: RoadmapUpdate,
) -> RoadmapResponse:
    """Update roadmap title/year.

    Note: This function commits the transaction.
    """
    if data.title is None and data.year is None:
        raise InvalidRequestError("At least one of title or year must be provided")

    roadmap = await get_roadmap_or_404(db, roadmap_id)
    _ensure_owner_or_admin(ctx, roadmap, "update")

    if data.title is not None:
        roadmap.title = data.title
    if data.year is not None:
        roadmap.year = data.year

    await db.commit()
    await db.refresh(roadmap)

    logger.info("Roadmap updated", roadmap_id=roadmap_id, user_id=ctx.user_id)
    return to_response(roadmap)


async def delete_roadmap(db: AsyncSession, ctx: RequestContext, roadmap_id: int) -> None:
    """Delete a roadmap and handle its progress rows per ROADMAP_DELETE_POLICY.

    - ``cascade``: progress rows are deleted in the same transaction
    - ``reject``: deletion fails with ConflictError while progress rows exist

    Note: This function commits the transaction.
    """
    roadmap = await get_roadmap_or_404(db, roadmap_id)
    _ensure_owner_or_admin(ctx, roadmap, "delete")

    progress_count = await db.scalar(
        select(func.count()).select_from(RoadmapProgress).where(RoadmapProgress.roadmap_id == roadmap_id)
    )
    policy = get_settings().ROADMAP_DELETE_POLICY
    if progress_count and policy == "reject":
        raise ConflictError("Roadmap has progress records and cannot be deleted")

    try:
        if progress_count:
            await db.execute(delete(RoadmapProgress).where(RoadmapProgress.roadmap_id == roadmap_id))
        await db.delete(roadmap)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise

    logger.info(
        "Roadmap deleted",
        roadmap_id=roadmap_id,
        user_id=ctx.user_id,
        removed_progress=progress_count or 0,
    )
