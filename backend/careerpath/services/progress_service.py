"""Roadmap progress reconciliation.

A student's progress row holds a like flag and a set of completed step
indices. The roadmap keeps an aggregate ``likes`` counter that must equal the
number of progress rows with ``liked = true``. Every progress update derives a
like delta from the previously stored flag, applies it as a relative
increment, and merges the provided fields into the progress row. Both writes
commit together.
"""

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.core.auth import RequestContext
from careerpath.core.exceptions import InvalidRequestError, PermissionDeniedError
from careerpath.core.logging import get_logger
from careerpath.models.roadmap import Roadmap, RoadmapProgress
from careerpath.schemas.roadmap import ProgressResponse, ProgressUpdate
from careerpath.services.roadmap_service import (
    dump_completed_steps,
    get_roadmap_or_404,
    parse_completed_steps,
)

logger = get_logger(__name__)


def like_delta(stored: bool | None, requested: bool | None) -> int:
    """Signed change to the like counter.

    Args:
        stored: Current flag, or None when the user has no progress row yet
        requested: Requested flag, or None to leave it unchanged

    Returns:
        -1, 0 or +1
    """
    if requested is None:
        return 0
    if stored is None:
        return 1 if requested else 0
    if stored == requested:
        return 0
    return 1 if requested else -1


async def update_progress(
    db: AsyncSession,
    ctx: RequestContext,
    data: ProgressUpdate,
) -> ProgressResponse:
    """Apply a partial progress update and keep the like counter consistent.

    Args:
        db: Database session
        ctx: Authenticated caller; must be the user being updated
        data: Requested change (liked and/or completed_steps)

    Returns:
        The merged progress row and the roadmap's like counter

    Raises:
        PermissionDeniedError: Caller is updating another user's progress
        InvalidRequestError: Neither liked nor completed_steps was provided
        NotFoundError: Roadmap does not exist

    Note: This function commits the transaction.
    """
    if data.user_id != ctx.user_id:
        raise PermissionDeniedError("Forbidden: Cannot update progress for another user")
    if data.liked is None and data.completed_steps is None:
        raise InvalidRequestError("At least one of liked or completed_steps must be provided")

    roadmap = await get_roadmap_or_404(db, data.roadmap_id)

    result = await db.execute(
        select(RoadmapProgress)
        .where(
            RoadmapProgress.user_id == data.user_id,
            RoadmapProgress.roadmap_id == data.roadmap_id,
        )
        .with_for_update()
    )
    progress = result.scalar_one_or_none()

    delta = like_delta(progress.liked if progress else None, data.liked)

    try:
        if delta:
            await db.execute(
                update(Roadmap)
                .where(Roadmap.id == data.roadmap_id)
                .values(likes=Roadmap.likes + delta)
                .execution_options(synchronize_session=False)
            )

        if progress is None:
            progress = RoadmapProgress(
                user_id=data.user_id,
                roadmap_id=data.roadmap_id,
                liked=bool(data.liked),
                completed_steps=dump_completed_steps(data.completed_steps or []),
            )
            db.add(progress)
        else:
            # Field-level merge: untouched fields keep their stored value
            if data.liked is not None:
                progress.liked = data.liked
            if data.completed_steps is not None:
                progress.completed_steps = dump_completed_steps(data.completed_steps)

        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "Progress update rolled back",
            user_id=data.user_id,
            roadmap_id=data.roadmap_id,
        )
        raise

    await db.refresh(roadmap, attribute_names=["likes"])

    logger.info(
        "Roadmap progress updated",
        user_id=data.user_id,
        roadmap_id=data.roadmap_id,
        like_delta=delta,
        likes=roadmap.likes,
    )
    return ProgressResponse(
        user_id=progress.user_id,
        roadmap_id=progress.roadmap_id,
        liked=progress.liked,
        completed_steps=parse_completed_steps(
            progress.completed_steps, user_id=progress.user_id, roadmap_id=progress.roadmap_id
        ),
        likes=roadmap.likes,
    )
