"""Success story routes."""

from fastapi import APIRouter, status

from careerpath.api.deps import CurrentContext, DBSession
from careerpath.core.logging import get_logger
from careerpath.models.success_story import SuccessStory
from careerpath.schemas.success_story import (
    SuccessStoryCreate,
    SuccessStoryDelete,
    SuccessStoryResponse,
)
from careerpath.services import success_story_service

logger = get_logger(__name__)
router = APIRouter(prefix="/success-stories", tags=["success-stories"])


@router.get("", response_model=list[SuccessStoryResponse])
async def list_stories(db: DBSession) -> list[SuccessStory]:
    """List all success stories, newest first."""
    return await success_story_service.list_stories(db)


@router.post("", response_model=SuccessStoryResponse, status_code=status.HTTP_201_CREATED)
async def create_story(
    data: SuccessStoryCreate,
    db: DBSession,
    ctx: CurrentContext,
) -> SuccessStory:
    """Create a success story."""
    story = await success_story_service.create_story(db, data)
    logger.info("Success story submitted", story_id=story.id, user_id=ctx.user_id)
    return story


@router.delete("")
async def delete_story(
    data: SuccessStoryDelete,
    db: DBSession,
    ctx: CurrentContext,
) -> dict:
    """Delete a success story by ID."""
    await success_story_service.delete_story(db, data.id)
    return {"message": "Success story deleted successfully"}
