"""Success story service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.core.exceptions import NotFoundError
from careerpath.core.logging import get_logger
from careerpath.models.success_story import SuccessStory
from careerpath.schemas.success_story import SuccessStoryCreate

logger = get_logger(__name__)


async def list_stories(db: AsyncSession) -> list[SuccessStory]:
    """List success stories, newest first."""
    result = await db.execute(
        select(SuccessStory).order_by(SuccessStory.created_at.desc(), SuccessStory.id.desc())
    )
    return list(result.scalars().all())


async def create_story(db: AsyncSession, data: SuccessStoryCreate) -> SuccessStory:
    """Create a success story.

    Note: This function commits the transaction.
    """
    story = SuccessStory(
        name=data.name,
        post=data.post,
        batch=data.batch,
        followed_roadmap=data.followed_roadmap,
        connect_link=data.connect_link,
        image_url=data.image_url,
    )
    db.add(story)
    await db.commit()
    await db.refresh(story)

    logger.info("Success story created", story_id=story.id, batch=story.batch)
    return story


async def delete_story(db: AsyncSession, story_id: int) -> None:
    """Delete a success story by ID.

    Raises:
        NotFoundError: Story does not exist

    Note: This function commits the transaction.
    """
    story = await db.get(SuccessStory, story_id)
    if not story:
        raise NotFoundError("Success story not found")

    await db.delete(story)
    await db.commit()
    logger.info("Success story deleted", story_id=story_id)
