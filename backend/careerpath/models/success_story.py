"""Success story model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from careerpath.core.database import Base


class SuccessStory(Base):
    """Alumni success story."""

    __tablename__ = "success_stories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String)
    post: Mapped[str] = mapped_column(String)
    batch: Mapped[int] = mapped_column(Integer)
    followed_roadmap: Mapped[str] = mapped_column(String)  # roadmap title, not a foreign key
    connect_link: Mapped[str] = mapped_column(String)
    image_url: Mapped[str | None] = mapped_column(Text, default=None)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
