"""Roadmap and per-user progress models."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from careerpath.core.database import Base


class Roadmap(Base):
    """Ordered learning plan published by an alumni user."""

    __tablename__ = "roadmaps"
    __table_args__ = (
        CheckConstraint("year IS NULL OR (year BETWEEN 1 AND 4)", name="ck_roadmaps_year"),
        CheckConstraint("likes >= 0", name="ck_roadmaps_likes_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String)
    year: Mapped[int | None] = mapped_column(Integer, default=None)
    ai_generated: Mapped[bool] = mapped_column(Boolean, default=False)
    created_by: Mapped[str] = mapped_column(String, index=True)  # identity provider user id

    # JSON array of {title, bullets, link?}, validated on read
    steps: Mapped[str] = mapped_column(Text, default="[]")

    # Number of users whose progress row has liked = true
    likes: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class RoadmapProgress(Base):
    """One user's like flag and completed steps on one roadmap."""

    __tablename__ = "roadmap_progress"

    user_id: Mapped[str] = mapped_column(String, primary_key=True)
    roadmap_id: Mapped[int] = mapped_column(ForeignKey("roadmaps.id"), primary_key=True)

    liked: Mapped[bool] = mapped_column(Boolean, default=False)
    # JSON array of distinct, ascending step indices
    completed_steps: Mapped[str] = mapped_column(Text, default="[]")
