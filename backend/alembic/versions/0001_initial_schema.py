"""Initial schema: roadmaps, roadmap_progress, success_stories

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "roadmaps",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("ai_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("steps", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("year IS NULL OR (year BETWEEN 1 AND 4)", name="ck_roadmaps_year"),
        sa.CheckConstraint("likes >= 0", name="ck_roadmaps_likes_non_negative"),
    )
    op.create_index("ix_roadmaps_created_by", "roadmaps", ["created_by"])

    # Composite primary key: one progress row per (user, roadmap)
    op.create_table(
        "roadmap_progress",
        sa.Column("user_id", sa.String(), primary_key=True),
        sa.Column("roadmap_id", sa.Integer(), sa.ForeignKey("roadmaps.id"), primary_key=True),
        sa.Column("liked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_steps", sa.Text(), nullable=False, server_default="[]"),
    )

    op.create_table(
        "success_stories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("post", sa.String(), nullable=False),
        sa.Column("batch", sa.Integer(), nullable=False),
        sa.Column("followed_roadmap", sa.String(), nullable=False),
        sa.Column("connect_link", sa.String(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("success_stories")
    op.drop_table("roadmap_progress")
    op.drop_index("ix_roadmaps_created_by", table_name="roadmaps")
    op.drop_table("roadmaps")
