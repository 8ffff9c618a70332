"""Engagement rollup input, likability scores and job log."""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_json = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "game_engagement_rollup",
        sa.Column("game_id", sa.String(64), nullable=False),
        sa.Column("genre", sa.String(32), nullable=False, server_default="other"),
        sa.Column("sessions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_seconds", sa.Float(), nullable=False, server_default="0"),
        sa.Column("restarts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("shares", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("abandons", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("favorites", sa.Integer(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("game_id"),
    )
    op.create_index("ix_game_engagement_rollup_genre", "game_engagement_rollup", ["genre"], unique=False)

    op.create_table(
        "likability_scores",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("game_id", sa.String(64), nullable=False),
        sa.Column("genre", sa.String(32), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("components", _json, nullable=False),
        sa.Column("sample_size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("computed_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_likability_scores_game_id", "likability_scores", ["game_id"], unique=True)
    op.create_index("ix_likability_scores_genre", "likability_scores", ["genre"], unique=False)
    op.create_index("ix_likability_scores_computed_at", "likability_scores", ["computed_at"], unique=False)

    op.create_table(
        "likability_jobs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("details", _json, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_likability_jobs_status", "likability_jobs", ["status"], unique=False)
    op.create_index("ix_likability_jobs_created_at", "likability_jobs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_likability_jobs_created_at", table_name="likability_jobs")
    op.drop_index("ix_likability_jobs_status", table_name="likability_jobs")
    op.drop_table("likability_jobs")
    op.drop_index("ix_likability_scores_computed_at", table_name="likability_scores")
    op.drop_index("ix_likability_scores_genre", table_name="likability_scores")
    op.drop_index("ix_likability_scores_game_id", table_name="likability_scores")
    op.drop_table("likability_scores")
    op.drop_index("ix_game_engagement_rollup_genre", table_name="game_engagement_rollup")
    op.drop_table("game_engagement_rollup")
