"""initial schema, teampulse : équipes + vibe check

Revision ID: 001_initial
Create Date: 03/03/2025
"""
from alembic import op
import sqlalchemy as sa

revision = '001_initial'
down_revision = None


def upgrade() -> None:
    op.create_table("teams",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("owner_id", sa.String, nullable=False),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("slug", sa.String, nullable=False, unique=True),
        sa.Column("expected_team_size", sa.Integer, nullable=True),
        sa.Column("timezone", sa.String, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_teams_id", "teams", ["id"])
    op.create_index("ix_teams_owner_id", "teams", ["owner_id"])

    op.create_table("vibe_submissions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("team_id", sa.Integer, sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("participant_id", sa.String, nullable=False),
        sa.Column("vibe_score", sa.Integer, nullable=False),
        sa.Column("comment", sa.String, nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("vibe_score BETWEEN 1 AND 5", name="ck_vibe_score_range"),
    )
    op.create_index("ix_vibe_submissions_id", "vibe_submissions", ["id"])
    op.create_index("ix_vibe_submissions_team_id", "vibe_submissions", ["team_id"])
    op.create_index("ix_vibe_submissions_participant_id", "vibe_submissions", ["participant_id"])
    op.create_index("ix_vibe_submissions_submitted_at", "vibe_submissions", ["submitted_at"])


def downgrade() -> None:
    op.drop_table("vibe_submissions")
    op.drop_table("teams")
