"""Initial schema — athletes, contests, athlete_contests, athlete_rankings.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "athletes",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("surname", sa.String(200), nullable=False),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("age_category", sa.String(20), nullable=False),
        sa.Column("country", sa.String(3), nullable=True),
        sa.Column("birthdate", sa.Date, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_athletes"),
    )

    op.create_table(
        "contests",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("discipline", sa.String(40), nullable=False),
        sa.Column("contest_type", sa.String(40), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("name", sa.String(300), nullable=True),
        sa.PrimaryKeyConstraint("id", "discipline", name="pk_contests"),
    )

    op.create_table(
        "athlete_contests",
        sa.Column("athlete_id", sa.String(64), nullable=False),
        sa.Column("contest_id", sa.String(64), nullable=False),
        sa.Column("contest_discipline", sa.String(40), nullable=False),
        sa.Column("points", sa.Float, nullable=False, server_default="0"),
        sa.Column("contest_date", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint(
            "athlete_id", "contest_id", "contest_discipline",
            name="pk_athlete_contests",
        ),
    )
    op.create_index(
        "ix_athlete_contests_window", "athlete_contests",
        ["athlete_id", "contest_discipline", "contest_date"],
    )

    op.create_table(
        "athlete_rankings",
        sa.Column("ranking_type", sa.String(20), nullable=False),
        sa.Column("athlete_id", sa.String(64), nullable=False),
        sa.Column("discipline", sa.String(40), nullable=False),
        sa.Column("age_category", sa.String(20), nullable=False),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("points", sa.Float, nullable=False, server_default="0"),
        sa.Column("contest_count", sa.Integer, nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("surname", sa.String(200), nullable=False),
        sa.Column("country", sa.String(3), nullable=True),
        sa.Column("birthdate", sa.Date, nullable=True),
        sa.Column("last_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint(
            "ranking_type", "athlete_id", "discipline", "age_category",
            "gender", "year",
            name="pk_athlete_rankings",
        ),
    )
    op.create_index(
        "ix_athlete_rankings_bucket_points", "athlete_rankings",
        ["ranking_type", "discipline", "age_category", "gender", "year", "points"],
    )


def downgrade() -> None:
    op.drop_index("ix_athlete_rankings_bucket_points", "athlete_rankings")
    op.drop_table("athlete_rankings")
    op.drop_index("ix_athlete_contests_window", "athlete_contests")
    op.drop_table("athlete_contests")
    op.drop_table("contests")
    op.drop_table("athletes")
