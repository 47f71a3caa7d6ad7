"""AthleteContest ORM — an athlete's result in one contest.

Invariants:
    - One row per (athlete, contest, discipline)
    - contest_date denormalized from Contest: window filtering without a join

Design Decisions:
    - Composite index (athlete_id, contest_discipline, contest_date): serves the
      Top-Score window query; pages are offset slices of that ordered scan
"""

from datetime import datetime

from sqlalchemy import String, Float, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from rankings.db.base import Base


class AthleteContest(Base):
    __tablename__ = "athlete_contests"
    __table_args__ = (
        Index(
            "ix_athlete_contests_window",
            "athlete_id", "contest_discipline", "contest_date",
        ),
    )

    athlete_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    contest_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    contest_discipline: Mapped[str] = mapped_column(
        String(40), primary_key=True,
    )
    points: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    contest_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
