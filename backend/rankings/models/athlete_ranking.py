"""AthleteRanking ORM — persisted ranking aggregate, one row per bucket.

Invariants:
    - Primary key (ranking_type, athlete_id, discipline, age_category, gender, year)
    - year 0 is the all-years bucket
    - contest_count only set for point_score rows
    - name/surname/country/birthdate are copies of the athlete at write time

Design Decisions:
    - Bucket index ends with points: leaderboard pages and rank lookups are
      range scans within one bucket
"""

from datetime import date, datetime

from sqlalchemy import String, Integer, Float, Date, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from rankings.db.base import Base


class AthleteRanking(Base):
    __tablename__ = "athlete_rankings"
    __table_args__ = (
        Index(
            "ix_athlete_rankings_bucket_points",
            "ranking_type", "discipline", "age_category", "gender", "year",
            "points",
        ),
    )

    ranking_type: Mapped[str] = mapped_column(String(20), primary_key=True)
    athlete_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    discipline: Mapped[str] = mapped_column(String(40), primary_key=True)
    age_category: Mapped[str] = mapped_column(String(20), primary_key=True)
    gender: Mapped[str] = mapped_column(String(20), primary_key=True)
    year: Mapped[int] = mapped_column(Integer, primary_key=True)

    points: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    contest_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    surname: Mapped[str] = mapped_column(String(200), nullable=False)
    country: Mapped[str | None] = mapped_column(String(3), nullable=True)
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)
    last_updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
