"""Ranking Schemas — Pydantic models for leaderboard reads and scoring events.

Invariants:
    - Enum fields accept only known dimension values
    - year 0 addresses the all-years bucket
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from rankings.core.domain_types import (
    AgeCategory, Discipline, Gender, RankingType, RankingsUpdateReason,
)
from rankings.core.entities import AthleteRanking, Page, RankingCursor


class ScoringEvent(BaseModel):
    """An athlete's result changed in one contest."""
    athlete_id: str = Field(min_length=1, max_length=64)
    discipline: Discipline
    year: int = Field(ge=0)
    points_to_add: float
    reason: RankingsUpdateReason


class AthleteRankingResponse(BaseModel):
    athlete_id: str
    ranking_type: RankingType
    discipline: Discipline
    year: int
    gender: Gender
    age_category: AgeCategory
    points: float
    contest_count: int | None = None
    name: str
    surname: str
    country: str | None = None
    birthdate: date | None = None
    last_updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, ranking: AthleteRanking) -> "AthleteRankingResponse":
        key = ranking.key
        return cls(
            athlete_id=key.athlete_id,
            ranking_type=key.ranking_type,
            discipline=key.discipline,
            year=int(key.year),
            gender=key.gender,
            age_category=key.age_category,
            points=ranking.points,
            contest_count=ranking.contest_count,
            name=ranking.name,
            surname=ranking.surname,
            country=ranking.country,
            birthdate=ranking.birthdate,
            last_updated_at=ranking.last_updated_at,
        )


class NextCursor(BaseModel):
    after_athlete_id: str
    after_points: float


class RankingsPageResponse(BaseModel):
    items: list[AthleteRankingResponse]
    next: NextCursor | None = None

    @classmethod
    def from_page(
        cls, page: Page[AthleteRanking, RankingCursor],
    ) -> "RankingsPageResponse":
        next_cursor = None
        if page.cursor is not None:
            next_cursor = NextCursor(
                after_athlete_id=page.cursor.athlete_id,
                after_points=page.cursor.points,
            )
        return cls(
            items=[AthleteRankingResponse.from_entity(r) for r in page.items],
            next=next_cursor,
        )


class RankResponse(BaseModel):
    athlete_id: str
    rank: int
