"""Ranking Entities — immutable value objects passed between core and shell.

Invariants:
    - All entities are frozen: snapshots, never mutated after construction
    - RankingPrimaryKey identifies at most one AthleteRanking
    - contest_count is only meaningful for PointScore rankings
    - Page.cursor is None when there are no further items

Design Decisions:
    - Dataclasses over ORM rows: core logic never touches SQLAlchemy objects
      (shell converts at the store boundary)
    - RankingCombination is transient — exists only during a fan-out
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Generic, TypeVar

from rankings.core.domain_types import (
    AgeCategory, AthleteId, ContestId, ContestType, Discipline, Gender,
    RankingType,
)

T = TypeVar("T")
C = TypeVar("C")


@dataclass(frozen=True)
class AthleteDetail:
    """Athlete snapshot read at update time."""
    id: AthleteId
    name: str
    surname: str
    gender: Gender
    age_category: AgeCategory
    country: str | None = None
    birthdate: date | None = None


@dataclass(frozen=True)
class Contest:
    """Contest metadata; identity is (id, discipline)."""
    id: ContestId
    discipline: Discipline
    contest_type: ContestType
    date: datetime
    name: str | None = None


@dataclass(frozen=True)
class AthleteContestParticipation:
    """An athlete's result in one contest."""
    contest_id: ContestId
    contest_discipline: Discipline
    points: float


@dataclass(frozen=True)
class RankingCombination:
    """One concrete bucket produced by a hierarchy fan-out."""
    year: int
    discipline: Discipline
    gender: Gender
    age_category: AgeCategory


@dataclass(frozen=True)
class RankingsCategory:
    """A leaderboard bucket (no athlete)."""
    ranking_type: RankingType
    discipline: Discipline
    year: int
    gender: Gender
    age_category: AgeCategory


@dataclass(frozen=True)
class AthleteRankingsCategory:
    """A leaderboard bucket narrowed to one athlete."""
    ranking_type: RankingType
    athlete_id: AthleteId
    discipline: Discipline
    year: int
    gender: Gender
    age_category: AgeCategory


@dataclass(frozen=True)
class RankingPrimaryKey:
    ranking_type: RankingType
    athlete_id: AthleteId
    discipline: Discipline
    age_category: AgeCategory
    gender: Gender
    year: int

    @classmethod
    def for_combination(
        cls,
        ranking_type: RankingType,
        athlete_id: AthleteId,
        combination: RankingCombination,
    ) -> "RankingPrimaryKey":
        return cls(
            ranking_type=ranking_type,
            athlete_id=athlete_id,
            discipline=combination.discipline,
            age_category=combination.age_category,
            gender=combination.gender,
            year=combination.year,
        )


@dataclass(frozen=True)
class AthleteRanking:
    """Persisted aggregate for one bucket, with denormalized athlete fields."""
    key: RankingPrimaryKey
    points: float
    name: str
    surname: str
    country: str | None = None
    birthdate: date | None = None
    contest_count: int | None = None
    last_updated_at: datetime | None = None

    @property
    def athlete_id(self) -> AthleteId:
        return self.key.athlete_id


@dataclass(frozen=True)
class RankingCursor:
    """Exclusive continuation point for leaderboard pages."""
    athlete_id: AthleteId
    points: float


@dataclass(frozen=True)
class DateRange:
    """Half-open window [start, end); end None means open-ended."""
    start: datetime
    end: datetime | None = None

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        return self.end is None or moment < self.end


@dataclass(frozen=True)
class Page(Generic[T, C]):
    items: list[T] = field(default_factory=list)
    cursor: C | None = None
