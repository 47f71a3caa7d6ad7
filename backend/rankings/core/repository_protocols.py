"""Boundary Protocols — contracts between the ranking core and its stores.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via constructor injection
    - Reads return None for absent records; failures raise RankingsError subclasses

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - No compare-and-swap in update_points_and_count: concurrent events on the
      same bucket are last-write-wins (known lost-update risk)
"""

from typing import Protocol

from rankings.core.domain_types import AthleteId, ContestId, Discipline
from rankings.core.entities import (
    AthleteContestParticipation, AthleteDetail, AthleteRanking,
    AthleteRankingsCategory, Contest, DateRange, Page, RankingCursor,
    RankingPrimaryKey, RankingsCategory,
)


class RankingStore(Protocol):
    """Contract for athlete, contest and ranking persistence — implemented by shell."""
    async def get_athlete_details(
        self, athlete_id: AthleteId,
    ) -> AthleteDetail | None: ...
    async def get_athlete_ranking(
        self, key: RankingPrimaryKey,
    ) -> AthleteRanking | None: ...
    async def put_athlete_ranking(self, ranking: AthleteRanking) -> None: ...
    async def update_points_and_count(
        self, key: RankingPrimaryKey, points: float, contest_count: int | None,
    ) -> None: ...
    async def get_athlete_ranking_place(
        self, category: AthleteRankingsCategory,
    ) -> int | None: ...
    async def query_athlete_rankings(
        self,
        limit: int,
        category: RankingsCategory,
        after: RankingCursor | None = None,
        athlete_id: AthleteId | None = None,
        country: str | None = None,
    ) -> Page[AthleteRanking, RankingCursor]: ...
    async def get_contest(
        self, contest_id: ContestId, discipline: Discipline,
    ) -> Contest | None: ...


class AthleteContestService(Protocol):
    """Contract for an athlete's contest history — implemented by shell."""
    async def get_contests(
        self,
        athlete_id: AthleteId,
        discipline: Discipline,
        cursor: str | None,
        date_range: DateRange,
    ) -> Page[AthleteContestParticipation, str]: ...
