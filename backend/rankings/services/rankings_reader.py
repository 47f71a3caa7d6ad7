"""Rankings Reader — read-side rank lookups and leaderboard pages.

Invariants:
    - Reads go straight to the store; never touch the updaters
    - query() with athlete_id returns at most one record, whatever the limit
    - Leaderboard order is points descending; `after` is an exclusive cursor
"""

from rankings.core.domain_types import (
    AgeCategory, AthleteId, Discipline, Gender, RankingType, Year,
)
from rankings.core.entities import (
    AthleteRanking, AthleteRankingsCategory, Page, RankingCursor,
    RankingsCategory,
)
from rankings.core.repository_protocols import RankingStore


class RankingsReader:

    def __init__(self, store: RankingStore):
        self.store = store

    async def rank_of(self, category: AthleteRankingsCategory) -> int | None:
        return await self.store.get_athlete_ranking_place(category)

    async def overall_rank(self, athlete_id: AthleteId) -> int | None:
        """Rank in the all-encompassing Top-Score bucket."""
        return await self.rank_of(AthleteRankingsCategory(
            ranking_type=RankingType.TOP_SCORE,
            athlete_id=athlete_id,
            discipline=Discipline.OVERALL,
            year=Year.ALL,
            gender=Gender.ALL,
            age_category=AgeCategory.ALL,
        ))

    async def query(
        self,
        limit: int,
        category: RankingsCategory,
        after: RankingCursor | None = None,
        athlete_id: AthleteId | None = None,
        country: str | None = None,
    ) -> Page[AthleteRanking, RankingCursor]:
        if athlete_id:
            limit = 1
        return await self.store.query_athlete_rankings(
            limit, category, after=after, athlete_id=athlete_id, country=country,
        )
