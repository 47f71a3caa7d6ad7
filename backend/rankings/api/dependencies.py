"""Service Dependencies — builds ranking services per request from settings and the DB.

Invariants:
    - Services receive their collaborators through constructors (no globals inside services)
    - Top-Score constants come from Settings
"""

from fastapi import Depends

from rankings.config import Settings, get_settings
from rankings.infrastructure.athlete_contest_service import (
    SqlAthleteContestService,
)
from rankings.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from rankings.infrastructure.ranking_store import SqlRankingStore
from rankings.services.rankings_coordinator import (
    RankingsUpdateCoordinator, create_rankings_coordinator,
)
from rankings.services.rankings_reader import RankingsReader


def get_ranking_store(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlRankingStore:
    return SqlRankingStore(db)


def get_rankings_reader(
    store: SqlRankingStore = Depends(get_ranking_store),
) -> RankingsReader:
    return RankingsReader(store)


def get_rankings_coordinator(
    store: SqlRankingStore = Depends(get_ranking_store),
    db: DatabaseSessionManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> RankingsUpdateCoordinator:
    return create_rankings_coordinator(
        store,
        SqlAthleteContestService(db, settings.athlete_contests_page_size),
        rolling_years=settings.top_score_year_range,
        sample_count=settings.top_score_contest_sample_count,
        contest_count=settings.top_score_contest_count,
    )
