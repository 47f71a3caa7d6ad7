"""Rankings Routes — leaderboard pages, rank lookups and scoring events.

Invariants:
    - Leaderboard limit capped by settings.rankings_max_page_size
    - athlete_id filter returns at most one record (enforced by RankingsReader)
    - after_athlete_id and after_points form one cursor: both or neither
    - Rank lookups for athletes without a record return 404
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from rankings.api.dependencies import (
    get_rankings_coordinator, get_rankings_reader,
)
from rankings.config import Settings, get_settings
from rankings.core.domain_types import (
    AgeCategory, AthleteId, Discipline, Gender, RankingType, Year,
)
from rankings.core.entities import (
    AthleteRankingsCategory, RankingCursor, RankingsCategory,
)
from rankings.core.errors import ResourceNotFoundError
from rankings.schemas.rankings import (
    RankingsPageResponse, RankResponse, ScoringEvent,
)
from rankings.services.rankings_coordinator import RankingsUpdateCoordinator
from rankings.services.rankings_reader import RankingsReader

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["rankings"])


def _rank_or_404(athlete_id: str, rank: int | None) -> RankResponse:
    if rank is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND,
            detail=ResourceNotFoundError(
                "AthleteRanking", athlete_id,
            ).to_response(),
        )
    return RankResponse(athlete_id=athlete_id, rank=rank)


@router.get(
    "/rankings/{ranking_type}/{discipline}/{year}/{gender}/{age_category}",
    response_model=RankingsPageResponse,
)
async def list_rankings(
    ranking_type: RankingType,
    discipline: Discipline,
    year: int,
    gender: Gender,
    age_category: AgeCategory,
    limit: int = Query(20, ge=1),
    after_athlete_id: str | None = Query(None),
    after_points: float | None = Query(None),
    athlete_id: str | None = Query(None),
    country: str | None = Query(None, min_length=2, max_length=3),
    reader: RankingsReader = Depends(get_rankings_reader),
    settings: Settings = Depends(get_settings),
):
    """One leaderboard page, points descending."""
    if (after_athlete_id is None) != (after_points is None):
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            detail="after_athlete_id and after_points must be given together",
        )
    after = None
    if after_athlete_id is not None:
        after = RankingCursor(
            athlete_id=AthleteId(after_athlete_id), points=after_points,
        )

    page = await reader.query(
        min(limit, settings.rankings_max_page_size),
        RankingsCategory(
            ranking_type=ranking_type,
            discipline=discipline,
            year=year,
            gender=gender,
            age_category=age_category,
        ),
        after=after,
        athlete_id=AthleteId(athlete_id) if athlete_id else None,
        country=country,
    )
    return RankingsPageResponse.from_page(page)


@router.get("/athletes/{athlete_id}/rank/overall", response_model=RankResponse)
async def get_overall_rank(
    athlete_id: str,
    reader: RankingsReader = Depends(get_rankings_reader),
):
    rank = await reader.overall_rank(AthleteId(athlete_id))
    return _rank_or_404(athlete_id, rank)


@router.get("/athletes/{athlete_id}/rank", response_model=RankResponse)
async def get_rank(
    athlete_id: str,
    ranking_type: RankingType = Query(RankingType.TOP_SCORE),
    discipline: Discipline = Query(Discipline.OVERALL),
    year: int = Query(Year.ALL, ge=0),
    gender: Gender = Query(Gender.ALL),
    age_category: AgeCategory = Query(AgeCategory.ALL),
    reader: RankingsReader = Depends(get_rankings_reader),
):
    """Rank of one athlete within a fully specified bucket."""
    rank = await reader.rank_of(AthleteRankingsCategory(
        ranking_type=ranking_type,
        athlete_id=AthleteId(athlete_id),
        discipline=discipline,
        year=year,
        gender=gender,
        age_category=age_category,
    ))
    return _rank_or_404(athlete_id, rank)


@router.post("/rankings/events", status_code=status.HTTP_200_OK)
async def apply_scoring_event(
    body: ScoringEvent,
    coordinator: RankingsUpdateCoordinator = Depends(get_rankings_coordinator),
):
    """Recompute every ranking bucket touched by one scoring event."""
    await coordinator.on_scoring_event(
        AthleteId(body.athlete_id),
        body.discipline,
        body.year,
        body.points_to_add,
        body.reason,
    )
    return {"status": "applied"}
