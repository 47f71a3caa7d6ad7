"""End-to-end — coordinator over the SQL store and athlete-contest service.

Tests cover:
    - first NEW_CONTEST writes 24 PointScore and 24 TopScore rows
    - second NEW_CONTEST accumulates PointScore and recomputes TopScore
    - leaderboard and overall rank read back what the updates wrote
"""

from datetime import datetime, timezone

from rankings.core.domain_types import (
    AgeCategory, Discipline, Gender, RankingType, RankingsUpdateReason, Year,
)
from rankings.core.entities import RankingPrimaryKey, RankingsCategory
from rankings.infrastructure.athlete_contest_service import (
    SqlAthleteContestService,
)
from rankings.infrastructure.ranking_store import SqlRankingStore
from rankings.services.rankings_coordinator import create_rankings_coordinator
from rankings.services.rankings_reader import RankingsReader


def _clock():
    return datetime(2024, 12, 31, tzinfo=timezone.utc)


def _coordinator(db_manager):
    store = SqlRankingStore(db_manager)
    coordinator = create_rankings_coordinator(
        store, SqlAthleteContestService(db_manager, page_size=2),
        rolling_years=2, sample_count=5, contest_count=3,
    )
    coordinator.top_score.clock = _clock
    return store, coordinator


async def test_two_contests_update_every_bucket(
    db_manager, seed_athlete, seed_results,
):
    store, coordinator = _coordinator(db_manager)

    await seed_results(seed_athlete, [
        ("wc-1", "downhill", "world_cup", datetime(2024, 1, 15, tzinfo=timezone.utc), 50),
    ])
    await coordinator.on_scoring_event(
        seed_athlete, Discipline.DOWNHILL, 2024, 50,
        RankingsUpdateReason.NEW_CONTEST,
    )
    await seed_results(seed_athlete, [
        ("wc-2", "downhill", "world_cup", datetime(2024, 2, 15, tzinfo=timezone.utc), 30),
    ])
    await coordinator.on_scoring_event(
        seed_athlete, Discipline.DOWNHILL, 2024, 30,
        RankingsUpdateReason.NEW_CONTEST,
    )

    for ranking_type, expected_count in [
        (RankingType.POINT_SCORE, 2), (RankingType.TOP_SCORE, None),
    ]:
        page = await store.query_athlete_rankings(
            1, RankingsCategory(
                ranking_type=ranking_type, discipline=Discipline.OVERALL,
                year=Year.ALL, gender=Gender.ALL, age_category=AgeCategory.ALL,
            ),
        )
        assert page.items[0].points == 80
        assert page.items[0].contest_count == expected_count
        assert page.items[0].name == "Jonas"

    most_specific = await store.get_athlete_ranking(RankingPrimaryKey(
        ranking_type=RankingType.POINT_SCORE, athlete_id=seed_athlete,
        discipline=Discipline.DOWNHILL, age_category=AgeCategory.U20,
        gender=Gender.MALE, year=2024,
    ))
    assert (most_specific.points, most_specific.contest_count) == (80, 2)

    assert await RankingsReader(store).overall_rank(seed_athlete) == 1


async def test_unknown_athlete_writes_nothing(db_manager):
    store, coordinator = _coordinator(db_manager)
    await coordinator.on_scoring_event(
        "missing", Discipline.DOWNHILL, 2024, 50,
        RankingsUpdateReason.NEW_CONTEST,
    )
    page = await store.query_athlete_rankings(10, RankingsCategory(
        ranking_type=RankingType.POINT_SCORE, discipline=Discipline.OVERALL,
        year=Year.ALL, gender=Gender.ALL, age_category=AgeCategory.ALL,
    ))
    assert page.items == []
