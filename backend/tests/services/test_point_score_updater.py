"""Point-Score Updater — tests for the additive fan-out over a fake store.

Tests cover:
    - first NEW_CONTEST creates 24 buckets with points and count 1
    - second NEW_CONTEST accumulates points and count
    - POINTS_CHANGED adjusts points only; DELETED_CONTEST decrements both
    - serial event sequence sums to the net deltas
    - missing contest_count baseline stays missing
    - DELETED_CONTEST on an absent bucket is rejected
    - one failing bucket does not stop the others; error surfaces afterwards
"""

import pytest

from rankings.core.combinations import generate_combinations
from rankings.core.domain_types import (
    AgeCategory, Discipline, Gender, RankingType, RankingsUpdateReason, Year,
)
from rankings.core.entities import AthleteRanking, RankingPrimaryKey
from rankings.core.errors import DatabaseError, InvalidRankingUpdateError
from rankings.services.point_score_updater import PointScoreUpdater


def _point_rankings(store):
    return {
        k: r for k, r in store.rankings.items()
        if k.ranking_type == RankingType.POINT_SCORE
    }


def _key(discipline, year, gender, age_category):
    return RankingPrimaryKey(
        ranking_type=RankingType.POINT_SCORE, athlete_id="a-1",
        discipline=discipline, age_category=age_category, gender=gender,
        year=year,
    )


async def test_first_contest_creates_every_bucket(store, athlete):
    updater = PointScoreUpdater(store)
    await updater.apply(
        athlete, Discipline.DOWNHILL, 2024, 50, RankingsUpdateReason.NEW_CONTEST,
    )

    rankings = _point_rankings(store)
    assert len(rankings) == 24
    for ranking in rankings.values():
        assert ranking.points == 50
        assert ranking.contest_count == 1
        assert ranking.name == "Jonas"
        assert ranking.surname == "Berg"
        assert ranking.country == "NOR"


async def test_second_contest_accumulates(store, athlete):
    updater = PointScoreUpdater(store)
    reason = RankingsUpdateReason.NEW_CONTEST
    await updater.apply(athlete, Discipline.DOWNHILL, 2024, 50, reason)
    await updater.apply(athlete, Discipline.DOWNHILL, 2024, 30, reason)

    rankings = _point_rankings(store)
    assert len(rankings) == 24
    assert {r.points for r in rankings.values()} == {80}
    assert {r.contest_count for r in rankings.values()} == {2}


async def test_other_discipline_shares_only_common_ancestors(store, athlete):
    updater = PointScoreUpdater(store)
    reason = RankingsUpdateReason.NEW_CONTEST
    await updater.apply(athlete, Discipline.DOWNHILL, 2024, 50, reason)
    await updater.apply(athlete, Discipline.SLALOM, 2024, 20, reason)

    skiing = store.rankings[_key(Discipline.SKIING, 2024, Gender.MALE, AgeCategory.U20)]
    downhill = store.rankings[_key(Discipline.DOWNHILL, 2024, Gender.MALE, AgeCategory.U20)]
    slalom = store.rankings[_key(Discipline.SLALOM, Year.ALL, Gender.ALL, AgeCategory.ALL)]
    assert (skiing.points, skiing.contest_count) == (70, 2)
    assert (downhill.points, downhill.contest_count) == (50, 1)
    assert (slalom.points, slalom.contest_count) == (20, 1)


async def test_serial_sequence_sums_net_deltas(store, athlete):
    updater = PointScoreUpdater(store)
    events = [
        (40, RankingsUpdateReason.NEW_CONTEST),
        (25, RankingsUpdateReason.NEW_CONTEST),
        (5, RankingsUpdateReason.POINTS_CHANGED),
        (-25, RankingsUpdateReason.DELETED_CONTEST),
        (10, RankingsUpdateReason.NEW_CONTEST),
    ]
    for points, reason in events:
        await updater.apply(athlete, Discipline.MOGULS, 2023, points, reason)

    rankings = _point_rankings(store)
    assert {r.points for r in rankings.values()} == {55}
    assert {r.contest_count for r in rankings.values()} == {2}


async def test_missing_contest_count_stays_missing(store, athlete):
    key = _key(Discipline.DOWNHILL, 2024, Gender.MALE, AgeCategory.U20)
    store.rankings[key] = AthleteRanking(
        key=key, points=10, contest_count=None, name="Jonas", surname="Berg",
    )
    updater = PointScoreUpdater(store)
    await updater.apply(
        athlete, Discipline.DOWNHILL, 2024, 5, RankingsUpdateReason.NEW_CONTEST,
    )

    assert store.rankings[key].points == 15
    assert store.rankings[key].contest_count is None


async def test_deleted_contest_on_absent_bucket_is_rejected(store, athlete):
    updater = PointScoreUpdater(store)
    with pytest.raises(InvalidRankingUpdateError):
        await updater.apply(
            athlete, Discipline.DOWNHILL, 2024, -50,
            RankingsUpdateReason.DELETED_CONTEST,
        )
    assert _point_rankings(store) == {}


async def test_failing_bucket_surfaces_after_others_written(store, athlete):
    failing = _key(Discipline.OVERALL, Year.ALL, Gender.ALL, AgeCategory.ALL)
    store.fail_puts.add(failing)
    updater = PointScoreUpdater(store)

    with pytest.raises(DatabaseError):
        await updater.apply(
            athlete, Discipline.DOWNHILL, 2024, 50,
            RankingsUpdateReason.NEW_CONTEST,
        )

    rankings = _point_rankings(store)
    assert len(rankings) == 23
    assert failing not in rankings


async def test_every_generated_bucket_is_written(store, athlete):
    updater = PointScoreUpdater(store)
    await updater.apply(
        athlete, Discipline.HALFPIPE, 2022, 12, RankingsUpdateReason.NEW_CONTEST,
    )
    expected = {
        RankingPrimaryKey.for_combination(RankingType.POINT_SCORE, "a-1", c)
        for c in generate_combinations(
            2022, Discipline.HALFPIPE, Gender.MALE, AgeCategory.U20,
        )
    }
    assert set(_point_rankings(store)) == expected
