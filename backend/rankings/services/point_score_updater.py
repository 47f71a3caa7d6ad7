"""Point-Score Updater — additive cumulative ranking across every bucket of an event.

Invariants:
    - One independent read-modify-write per combination, all run concurrently
    - Existing record: points += points_to_add; contest_count += reason delta
      (left None when either side is None)
    - Absent record: inserted with points_to_add and the reason delta as seeds,
      display attributes copied from the athlete snapshot
    - DELETED_CONTEST on an absent record is rejected, never seeded negative
    - Failures surface after all combinations settle; completed writes persist

Design Decisions:
    - Read-then-write without version check: overlapping events for the same
      athlete may lose an update (last write wins)
"""

import logging
from datetime import datetime, timezone

from rankings.core.combinations import generate_combinations
from rankings.core.domain_types import (
    Discipline, RankingType, RankingsUpdateReason,
)
from rankings.core.entities import (
    AthleteDetail, AthleteRanking, RankingCombination, RankingPrimaryKey,
)
from rankings.core.errors import ErrorContext, InvalidRankingUpdateError
from rankings.core.point_score import (
    apply_contest_count_delta, contest_count_delta,
)
from rankings.core.repository_protocols import RankingStore
from rankings.services.fan_out import settle_all

logger = logging.getLogger(__name__)


class PointScoreUpdater:
    """Maintains RankingType.POINT_SCORE records."""

    RANKING_TYPE = RankingType.POINT_SCORE

    def __init__(self, store: RankingStore):
        self.store = store

    async def apply(
        self,
        athlete: AthleteDetail,
        discipline: Discipline,
        year: int,
        points_to_add: float,
        reason: RankingsUpdateReason | None,
    ) -> None:
        combinations = generate_combinations(
            year, discipline, athlete.gender, athlete.age_category,
        )
        logger.debug(
            f"Point-score fan-out over {len(combinations)} buckets",
            extra={
                "athlete_id": athlete.id, "discipline": discipline,
                "year": year, "ranking_type": self.RANKING_TYPE.value,
            },
        )
        await settle_all(
            self._update_bucket(athlete, combination, points_to_add, reason)
            for combination in combinations
        )

    async def _update_bucket(
        self,
        athlete: AthleteDetail,
        combination: RankingCombination,
        points_to_add: float,
        reason: RankingsUpdateReason | None,
    ) -> None:
        key = RankingPrimaryKey.for_combination(
            self.RANKING_TYPE, athlete.id, combination,
        )
        delta = contest_count_delta(reason)
        existing = await self.store.get_athlete_ranking(key)

        if existing is not None:
            await self.store.update_points_and_count(
                key,
                existing.points + points_to_add,
                apply_contest_count_delta(existing.contest_count, delta),
            )
            return

        if reason == RankingsUpdateReason.DELETED_CONTEST:
            raise InvalidRankingUpdateError(
                "Cannot remove a contest from a ranking that does not exist",
                ErrorContext(
                    athlete_id=athlete.id,
                    discipline=combination.discipline.value,
                    year=combination.year,
                    ranking_type=self.RANKING_TYPE.value,
                ),
            )

        await self.store.put_athlete_ranking(AthleteRanking(
            key=key,
            points=points_to_add,
            contest_count=delta,
            name=athlete.name,
            surname=athlete.surname,
            country=athlete.country,
            birthdate=athlete.birthdate,
            last_updated_at=datetime.now(timezone.utc),
        ))
