"""Rankings Update Coordinator — entry point for a scoring event.

Invariants:
    - Unknown athlete -> silent no-op (deletion may race pending events)
    - PointScore and TopScore updates run concurrently; both must settle
    - points_to_add only affects the PointScore policy
"""

import logging

from rankings.core.domain_types import (
    AthleteId, Discipline, RankingsUpdateReason,
)
from rankings.core.repository_protocols import (
    AthleteContestService, RankingStore,
)
from rankings.services.fan_out import settle_all
from rankings.services.point_score_updater import PointScoreUpdater
from rankings.services.top_score_recalculator import TopScoreRecalculator

logger = logging.getLogger(__name__)


class RankingsUpdateCoordinator:
    """Applies one scoring event to both ranking policies."""

    def __init__(
        self,
        store: RankingStore,
        point_score: PointScoreUpdater,
        top_score: TopScoreRecalculator,
    ):
        self.store = store
        self.point_score = point_score
        self.top_score = top_score

    async def on_scoring_event(
        self,
        athlete_id: AthleteId,
        discipline: Discipline,
        year: int,
        points_to_add: float,
        reason: RankingsUpdateReason | None,
    ) -> None:
        athlete = await self.store.get_athlete_details(athlete_id)
        if athlete is None:
            logger.debug(
                "Scoring event for unknown athlete ignored",
                extra={"athlete_id": athlete_id, "discipline": discipline},
            )
            return

        await settle_all([
            self.point_score.apply(
                athlete, discipline, year, points_to_add, reason,
            ),
            self.top_score.apply(athlete, discipline, year),
        ])
        logger.info(
            f"Rankings updated ({reason.value if reason else 'no reason'})",
            extra={"athlete_id": athlete_id, "discipline": discipline, "year": year},
        )


def create_rankings_coordinator(
    store: RankingStore,
    athlete_contests: AthleteContestService,
    rolling_years: int,
    sample_count: int,
    contest_count: int,
) -> RankingsUpdateCoordinator:
    """Wire both ranking policies around one store."""
    return RankingsUpdateCoordinator(
        store,
        PointScoreUpdater(store),
        TopScoreRecalculator(
            store,
            athlete_contests,
            rolling_years=rolling_years,
            sample_count=sample_count,
            contest_count=contest_count,
        ),
    )
