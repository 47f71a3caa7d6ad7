"""Top-Score Recalculator — replaces best-contests totals for every bucket of an event.

Invariants:
    - Score computed once per (discipline, year) pair per call, shared by every
      gender/age-category bucket with that pair
    - Cache lives for a single apply() call; never shared across calls
    - Concurrent buckets needing the same pair await one memoized task (no recompute)
    - A pair with no eligible contests writes nothing (skip, not zero)
    - Writes are full replacements: no read-before-write, no accumulation

Design Decisions:
    - Memoized asyncio task per pair over a lock: the first bucket creates it
      synchronously (no await between check and insert), siblings just await it
    - Clock injected: window selection is deterministic under test
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable

from rankings.core.combinations import generate_combinations
from rankings.core.domain_types import AthleteId, Discipline, RankingType
from rankings.core.entities import (
    AthleteContestParticipation, AthleteDetail, AthleteRanking, Contest,
    DateRange, RankingCombination, RankingPrimaryKey,
)
from rankings.core.errors import ErrorContext, ResourceNotFoundError
from rankings.core.repository_protocols import (
    AthleteContestService, RankingStore,
)
from rankings.core.top_score import compute_top_score, select_window
from rankings.services.fan_out import settle_all

logger = logging.getLogger(__name__)

ScoreKey = tuple[Discipline, int]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TopScoreRecalculator:
    """Maintains RankingType.TOP_SCORE records."""

    RANKING_TYPE = RankingType.TOP_SCORE

    def __init__(
        self,
        store: RankingStore,
        athlete_contests: AthleteContestService,
        rolling_years: int = 2,
        sample_count: int = 5,
        contest_count: int = 3,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.athlete_contests = athlete_contests
        self.rolling_years = rolling_years
        self.sample_count = sample_count
        self.contest_count = contest_count
        self.clock = clock

    async def apply(
        self, athlete: AthleteDetail, discipline: Discipline, year: int,
    ) -> None:
        combinations = generate_combinations(
            year, discipline, athlete.gender, athlete.age_category,
        )
        scores: dict[ScoreKey, asyncio.Task] = {}
        await settle_all(
            self._update_bucket(athlete, combination, scores)
            for combination in combinations
        )

    async def _update_bucket(
        self,
        athlete: AthleteDetail,
        combination: RankingCombination,
        scores: dict[ScoreKey, asyncio.Task],
    ) -> None:
        pair = (combination.discipline, combination.year)
        if pair not in scores:
            scores[pair] = asyncio.ensure_future(
                self.compute_score(athlete.id, *pair),
            )
        points = await scores[pair]
        if points is None:
            return

        await self.store.put_athlete_ranking(AthleteRanking(
            key=RankingPrimaryKey.for_combination(
                self.RANKING_TYPE, athlete.id, combination,
            ),
            points=points,
            name=athlete.name,
            surname=athlete.surname,
            country=athlete.country,
            birthdate=athlete.birthdate,
            last_updated_at=datetime.now(timezone.utc),
        ))

    async def compute_score(
        self, athlete_id: AthleteId, discipline: Discipline, year: int,
    ) -> float | None:
        """Best-contests total for one (discipline, year) pair, None if no contests."""
        window = select_window(
            discipline, year, self.clock(), self.rolling_years,
        )
        participations = await self._fetch_participations(
            athlete_id, discipline, window,
        )
        contests = await settle_all(
            self._resolve_contest(athlete_id, p) for p in participations
        )
        points = compute_top_score(
            participations, contests, self.sample_count, self.contest_count,
        )
        logger.debug(
            f"Top-score {points} from {len(participations)} participations",
            extra={
                "athlete_id": athlete_id, "discipline": discipline,
                "year": year, "ranking_type": self.RANKING_TYPE.value,
            },
        )
        return points

    async def _fetch_participations(
        self, athlete_id: AthleteId, discipline: Discipline, window: DateRange,
    ) -> list[AthleteContestParticipation]:
        participations: list[AthleteContestParticipation] = []
        cursor = None
        while True:
            page = await self.athlete_contests.get_contests(
                athlete_id, discipline, cursor, window,
            )
            participations.extend(page.items)
            if page.cursor is None:
                return participations
            cursor = page.cursor

    async def _resolve_contest(
        self, athlete_id: AthleteId, participation: AthleteContestParticipation,
    ) -> Contest:
        contest = await self.store.get_contest(
            participation.contest_id, participation.contest_discipline,
        )
        if contest is None:
            raise ResourceNotFoundError(
                "Contest", participation.contest_id,
                ErrorContext(
                    athlete_id=athlete_id,
                    discipline=participation.contest_discipline.value,
                ),
            )
        return contest
