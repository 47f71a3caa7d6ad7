"""Top-Score Selection — pure algorithm behind the best-contests ranking.

Invariants:
    - Window is the calendar season [Jan 1 year, Jan 1 year+1) only for a concrete
      year in a COMPETITION discipline; otherwise [now - rolling_years, open)
    - Eligibility order: same contest type -> newest first; different types ->
      CONTEST_TYPES_BY_SIZE index ascending (prestige beats recency)
    - Eligible set = first sample_count contests of that order
    - Score = sum of the best contest_count participations in the eligible set,
      matched on (contest id, discipline);
      None when the eligible set is empty (no write, not zero)

Design Decisions:
    - Key-based sort instead of a comparator: (type index, -timestamp) expresses
      both tie-break rules and is stable and total
    - No IO here: TopScoreRecalculator fetches, these functions decide
"""

from datetime import datetime

from rankings.core.category_hierarchy import discipline_type
from rankings.core.domain_types import (
    CONTEST_TYPES_BY_SIZE, Discipline, DisciplineType, Year,
)
from rankings.core.entities import (
    AthleteContestParticipation, Contest, DateRange,
)

_SIZE_INDEX = {t: i for i, t in enumerate(CONTEST_TYPES_BY_SIZE)}


def _years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # Feb 29 -> Feb 28
        return moment.replace(year=moment.year - years, day=28)


def select_window(
    discipline: Discipline,
    year: int | None,
    now: datetime,
    rolling_years: int,
) -> DateRange:
    """Date range whose participations count towards the Top-Score."""
    is_season = year is not None and year != Year.ALL
    if is_season and discipline_type(discipline) == DisciplineType.COMPETITION:
        return DateRange(
            start=datetime(year, 1, 1, tzinfo=now.tzinfo),
            end=datetime(year + 1, 1, 1, tzinfo=now.tzinfo),
        )
    return DateRange(start=_years_before(now, rolling_years))


def _eligibility_key(contest: Contest) -> tuple[int, float]:
    size_index = _SIZE_INDEX.get(contest.contest_type, len(_SIZE_INDEX))
    return size_index, -contest.date.timestamp()


def rank_contests_for_eligibility(contests: list[Contest]) -> list[Contest]:
    return sorted(contests, key=_eligibility_key)


def select_eligible_contests(
    contests: list[Contest], sample_count: int,
) -> list[Contest]:
    return rank_contests_for_eligibility(contests)[:sample_count]


def sum_top_points(
    participations: list[AthleteContestParticipation],
    eligible: list[Contest],
    contest_count: int,
) -> float | None:
    """Sum of the best contest_count results among eligible contests."""
    if not eligible:
        return None
    # contests are identified by (id, discipline), not id alone
    eligible_keys = {(c.id, c.discipline) for c in eligible}
    best = sorted(
        (
            p.points for p in participations
            if (p.contest_id, p.contest_discipline) in eligible_keys
        ),
        reverse=True,
    )[:contest_count]
    return sum(best)


def compute_top_score(
    participations: list[AthleteContestParticipation],
    contests: list[Contest],
    sample_count: int,
    contest_count: int,
) -> float | None:
    eligible = select_eligible_contests(contests, sample_count)
    return sum_top_points(participations, eligible, contest_count)
