"""SQL Athlete-Contest Service — an athlete's contest results, page by page.

Invariants:
    - A group discipline (SKIING, OVERALL, ...) returns results from every
      discipline that rolls up into it
    - Only results with date_range.start <= contest_date < date_range.end
      (no upper bound when end is None)
    - Cursor is an opaque offset string; None on the last page

Design Decisions:
    - Offset cursor over keyset: result sets per athlete and window are small
"""

import logging

from sqlalchemy import select

from rankings.core.category_hierarchy import self_and_descendants
from rankings.core.domain_types import AthleteId, ContestId, Discipline
from rankings.core.entities import (
    AthleteContestParticipation, DateRange, Page,
)
from rankings.core.errors import ExternalServiceError
from rankings.infrastructure.database import DatabaseSessionManager
from rankings.models.athlete_contest import AthleteContest

logger = logging.getLogger(__name__)


def _parse_cursor(cursor: str | None) -> int:
    if cursor is None:
        return 0
    try:
        offset = int(cursor)
    except ValueError:
        raise ExternalServiceError(
            f"malformed cursor {cursor!r}", "athlete-contests",
        )
    if offset < 0:
        raise ExternalServiceError(
            f"malformed cursor {cursor!r}", "athlete-contests",
        )
    return offset


class SqlAthleteContestService:

    def __init__(self, db: DatabaseSessionManager, page_size: int = 50):
        self.db = db
        self.page_size = page_size

    async def get_contests(
        self,
        athlete_id: AthleteId,
        discipline: Discipline,
        cursor: str | None,
        date_range: DateRange,
    ) -> Page[AthleteContestParticipation, str]:
        offset = _parse_cursor(cursor)
        disciplines = [d.value for d in self_and_descendants(discipline)]
        query = (
            select(AthleteContest)
            .where(
                AthleteContest.athlete_id == athlete_id,
                AthleteContest.contest_discipline.in_(disciplines),
                AthleteContest.contest_date >= date_range.start,
            )
            .order_by(
                AthleteContest.contest_date.desc(),
                AthleteContest.contest_discipline,
                AthleteContest.contest_id,
            )
        )
        if date_range.end is not None:
            query = query.where(AthleteContest.contest_date < date_range.end)

        async with self.db.session() as session:
            result = await session.execute(
                query.offset(offset).limit(self.page_size + 1),
            )
            rows = list(result.scalars().all())

        items = [
            AthleteContestParticipation(
                contest_id=ContestId(r.contest_id),
                contest_discipline=Discipline(r.contest_discipline),
                points=r.points,
            )
            for r in rows[:self.page_size]
        ]
        next_cursor = None
        if len(rows) > self.page_size:
            next_cursor = str(offset + self.page_size)
        return Page(items=items, cursor=next_cursor)
