"""SQL Ranking Store — RankingStore implementation over async SQLAlchemy.

Invariants:
    - Every operation opens its own session and commits before returning,
      so concurrent fan-out tasks never share an AsyncSession
    - ORM rows never leave this module; callers get core entities
    - update_points_and_count leaves contest_count untouched when given None
    - Leaderboard order: points desc, athlete_id asc; `after` is exclusive
    - Rank place = 1 + rows in the bucket with strictly more points

Design Decisions:
    - session.merge for put: insert-or-replace without dialect-specific upserts
    - limit + 1 fetch to decide whether a continuation cursor exists
"""

import logging

from sqlalchemy import and_, func, or_, select, update

from rankings.core.domain_types import (
    AgeCategory, AthleteId, ContestId, ContestType, Discipline, Gender,
    RankingType,
)
from rankings.core.entities import (
    AthleteDetail, AthleteRanking, AthleteRankingsCategory, Contest, Page,
    RankingCursor, RankingPrimaryKey, RankingsCategory,
)
from rankings.infrastructure.database import DatabaseSessionManager
from rankings.models.athlete import Athlete as AthleteModel
from rankings.models.athlete_ranking import AthleteRanking as RankingModel
from rankings.models.contest import Contest as ContestModel

logger = logging.getLogger(__name__)


def _bucket_filter(category: RankingsCategory | AthleteRankingsCategory):
    return and_(
        RankingModel.ranking_type == category.ranking_type.value,
        RankingModel.discipline == category.discipline.value,
        RankingModel.age_category == category.age_category.value,
        RankingModel.gender == category.gender.value,
        RankingModel.year == int(category.year),
    )


def _key_filter(key: RankingPrimaryKey):
    return and_(
        RankingModel.ranking_type == key.ranking_type.value,
        RankingModel.athlete_id == key.athlete_id,
        RankingModel.discipline == key.discipline.value,
        RankingModel.age_category == key.age_category.value,
        RankingModel.gender == key.gender.value,
        RankingModel.year == int(key.year),
    )


def _to_ranking(row: RankingModel) -> AthleteRanking:
    return AthleteRanking(
        key=RankingPrimaryKey(
            ranking_type=RankingType(row.ranking_type),
            athlete_id=AthleteId(row.athlete_id),
            discipline=Discipline(row.discipline),
            age_category=AgeCategory(row.age_category),
            gender=Gender(row.gender),
            year=row.year,
        ),
        points=row.points,
        contest_count=row.contest_count,
        name=row.name,
        surname=row.surname,
        country=row.country,
        birthdate=row.birthdate,
        last_updated_at=row.last_updated_at,
    )


def _to_row(ranking: AthleteRanking) -> RankingModel:
    key = ranking.key
    return RankingModel(
        ranking_type=key.ranking_type.value,
        athlete_id=key.athlete_id,
        discipline=key.discipline.value,
        age_category=key.age_category.value,
        gender=key.gender.value,
        year=int(key.year),
        points=ranking.points,
        contest_count=ranking.contest_count,
        name=ranking.name,
        surname=ranking.surname,
        country=ranking.country,
        birthdate=ranking.birthdate,
        last_updated_at=ranking.last_updated_at,
    )


class SqlRankingStore:
    """Ranking, athlete and contest reads/writes backed by SQL tables."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def get_athlete_details(
        self, athlete_id: AthleteId,
    ) -> AthleteDetail | None:
        async with self.db.session() as session:
            row = await session.get(AthleteModel, athlete_id)
        if row is None:
            return None
        return AthleteDetail(
            id=AthleteId(row.id),
            name=row.name,
            surname=row.surname,
            gender=Gender(row.gender),
            age_category=AgeCategory(row.age_category),
            country=row.country,
            birthdate=row.birthdate,
        )

    async def get_athlete_ranking(
        self, key: RankingPrimaryKey,
    ) -> AthleteRanking | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(RankingModel).where(_key_filter(key)),
            )
            row = result.scalar_one_or_none()
        return _to_ranking(row) if row else None

    async def put_athlete_ranking(self, ranking: AthleteRanking) -> None:
        async with self.db.transaction() as session:
            await session.merge(_to_row(ranking))

    async def update_points_and_count(
        self, key: RankingPrimaryKey, points: float, contest_count: int | None,
    ) -> None:
        values: dict[str, object] = {"points": points}
        if contest_count is not None:
            values["contest_count"] = contest_count
        async with self.db.transaction() as session:
            await session.execute(
                update(RankingModel).where(_key_filter(key)).values(**values),
            )

    async def get_athlete_ranking_place(
        self, category: AthleteRankingsCategory,
    ) -> int | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(RankingModel.points).where(
                    _bucket_filter(category),
                    RankingModel.athlete_id == category.athlete_id,
                ),
            )
            points = result.scalar_one_or_none()
            if points is None:
                return None
            result = await session.execute(
                select(func.count()).select_from(RankingModel).where(
                    _bucket_filter(category),
                    RankingModel.points > points,
                ),
            )
            ahead = result.scalar() or 0
        return ahead + 1

    async def query_athlete_rankings(
        self,
        limit: int,
        category: RankingsCategory,
        after: RankingCursor | None = None,
        athlete_id: AthleteId | None = None,
        country: str | None = None,
    ) -> Page[AthleteRanking, RankingCursor]:
        query = (
            select(RankingModel)
            .where(_bucket_filter(category))
            .order_by(RankingModel.points.desc(), RankingModel.athlete_id.asc())
        )
        if after is not None:
            query = query.where(or_(
                RankingModel.points < after.points,
                and_(
                    RankingModel.points == after.points,
                    RankingModel.athlete_id > after.athlete_id,
                ),
            ))
        if athlete_id:
            query = query.where(RankingModel.athlete_id == athlete_id)
        if country:
            query = query.where(RankingModel.country == country)

        async with self.db.session() as session:
            result = await session.execute(query.limit(limit + 1))
            rows = list(result.scalars().all())

        items = [_to_ranking(r) for r in rows[:limit]]
        cursor = None
        if len(rows) > limit and items:
            last = items[-1]
            cursor = RankingCursor(athlete_id=last.athlete_id, points=last.points)
        return Page(items=items, cursor=cursor)

    async def get_contest(
        self, contest_id: ContestId, discipline: Discipline,
    ) -> Contest | None:
        async with self.db.session() as session:
            row = await session.get(ContestModel, (contest_id, discipline.value))
        if row is None:
            return None
        return Contest(
            id=ContestId(row.id),
            discipline=Discipline(row.discipline),
            contest_type=ContestType(row.contest_type),
            date=row.date,
            name=row.name,
        )
