"""Root conftest — shared test configuration and SQL fixtures.

Invariants:
    - Every SQL-backed test gets a fresh SQLite file database under tmp_path
    - Tables created from Base.metadata (all models imported)

Design Decisions:
    - File database over :memory:: every store operation opens its own session,
      and in-memory SQLite is private to one connection
"""

import os
from datetime import date

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest

from rankings.db.base import Base
from rankings.infrastructure.database import DatabaseSessionManager
import rankings.models  # noqa: F401
from rankings.models.athlete import Athlete
from rankings.models.athlete_contest import AthleteContest
from rankings.models.contest import Contest


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'rankings.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def seed_athlete(db_manager):
    """One male U20 athlete: a-1, Jonas Berg (NOR)."""
    async with db_manager.session() as session:
        session.add(Athlete(
            id="a-1", name="Jonas", surname="Berg", gender="male",
            age_category="u20", country="NOR", birthdate=date(2006, 3, 14),
        ))
        await session.commit()
    return "a-1"


@pytest.fixture
def seed_results(db_manager):
    """Insert (contest_id, discipline, contest_type, date, points) rows for an athlete."""
    async def _seed(athlete_id: str, rows: list[tuple]) -> None:
        async with db_manager.session() as session:
            for contest_id, discipline, contest_type, when, points in rows:
                session.add(Contest(
                    id=contest_id, discipline=discipline,
                    contest_type=contest_type, date=when,
                ))
                session.add(AthleteContest(
                    athlete_id=athlete_id, contest_id=contest_id,
                    contest_discipline=discipline, points=points,
                    contest_date=when,
                ))
            await session.commit()
    return _seed
