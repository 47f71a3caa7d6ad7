"""Service test fixtures — in-memory fakes for the store protocols.

Invariants:
    - FakeRankingStore mirrors SqlRankingStore semantics (exclusive cursor,
      points desc / athlete_id asc order, contest_count untouched on None)
    - Every store call yields to the event loop, so fan-outs really interleave
    - fail_puts / fail_updates inject DatabaseError for chosen keys

Design Decisions:
    - Hand-written fakes over unittest.mock: the protocols are small and the
      fakes double as executable documentation of the store contract
"""

import asyncio
from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from rankings.core.category_hierarchy import self_and_descendants
from rankings.core.domain_types import AgeCategory, Gender
from rankings.core.entities import (
    AthleteDetail, Page, RankingCursor,
)
from rankings.core.errors import DatabaseError


class FakeRankingStore:

    def __init__(self):
        self.athletes = {}
        self.rankings = {}
        self.contests = {}
        self.fail_puts = set()
        self.fail_updates = set()
        self.contest_lookups = 0
        self.query_calls = []
        self.place_calls = []

    async def get_athlete_details(self, athlete_id):
        await asyncio.sleep(0)
        return self.athletes.get(athlete_id)

    async def get_athlete_ranking(self, key):
        await asyncio.sleep(0)
        return self.rankings.get(key)

    async def put_athlete_ranking(self, ranking):
        await asyncio.sleep(0)
        if ranking.key in self.fail_puts:
            raise DatabaseError("injected", "put")
        self.rankings[ranking.key] = ranking

    async def update_points_and_count(self, key, points, contest_count):
        await asyncio.sleep(0)
        if key in self.fail_updates:
            raise DatabaseError("injected", "update")
        existing = self.rankings[key]
        if contest_count is None:
            contest_count = existing.contest_count
        self.rankings[key] = replace(
            existing, points=points, contest_count=contest_count,
        )

    def _bucket(self, category):
        return [
            r for k, r in self.rankings.items()
            if k.ranking_type == category.ranking_type
            and k.discipline == category.discipline
            and k.age_category == category.age_category
            and k.gender == category.gender
            and k.year == category.year
        ]

    async def get_athlete_ranking_place(self, category):
        self.place_calls.append(category)
        bucket = self._bucket(category)
        mine = [r for r in bucket if r.athlete_id == category.athlete_id]
        if not mine:
            return None
        return 1 + sum(1 for r in bucket if r.points > mine[0].points)

    async def query_athlete_rankings(
        self, limit, category, after=None, athlete_id=None, country=None,
    ):
        self.query_calls.append({
            "limit": limit, "category": category, "after": after,
            "athlete_id": athlete_id, "country": country,
        })
        rows = sorted(
            self._bucket(category), key=lambda r: (-r.points, r.athlete_id),
        )
        if after is not None:
            rows = [
                r for r in rows
                if r.points < after.points
                or (r.points == after.points and r.athlete_id > after.athlete_id)
            ]
        if athlete_id:
            rows = [r for r in rows if r.athlete_id == athlete_id]
        if country:
            rows = [r for r in rows if r.country == country]
        items = rows[:limit]
        cursor = None
        if len(rows) > limit and items:
            cursor = RankingCursor(items[-1].athlete_id, items[-1].points)
        return Page(items=items, cursor=cursor)

    async def get_contest(self, contest_id, discipline):
        self.contest_lookups += 1
        await asyncio.sleep(0)
        return self.contests.get((contest_id, discipline))


class FakeAthleteContestService:
    """Serves (participation, date) rows, page_size at a time."""

    def __init__(self, page_size: int = 2):
        self.rows = []
        self.page_size = page_size
        self.calls = []

    def add(self, participation, when):
        self.rows.append((participation, when))

    async def get_contests(self, athlete_id, discipline, cursor, date_range):
        self.calls.append((athlete_id, discipline, cursor, date_range))
        await asyncio.sleep(0)
        disciplines = set(self_and_descendants(discipline))
        matching = [
            p for p, when in self.rows
            if p.contest_discipline in disciplines and date_range.contains(when)
        ]
        offset = int(cursor) if cursor else 0
        items = matching[offset:offset + self.page_size]
        next_cursor = None
        if offset + self.page_size < len(matching):
            next_cursor = str(offset + self.page_size)
        return Page(items=items, cursor=next_cursor)


@pytest.fixture
def store():
    return FakeRankingStore()


@pytest.fixture
def contest_service():
    return FakeAthleteContestService()


@pytest.fixture
def athlete():
    return AthleteDetail(
        id="a-1", name="Jonas", surname="Berg", gender=Gender.MALE,
        age_category=AgeCategory.U20, country="NOR",
        birthdate=date(2006, 3, 14),
    )


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 12, 31, tzinfo=timezone.utc)
