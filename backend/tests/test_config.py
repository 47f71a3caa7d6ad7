"""Settings — tests for URL rewriting and Top-Score constraints."""

import pytest
from pydantic import ValidationError

from rankings.config import Settings


def test_plain_postgres_url_gets_asyncpg_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///x.db")
    assert settings.database_url == "sqlite+aiosqlite:///x.db"


def test_top_score_defaults():
    settings = Settings()
    assert (
        settings.top_score_year_range,
        settings.top_score_contest_sample_count,
        settings.top_score_contest_count,
    ) == (2, 5, 3)


def test_contest_count_cannot_exceed_sample():
    with pytest.raises(ValidationError):
        Settings(top_score_contest_sample_count=2, top_score_contest_count=3)


def test_unknown_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")
