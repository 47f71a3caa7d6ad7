"""Rankings Settings — environment-driven configuration via pydantic-settings.

Invariants:
    - get_settings() is cached; one Settings per process
    - Top-Score window and contest counts are configuration, never literals in services
    - top_score_contest_count <= top_score_contest_sample_count (you cannot sum
      more contests than are eligible)
    - log_format is either "json" or "text"

Design Decisions:
    - Plain postgresql:// URLs accepted and rewritten for the asyncpg driver
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    database_url: str = "postgresql+asyncpg://rankings:rankings@db:5432/rankings"
    database_pool_size: int = Field(default=20, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)

    # Top-Score: rolling window in years, eligible contests, contests summed
    top_score_year_range: int = Field(default=2, ge=1)
    top_score_contest_sample_count: int = Field(default=5, ge=1)
    top_score_contest_count: int = Field(default=3, ge=1)

    athlete_contests_page_size: int = Field(default=50, ge=1)
    rankings_max_page_size: int = Field(default=100, ge=1)

    cors_origins: list[str] = ["http://localhost:5173"]

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return "postgresql+asyncpg://" + v[len("postgresql://"):]
        return v

    @model_validator(mode="after")
    def contest_count_within_sample(self) -> "Settings":
        if self.top_score_contest_count > self.top_score_contest_sample_count:
            raise ValueError(
                "top_score_contest_count cannot exceed "
                "top_score_contest_sample_count",
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
