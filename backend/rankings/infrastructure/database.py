"""Ranking Database — async engine, per-operation sessions and error translation.

Invariants:
    - A session never outlives one store operation; fan-out tasks each get their own
    - transaction() commits on clean exit, rolls back on any exception
    - SQLAlchemy exceptions leave this module only as DatabaseError
    - Server databases get a bounded pool with pre-ping; SQLite keeps its default pool

Design Decisions:
    - Exception -> (message, operation) table instead of one except block per class:
      ordered most specific first, first isinstance match wins
    - Module-level manager set by the FastAPI lifespan, read through get_db_manager()
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from rankings.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_ERROR_TRANSLATIONS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Ranking row violates a table constraint", "write"),
    (OperationalError, "Ranking database unreachable or locked", "connect"),
    (DBAPIError, "Ranking database driver rejected the statement", "execute"),
    (SQLAlchemyError, "Ranking database operation failed", "unknown"),
)


def _translate(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in _ERROR_TRANSLATIONS:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Ranking database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine; hands out short-lived sessions to the SQL stores."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_options: dict[str, object] = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_options.update(
                pool_size=pool_size, max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Read-only or caller-committed session; rolled back on failure."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = _translate(e)
            logger.error(
                f"{error.message}: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that commits when the block exits cleanly."""
        async with self.session() as session:
            yield session
            await session.commit()

    async def health_check(self) -> bool:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except DatabaseError:
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


def get_db_manager() -> DatabaseSessionManager:
    """FastAPI dependency; fails loudly if the lifespan never ran."""
    if db_manager is None:
        raise RuntimeError("Ranking database not initialized")
    return db_manager
