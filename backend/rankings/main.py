"""Athlete Rankings API — application factory and ASGI entry point.

Invariants:
    - Logging configured and the database manager created before the first request
    - The engine is disposed on shutdown
    - Routers and error handlers registered explicitly in create_app()
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rankings.api.error_handlers import register_error_handlers
from rankings.api.routes import health, rankings
from rankings.config import Settings, get_settings
from rankings.infrastructure.database import init_db
from rankings.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(
        f"Rankings API up (top-score: best {settings.top_score_contest_count} "
        f"of {settings.top_score_contest_sample_count}, "
        f"{settings.top_score_year_range}y window)",
    )
    try:
        yield
    finally:
        await manager.dispose()
        logger.info("Rankings API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Athlete Rankings API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(rankings.router)
    register_error_handlers(app)
    return app


app = create_app()
