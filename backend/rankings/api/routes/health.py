"""Health Probes — liveness and database readiness.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests
    - GET /health/ready answers 503 until the ranking database accepts queries
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from rankings.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "athlete-rankings"}


@router.get("/ready")
async def readiness(db: DatabaseSessionManager = Depends(get_db_manager)):
    if not await db.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "database": "unreachable"},
        )
    return {"status": "ready", "database": "ok"}
