"""Health Routes — liveness and database readiness, both unguarded.

Invariants:
    - /health/ answers 200 whenever the event loop is serving requests
    - /health/ready answers 503 until the lifespan has opened the engine, and
      whenever SELECT 1 fails
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from foopoc import __version__
from foopoc.infrastructure import database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": "foopoc", "version": __version__}


@router.get("/ready")
async def readiness():
    """Report whether the store answers; the manager is looked up per call."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
