"""Health & Readiness Probes - liveness and readiness for container orchestration.

Invariants:
    - GET /health/ is 200 whenever the process can serve requests
    - GET /health/ready is 503 unless the database answers and the demo fixtures load
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from marketplace import __version__
from marketplace.api.dependencies import get_fixtures
from marketplace.core.repository_protocols import FixtureProvider
from marketplace.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

REQUIRED_FIXTURES = ("demo_user", "events")


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": "academic-nft-marketplace", "version": __version__}


@router.get("/ready")
async def readiness(fixtures: FixtureProvider = Depends(get_fixtures)):
    manager = database.db_manager
    checks = {
        "database": "healthy" if manager and await manager.health_check() else "unavailable",
        "fixtures": "healthy" if all(fixtures.has(k) for k in REQUIRED_FIXTURES) else "missing",
    }
    failing = sorted(name for name, state in checks.items() if state != "healthy")
    if failing:
        logger.warning(f"Readiness failed: {failing}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
