"""Health & Readiness Probes — liveness, and readiness of the round scheduler.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Readiness reports how many RoundConfigs are enabled; zero is still
      ready (the materializer simply has nothing to walk)
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select

import roundwatch.infrastructure.database as db_module
from roundwatch.models.round_config import RoundConfig

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "roundwatch-api"}


async def _count_enabled_configs(manager: db_module.DatabaseSessionManager) -> int:
    async with manager.session() as db:
        result = await db.execute(
            select(func.count())
            .select_from(RoundConfig)
            .where(RoundConfig.enabled.is_(True))
        )
        return result.scalar_one()


@router.get("/ready")
async def readiness_check():
    """Database reachable, plus the number of cadences the materializer will walk."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    enabled = await _count_enabled_configs(manager)
    return {
        "status": "ready",
        "checks": {"database": "healthy", "enabled_round_configs": enabled},
    }
