"""Health & Readiness Probes — liveness plus registry readiness.

Invariants:
    - GET /health/ returns 200 whenever the process is up
    - GET /health/ready returns 503 until the database answers
    - Readiness also reports the configured default serving domain name and
      the number of hierarchy locks currently held, for operators

Design Decisions:
    - db_manager read through the module: it is assigned at startup, after import
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import app.infrastructure.database as database
from app.core.serving_domain import default_serving_domain_name
from app.infrastructure.name_locks import name_locks

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "domain-registry", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "default_serving_domain": default_serving_domain_name.get(),
        "active_locks": len(name_locks.active_keys()),
    }
