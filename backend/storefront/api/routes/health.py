"""Health & Readiness Probes — liveness and per-store readiness endpoints.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if EITHER store is unreachable (readiness)
    - Each store is probed independently; one hanging store never hides the other's state

Design Decisions:
    - Separate liveness/readiness: a degraded start keeps the process alive (liveness ok)
      while readiness reports which store is down
    - Startup bootstrap outcome reported alongside the live probe: an operator sees both
      "schema never created" and "store currently unreachable"
"""

import asyncio
import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from storefront.core.domain_types import StoreName
from storefront.infrastructure import database
from storefront.infrastructure.store_initializer import get_store_status

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "storefront-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


async def _probe(name: StoreName) -> bool:
    manager = database.stores.get(name)
    return await manager.health_check() if manager else False


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes connectivity of both stores."""
    names = list(StoreName)
    results = await asyncio.gather(*(_probe(name) for name in names))
    checks = {}
    for name, ok in zip(names, results):
        init = get_store_status(name)
        checks[name.value] = {
            "reachable": ok,
            "initialization": init.to_dict() if init else None,
        }

    if not all(results):
        down = [name.value for name, ok in zip(names, results) if not ok]
        logger.warning(f"Readiness failed, stores down: {', '.join(down)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "store_unavailable",
                "checks": checks,
            },
        )
    return {"status": "ready", "checks": checks}
