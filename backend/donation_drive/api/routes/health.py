"""Health & Readiness Probes — process and storage connectivity summary.

Invariants:
    - GET /api/health always returns 200 while the process is up, even with no storage
    - GET /api/health/ready returns 503 if storage is missing or unreachable
    - Storage error text only appears when VERBOSE_ERRORS is on

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      load balancer
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from donation_drive.api.dependencies import get_optional_store
from donation_drive.config import get_settings
from donation_drive.core.repository_protocols import DonationStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

_STARTED = time.monotonic()


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(
    store: DonationStore | None = Depends(get_optional_store),
):
    """Liveness plus a storage summary for diagnostics."""
    storage: dict = {"configured": store is not None}
    if store is not None:
        storage["backend"] = store.backend
        storage["connected"] = await store.health_check()
        if get_settings().verbose_errors:
            storage["lastError"] = store.last_error
    return {
        "status": "healthy",
        "service": "donation-drive-api",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptimeSeconds": round(time.monotonic() - _STARTED, 1),
        "storage": storage,
    }


@router.get("/ready")
async def readiness_check(
    store: DonationStore | None = Depends(get_optional_store),
):
    """Readiness probe — includes storage connectivity."""
    if store is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "storage_not_configured"},
        )
    if not await store.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "storage_unavailable"},
        )
    return {"status": "ready", "checks": {"storage": "healthy"}}
