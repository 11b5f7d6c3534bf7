"""Stats Routes — aggregate read and administrative recount.

Invariants:
    - GET /api/stats returns the stored aggregate verbatim (no recount)
    - POST /api/sync-stats is the only path that recounts the donor log
"""

from fastapi import APIRouter, Depends

from donation_drive.api.dependencies import get_store
from donation_drive.core.repository_protocols import DonationStore
from donation_drive.services.reconcile_stats import reconcile_stats

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
async def get_stats(store: DonationStore = Depends(get_store)):
    """Current total and last update time, polled by the dashboard."""
    snapshot = await store.get_stats()
    return {
        "success": True,
        "data": {
            "totalBloodUnits": snapshot.total,
            "lastUpdated": snapshot.last_updated,
        },
    }


@router.post("/sync-stats")
async def sync_stats(store: DonationStore = Depends(get_store)):
    """Recount donors and overwrite the aggregate."""
    result = await reconcile_stats(store)
    return {
        "success": True,
        "message": f"Stats synced. Total donors: {result.total}",
        "data": {"totalBloodUnits": result.total},
    }
