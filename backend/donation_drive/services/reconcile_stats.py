"""Aggregate Reconciler — recompute the stats total from the donor log.

Invariants:
    - The stored total after reconcile equals the donor count at recount time
    - Running it twice in a row yields the same total (idempotent)

Design Decisions:
    - Administrative only (POST /api/sync-stats): recount is a full count,
      never run on the donation path
    - Previous total is read first purely to report drift in logs and results
"""

import logging
from dataclasses import dataclass

from donation_drive.core.repository_protocols import DonationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    total: int
    previous_total: int

    @property
    def drift(self) -> int:
        return self.total - self.previous_total


async def reconcile_stats(store: DonationStore) -> ReconcileResult:
    previous = await store.get_stats()
    total = await store.recount_stats()
    result = ReconcileResult(total=total, previous_total=previous.total)
    log = logger.warning if result.drift else logger.info
    log(
        f"Stats reconciled: {result.previous_total} -> {result.total}",
        extra={
            "backend": store.backend,
            "total": result.total,
            "previous_total": result.previous_total,
            "drift": result.drift,
        },
    )
    return result
