"""Boundary Protocols — the storage contract between services/routes and backends.

Invariants:
    - Services and routes depend on DonationStore only, never on a concrete backend
    - increment_stats is a single atomic storage operation (no read-modify-write)
    - recount_stats is idempotent: it always writes the exact donor count
    - Every data method raises StorageUnavailableError on backend failure
    - initialize() and shutdown() never raise

Design Decisions:
    - Protocol over ABC: structural subtyping, the two backends share no base class
      for their contract (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do network IO on the event loop
"""

from typing import Protocol

from donation_drive.core.domain_types import (
    DonorDraft, DonorRecord, DonorSummary, StatsSnapshot,
)


class DonationStore(Protocol):
    """Contract for donor log + aggregate persistence — implemented per backend."""

    backend: str

    @property
    def last_error(self) -> str | None: ...

    async def initialize(self) -> bool: ...
    async def insert_donor(self, draft: DonorDraft) -> DonorRecord: ...
    async def increment_stats(self) -> int: ...
    async def recount_stats(self) -> int: ...
    async def get_stats(self) -> StatsSnapshot: ...
    async def list_donors(self, limit: int = 10) -> list[DonorSummary]: ...
    async def health_check(self) -> bool: ...
    async def shutdown(self) -> None: ...
