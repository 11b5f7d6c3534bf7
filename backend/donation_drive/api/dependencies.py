"""Route Dependencies — inject the process-wide DonationStore.

Invariants:
    - The store lives on app.state, created in the lifespan, never imported globally
    - get_store raises StorageNotConfiguredError when no backend was configured
"""

from fastapi import Depends, Request

from donation_drive.core.errors import StorageNotConfiguredError
from donation_drive.core.repository_protocols import DonationStore


def get_optional_store(request: Request) -> DonationStore | None:
    """Store or None — for diagnostics that must answer without storage."""
    return getattr(request.app.state, "store", None)


def get_store(
    store: DonationStore | None = Depends(get_optional_store),
) -> DonationStore:
    """FastAPI dependency for data endpoints."""
    if store is None:
        raise StorageNotConfiguredError()
    return store
