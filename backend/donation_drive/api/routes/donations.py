"""Donation Routes — registration form submission and donor roster.

Invariants:
    - POST /api/donate returns 201 only after both insert and increment succeeded
    - GET /api/donors never returns more than DONORS_MAX_LIMIT rows
    - Roster entries carry fullName, bloodGroup, donatedAt only (no age/year/id)
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from donation_drive.api.dependencies import get_store
from donation_drive.config import get_settings
from donation_drive.core.list_limits import resolve_list_limit
from donation_drive.core.repository_protocols import DonationStore
from donation_drive.schemas.donation import DonationSubmission
from donation_drive.services.register_donation import register_donation

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["donations"])


@router.post("/donate", status_code=status.HTTP_201_CREATED)
async def donate(
    body: DonationSubmission, store: DonationStore = Depends(get_store),
):
    """Register a donation and return the new aggregate total."""
    receipt = await register_donation(store, body.to_candidate())
    return {
        "success": True,
        "message": "Donation registered successfully",
        "data": {
            "donor": {
                "fullName": receipt.donor.full_name,
                "bloodGroup": receipt.donor.blood_group,
            },
            "totalUnits": receipt.total_units,
        },
    }


@router.get("/donors")
async def list_donors(
    limit: str | None = Query(None),
    store: DonationStore = Depends(get_store),
):
    """Most recent donors, newest first."""
    settings = get_settings()
    resolved = resolve_list_limit(
        limit,
        default=settings.donors_default_limit,
        maximum=settings.donors_max_limit,
    )
    donors = await store.list_donors(resolved)
    return {"success": True, "data": [d.to_public() for d in donors]}
