"""Donation Registration — validate, persist the donor, bump the aggregate.

Invariants:
    - Nothing is written unless validate_donation returns None
    - insert_donor runs before increment_stats, as two separate storage calls
    - An increment failure after a successful insert is logged as drift and
      re-raised; the next recount repairs the total

Design Decisions:
    - No cross-call transaction: the document store has none to offer, and
      recount_stats makes drift recoverable on both backends
"""

import logging
from dataclasses import dataclass

from donation_drive.core.domain_types import DonorRecord
from donation_drive.core.errors import DonationRejectedError, StorageUnavailableError
from donation_drive.core.repository_protocols import DonationStore
from donation_drive.core.validate_donation import normalize_donation, validate_donation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DonationReceipt:
    """Stored donor plus the aggregate total after this donation."""
    donor: DonorRecord
    total_units: int


async def register_donation(store: DonationStore, candidate: dict) -> DonationReceipt:
    """Run the validation gate, then insert and increment."""
    error = validate_donation(candidate)
    if error:
        raise DonationRejectedError(error["message"], error["field"])

    draft = normalize_donation(candidate)
    donor = await store.insert_donor(draft)
    try:
        total = await store.increment_stats()
    except StorageUnavailableError:
        logger.warning(
            "Donor stored but aggregate increment failed; total will under-count until recount",
            extra={"backend": store.backend, "operation": "increment_stats"},
        )
        raise

    logger.info(
        f"New donor registered ({donor.blood_group})",
        extra={"backend": store.backend, "total": total},
    )
    return DonationReceipt(donor=donor, total_units=total)
