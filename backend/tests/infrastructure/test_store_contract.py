"""DonationStore contract — every test runs against the SQL and document backends.

Invariants:
    - initialize() is idempotent and never resets an existing total
    - increment_stats is atomic: N concurrent increments add exactly N
    - recount_stats equals the donor count regardless of prior drift, twice in a row
    - list_donors is newest first, truncated, projected
"""

import asyncio
from datetime import timezone

from donation_drive.core.domain_types import DonorSummary
from tests.factories import draft


async def test_fresh_store_reports_zero_total(store):
    stats = await store.get_stats()
    assert stats.total == 0


async def test_insert_returns_record_with_identity_and_utc_timestamp(store):
    record = await store.insert_donor(draft("Asha Rao", "O-"))
    assert record.id
    assert record.full_name == "Asha Rao"
    assert record.blood_group == "O-"
    assert record.age == 22
    assert record.year == "SY"
    assert record.donated_at.tzinfo is not None
    assert record.donated_at.utcoffset() == timezone.utc.utcoffset(None)


async def test_insert_ids_are_unique(store):
    a = await store.insert_donor(draft("Donor A"))
    b = await store.insert_donor(draft("Donor B"))
    assert a.id != b.id


async def test_increment_returns_new_total_and_refreshes_timestamp(store):
    assert await store.increment_stats() == 1
    assert await store.increment_stats() == 2
    stats = await store.get_stats()
    assert stats.total == 2
    assert stats.last_updated is not None


async def test_initialize_does_not_reset_existing_total(store):
    await store.increment_stats()
    await store.increment_stats()
    assert await store.initialize()
    assert (await store.get_stats()).total == 2


async def test_concurrent_increments_lose_no_updates(store):
    results = await asyncio.gather(*(store.increment_stats() for _ in range(20)))
    assert (await store.get_stats()).total == 20
    assert sorted(results) == list(range(1, 21))


async def test_recount_repairs_overcount_and_is_idempotent(store):
    for i in range(3):
        await store.insert_donor(draft(f"Donor {i}"))
    for _ in range(7):
        await store.increment_stats()
    assert (await store.get_stats()).total == 7

    first = await store.recount_stats()
    second = await store.recount_stats()
    assert first == second == 3
    assert (await store.get_stats()).total == 3


async def test_recount_repairs_undercount(store):
    for i in range(4):
        await store.insert_donor(draft(f"Donor {i}"))
    assert await store.recount_stats() == 4


async def test_list_donors_newest_first_and_truncated(store):
    for i in range(5):
        await store.insert_donor(draft(f"Donor {i}"))
    donors = await store.list_donors(2)
    assert [d.full_name for d in donors] == ["Donor 4", "Donor 3"]


async def test_list_donors_default_limit_is_ten(store):
    for i in range(12):
        await store.insert_donor(draft(f"Donor {i}"))
    donors = await store.list_donors()
    assert len(donors) == 10
    assert donors[0].full_name == "Donor 11"


async def test_list_donors_projects_public_fields(store):
    await store.insert_donor(draft("Asha Rao", "O-"))
    (donor,) = await store.list_donors(1)
    assert isinstance(donor, DonorSummary)
    assert set(donor.to_public()) == {"fullName", "bloodGroup", "donatedAt"}


async def test_list_donors_on_empty_log(store):
    assert await store.list_donors(5) == []


async def test_shutdown_does_not_raise(store):
    await store.shutdown()
