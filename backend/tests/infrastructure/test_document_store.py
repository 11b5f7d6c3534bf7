"""MongoDonationStore — document specifics: layout, missing aggregate, driver failures.

Design Decisions:
    - mongomock-motor stands in for a server; _FailingClient simulates an
      unreachable cluster by raising the driver's own timeout error
"""

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from donation_drive.core.errors import StorageUnavailableError
from donation_drive.infrastructure.document_store import (
    MongoDonationStore, database_name_from_url,
)
from tests.factories import draft


async def test_donor_document_layout(mongo_store):
    record = await mongo_store.insert_donor(draft("Asha Rao", "O-"))
    doc = await mongo_store._donors.find_one({})
    assert str(doc["_id"]) == record.id
    assert doc["fullName"] == "Asha Rao"
    assert doc["bloodGroup"] == "O-"
    assert doc["age"] == 22
    assert doc["year"] == "SY"
    assert "donatedAt" in doc


async def test_stats_document_keyed_global(mongo_store):
    await mongo_store.increment_stats()
    doc = await mongo_store._stats.find_one({"_id": "global"})
    assert doc["totalBloodUnits"] == 1
    assert doc["lastUpdated"] is not None


async def test_get_stats_defaults_when_aggregate_missing(mongo_store):
    await mongo_store._stats.delete_many({})
    stats = await mongo_store.get_stats()
    assert stats.total == 0
    assert stats.last_updated is None


async def test_increment_recreates_missing_aggregate(mongo_store):
    await mongo_store._stats.delete_many({})
    assert await mongo_store.increment_stats() == 1


def test_database_name_taken_from_url_path():
    assert database_name_from_url("mongodb://h:27017/drive?retryWrites=true", "x") == "drive"
    assert database_name_from_url("mongodb+srv://u:p@cluster.example.net/", "fallback") == "fallback"


# ─── unreachable cluster ─────────────────────────────────────────

class _FailingCollection:
    async def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers available")

    create_index = update_one = insert_one = find_one = _fail
    find_one_and_update = count_documents = _fail


class _FailingDatabase:
    def __getitem__(self, name):
        return _FailingCollection()

    async def command(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("No servers available")


class _FailingClient:
    def __init__(self, url, **kwargs):
        self.closed = False

    def __getitem__(self, name):
        return _FailingDatabase()

    def close(self):
        self.closed = True


@pytest.fixture
def unreachable_store():
    return MongoDonationStore("mongodb://10.255.255.1/drive", client_factory=_FailingClient)


async def test_initialize_failure_is_recorded_not_raised(unreachable_store):
    assert await unreachable_store.initialize() is False
    assert "No servers available" in unreachable_store.last_error


async def test_data_operations_surface_storage_unavailable(unreachable_store):
    with pytest.raises(StorageUnavailableError) as exc_info:
        await unreachable_store.get_stats()
    assert exc_info.value.context.backend == "document"


async def test_health_check_false_when_unreachable(unreachable_store):
    assert await unreachable_store.health_check() is False


async def test_shutdown_closes_client(unreachable_store):
    await unreachable_store.shutdown()
    assert unreachable_store._client.closed is True
