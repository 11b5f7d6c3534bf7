"""Document Donation Store — donor log and aggregate on MongoDB.

Invariants:
    - increment_stats is one find_one_and_update with $inc and upsert=True
    - initialize() uses $setOnInsert, so an existing totalBloodUnits is never reset
    - donors documents: {_id, fullName, bloodGroup, age, year, donatedAt}
    - stats document: {_id: "global", totalBloodUnits, lastUpdated}

Design Decisions:
    - pymongo's native async client: the client connects lazily, so construction
      never blocks startup; the first command proves connectivity
    - client_factory injectable so tests can substitute an in-memory client
    - Ties on donatedAt broken by _id (ObjectIds grow with insertion time)
"""

import inspect
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable
from urllib.parse import urlsplit

from pymongo import AsyncMongoClient, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from donation_drive.core.domain_types import (
    STATS_IDENTIFIER, DonorDraft, DonorRecord, DonorSummary, StatsSnapshot,
)
from donation_drive.core.errors import StorageUnavailableError
from donation_drive.infrastructure.store_lifecycle import (
    StoreLifecycle, as_utc, utcnow,
)

logger = logging.getLogger(__name__)

DONORS_COLLECTION = "donors"
STATS_COLLECTION = "stats"

_ROSTER_PROJECTION = {"_id": 0, "fullName": 1, "bloodGroup": 1, "donatedAt": 1}


def database_name_from_url(url: str, default: str) -> str:
    """mongodb://host/dbname?opts -> dbname, else default."""
    path = urlsplit(url).path.lstrip("/")
    return path or default


class MongoDonationStore(StoreLifecycle):
    """DonationStore backed by a MongoDB database."""

    backend = "document"

    def __init__(
        self,
        url: str,
        database_name: str = "blood_donation",
        server_selection_timeout_ms: int = 10_000,
        client_factory: Callable[..., object] = AsyncMongoClient,
    ):
        super().__init__()
        self._client = client_factory(
            url,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            tz_aware=True,
        )
        self._db = self._client[database_name_from_url(url, database_name)]
        self._donors = self._db[DONORS_COLLECTION]
        self._stats = self._db[STATS_COLLECTION]

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        """Map driver failures to StorageUnavailableError."""
        try:
            yield
        except PyMongoError as e:
            logger.error(f"MongoDB error during {operation}: {e}")
            raise StorageUnavailableError(operation, str(e), self.backend)

    async def _setup(self) -> None:
        async with self._guard("initialize"):
            await self._donors.create_index(
                [("donatedAt", DESCENDING)], name="idx_donors_donated_at",
            )
            await self._donors.create_index(
                "bloodGroup", name="idx_donors_blood_group",
            )
            await self._stats.update_one(
                {"_id": STATS_IDENTIFIER},
                {"$setOnInsert": {"totalBloodUnits": 0, "lastUpdated": utcnow()}},
                upsert=True,
            )

    async def insert_donor(self, draft: DonorDraft) -> DonorRecord:
        await self.ensure_ready()
        doc = {
            "fullName": draft.full_name,
            "bloodGroup": draft.blood_group,
            "age": draft.age,
            "year": draft.year,
            "donatedAt": utcnow(),
        }
        async with self._guard("insert_donor"):
            res = await self._donors.insert_one(doc)
        return DonorRecord(
            id=str(res.inserted_id),
            full_name=draft.full_name,
            blood_group=draft.blood_group,
            age=draft.age,
            year=draft.year,
            donated_at=doc["donatedAt"],
        )

    async def increment_stats(self) -> int:
        await self.ensure_ready()
        async with self._guard("increment_stats"):
            doc = await self._stats.find_one_and_update(
                {"_id": STATS_IDENTIFIER},
                {"$inc": {"totalBloodUnits": 1}, "$set": {"lastUpdated": utcnow()}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        return int(doc["totalBloodUnits"])

    async def recount_stats(self) -> int:
        await self.ensure_ready()
        async with self._guard("recount_stats"):
            donor_count = await self._donors.count_documents({})
            await self._stats.update_one(
                {"_id": STATS_IDENTIFIER},
                {"$set": {"totalBloodUnits": donor_count, "lastUpdated": utcnow()}},
                upsert=True,
            )
        return int(donor_count)

    async def get_stats(self) -> StatsSnapshot:
        await self.ensure_ready()
        async with self._guard("get_stats"):
            doc = await self._stats.find_one({"_id": STATS_IDENTIFIER})
        if doc is None:
            return StatsSnapshot()
        return StatsSnapshot(
            total=int(doc.get("totalBloodUnits", 0)),
            last_updated=as_utc(doc.get("lastUpdated")),
        )

    async def list_donors(self, limit: int = 10) -> list[DonorSummary]:
        await self.ensure_ready()
        async with self._guard("list_donors"):
            cursor = self._donors.find(
                {},
                _ROSTER_PROJECTION,
                sort=[("donatedAt", DESCENDING), ("_id", DESCENDING)],
                limit=limit,
            )
            docs = await cursor.to_list(length=None)
        return [
            DonorSummary(
                full_name=d["fullName"],
                blood_group=d["bloodGroup"],
                donated_at=as_utc(d["donatedAt"]),
            )
            for d in docs
        ]

    async def health_check(self) -> bool:
        try:
            async with self._guard("health_check"):
                await self._db.command("ping")
            return True
        except StorageUnavailableError as e:
            logger.error(f"MongoDB health check failed: {e.detail}")
            return False

    async def shutdown(self) -> None:
        try:
            closing = self._client.close()
            if inspect.isawaitable(closing):
                await closing
            logger.info("MongoDB client closed", extra={"backend": self.backend})
        except Exception as e:
            logger.error(f"Error closing MongoDB client: {e}")
