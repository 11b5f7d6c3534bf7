"""Relational Donation Store — donor log and aggregate on PostgreSQL or SQLite.

Invariants:
    - increment_stats and recount_stats are each ONE SQL statement
      (INSERT .. ON CONFLICT DO UPDATE .. RETURNING), so concurrent callers never
      lose updates and a missing aggregate row is recreated in place
    - initialize() creates tables/indexes with checkfirst and inserts the
      aggregate with ON CONFLICT DO NOTHING — an existing total is never reset
    - list_donors projects name, blood group, timestamp only

Design Decisions:
    - Core statements over ORM unit-of-work: the aggregate must be updated by the
      database, never read-modified-written by Python
    - Dialect-specific insert() picked once at construction; only PostgreSQL
      and SQLite support the upsert + RETURNING combination used here
"""

import logging

from sqlalchemy import func, insert, select
from sqlalchemy.dialects import postgresql, sqlite

from donation_drive.core.domain_types import (
    STATS_IDENTIFIER, DonorDraft, DonorRecord, DonorSummary, StatsSnapshot,
)
from donation_drive.db.base import Base
from donation_drive.infrastructure.database import DatabaseSessionManager
from donation_drive.infrastructure.store_lifecycle import (
    StoreLifecycle, as_utc, utcnow,
)
from donation_drive.models import Donor, Stats

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

donors_table = Donor.__table__
stats_table = Stats.__table__


class SqlDonationStore(StoreLifecycle):
    """DonationStore backed by SQLAlchemy's async engine."""

    backend = "sql"

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        connect_timeout: int = 10,
    ):
        super().__init__()
        self._db = DatabaseSessionManager(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            connect_timeout=connect_timeout,
        )
        dialect = self._db.dialect_name
        if dialect not in _UPSERT_INSERTS:
            raise ValueError(f"Unsupported SQL dialect: {dialect}")
        self._upsert = _UPSERT_INSERTS[dialect]

    async def _setup(self) -> None:
        stmt = self._upsert(stats_table).values(
            identifier=STATS_IDENTIFIER, total_blood_units=0, last_updated=utcnow(),
        ).on_conflict_do_nothing(index_elements=[stats_table.c.identifier])
        async with self._db.session("initialize") as db:
            conn = await db.connection()
            await conn.run_sync(Base.metadata.create_all)
            await db.execute(stmt)
            await db.commit()

    async def insert_donor(self, draft: DonorDraft) -> DonorRecord:
        await self.ensure_ready()
        stmt = insert(donors_table).values(
            full_name=draft.full_name,
            blood_group=draft.blood_group,
            age=draft.age,
            year=draft.year,
            donated_at=utcnow(),
        ).returning(donors_table.c.id, donors_table.c.donated_at)
        async with self._db.session("insert_donor") as db:
            row = (await db.execute(stmt)).one()
            await db.commit()
        return DonorRecord(
            id=str(row.id),
            full_name=draft.full_name,
            blood_group=draft.blood_group,
            age=draft.age,
            year=draft.year,
            donated_at=as_utc(row.donated_at),
        )

    async def increment_stats(self) -> int:
        await self.ensure_ready()
        now = utcnow()
        stmt = self._upsert(stats_table).values(
            identifier=STATS_IDENTIFIER, total_blood_units=1, last_updated=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[stats_table.c.identifier],
            set_={
                "total_blood_units": stats_table.c.total_blood_units + 1,
                "last_updated": now,
            },
        ).returning(stats_table.c.total_blood_units)
        async with self._db.session("increment_stats") as db:
            total = (await db.execute(stmt)).scalar_one()
            await db.commit()
        return int(total)

    async def recount_stats(self) -> int:
        await self.ensure_ready()
        donor_count = select(func.count()).select_from(donors_table).scalar_subquery()
        stmt = self._upsert(stats_table).values(
            identifier=STATS_IDENTIFIER,
            total_blood_units=donor_count,
            last_updated=utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[stats_table.c.identifier],
            set_={
                "total_blood_units": stmt.excluded.total_blood_units,
                "last_updated": stmt.excluded.last_updated,
            },
        ).returning(stats_table.c.total_blood_units)
        async with self._db.session("recount_stats") as db:
            total = (await db.execute(stmt)).scalar_one()
            await db.commit()
        return int(total)

    async def get_stats(self) -> StatsSnapshot:
        await self.ensure_ready()
        stmt = select(
            stats_table.c.total_blood_units, stats_table.c.last_updated,
        ).where(stats_table.c.identifier == STATS_IDENTIFIER).limit(1)
        async with self._db.session("get_stats") as db:
            row = (await db.execute(stmt)).one_or_none()
        if row is None:
            return StatsSnapshot()
        return StatsSnapshot(
            total=int(row.total_blood_units), last_updated=as_utc(row.last_updated),
        )

    async def list_donors(self, limit: int = 10) -> list[DonorSummary]:
        await self.ensure_ready()
        stmt = (
            select(
                donors_table.c.full_name,
                donors_table.c.blood_group,
                donors_table.c.donated_at,
            )
            .order_by(donors_table.c.donated_at.desc(), donors_table.c.id.desc())
            .limit(limit)
        )
        async with self._db.session("list_donors") as db:
            rows = (await db.execute(stmt)).all()
        return [
            DonorSummary(
                full_name=r.full_name,
                blood_group=r.blood_group,
                donated_at=as_utc(r.donated_at),
            )
            for r in rows
        ]

    async def health_check(self) -> bool:
        return await self._db.health_check()

    async def shutdown(self) -> None:
        try:
            await self._db.dispose()
            logger.info("SQL connection pool closed", extra={"backend": self.backend})
        except Exception as e:
            logger.error(f"Error closing SQL connection pool: {e}")
