"""Store Lifecycle — initialization state shared by both storage backends.

Invariants:
    - initialize() never raises: failures are logged and kept in last_error
    - Data operations call ensure_ready() first; a failed startup is retried
      lazily there and surfaces as StorageUnavailableError
    - Timestamps leave the stores timezone-aware (UTC)

Design Decisions:
    - Lazy re-initialization over crash-on-startup: the process stays up so
      /api/health keeps answering while the database is unreachable
    - No retry loop or backoff: one attempt per data call, failure fails the request
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from donation_drive.core.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite and BSON drop the offset)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class StoreLifecycle(ABC):
    """Tracks whether the backend was set up. Subclasses implement _setup()."""

    backend = "unknown"

    def __init__(self):
        self._ready = False
        self._last_error: str | None = None

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @abstractmethod
    async def _setup(self) -> None:
        """Connect, create schema and upsert the aggregate; raise StorageUnavailableError."""

    async def initialize(self) -> bool:
        """Connect, create schema, ensure the aggregate exists. Returns success."""
        try:
            await self._setup()
        except StorageUnavailableError as e:
            self._ready = False
            self._last_error = e.detail
            logger.error(
                f"Storage initialization failed: {e.detail}",
                extra={"backend": self.backend, "operation": "initialize"},
            )
            return False
        self._ready = True
        self._last_error = None
        logger.info(
            "Storage initialized, stats aggregate ensured",
            extra={"backend": self.backend},
        )
        return True

    async def ensure_ready(self) -> None:
        if self._ready:
            return
        if not await self.initialize():
            raise StorageUnavailableError(
                "initialize", self._last_error, backend=self.backend,
            )
