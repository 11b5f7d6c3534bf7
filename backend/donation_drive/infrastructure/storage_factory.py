"""Storage Factory — picks the DonationStore implementation from DATABASE_URL.

Invariants:
    - Selection is by URL scheme only; callers never branch on backend identity
    - No URL -> None (storage disabled, data endpoints answer 500)
    - Unsupported scheme, malformed URL or unloadable driver -> ValueError

Design Decisions:
    - Construction never opens a connection: both engines connect lazily, so
      reachability problems surface in initialize(), not here
"""

import logging

from pymongo.errors import PyMongoError
from sqlalchemy.exc import SQLAlchemyError

from donation_drive.config import Settings
from donation_drive.core.repository_protocols import DonationStore
from donation_drive.infrastructure.document_store import MongoDonationStore
from donation_drive.infrastructure.sql_store import SqlDonationStore

logger = logging.getLogger(__name__)

DOCUMENT_SCHEMES = ("mongodb", "mongodb+srv")
SQL_SCHEMES = ("postgresql", "sqlite")


def url_scheme(url: str) -> str:
    return url.split("://", 1)[0].lower()


def build_store(settings: Settings) -> DonationStore | None:
    """Create the configured store, or None when DATABASE_URL is unset."""
    url = settings.database_url
    if not url:
        logger.warning("No DATABASE_URL provided. Database features will be disabled.")
        return None

    scheme = url_scheme(url)
    if scheme in DOCUMENT_SCHEMES:
        try:
            return MongoDonationStore(
                url,
                database_name=settings.mongo_database,
                server_selection_timeout_ms=settings.database_connect_timeout_seconds * 1000,
            )
        except PyMongoError as e:
            raise ValueError(f"Cannot create MongoDB client for scheme '{scheme}': {e}") from e
    # sqlite+aiosqlite, postgresql+asyncpg: driver suffix after "+"
    if scheme.split("+", 1)[0] in SQL_SCHEMES:
        try:
            return SqlDonationStore(
                url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
                connect_timeout=settings.database_connect_timeout_seconds,
            )
        except (SQLAlchemyError, ImportError) as e:
            raise ValueError(f"Cannot create SQL engine for scheme '{scheme}': {e}") from e
    raise ValueError(f"Unsupported DATABASE_URL scheme: '{scheme}'")
