"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy and socket exceptions mapped to StorageUnavailableError

Design Decisions:
    - One manager per SqlDonationStore, created at startup and disposed on shutdown
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only for server databases: SQLite pools ignore it
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from donation_drive.core.errors import StorageUnavailableError

logger = logging.getLogger(__name__)

BACKEND = "sql"


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        connect_timeout: int = 10,
    ):
        engine_kwargs: dict = {
            "pool_pre_ping": True,
            "connect_args": {"timeout": connect_timeout},
        }
        if make_url(database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error during {operation}: {e}")
            raise StorageUnavailableError(
                operation, "Integrity constraint violated", BACKEND,
            )
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error during {operation}: {e}")
            raise StorageUnavailableError(
                operation, "Connection or operational error", BACKEND,
            )
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error during {operation}: {e}")
            raise StorageUnavailableError(
                operation, "Database driver error", BACKEND,
            )
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error during {operation}: {e}")
            raise StorageUnavailableError(
                operation, "Database operation failed", BACKEND,
            )
        except OSError as e:
            logger.error(f"DB connection error during {operation}: {e}")
            raise StorageUnavailableError(
                operation, f"Connection failed: {e}", BACKEND,
            )
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except StorageUnavailableError as e:
            logger.error(f"DB health check failed: {e.detail}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
