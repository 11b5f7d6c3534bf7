"""Root conftest — shared stores, API client and settings toggles.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path or a fresh in-memory Mongo
    - The app's store dependency is overridden; the lifespan never runs in tests
    - Settings cache cleared around any test that changes environment
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Never pick up a developer's real database or verbose mode
os.environ.pop("DATABASE_URL", None)
os.environ.setdefault("VERBOSE_ERRORS", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from donation_drive.api.dependencies import get_optional_store  # noqa: E402
from donation_drive.config import get_settings  # noqa: E402
from donation_drive.infrastructure.document_store import MongoDonationStore  # noqa: E402
from donation_drive.infrastructure.sql_store import SqlDonationStore  # noqa: E402
from donation_drive.main import app  # noqa: E402


def mock_mongo_factory(url, **kwargs):
    return AsyncMongoMockClient()


@pytest.fixture
async def sql_store(tmp_path):
    store = SqlDonationStore(f"sqlite+aiosqlite:///{tmp_path / 'donations.db'}")
    assert await store.initialize()
    yield store
    await store.shutdown()


@pytest.fixture
async def mongo_store():
    store = MongoDonationStore(
        "mongodb://localhost:27017/drive_test", client_factory=mock_mongo_factory,
    )
    assert await store.initialize()
    yield store
    await store.shutdown()


@pytest.fixture(params=["sql", "document"])
async def store(request, tmp_path):
    """Each contract test runs once per backend."""
    if request.param == "sql":
        s = SqlDonationStore(f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}")
    else:
        s = MongoDonationStore(
            "mongodb://localhost:27017/drive_contract",
            client_factory=mock_mongo_factory,
        )
    assert await s.initialize()
    yield s
    await s.shutdown()


@pytest.fixture
async def client(sql_store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_optional_store] = lambda: sql_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def unconfigured_client():
    """Client for an app started without DATABASE_URL."""
    app.dependency_overrides[get_optional_store] = lambda: None

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def verbose_errors(monkeypatch):
    monkeypatch.setenv("VERBOSE_ERRORS", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
