"""StoreLifecycle — setup contract and lazy re-initialization, backend-free."""

import pytest

from donation_drive.core.errors import StorageUnavailableError
from donation_drive.infrastructure.store_lifecycle import StoreLifecycle


class _FlakySetup(StoreLifecycle):
    backend = "fake"

    def __init__(self, failures: int):
        super().__init__()
        self.failures = failures
        self.attempts = 0

    async def _setup(self) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise StorageUnavailableError("initialize", "refused", self.backend)


def test_subclass_without_setup_cannot_be_constructed():
    class _NoSetup(StoreLifecycle):
        pass

    with pytest.raises(TypeError):
        _NoSetup()


async def test_failed_initialize_is_recorded_then_retried_on_demand():
    store = _FlakySetup(failures=1)
    assert await store.initialize() is False
    assert store.last_error == "initialize failed: refused"

    await store.ensure_ready()
    assert store.ready
    assert store.last_error is None
    assert store.attempts == 2


async def test_ensure_ready_raises_when_retry_fails():
    store = _FlakySetup(failures=2)
    await store.initialize()
    with pytest.raises(StorageUnavailableError):
        await store.ensure_ready()
    assert store.attempts == 2
