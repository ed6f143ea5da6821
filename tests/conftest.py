"""Shared fixtures for the Savorist test suite."""

import asyncio

import pytest

from savorist.client.storage import KeyValueStore
from savorist.errors import CacheReadError, CacheWriteError
from savorist.services import EntityStore, QueryService, ensure_seed_data


class MemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store that yields to the event loop on every call."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False) -> None:
        self.items: dict[str, str] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.writes = 0

    async def get_item(self, key: str) -> str | None:
        await asyncio.sleep(0)
        if self.fail_reads:
            raise CacheReadError("storage unavailable")
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        if self.fail_writes:
            raise CacheWriteError("disk full")
        self.items[key] = value
        self.writes += 1


@pytest.fixture
def store(tmp_path):
    """Create an empty entity store in a temporary database."""
    entity_store = EntityStore(tmp_path / "savorist-test.db")
    entity_store.init_schema()
    return entity_store


@pytest.fixture
def seeded_store(store):
    """Create an entity store holding the demo catalog."""
    ensure_seed_data(store)
    return store


@pytest.fixture
def query_service(seeded_store):
    """Create a query service over the demo catalog."""
    return QueryService(seeded_store)


@pytest.fixture
def broken_query_service(tmp_path):
    """Create a query service whose database path cannot be opened."""
    return QueryService(EntityStore(tmp_path))


@pytest.fixture
def memory_storage():
    """Create an empty in-memory key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def storage_factory():
    """Return the in-memory storage class for tests that need failure modes."""
    return MemoryKeyValueStore
