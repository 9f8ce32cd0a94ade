import pytest

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.memory import InMemoryKeyValueStore, ShortLinkMemoryDAO, EventLogMemoryDAO
from linkshortener.services import LinkStore


class UnwritableShortLinkDAO(ShortLinkMemoryDAO):
    """Memory repository whose writes always fail."""

    def save(self, links, **kwargs):
        raise DataStoreError("Can't connect to Redis at redis.test:6379/0.")


@pytest.fixture
def failing_store(memory_store: InMemoryKeyValueStore, app_prefix: str, event_log: EventLogMemoryDAO) -> LinkStore:
    """LinkStore sharing the `store` fixture's data, but unable to persist changes."""
    return LinkStore(UnwritableShortLinkDAO(store=memory_store, prefix=app_prefix), event_log)
