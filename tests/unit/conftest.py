import random
from unittest.mock import MagicMock

import pytest
import redis

from linkshortener.dao.memory import InMemoryKeyValueStore, ShortLinkMemoryDAO, EventLogMemoryDAO
from linkshortener.services import LinkStore
from linkshortener.utils import CodeGenerator


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.get.return_value = None
    return client


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def link_dao(memory_store: InMemoryKeyValueStore, app_prefix: str) -> ShortLinkMemoryDAO:
    return ShortLinkMemoryDAO(store=memory_store, prefix=app_prefix)


@pytest.fixture
def event_log(memory_store: InMemoryKeyValueStore, app_prefix: str) -> EventLogMemoryDAO:
    return EventLogMemoryDAO(store=memory_store, prefix=app_prefix)


@pytest.fixture
def store(link_dao: ShortLinkMemoryDAO, event_log: EventLogMemoryDAO) -> LinkStore:
    """LinkStore over an isolated memory backend with a seeded generator."""
    return LinkStore(link_dao, event_log, generator=CodeGenerator(rng=random.Random(1234)))
