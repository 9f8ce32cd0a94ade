"""Unit tests for the ShortLinkRedisDAO

Test coverage includes:

1. Loading
   - Ensures a missing blob loads as an empty collection.
   - Ensures stored blobs decode to ShortLinkModel instances.
   - Confirms Redis connection errors raise DataStoreError.

2. Saving
   - Ensures the collection is stored as one blob under <prefix>:links.
   - Ensures invalid types raise BeartypeCallHintParamViolation.

3. Transactions
   - Ensures mutations are written through WATCH/MULTI/EXEC.
   - Ensures no write happens when the mutation returns no collection.
   - Ensures exceptions raised by the mutation abort the write.
"""

from datetime import datetime, timedelta, UTC

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from linkshortener.models import ShortLinkModel
from linkshortener.dao.codec import encode_links, decode_links
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.redis import ShortLinkRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def link() -> ShortLinkModel:
    now = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    return ShortLinkModel(
        id='9d0c6e8e-8d0a-4c1c-9a53-0f3c7e7a2b11',
        shortcode='abc123',
        long_url='https://example.com/blog/chuck-norris-is-awesome',
        created_at=now,
        expire_at=now + timedelta(minutes=30),
    )


@pytest.fixture
def dao(redis_client, app_prefix) -> ShortLinkRedisDAO:
    return ShortLinkRedisDAO(redis_client=redis_client, prefix=app_prefix)


# -------------------------------
# 1. Loading
# -------------------------------


def test_load_empty(dao, redis_client):
    assert dao.load() == []
    redis_client.get.assert_called_once_with('testapp:test:links')


def test_load_links(dao, redis_client, link):
    redis_client.get.return_value = encode_links([link])

    assert dao.load() == [link]


def test_load_with_connection_error(dao, redis_client):
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
        dao.load()


def test_load_corrupt_blob(dao, redis_client):
    redis_client.get.return_value = '{not json'

    with pytest.raises(DataStoreError):
        dao.load()


# -------------------------------
# 2. Saving
# -------------------------------


def test_save(dao, redis_client, link):
    assert dao.save([link]) is dao

    key, blob = redis_client.set.call_args.args
    assert key == 'testapp:test:links'
    assert decode_links(blob) == [link]


def test_save_invalid_type(dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        dao.save('abc123')


# -------------------------------
# 3. Transactions
# -------------------------------


def test_transaction_writes_mutation(dao, redis_client, link):
    result = dao.transaction(lambda links: ([link, *links], 'created'))

    assert result == 'created'
    redis_client.watch.assert_called_once_with('testapp:test:links')
    key, blob = redis_client.set.call_args.args
    assert key == 'testapp:test:links'
    assert decode_links(blob) == [link]
    redis_client.execute.assert_called_once()


def test_transaction_passes_current_collection(dao, redis_client, link):
    redis_client.get.return_value = encode_links([link])
    seen = []

    def inspect(links):
        seen.extend(links)
        return None, None

    dao.transaction(inspect)

    assert seen == [link]
    redis_client.set.assert_not_called()


def test_transaction_mutation_error_aborts_write(dao, redis_client):
    def mutate(links):
        raise ValueError('rejected')

    with pytest.raises(ValueError, match='rejected'):
        dao.transaction(mutate)

    redis_client.set.assert_not_called()
    redis_client.execute.assert_not_called()


def test_transaction_with_connection_error(dao, redis_client):
    redis_client.watch.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError):
        dao.transaction(lambda links: (links, None))
