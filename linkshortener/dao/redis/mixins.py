"""Redis mixin providing shared client initialization, healthchecks and
optimistic-locking updates of single-key blobs.

Responsibilities:
    - Initialize Redis client
    - Healthcheck Redis client
    - Run check-and-set (WATCH/MULTI/EXEC) updates of a blob key

Classes:
    - RedisClientMixin: Base mixin to inject key management, client setup,
      healthcheck and check-and-set updates.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
        ...     pass
        ...
        >>> dao = ShortLinkRedisDAO(prefix="myapp:prod")
        >>> dao._healthcheck()
        True
"""

import logging
from collections.abc import Callable
from typing import Optional, TypeVar

import redis

from linkshortener.constants import LinkDefaults
from linkshortener.dao.key_schema import KeySchema
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.redis.helpers import redis_location


logger = logging.getLogger(__name__)

T = TypeVar('T')


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (KeySchema):
            Helper class for generating namespaced key names.

        max_retries (int):
            Attempts of a check-and-set update before giving up.

    Methods:
        _healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.

        _check_and_set(key, update) -> T:
            Optimistically update the blob stored under `key`.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
        max_retries: int = LinkDefaults.MAX_TRANSACTION_RETRIES,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters.

        Args:
            redis_host (Optional[str]):
                Hostname of the Redis server. Defaults to 'localhost'.

            redis_port (Optional[int]):
                Redis server port. Defaults to 6379.

            redis_db (Optional[int]):
                Redis database index. Defaults to 0.

            redis_decode_responses (Optional[bool]):
                If True, decodes Redis responses. Defaults to True.

            redis_username (Optional[str]):
                Username for Redis authentication (if required).

            redis_password (Optional[str]):
                Password for Redis authentication (if required).

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (Optional[str]):
                Namespace prefix for all keys, e.g. 'app:env'.

            max_retries (int):
                Attempts of an optimistic update before raising DataStoreError.

        Raises:
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = KeySchema(prefix=prefix)
        self.max_retries = max_retries

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.
        """
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True

    def _check_and_set(self, key: str, update: Callable[[str | None], tuple[str | None, T]]) -> T:
        """Optimistically update the blob stored under `key`

        The key is WATCHed while its current blob is read and `update` computes
        the replacement. The replacement is written in a MULTI/EXEC block, which
        Redis aborts if another client modified the key in the meantime. Aborted
        attempts are retried up to `max_retries` times.

        Args:
            key (str):
                Key of the blob to update.
            update (Callable[[str | None], tuple[str | None, T]]):
                Receives the current blob (None if missing) and returns
                (new blob or None to skip the write, result).

        Returns:
            T: the result returned by `update` on the successful attempt.

        Raises:
            DataStoreError:
                If every attempt lost the race against a concurrent writer.
        """
        for attempt in range(1, self.max_retries + 1):
            with self.redis.pipeline(transaction=True) as pipe:
                try:
                    pipe.watch(key)
                    new_blob, result = update(pipe.get(key))
                    if new_blob is None:
                        return result

                    pipe.multi()
                    pipe.set(key, new_blob)
                    pipe.execute()
                    return result
                except redis.exceptions.WatchError:
                    logger.info(
                        'Concurrent write detected. Retrying update.',
                        extra={'key': key, 'attempt': attempt},
                    )

        raise DataStoreError(f"Failed to update '{key}' after {self.max_retries} attempts due to concurrent writes.")
