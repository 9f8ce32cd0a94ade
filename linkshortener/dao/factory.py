"""Build DAOs for the backend selected in the application configuration.

The loaded configuration names its `active_backend` and carries that backend's
connection parameters (see `linkshortener.utils.config.load_config`):

    {'active_backend': 'redis', 'redis': {'host': ..., 'port': ..., 'db': ...}, 'links': {...}}

The `memory` backend keeps all blobs in one process-wide
InMemoryKeyValueStore, so DAOs built in the same process share their data.
"""

import logging
from typing import Any

from linkshortener.constants import Backend
from linkshortener.exceptions import BadConfigurationError
from linkshortener.dao.base import ShortLinkBaseDAO, EventLogBaseDAO
from linkshortener.dao.memory import InMemoryKeyValueStore, ShortLinkMemoryDAO, EventLogMemoryDAO
from linkshortener.dao.redis import ShortLinkRedisDAO, EventLogRedisDAO
from linkshortener.utils.config import LinkSettings


logger = logging.getLogger(__name__)

_memory_store = InMemoryKeyValueStore()


def _backend(app_config: dict[str, Any]) -> Backend:
    backend = app_config.get('active_backend', Backend.REDIS)
    try:
        return Backend(backend)
    except ValueError as e:
        raise BadConfigurationError(f'Unsupported backend: {backend!r}') from e


def _redis_kwargs(app_config: dict[str, Any]) -> dict[str, Any]:
    return {f'redis_{k}': v for k, v in (app_config.get(Backend.REDIS) or {}).items()}


def short_link_dao(app_config: dict[str, Any], settings: LinkSettings, prefix: str | None = None) -> ShortLinkBaseDAO:
    backend = _backend(app_config)
    logger.debug('Using %s backend for short links.', backend)
    if backend is Backend.MEMORY:
        return ShortLinkMemoryDAO(store=_memory_store, prefix=prefix)
    return ShortLinkRedisDAO(**_redis_kwargs(app_config), prefix=prefix, max_retries=settings.max_transaction_retries)


def event_log_dao(app_config: dict[str, Any], settings: LinkSettings, prefix: str | None = None) -> EventLogBaseDAO:
    backend = _backend(app_config)
    if backend is Backend.MEMORY:
        return EventLogMemoryDAO(store=_memory_store, prefix=prefix, capacity=settings.log_capacity)
    return EventLogRedisDAO(
        **_redis_kwargs(app_config),
        prefix=prefix,
        capacity=settings.log_capacity,
        max_retries=settings.max_transaction_retries,
    )
