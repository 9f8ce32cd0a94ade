"""Redis-backed diagnostic event log

The log is stored as one JSON array blob under `<prefix>:logs`, newest entry
first, truncated to the configured capacity on every write.

Example:
    >>> dao = EventLogRedisDAO(prefix='linkshortener:dev')
    >>> dao.write('short_created', {'shortcode': 'abc123'})
    LogEntryModel(id='...', timestamp=..., event='short_created', payload={'shortcode': 'abc123'})
    >>> [entry.event for entry in dao.read()]
    ['short_created']
"""

import redis
from beartype import beartype

from linkshortener.constants import LinkDefaults
from linkshortener.models import LogEntryModel
from linkshortener.dao.base import EventLogBaseDAO
from linkshortener.dao.codec import encode_log
from linkshortener.dao.exceptions import DAOError
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error


class EventLogRedisDAO(RedisClientMixin, EventLogBaseDAO):
    swallowed_errors = (DAOError, redis.exceptions.RedisError)

    def __init__(self, capacity: int = LinkDefaults.LOG_CAPACITY, **kwargs):
        RedisClientMixin.__init__(self, **kwargs)
        EventLogBaseDAO.__init__(self, capacity=capacity)

    @handle_redis_connection_error
    @beartype
    def _prepend(self, entry: LogEntryModel) -> None:
        def update(blob: str | None) -> tuple[str, None]:
            entries = [entry, *self._decode(blob)][: self.capacity]
            return encode_log(entries), None

        self._check_and_set(self.keys.logs_key(), update)

    @handle_redis_connection_error
    def read(self) -> list[LogEntryModel]:
        return self._decode(self.redis.get(self.keys.logs_key()))

    @handle_redis_connection_error
    def clear(self) -> None:
        self.redis.delete(self.keys.logs_key())
