from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.short_link_redis_dao import ShortLinkRedisDAO
from linkshortener.dao.redis.event_log_redis_dao import EventLogRedisDAO


__all__ = [
    'RedisClientMixin',
    'ShortLinkRedisDAO',
    'EventLogRedisDAO',
]
