from linkshortener.dao.memory.store import InMemoryKeyValueStore
from linkshortener.dao.memory.short_link_memory_dao import ShortLinkMemoryDAO
from linkshortener.dao.memory.event_log_memory_dao import EventLogMemoryDAO


__all__ = [
    'InMemoryKeyValueStore',
    'ShortLinkMemoryDAO',
    'EventLogMemoryDAO',
]
