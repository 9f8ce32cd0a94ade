from linkshortener.dao.base import ShortLinkBaseDAO, EventLogBaseDAO
from linkshortener.dao.key_schema import KeySchema


__all__ = [
    'ShortLinkBaseDAO',
    'EventLogBaseDAO',
    'KeySchema',
]
