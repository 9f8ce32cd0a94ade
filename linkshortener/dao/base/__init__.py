from linkshortener.dao.base.short_link_base_dao import ShortLinkBaseDAO
from linkshortener.dao.base.event_log_base_dao import EventLogBaseDAO


__all__ = [
    'ShortLinkBaseDAO',
    'EventLogBaseDAO',
]
