from linkshortener.models.click_event_model import ClickEventModel, CoarseLocale
from linkshortener.models.short_link_model import LinkDraft, ShortLinkModel
from linkshortener.models.log_entry_model import LogEntryModel


__all__ = [
    'ClickEventModel',
    'CoarseLocale',
    'LinkDraft',
    'ShortLinkModel',
    'LogEntryModel',
]
