import logging

from linkshortener.constants import LogEvent
from linkshortener.dao.base import EventLogBaseDAO
from linkshortener.types import Clipboard


logger = logging.getLogger(__name__)


def copy_short_url(short_url: str, clipboard: Clipboard, event_log: EventLogBaseDAO) -> bool:
    """Hand a short URL to an external clipboard capability

    Args:
        short_url (str):
            Full short URL, e.g. 'https://sho.rt/abc123'.
        clipboard (Clipboard):
            Callable copying text; signals failure by raising.
        event_log (EventLogBaseDAO):
            Receives a `copied` event on success.

    Returns:
        bool: True if the clipboard accepted the text, False otherwise.
    """
    try:
        clipboard(short_url)
    except Exception:
        logger.warning('Copy to clipboard failed.', exc_info=True, extra={'shortUrl': short_url})
        return False

    event_log.write(LogEvent.COPIED, {'text': short_url})
    return True
