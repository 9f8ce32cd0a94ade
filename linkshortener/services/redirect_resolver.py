"""Resolve shortcodes to their destination and record clicks.

A redirect attempt goes through the states

    RESOLVING -> REDIRECTING | NOT_FOUND | EXPIRED

Only REDIRECTING touches the store: exactly one click is recorded, at
resolution time. NOT_FOUND and EXPIRED are terminal and leave the store
unchanged; in particular an expired link is not purged by a failed redirect.

Example:
    >>> resolver = RedirectResolver(store)
    >>> result = resolver.resolve('abc123', RequestContext(referrer='https://news.example'))
    >>> result.status
    <RedirectStatus.REDIRECTING: 'redirecting'>
    >>> result.target
    'https://example.com'
"""

import logging
from dataclasses import dataclass
from enum import StrEnum

from linkshortener.constants import LogEvent
from linkshortener.dao.exceptions import ShortLinkNotFoundError
from linkshortener.models import ClickEventModel, CoarseLocale, ShortLinkModel
from linkshortener.services.click_recorder import ClickRecorder
from linkshortener.services.link_store import LinkStore
from linkshortener.utils.timestamps import utcnow


logger = logging.getLogger(__name__)


class RedirectStatus(StrEnum):
    RESOLVING = 'resolving'
    REDIRECTING = 'redirecting'
    NOT_FOUND = 'not_found'
    EXPIRED = 'expired'


@dataclass(frozen=True)
class RequestContext:
    """Client information attached to a redirect request.

    Attributes:
        referrer (str):
            Referrer of the request, empty for direct visits.
        language (str):
            Client language tag, e.g. 'en-US'.
        timezone (str):
            Client IANA timezone, e.g. 'Europe/Sofia'.
        source_path (str):
            Path the redirect request originated from.
    """

    referrer: str = ''
    language: str = ''
    timezone: str = ''
    source_path: str = '/'


@dataclass(frozen=True)
class RedirectResult:
    status: RedirectStatus
    shortcode: str
    target: str | None = None
    link: ShortLinkModel | None = None

    @property
    def ok(self) -> bool:
        return self.status is RedirectStatus.REDIRECTING


class RedirectResolver:
    """Resolve shortcodes against a LinkStore.

    Attributes:
        store (LinkStore):
            Link collection to resolve against.
        recorder (ClickRecorder):
            Records a click for every successful resolution.
    """

    def __init__(self, store: LinkStore, recorder: ClickRecorder | None = None):
        self.store = store
        self.recorder = recorder or ClickRecorder(store)

    @property
    def event_log(self):
        return self.store.event_log

    def resolve(self, shortcode: str, context: RequestContext | None = None) -> RedirectResult:
        """Resolve `shortcode` and record a click on success

        Args:
            shortcode (str):
                Shortcode taken from the request path.
            context (RequestContext, optional):
                Referrer, coarse locale and source path of the request.

        Returns:
            RedirectResult:
                REDIRECTING with the unchanged long URL as `target`,
                or NOT_FOUND / EXPIRED without a target.

        Raises:
            DataStoreError: If the store could not be read or the click persisted.
        """
        context = context or RequestContext()

        link = self.store.find_by_code(shortcode)
        if link is None:
            return self._fail(shortcode, RedirectStatus.NOT_FOUND)

        now = utcnow()
        if link.is_expired(now):
            return self._fail(shortcode, RedirectStatus.EXPIRED, link=link)

        click = ClickEventModel(
            ts=now,
            referrer=context.referrer or '',
            coarse_locale=CoarseLocale(language=context.language or '', timezone=context.timezone or ''),
            source_path=context.source_path or '/',
        )
        try:
            updated = self.recorder.append(link, click)
        except ShortLinkNotFoundError:
            # The link was purged between lookup and click recording
            return self._fail(shortcode, RedirectStatus.NOT_FOUND)

        logger.info('Short link resolved.', extra={'shortcode': shortcode, 'clicks': updated.total_clicks})
        self.event_log.write(LogEvent.REDIRECT_CLICK, {'code': shortcode})
        return RedirectResult(RedirectStatus.REDIRECTING, shortcode, target=link.long_url, link=updated)

    def _fail(self, shortcode: str, status: RedirectStatus, link: ShortLinkModel | None = None) -> RedirectResult:
        logger.info('Short link could not be resolved.', extra={'shortcode': shortcode, 'reason': str(status)})
        self.event_log.write(LogEvent.REDIRECT_FAILED, {'code': shortcode, 'reason': str(status)})
        return RedirectResult(status, shortcode, link=link)
