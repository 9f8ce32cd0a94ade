"""Authoritative collection of short links.

LinkStore validates link drafts, assigns shortcodes and runs every mutation of
the collection as one repository transaction, so the uniqueness check for a
shortcode and the write that claims it are atomic.

Classes:
    LinkStore:
        Create, look up, update, filter and purge short links.
    PurgeResult:
        Outcome of `LinkStore.purge_expired()`.

Example:
    >>> from linkshortener.dao.memory import ShortLinkMemoryDAO, EventLogMemoryDAO
    >>> store = LinkStore(ShortLinkMemoryDAO(), EventLogMemoryDAO())
    >>> link = store.insert(LinkDraft(long_url='https://example.com', validity_minutes=1))
    >>> len(link.shortcode)
    7
    >>> store.find_by_code(link.shortcode) == link
    True
    >>> store.insert(LinkDraft(long_url='not-a-url'))
    Traceback (most recent call last):
        ...
    linkshortener.exceptions.InvalidURLError: Row 1: invalid URL 'not-a-url'.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from beartype import beartype

from linkshortener.constants import LogEvent
from linkshortener.dao.base import ShortLinkBaseDAO, EventLogBaseDAO
from linkshortener.dao.exceptions import ShortLinkNotFoundError
from linkshortener.exceptions import (
    ValidationError,
    InvalidURLError,
    InvalidValidityError,
    InvalidShortcodeError,
    ShortcodeCollisionError,
    BatchSizeError,
    ExhaustedCodeSpaceError,
)
from linkshortener.models import LinkDraft, ShortLinkModel
from linkshortener.utils.config import LinkSettings
from linkshortener.utils.shortener import CodeGenerator, is_valid_shortcode
from linkshortener.utils.timestamps import utcnow
from linkshortener.utils.validators import is_valid_url, parse_validity


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurgeResult:
    removed_count: int
    before: int
    after: int


class LinkStore:
    """Short link collection operations over a ShortLinkBaseDAO.

    Attributes:
        dao (ShortLinkBaseDAO):
            Repository holding the persisted collection.
        event_log (EventLogBaseDAO):
            Best-effort diagnostic event sink.
        generator (CodeGenerator):
            Source of candidate shortcodes.
        settings (LinkSettings):
            Defaults and limits for link creation.
    """

    def __init__(
        self,
        dao: ShortLinkBaseDAO,
        event_log: EventLogBaseDAO,
        generator: CodeGenerator | None = None,
        settings: LinkSettings | None = None,
    ):
        self.dao = dao
        self.event_log = event_log
        self.settings = settings or LinkSettings()
        self.generator = generator or CodeGenerator(length=self.settings.shortcode_length)

    @beartype
    def insert(self, draft: LinkDraft) -> ShortLinkModel:
        """Validate a single draft and store the resulting link

        Raises:
            InvalidURLError, InvalidValidityError, InvalidShortcodeError, ShortcodeCollisionError:
                If the draft is rejected. Nothing is stored.
            ExhaustedCodeSpaceError:
                If no free shortcode was found within the retry bound.
            DataStoreError:
                If the collection could not be persisted.
        """
        return self.insert_many([draft])[0]

    @beartype
    def insert_many(self, drafts: Sequence[LinkDraft]) -> list[ShortLinkModel]:
        """Validate a batch of drafts and store all resulting links, or none

        Drafts are validated in order. The first rejected draft aborts the whole
        batch; drafts after it are not evaluated. Shortcodes claimed by earlier
        drafts of the same batch count as taken. Created links are placed in
        front of the collection, in draft order.

        Args:
            drafts (Sequence[LinkDraft]):
                Between 1 and `settings.max_batch_size` drafts.

        Returns:
            list[ShortLinkModel]: the created links, in draft order.

        Raises:
            BatchSizeError:
                If the batch is empty or too large.
            ValidationError:
                Subclass describing the first rejected draft (with its 1-based `row`).
            ExhaustedCodeSpaceError:
                If no free shortcode was found within the retry bound.
            DataStoreError:
                If the collection could not be persisted.
        """
        drafts = list(drafts)
        if not 1 <= len(drafts) <= self.settings.max_batch_size:
            raise BatchSizeError(
                f'Expected between 1 and {self.settings.max_batch_size} links per request (given: {len(drafts)}).',
                value=len(drafts),
            )

        def create(links: list[ShortLinkModel]) -> tuple[list[ShortLinkModel], list[ShortLinkModel]]:
            now = utcnow()
            taken = {link.shortcode for link in links}
            created = []
            for row, draft in enumerate(drafts, start=1):
                link = self._build_link(row, draft, taken, now)
                taken.add(link.shortcode)
                created.append(link)
            return [*created, *links], created

        try:
            created = self.dao.transaction(create)
        except ValidationError as error:
            logger.info(
                'Rejected link draft.',
                extra={'row': error.row, 'reason': error.reason, 'errorCode': error.error_code},
            )
            self.event_log.write(
                LogEvent.VALIDATION_ERROR,
                {'row': error.row, 'reason': error.reason, 'value': error.value},
            )
            raise

        for link in created:
            minutes = int((link.expire_at - link.created_at).total_seconds() // 60)
            logger.info('Created short link.', extra={'shortcode': link.shortcode, 'minutes': minutes})
            self.event_log.write(
                LogEvent.SHORT_CREATED,
                {'shortcode': link.shortcode, 'longUrl': link.long_url, 'minutes': minutes},
            )
        return created

    def _build_link(self, row: int, draft: LinkDraft, taken: set[str], now: datetime) -> ShortLinkModel:
        if not is_valid_url(draft.long_url):
            raise InvalidURLError(f'Row {row}: invalid URL {draft.long_url!r}.', row=row, value=draft.long_url)

        try:
            minutes = parse_validity(draft.validity_minutes, default=self.settings.default_validity_minutes)
        except ValueError as e:
            # fmt: off
            raise InvalidValidityError(f'Row {row}: validity must be a positive integer (minutes).',
                                       row=row,
                                       value=draft.validity_minutes) from e
            # fmt: on

        shortcode = draft.shortcode.strip() if isinstance(draft.shortcode, str) else draft.shortcode
        if shortcode:
            if not is_valid_shortcode(shortcode):
                # fmt: off
                raise InvalidShortcodeError(f'Row {row}: shortcode must be 3-15 alphanumeric characters.',
                                            row=row,
                                            value=shortcode)
                # fmt: on
            if shortcode in taken:
                raise ShortcodeCollisionError(f"Row {row}: shortcode '{shortcode}' already exists.", row=row, value=shortcode)
        else:
            shortcode = self._generate_unique_shortcode(taken)

        return ShortLinkModel(
            id=str(uuid4()),
            shortcode=shortcode,
            long_url=draft.long_url,
            created_at=now,
            expire_at=now + timedelta(minutes=minutes),
        )

    def _generate_unique_shortcode(self, taken: set[str]) -> str:
        for _ in range(self.settings.max_generation_attempts):
            shortcode = self.generator.generate()
            if shortcode not in taken:
                return shortcode

        logger.error(
            'Could not generate a free shortcode.',
            extra={'attempts': self.settings.max_generation_attempts, 'taken': len(taken)},
        )
        raise ExhaustedCodeSpaceError(f'No free shortcode found after {self.settings.max_generation_attempts} attempts.')

    @beartype
    def find_by_code(self, shortcode: str) -> ShortLinkModel | None:
        return next((link for link in self.dao.load() if link.shortcode == shortcode), None)

    @beartype
    def update(self, link: ShortLinkModel) -> ShortLinkModel:
        """Replace the stored link that has the same id as `link`

        Raises:
            ShortLinkNotFoundError: If no stored link has this id.
            DataStoreError: If the collection could not be persisted.
        """
        return self.modify(link.id, lambda _: link)

    def modify(self, link_id: str, change: Callable[[ShortLinkModel], ShortLinkModel]) -> ShortLinkModel:
        """Atomically replace a stored link with `change(current stored link)`

        Raises:
            ShortLinkNotFoundError: If no stored link has this id.
            DataStoreError: If the collection could not be persisted.
        """

        def replace(links: list[ShortLinkModel]) -> tuple[list[ShortLinkModel], ShortLinkModel]:
            for index, current in enumerate(links):
                if current.id == link_id:
                    updated = change(current)
                    return [*links[:index], updated, *links[index + 1 :]], updated
            raise ShortLinkNotFoundError(f"Short link with id '{link_id}' not found.")

        return self.dao.transaction(replace)

    def purge_expired(self) -> PurgeResult:
        """Remove every link whose validity window has ended

        Links are compared against the time of the call. Nothing is written
        when no link is expired.

        Returns:
            PurgeResult: number of removed links and collection sizes before/after.
        """

        def purge(links: list[ShortLinkModel]) -> tuple[list[ShortLinkModel] | None, PurgeResult]:
            now = utcnow()
            live = [link for link in links if not link.is_expired(now)]
            result = PurgeResult(removed_count=len(links) - len(live), before=len(links), after=len(live))
            return (live if result.removed_count else None), result

        result = self.dao.transaction(purge)
        logger.info('Purged expired short links.', extra={'removed': result.removed_count})
        self.event_log.write(LogEvent.PURGE_EXPIRED, {'before': result.before, 'after': result.after})
        return result

    def all(self) -> list[ShortLinkModel]:
        return self.dao.load()

    @beartype
    def filter(self, query: str | None = None) -> list[ShortLinkModel]:
        """Return links whose shortcode contains `query` (all links if empty)"""
        links = self.dao.load()
        if not query:
            return links
        return [link for link in links if query in link.shortcode]
