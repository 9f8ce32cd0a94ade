"""Abstract base class for the diagnostic event log.

The event log is an append-only audit trail of domain events kept apart from
the link collection. Entries are stored newest first and the log is capped to
its most recent `capacity` entries.

Writing is best-effort: `write()` never raises. Persistence failures are
reported through Python logging and the entry is dropped, so that logging
never blocks a domain operation.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

from linkshortener.constants import LinkDefaults
from linkshortener.models import LogEntryModel
from linkshortener.dao.codec import decode_log
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.utils.timestamps import utcnow


logger = logging.getLogger(__name__)


class EventLogBaseDAO(ABC):
    """Interface for event log data access objects (DAOs).

    Methods:
        write(event: str, payload: dict | None = None) -> LogEntryModel | None:
            Prepend a new entry and truncate to capacity. Never raises.
            Returns the written entry, or None if it could not be persisted.

        read() -> list[LogEntryModel]:
            Return entries, newest first.
            Raises DataStoreError on read failure.

        clear() -> None:
            Remove all entries.
            Raises DataStoreError on write failure.

    Subclassing:
        Implementations provide `_prepend()`, `read()` and `clear()`, and
        list the exceptions `write()` may swallow in `swallowed_errors`.
    """

    swallowed_errors: tuple[type[BaseException], ...] = ()

    def __init__(self, capacity: int = LinkDefaults.LOG_CAPACITY):
        self.capacity = capacity

    def write(self, event: str, payload: dict[str, Any] | None = None) -> LogEntryModel | None:
        entry = LogEntryModel(id=str(uuid4()), timestamp=utcnow(), event=str(event), payload=dict(payload or {}))
        try:
            self._prepend(entry)
        except self.swallowed_errors:
            logger.warning(
                'Failed to persist event log entry. Dropping it.',
                exc_info=True,
                extra={'logEvent': entry.event},
            )
            return None
        return entry

    def _decode(self, blob: str | bytes | None) -> list[LogEntryModel]:
        try:
            return decode_log(blob)
        except DataStoreError:
            logger.warning('Event log blob is unreadable. Treating the log as empty.', exc_info=True)
            return []

    @abstractmethod
    def _prepend(self, entry: LogEntryModel) -> None:
        """Store `entry` in front of the log and keep only `capacity` entries."""
        pass

    @abstractmethod
    def read(self) -> list[LogEntryModel]:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
