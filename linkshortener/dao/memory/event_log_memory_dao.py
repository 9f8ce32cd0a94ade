from linkshortener.constants import LinkDefaults
from linkshortener.models import LogEntryModel
from linkshortener.dao.base import EventLogBaseDAO
from linkshortener.dao.codec import encode_log
from linkshortener.dao.exceptions import DAOError
from linkshortener.dao.key_schema import KeySchema
from linkshortener.dao.memory.store import InMemoryKeyValueStore


class EventLogMemoryDAO(EventLogBaseDAO):
    swallowed_errors = (DAOError,)

    def __init__(self, store: InMemoryKeyValueStore | None = None, prefix: str | None = None, capacity: int = LinkDefaults.LOG_CAPACITY):
        super().__init__(capacity=capacity)
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.keys = KeySchema(prefix=prefix)

    def _prepend(self, entry: LogEntryModel) -> None:
        key = self.keys.logs_key()
        with self.store.lock:
            entries = [entry, *self._decode(self.store.get(key))][: self.capacity]
            self.store.set(key, encode_log(entries))

    def read(self) -> list[LogEntryModel]:
        return self._decode(self.store.get(self.keys.logs_key()))

    def clear(self) -> None:
        self.store.delete(self.keys.logs_key())
