"""Process-local key-value store backing the `memory` backend.

Blobs are kept as serialized strings, exactly like the Redis backend stores
them, so the memory backend exercises the same codec. A single re-entrant lock
serializes every read-modify-write cycle (single-writer guard).
"""

import threading


class InMemoryKeyValueStore:
    def __init__(self):
        self._data: dict[str, str] = {}
        self.lock = threading.RLock()

    def get(self, key: str) -> str | None:
        with self.lock:
            return self._data.get(key)

    def set(self, key: str, blob: str) -> None:
        with self.lock:
            self._data[key] = blob

    def delete(self, key: str) -> None:
        with self.lock:
            self._data.pop(key, None)
