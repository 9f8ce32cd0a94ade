from linkshortener.models import ShortLinkModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.base.short_link_base_dao import Mutation, T
from linkshortener.dao.codec import encode_links, decode_links
from linkshortener.dao.key_schema import KeySchema
from linkshortener.dao.memory.store import InMemoryKeyValueStore


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    """Short link repository over a process-local InMemoryKeyValueStore.

    Transactions hold the store lock for the whole read-modify-write cycle.
    """

    def __init__(self, store: InMemoryKeyValueStore | None = None, prefix: str | None = None, **kwargs):
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.keys = KeySchema(prefix=prefix)

    def load(self, **kwargs) -> list[ShortLinkModel]:
        return decode_links(self.store.get(self.keys.links_key()))

    def save(self, links: list[ShortLinkModel], **kwargs) -> 'ShortLinkMemoryDAO':
        self.store.set(self.keys.links_key(), encode_links(links))
        return self

    def transaction(self, mutate: Mutation[T], **kwargs) -> T:
        with self.store.lock:
            links, result = mutate(self.load())
            if links is not None:
                self.save(links)
            return result
