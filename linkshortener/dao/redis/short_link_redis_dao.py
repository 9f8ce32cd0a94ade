"""Data Access Object (DAO) implementation for managing short links in Redis

The whole link collection is stored as one JSON blob under
`<prefix>:links`. Mutations are WATCH/MULTI/EXEC check-and-set cycles so that
the uniqueness check performed by a mutation and its write cannot interleave
with another writer.

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving the ShortLinkModel collection in Redis.

Example:
    >>> from linkshortener.dao.redis import ShortLinkRedisDAO
    >>> dao = ShortLinkRedisDAO(prefix="app:dev")
    >>> dao.load()
    []
    >>> dao.transaction(lambda links: ([new_link, *links], new_link))
    ShortLinkModel(id='...', shortcode='abc123', ...)
    >>> [link.shortcode for link in dao.load()]
    ['abc123']
"""

from beartype import beartype

from linkshortener.models import ShortLinkModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.base.short_link_base_dao import Mutation, T
from linkshortener.dao.codec import encode_links, decode_links
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for the short link collection

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (KeySchema):
            Key schema helper for generating namespaced keys.

    Methods:
        load(**kwargs) -> list[ShortLinkModel]:
            GET and decode the collection blob.

        save(links, **kwargs) -> ShortLinkRedisDAO:
            Encode and SET the collection blob.

        transaction(mutate, **kwargs) -> T:
            Check-and-set the collection blob through `mutate`.

    All methods raise DataStoreError on connectivity issues with Redis or
    on blobs which cannot be (de)serialized.
    """

    @handle_redis_connection_error
    def load(self, **kwargs) -> list[ShortLinkModel]:
        return decode_links(self.redis.get(self.keys.links_key()))

    @handle_redis_connection_error
    @beartype
    def save(self, links: list[ShortLinkModel], **kwargs) -> 'ShortLinkRedisDAO':
        self.redis.set(self.keys.links_key(), encode_links(links))
        return self

    @handle_redis_connection_error
    def transaction(self, mutate: Mutation[T], **kwargs) -> T:
        """Atomically load, mutate and save the link collection

        Args:
            mutate (Mutation[T]):
                Receives the current collection, returns (new collection or None, result).

        Returns:
            T: the result of `mutate`.

        Raises:
            DataStoreError:
                On Redis connectivity issues, (de)serialization failures, or if
                concurrent writers keep invalidating the WATCH.
            Exception:
                Whatever `mutate` raises; nothing is written in that case.
        """

        def update(blob: str | None) -> tuple[str | None, T]:
            links, result = mutate(decode_links(blob))
            return (None if links is None else encode_links(links)), result

        return self._check_and_set(self.keys.links_key(), update)
