"""Abstract base class for short link repositories.

The link collection is persisted as a whole: implementations load and save the
full collection as one blob under a fixed key of a key-value store. Every
mutation goes through `transaction()`, which runs a read-modify-write cycle
atomically with respect to other writers of the same store.

Responsibilities:
    - Load and save the full ShortLinkModel collection.
    - Run mutations as atomic read-modify-write transactions.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.redis import ShortLinkRedisDAO
        >>> dao = ShortLinkRedisDAO(prefix='linkshortener:dev')

        >>> def drop_all(links):
        ...     return [], len(links)
        >>> dao.transaction(drop_all)
        3
        >>> dao.load()
        []
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

from linkshortener.models import ShortLinkModel


T = TypeVar('T')

# A mutation receives the current collection and returns (new collection, result).
# Returning None as the new collection leaves the stored collection untouched.
type Mutation[T] = Callable[[list[ShortLinkModel]], tuple[list[ShortLinkModel] | None, T]]


class ShortLinkBaseDAO(ABC):
    """Interface for short link repositories.

    Methods:
        load(**kwargs) -> list[ShortLinkModel]:
            Return the stored collection in store order (most recent first).
            Raises DataStoreError on read or deserialization failure.

        save(links: list[ShortLinkModel], **kwargs) -> ShortLinkBaseDAO:
            Overwrite the stored collection.
            Raises DataStoreError on write or serialization failure.

        transaction(mutate: Mutation[T], **kwargs) -> T:
            Atomically load, mutate and save the collection.
            Exceptions raised by `mutate` propagate and nothing is written.
            Raises DataStoreError on persistence failure.

    Subclassing:
        Datastore-specific implementations (e.g. ShortLinkRedisDAO or
        ShortLinkMemoryDAO) must extend this class and implement all
        abstract methods.
    """

    @abstractmethod
    def load(self, **kwargs) -> list[ShortLinkModel]:
        pass

    @abstractmethod
    def save(self, links: list[ShortLinkModel], **kwargs) -> 'ShortLinkBaseDAO':
        pass

    @abstractmethod
    def transaction(self, mutate: Mutation[T], **kwargs) -> T:
        """Atomically run a read-modify-write cycle over the collection.

        Args:
            mutate (Mutation[T]):
                Callable receiving the current collection. Returns a tuple of
                (new collection or None, result). A None collection means
                "nothing to write".

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            T: the result returned by `mutate`.

        Raises:
            DataStoreError:
                If the collection cannot be read, serialized or written, or the
                write keeps losing races against concurrent writers.
        """
        pass
