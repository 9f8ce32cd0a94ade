"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when the persistence layer fails: connection issues, blobs that
        cannot be (de)serialized, or writes that lose optimistic locking races
        too many times. Callers must treat the operation as not persisted.

    ShortLinkNotFoundError:
        Raised when updating a short link which is not in the data store.

Example:
    >>> from linkshortener.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.DataStoreError: Can't connect to Redis at localhost:6379/0.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'DAO_ERROR'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, serialization failures, write contention, etc.
    """

    error_code = 'PERSISTENCE_ERROR'


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a short link is not found in the data store."""

    error_code = 'SHORT_LINK_NOT_FOUND'
