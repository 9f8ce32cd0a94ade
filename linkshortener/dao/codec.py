"""JSON codec for the blobs stored behind the key-value persistence boundary.

The link collection is stored as a single blob `{"items": [<link>, ...]}` and
the event log as a single JSON array of entries, newest first.

Both decoders treat a missing blob (None) as an empty collection. Blobs that
cannot be decoded, and collections that cannot be encoded, raise
DataStoreError.
"""

import json

from linkshortener.models import ShortLinkModel, LogEntryModel
from linkshortener.dao.exceptions import DataStoreError


def encode_links(links: list[ShortLinkModel]) -> str:
    try:
        return json.dumps({'items': [link.to_dict() for link in links]}, separators=(',', ':'), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise DataStoreError('Failed to serialize short link collection.') from e


def decode_links(blob: str | bytes | None) -> list[ShortLinkModel]:
    if blob is None:
        return []
    try:
        document = json.loads(blob)
        return [ShortLinkModel.from_dict(item) for item in document.get('items', [])]
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise DataStoreError('Failed to deserialize short link collection.') from e


def encode_log(entries: list[LogEntryModel]) -> str:
    try:
        return json.dumps([entry.to_dict() for entry in entries], separators=(',', ':'), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise DataStoreError('Failed to serialize event log.') from e


def decode_log(blob: str | bytes | None) -> list[LogEntryModel]:
    if blob is None:
        return []
    try:
        return [LogEntryModel.from_dict(entry) for entry in json.loads(blob)]
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise DataStoreError('Failed to deserialize event log.') from e
