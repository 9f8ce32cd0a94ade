from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from linkshortener.utils.timestamps import parse_timestamp, format_timestamp


@dataclass(frozen=True)
class LogEntryModel:
    # fmt: off
    id: str                                                 # Unique entry identifier
    timestamp: datetime                                     # UTC time the entry was written
    event: str                                              # Event name, e.g. 'short_created'
    payload: dict[str, Any] = field(default_factory=dict)   # Event-specific details
    # fmt: on

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'ts': format_timestamp(self.timestamp),
            'event': self.event,
            'payload': self.payload,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'LogEntryModel':
        return cls(
            id=data['id'],
            timestamp=parse_timestamp(data['ts']),
            event=data['event'],
            payload=data.get('payload') or {},
        )
