from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from linkshortener.utils.timestamps import parse_timestamp, format_timestamp


@dataclass(frozen=True)
class CoarseLocale:
    """Non-identifying client locale hint used instead of geolocation."""

    language: str = ''
    timezone: str = ''


@dataclass(frozen=True)
class ClickEventModel:
    """Represent a single successful redirect of a short link.

    Attributes:
        ts (datetime):
            UTC moment the redirect was resolved.
        referrer (str):
            Referrer of the redirect request, empty for direct visits.
        coarse_locale (CoarseLocale):
            Client language and timezone.
        source_path (str):
            Path the redirect request originated from.
    """

    ts: datetime
    referrer: str = ''
    coarse_locale: CoarseLocale = field(default_factory=CoarseLocale)
    source_path: str = '/'

    def to_dict(self) -> dict[str, Any]:
        return {
            'ts': format_timestamp(self.ts),
            'ref': self.referrer,
            'coarse': {'lang': self.coarse_locale.language, 'tz': self.coarse_locale.timezone},
            'sourcePath': self.source_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ClickEventModel':
        coarse = data.get('coarse') or {}
        return cls(
            ts=parse_timestamp(data['ts']),
            referrer=data.get('ref') or '',
            coarse_locale=CoarseLocale(language=coarse.get('lang') or '', timezone=coarse.get('tz') or ''),
            source_path=data.get('sourcePath') or '/',
        )
