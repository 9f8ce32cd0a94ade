from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from linkshortener.models.click_event_model import ClickEventModel
from linkshortener.utils.timestamps import parse_timestamp, format_timestamp


@dataclass(frozen=True)
class LinkDraft:
    """A single link creation request.

    Attributes:
        long_url (str):
            Destination URL to shorten.
        validity_minutes (int | str | None):
            Requested validity window in minutes. None or '' means the default.
        shortcode (str | None):
            Optional custom shortcode. None or blank means "generate one".
    """

    long_url: str
    validity_minutes: int | str | None = None
    shortcode: str | None = None


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a short link and its click history.

    Only `clicks` ever changes after creation, and only by prepending a new
    ClickEventModel (see `with_click`). Expiration is derived from `expire_at`,
    an expired link stays stored until it is purged.

    Attributes:
        id (str):
            Opaque unique identifier assigned at creation.
        shortcode (str):
            Unique short identifier among the links stored at creation time.
        long_url (str):
            The original long URL that the shortcode redirects to.
        created_at (datetime):
            UTC creation time.
        expire_at (datetime):
            UTC time after which the link no longer redirects.
        clicks (tuple[ClickEventModel, ...]):
            Click history, most recent first.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> link = ShortLinkModel(
        ...     id='6f1c...',
        ...     shortcode='abc123',
        ...     long_url='https://example.com/article/123',
        ...     created_at=now,
        ...     expire_at=now + timedelta(minutes=30),
        ... )
        >>> link.is_expired(now)
        False
        >>> link.total_clicks
        0
    """

    id: str
    shortcode: str
    long_url: str
    created_at: datetime
    expire_at: datetime
    clicks: tuple[ClickEventModel, ...] = field(default_factory=tuple)

    @property
    def total_clicks(self) -> int:
        return len(self.clicks)

    def is_expired(self, now: datetime) -> bool:
        return self.expire_at < now

    def with_click(self, click: ClickEventModel) -> 'ShortLinkModel':
        return replace(self, clicks=(click, *self.clicks))

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'shortcode': self.shortcode,
            'longUrl': self.long_url,
            'createdAt': format_timestamp(self.created_at),
            'expireAt': format_timestamp(self.expire_at),
            'clicks': [click.to_dict() for click in self.clicks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ShortLinkModel':
        return cls(
            id=data['id'],
            shortcode=data['shortcode'],
            long_url=data['longUrl'],
            created_at=parse_timestamp(data['createdAt']),
            expire_at=parse_timestamp(data['expireAt']),
            clicks=tuple(ClickEventModel.from_dict(click) for click in data.get('clicks') or []),
        )
