"""Timestamp helpers shared by models and services.

All timestamps handled by the application are timezone-aware UTC datetimes.
They are serialized as ISO-8601 strings with microsecond precision and a
trailing 'Z', e.g. '2025-10-15T12:00:00.000000Z'.
"""

from datetime import datetime, UTC


def utcnow() -> datetime:
    """Return the current moment as a timezone-aware UTC datetime"""
    return datetime.now(UTC)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec='microseconds').replace('+00:00', 'Z')


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC

    Example:
        >>> parse_timestamp('2025-10-15T12:00:00.000Z')
        datetime.datetime(2025, 10, 15, 12, 0, tzinfo=datetime.timezone.utc)
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
