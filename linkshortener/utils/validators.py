"""Validation helpers for link creation requests.

Functions:
    is_valid_url(url) -> bool
        True iff `url` is a syntactically valid http or https URL.
    parse_validity(value, default) -> int
        Normalize a requested validity window to a positive number of minutes.
"""

from typing import Any
from urllib.parse import urlsplit

from linkshortener.constants import LinkDefaults


ALLOWED_SCHEMES = frozenset({'http', 'https'})


def is_valid_url(url: Any) -> bool:
    """Check whether `url` is an absolute http(s) URL with a host

    Example:
        >>> is_valid_url('https://example.com')
        True
        >>> is_valid_url('ftp://example.com')
        False
        >>> is_valid_url('not-a-url')
        False
    """
    if not isinstance(url, str) or not url or url != url.strip():
        return False
    try:
        components = urlsplit(url)
        # Accessing .port validates the port component
        components.port
    except ValueError:
        return False
    return components.scheme.lower() in ALLOWED_SCHEMES and bool(components.hostname)


def parse_validity(value: Any, default: int = LinkDefaults.VALIDITY_MINUTES) -> int:
    """Normalize a requested validity window

    None and blank strings fall back to `default`. Any number, or numeric string,
    with an integral value is accepted as long as it is positive, so `15.0`,
    `'+5'` and `'1e3'` are all valid.

    Args:
        value (Any):
            Requested validity in minutes.
        default (int):
            Validity used when nothing was requested.

    Returns:
        int: validity in minutes.

    Raises:
        ValueError: If the value is not a positive integer.

    Example:
        >>> parse_validity(None)
        30
        >>> parse_validity('15')
        15
        >>> parse_validity('1e3')
        1000
        >>> parse_validity(0)
        Traceback (most recent call last):
            ...
        ValueError: Validity must be a positive integer (given value: 0).
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default

    if isinstance(value, bool):
        minutes = None
    elif isinstance(value, int):
        minutes = value
    elif isinstance(value, float) and value.is_integer():
        minutes = int(value)
    elif isinstance(value, str):
        minutes = _integral_number(value.strip())
    else:
        minutes = None

    if minutes is None or minutes <= 0:
        raise ValueError(f'Validity must be a positive integer (given value: {value!r}).')
    return minutes


def _integral_number(text: str) -> int | None:
    # Underscore digit separators are not part of the accepted number syntax
    if '_' in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None
