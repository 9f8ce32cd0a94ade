"""Unit tests for link creation validators in validators.py.

Test coverage includes:

1. is_valid_url()
   - Accepts absolute http(s) URLs with a host.
   - Rejects other schemes, relative URLs, whitespace and bad ports.

2. parse_validity()
   - Falls back to the default for missing values.
   - Accepts positive integers and integer strings.
   - Rejects zero, negatives, fractions, booleans and garbage.
"""

import pytest

from linkshortener.utils.validators import is_valid_url, parse_validity


# -------------------------------
# 1. is_valid_url()
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        'https://example.com',
        'http://example.com/path?q=1#frag',
        'HTTPS://EXAMPLE.COM',
        'https://sub.example.co.uk:8443/a/b',
        'http://127.0.0.1:3000',
    ],
)
def test_valid_urls(url):
    assert is_valid_url(url)


@pytest.mark.parametrize(
    'url',
    [
        'not-a-url',
        'ftp://example.com',
        'javascript:alert(1)',
        '//example.com',
        'https://',
        ' https://example.com',
        'https://example.com:99999',
        'https://example.com:port',
        '',
        None,
        42,
    ],
)
def test_invalid_urls(url):
    assert not is_valid_url(url)


# -------------------------------
# 2. parse_validity()
# -------------------------------


@pytest.mark.parametrize('value', [None, '', '   '])
def test_parse_validity_default(value):
    assert parse_validity(value) == 30
    assert parse_validity(value, default=5) == 5


@pytest.mark.parametrize(
    'value, expected',
    [(1, 1), (15, 15), ('15', 15), (' 60 ', 60), (10.0, 10), ('15.0', 15), ('+5', 5), ('1e3', 1000)],
)
def test_parse_validity_accepts_positive_integers(value, expected):
    assert parse_validity(value) == expected


@pytest.mark.parametrize('value', [0, -5, '0', '-5', '-0', 1.5, '1.5', 'abc', '1_000', 'inf', 'nan', True, [], {}])
def test_parse_validity_rejects_invalid_values(value):
    with pytest.raises(ValueError, match='positive integer'):
        parse_validity(value)
