"""Shortcode generation utility

This module provides random Base62 shortcode generation and the format check
applied to user-supplied shortcodes.

Generation knows nothing about already stored links. Callers that need a
unique shortcode must check it against their own store and draw again on
collision (see `LinkStore.insert`).

Classes:
    CodeGenerator:
        Stateless shortcode generator bound to an injectable random source.

Functions:
    generate_shortcode(length=7, rng=None) -> str:
        Draw a random shortcode of the given length.
    is_valid_shortcode(code) -> bool:
        Check whether a user-supplied shortcode is 3-15 alphanumeric characters.

Example:
    >>> import random
    >>> from linkshortener.utils import CodeGenerator
    >>> generator = CodeGenerator(rng=random.Random(42))
    >>> len(generator.generate())
    7
    >>> is_valid_shortcode('abc')
    True
    >>> is_valid_shortcode('ab')
    False
"""

import re
import random
import string

from linkshortener.constants import LinkDefaults


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits

SHORTCODE_PATTERN = re.compile(r'^[A-Za-z0-9]{3,15}$')


def generate_shortcode(length: int = LinkDefaults.SHORTCODE_LENGTH, rng: random.Random | None = None) -> str:
    """Generate a random Base62 shortcode.

    Each character is drawn uniformly from the 62-character alphabet.

    Args:
        length (int, optional):
            Number of characters in the shortcode. Defaults to 7.

        rng (random.Random, optional):
            Random source to draw from. Defaults to a `random.SystemRandom`.
            Pass a seeded `random.Random` for reproducible output.

    Returns:
        str: A `length`-character alphanumeric shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    rng = rng or random.SystemRandom()
    return ''.join(rng.choice(ALPHABET) for _ in range(length))


def is_valid_shortcode(code: str | None) -> bool:
    return isinstance(code, str) and SHORTCODE_PATTERN.fullmatch(code) is not None


class CodeGenerator:
    """Produce candidate shortcodes from an injected random source.

    Attributes:
        rng (random.Random):
            Random source used for every draw.
        length (int):
            Default shortcode length.
    """

    def __init__(self, rng: random.Random | None = None, length: int = LinkDefaults.SHORTCODE_LENGTH):
        self.rng = rng or random.SystemRandom()
        self.length = length

    def generate(self, length: int | None = None) -> str:
        return generate_shortcode(self.length if length is None else length, rng=self.rng)

    @staticmethod
    def is_valid_format(code: str | None) -> bool:
        return is_valid_shortcode(code)
