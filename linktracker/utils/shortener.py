"""Short code generation utility

This module provides a helper function for generating random, fixed-length
Base62 codes used as the public identifier of a link.

Functions:
    generate_code(length=5, rng=None):
        Generate a random alphanumeric code suitable for use as a URL slug.

Example:
    >>> from linktracker.utils import generate_code
    >>> generate_code()
    'aBsJu'
"""

import random
import string
from typing import Optional


ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
BASE = len(ALPHABET)  # 26 uppercase + 26 lowercase + 10 digits

_system_random = random.SystemRandom()


def generate_code(length: int = 5, rng: Optional[random.Random] = None) -> str:
    """Generate a random Base62 code.

    Every character is drawn independently and uniformly from ALPHABET. With the
    default length of 5 this yields 62^5 (~916M) possible codes.

    Args:
        length (int, optional):
            Exact length of the resulting code.
            Defaults to 5.

        rng (random.Random, optional):
            Random source. Defaults to a `random.SystemRandom` instance.
            Pass a seeded `random.Random` for reproducible output.

    Returns:
        str: A code of exactly `length` characters from ALPHABET.

    Example:
        >>> len(generate_code(8, rng=random.Random(42)))
        8

    NOTE:
        - The function never checks uniqueness. Callers are responsible for
          handling collisions with codes already in use.
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    rng = rng or _system_random
    return ''.join(rng.choice(ALPHABET) for _ in range(length))
