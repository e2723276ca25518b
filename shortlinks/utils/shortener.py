"""Shortcode generation utilities

This module provides the candidate shortcode strategies used by the
shortening service. Every strategy produces fixed-length Base62 strings.

Functions:
    generate_shortcode(counter, salt='default_salt', length=7, mult=1315423911):
        Deterministic, non-sequential shortcode derived from a numeric counter.

    generate_random_shortcode(length=7):
        Uniformly random shortcode drawn from a CSPRNG.

    random_shortcode_generator(length=7) -> Callable[[], str]:
        Zero-argument generator for the 'random' strategy.

    counter_shortcode_generator(counter, salt, length=7) -> Callable[[], str]:
        Zero-argument generator for the 'counter' strategy.

Collision argument:
    - random: 62**7 ~= 3.52e12 codes. With n stored mappings a fresh candidate
      collides with probability n / 62**7 (~2.8e-6 at n = 10M). Five
      consecutive collisions, the default retry budget, happen with
      probability ~1.8e-28.
    - counter: the affine permutation is a bijection over 62**length, so codes
      are collision-free until the counter wraps around the code space.

Example:
    >>> from shortlinks.utils import generate_shortcode
    >>> generate_shortcode(12345, salt='my_secret')
    'Gh71WPT'
"""

import math
import secrets
import string
from collections.abc import Callable

import xxhash

from shortlinks.constants import Shortcode


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(counter: int, salt: str = Shortcode.SALT, length: int = Shortcode.LENGTH, mult: int = 1315423911) -> str:
    """Generate a short, deterministic URL hash from a counter and salt.

    This function encodes a numeric counter into an n-character Base62 string
    (using a-z, A-Z, 0-9). The counter is salted and wrapped in modulo
    BASE^length to ensure fixed-length output.

    This implementation uses a **multiplicative permutation** over a fixed
    Base62 space to guarantee:
    - 1:1 mapping (bijective)
    - Deterministic output
    - No visible sequential patterns
    - Constant-time execution

    Args:
        counter (int):
            Unique integer value identifying the URL.

        salt (str, optional):
            Secret string used to randomize the output space.
            Highly recommended to set a custom salt.

        length (int, optional):
            Length of the resulting hash. Defaults to 7.

        mult (int, optional):
            Multiplicative factor for the permutation.
            Must be coprime with mod (BASE**length).

    Returns:
        str: A short alphanumeric hash derived from the counter and salt.

    Example:
        >>> generate_shortcode(12345, salt='my_secret', length=7)
        'Gh71WPT'

    NOTE:
        - The output is not trivially predictable without knowledge of the salt
          and permutation parameters (this is obfuscation, not encryption).
    """
    if not isinstance(counter, int):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if math.gcd(mult, BASE**length) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with mod ({BASE**length}) (given value: mult={mult}).')

    # Affine permutation over the fixed modulo space: scrambles sequential
    # counters while preserving a 1:1 mapping.
    # NOTE: collision-free as long as `counter < BASE**length`.
    modulo_space = BASE**length
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space

    # Base62 encode, most significant digit first, padded to fixed length
    return ''.join(reversed([ALPHABET[(permuted // BASE**i) % BASE] for i in range(length)])).rjust(length, ALPHABET[0])


def generate_random_shortcode(length: int = Shortcode.LENGTH) -> str:
    """Generate a uniformly random Base62 shortcode.

    Args:
        length (int, optional):
            Length of the resulting code. Defaults to 7.

    Returns:
        str: Random alphanumeric code.

    Example:
        >>> generate_random_shortcode(6)
        'aZ3kQ1'
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def random_shortcode_generator(length: int = Shortcode.LENGTH) -> Callable[[], str]:
    def generate() -> str:
        return generate_random_shortcode(length)

    return generate


def counter_shortcode_generator(counter: Callable[[], int], salt: str = Shortcode.SALT, length: int = Shortcode.LENGTH) -> Callable[[], str]:
    """Build a generator that permutes successive counter values into shortcodes.

    Args:
        counter (Callable[[], int]):
            Returns a fresh counter value on every call,
            e.g. `lambda: dao.count(increment=True)`.
        salt (str):
            Salt forwarded to generate_shortcode().
        length (int):
            Shortcode length forwarded to generate_shortcode().

    Returns:
        Callable[[], str]: zero-argument shortcode generator.
    """

    def generate() -> str:
        return generate_shortcode(counter(), salt=salt, length=length)

    return generate
