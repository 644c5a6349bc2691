"""
Unbiased random primitives backed by the operating system CSPRNG.

All draws go through ``secrets`` (``os.urandom`` underneath). Bounded integers
use rejection sampling so that no value in the range is favoured by modulo
reduction.
"""

import os
import secrets
import logging
from typing import List, MutableSequence, Sequence, TypeVar

from ..exceptions import InsecureRandomError


logger = logging.getLogger(__name__)

T = TypeVar("T")

WORD_BITS = 32
WORD_RANGE = 1 << WORD_BITS


def is_crypto_available() -> bool:
    """Check whether the OS exposes a cryptographically secure source."""
    try:
        os.urandom(1)
    except NotImplementedError:
        return False
    return True


def ensure_crypto() -> None:
    """
    Fail fast when no secure random source exists.

    Raises:
        InsecureRandomError: If ``os.urandom`` is not implemented here
    """
    if not is_crypto_available():
        logger.error("os.urandom is not available; refusing to generate")
        raise InsecureRandomError(
            "No cryptographically secure random source is available on this system"
        )


def uniform_int(max_value: int) -> int:
    """
    Return an integer uniformly distributed on [0, max_value).

    Draws 32-bit words and discards the ones that fall in the tail of the
    word range that ``max_value`` does not divide evenly.

    Args:
        max_value: Exclusive upper bound (at most 2**32)

    Returns:
        Random integer; always 0 when ``max_value <= 1``
    """
    if max_value <= 1:
        return 0
    if max_value > WORD_RANGE:
        raise ValueError(f"max_value must not exceed 2**{WORD_BITS}, got {max_value}")

    limit = (WORD_RANGE // max_value) * max_value
    while True:
        x = secrets.randbits(WORD_BITS)
        if x < limit:
            return x % max_value


def uniform_big_int(max_exclusive: int) -> int:
    """
    Return an arbitrary-precision integer uniformly distributed on [0, max_exclusive).

    The draw uses the smallest whole number of bytes covering
    ``max_exclusive - 1`` and rejects values at or above the largest multiple
    of ``max_exclusive`` representable in that many bytes.

    Args:
        max_exclusive: Exclusive upper bound

    Returns:
        Random integer; always 0 when ``max_exclusive <= 1``
    """
    if max_exclusive <= 1:
        return 0

    width = ((max_exclusive - 1).bit_length() + 7) // 8
    limit = ((1 << (8 * width)) // max_exclusive) * max_exclusive

    while True:
        x = int.from_bytes(secrets.token_bytes(width), "big")
        if x < limit:
            return x % max_exclusive


def shuffle(items: MutableSequence[T]) -> MutableSequence[T]:
    """
    Fisher-Yates shuffle in place; every permutation is equally likely.

    Args:
        items: Sequence to permute

    Returns:
        The same sequence object, permuted
    """
    for i in range(len(items) - 1, 0, -1):
        j = uniform_int(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def draw(pool: Sequence[T], count: int) -> List[T]:
    """Draw ``count`` independent uniform elements from ``pool``."""
    size = len(pool)
    return [pool[uniform_int(size)] for _ in range(count)]
