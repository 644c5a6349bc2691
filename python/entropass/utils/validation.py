"""
Input validation utilities for Entropass.
"""

import math
import re
from typing import Any, List, Sequence

# Leading integer, the way a form field like "24 chars" is read
LENGTH_PATTERN = re.compile(r"^\s*([+-]?\d+)")

FALLBACK_LENGTH = 16


def parse_length(value: Any) -> int:
    """
    Read a requested password length from loosely typed input.

    Integers and floats are truncated, strings contribute their leading
    integer. Anything unreadable, and zero, maps to ``FALLBACK_LENGTH``.
    Clamping is left to the caller.

    Args:
        value: Raw length (int, float, str or anything else)

    Returns:
        Parsed length, not yet clamped
    """
    parsed = 0

    if isinstance(value, bool) or value is None:
        parsed = 0
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if math.isfinite(value):
            parsed = int(value)
    elif isinstance(value, str):
        match = LENGTH_PATTERN.match(value)
        if match:
            parsed = int(match.group(1))

    return parsed or FALLBACK_LENGTH


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp ``value`` into [lower, upper]."""
    return max(lower, min(upper, value))


def validate_count(value: Any, name: str) -> int:
    """
    Check that ``value`` is a non-negative integer.

    Args:
        value: Value to check
        name: Name used in the error message

    Returns:
        The value unchanged

    Raises:
        ValueError: If the value is not a non-negative ``int``
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value}")
    return value


def validate_set_sizes(sizes: Sequence[Any]) -> List[int]:
    """
    Validate character class sizes for counting.

    Raises:
        ValueError: If any size is negative or not an integer
    """
    return [validate_count(size, f"sizes[{idx}]") for idx, size in enumerate(sizes)]
