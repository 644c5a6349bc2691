"""
Exact counting and entropy of constrained passwords.
"""

from .combinatorics import RemainingCounter, count_remaining, count_valid_sequences
from .entropy import (
    calculate_entropy,
    calculate_shannon_entropy_guaranteed,
    log2_bigint,
    max_entropy,
)

__all__ = [
    'RemainingCounter',
    'calculate_entropy',
    'calculate_shannon_entropy_guaranteed',
    'count_remaining',
    'count_valid_sequences',
    'log2_bigint',
    'max_entropy',
]
