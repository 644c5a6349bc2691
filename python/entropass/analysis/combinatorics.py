"""
Exact counting of class-covering sequences by inclusion-exclusion.

Given ``k`` character classes of sizes ``s_1..s_k`` and a pool of size
``N = sum(s_i)``, the number of length-``L`` sequences over the pool in which
every class appears at least once is::

    T = sum over S subset of {1..k} of (-1)**|S| * (N - sum_{i in S} s_i)**L

Here ``S`` is the set of classes assumed missing. Everything is computed on
Python integers; there is no floating point in this module.
"""

from typing import Dict, Sequence, Tuple

from ..utils.validation import validate_count, validate_set_sizes


def _popcount(mask: int) -> int:
    return bin(mask).count("1")


def _masked_sum(sizes: Sequence[int], mask: int) -> int:
    return sum(size for idx, size in enumerate(sizes) if mask & (1 << idx))


def count_valid_sequences(length: int, sizes: Sequence[int]) -> int:
    """
    Count length-``length`` sequences that contain every class at least once.

    Args:
        length: Sequence length L (non-negative int)
        sizes: Size of each class

    Returns:
        Exact number of covering sequences

    Raises:
        ValueError: If ``length`` or any size is negative or not an integer
    """
    length = validate_count(length, "length")
    sizes = validate_set_sizes(sizes)

    pool_size = sum(sizes)
    total = 0

    for mask in range(1 << len(sizes)):
        term = (pool_size - _masked_sum(sizes, mask)) ** length
        if _popcount(mask) % 2:
            total -= term
        else:
            total += term

    return total


def count_remaining(rem_len: int, sizes: Sequence[int], satisfied_mask: int) -> int:
    """
    Count fillings of ``rem_len`` positions that cover every unsatisfied class.

    Positions are drawn from the full pool. A class whose bit is set in
    ``satisfied_mask`` has already appeared and imposes no constraint.

    Args:
        rem_len: Number of positions still to fill
        sizes: Size of each class
        satisfied_mask: Bitmask of classes already present

    Returns:
        Exact number of completions

    Raises:
        ValueError: On negative/non-integer input or a mask outside [0, 2**k)
    """
    rem_len = validate_count(rem_len, "rem_len")
    sizes = validate_set_sizes(sizes)

    all_mask = (1 << len(sizes)) - 1
    if isinstance(satisfied_mask, bool) or not isinstance(satisfied_mask, int):
        raise ValueError(f"satisfied_mask must be an integer, got {satisfied_mask!r}")
    if satisfied_mask < 0 or satisfied_mask > all_mask:
        raise ValueError(f"satisfied_mask {satisfied_mask} out of range for {len(sizes)} classes")

    pool_size = sum(sizes)
    needed = all_mask ^ satisfied_mask
    total = 0

    # Walk every submask of ``needed``, including 0
    sub = needed
    while True:
        term = (pool_size - _masked_sum(sizes, sub)) ** rem_len
        if _popcount(sub) % 2:
            total -= term
        else:
            total += term
        if sub == 0:
            break
        sub = (sub - 1) & needed

    return total


class RemainingCounter:
    """
    Memoized ``count_remaining`` for one unranking pass.

    The cache is keyed by ``(rem_len, mask)`` and lives only as long as the
    instance; build a new counter for every generation call.
    """

    def __init__(self, sizes: Sequence[int]):
        """
        Args:
            sizes: Size of each class, fixed for the lifetime of the counter
        """
        self.sizes: Tuple[int, ...] = tuple(validate_set_sizes(sizes))
        self._cache: Dict[Tuple[int, int], int] = {}
        self.hits = 0

    def __call__(self, rem_len: int, mask: int) -> int:
        key = (rem_len, mask)
        if key in self._cache:
            self.hits += 1
            return self._cache[key]

        value = count_remaining(rem_len, self.sizes, mask)
        self._cache[key] = value
        return value

    @property
    def cache_size(self) -> int:
        """Number of distinct (rem_len, mask) pairs computed so far."""
        return len(self._cache)
