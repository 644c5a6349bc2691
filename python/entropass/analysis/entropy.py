"""
Entropy of a generated password, in bits.

Uniform samplers get Hartley entropy, ``log2`` of the number of equally
likely outcomes, computed from exact integer counts. The guaranteed-inclusion
fallback is not uniform over the valid sequences, so it gets the Shannon
entropy of its actual output distribution instead.
"""

import math
from typing import List, Sequence

from .combinatorics import count_valid_sequences
from ..methods import Method

# Mantissa bits of an IEEE-754 double
MANTISSA_BITS = 53


def log2_bigint(n: int) -> float:
    """
    log2 of an arbitrarily large non-negative integer.

    Up to 53 bits the integer converts to a float without loss. Beyond that,
    the top 53 bits are kept as the mantissa and the dropped bits are added
    back as an integer shift, which keeps about 15-16 significant digits at
    any magnitude.

    Args:
        n: Integer to take the logarithm of

    Returns:
        log2(n), or 0.0 when ``n <= 0``
    """
    if n <= 0:
        return 0.0

    bit_length = n.bit_length()
    if bit_length <= MANTISSA_BITS:
        return math.log2(float(n))

    shift = bit_length - MANTISSA_BITS
    top = n >> shift
    return math.log2(float(top)) + shift


def _log_factorials(n: int) -> List[float]:
    table = [0.0] * (n + 1)
    for i in range(1, n + 1):
        table[i] = table[i - 1] + math.log(i)
    return table


def _expected_log2_successor(n: int, p: float, ln_fact: Sequence[float]) -> float:
    """
    E[log2(X + 1)] for X ~ Binomial(n, p).

    The pmf is evaluated in natural-log space; the largest log-probability is
    subtracted before exponentiating so no weight underflows to zero, and the
    weights are normalised at the end.
    """
    if p >= 1.0:
        return math.log2(n + 1)

    log_p = math.log(p)
    log_q = math.log1p(-p)
    ln_n_fact = ln_fact[n]

    ln_probs = [
        (ln_n_fact - ln_fact[j] - ln_fact[n - j]) + j * log_p + (n - j) * log_q
        for j in range(n + 1)
    ]
    max_ln = max(ln_probs)

    sum_w = 0.0
    sum_wl = 0.0
    for j, ln_prob in enumerate(ln_probs):
        w = math.exp(ln_prob - max_ln)
        sum_w += w
        sum_wl += w * math.log2(j + 1)

    if sum_w <= 0.0:
        return 0.0
    return sum_wl / sum_w


def calculate_shannon_entropy_guaranteed(length: int, sizes: Sequence[int]) -> float:
    """
    Shannon entropy of the guaranteed-inclusion sampler.

    That sampler fixes one character from each of the ``k`` classes and then
    fills ``n = L - k`` positions uniformly from the pool of size ``N``. With
    ``X_i ~ Binomial(n, s_i / N)`` the number of extra draws landing in class
    ``i``, linearity of expectation gives::

        H = log2(L! / (L-k)!) + n*log2(N) + sum log2(s_i) - sum E[log2(X_i + 1)]

    Args:
        length: Password length L
        sizes: Size of each active class

    Returns:
        Entropy in bits, never negative; 0.0 for degenerate input
    """
    k = len(sizes)
    if isinstance(length, bool) or not isinstance(length, int):
        return 0.0
    if k == 0 or length < k:
        return 0.0
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            return 0.0

    pool_size = sum(sizes)
    n = length - k

    # log2 of the number of ordered position choices for the k fixed draws
    entropy = sum(math.log2(i) for i in range(length - k + 1, length + 1))
    entropy += n * math.log2(pool_size)
    entropy += sum(math.log2(size) for size in sizes)

    ln_fact = _log_factorials(n)
    for size in sizes:
        entropy -= _expected_log2_successor(n, size / pool_size, ln_fact)

    # Round-off can leave a tiny negative value
    return max(0.0, entropy)


def calculate_entropy(
    length: int,
    pool_size: int,
    sizes: Sequence[int] = (),
    force_each: bool = False,
    method: str = Method.REJECTION_SAMPLING,
) -> float:
    """
    Entropy in bits of a password produced by ``method``.

    Args:
        length: Password length
        pool_size: Total characters across all active classes
        sizes: Size of each active class
        force_each: Whether every class had to appear at least once
        method: Sampling method that produced the password

    Returns:
        Entropy in bits (0.0 for an empty length or pool)
    """
    if length <= 0 or pool_size <= 0:
        return 0.0

    if method == Method.GUARANTEED_INCLUSION and force_each:
        return calculate_shannon_entropy_guaranteed(length, sizes)

    if not force_each:
        return log2_bigint(pool_size ** length)

    total_valid = count_valid_sequences(length, sizes)
    if total_valid <= 0:
        return 0.0
    return log2_bigint(total_valid)


def max_entropy(length: int, pool_size: int) -> float:
    """Unconstrained upper bound ``length * log2(pool_size)``."""
    if length <= 0 or pool_size <= 0:
        return 0.0
    return length * math.log2(pool_size)
