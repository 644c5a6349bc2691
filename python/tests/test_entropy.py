"""
Unit tests for entropy analysis.
"""

import math
from collections import defaultdict
from fractions import Fraction
from itertools import permutations, product
import pytest

from entropass.analysis.combinatorics import count_valid_sequences
from entropass.analysis.entropy import (
    calculate_entropy,
    calculate_shannon_entropy_guaranteed,
    log2_bigint,
    max_entropy,
)
from entropass.methods import Method


def guaranteed_distribution(length, active_sets):
    """
    Exact output distribution of guaranteed inclusion followed by a shuffle.

    Enumerates every fixed-per-class draw, every free draw and every
    permutation, each path carrying equal probability within its branch.
    """
    pool = "".join(active_sets)
    free = length - len(active_sets)
    orders = list(permutations(range(length)))
    dist = defaultdict(Fraction)

    fixed_weight = Fraction(1)
    for s in active_sets:
        fixed_weight /= len(s)
    path_weight = fixed_weight / (len(pool) ** free) / len(orders)

    for fixed in product(*active_sets):
        for rest in product(pool, repeat=free):
            drawn = fixed + rest
            for order in orders:
                dist["".join(drawn[i] for i in order)] += path_weight
    return dist


class TestLog2BigInt:
    """Test logarithms of large integers."""

    @pytest.mark.parametrize("n", [0, 1, 10, 52, 53, 54, 100, 500, 2000])
    def test_powers_of_two_are_exact(self, n):
        """Test that log2(2**n) == n exactly on both sides of 53 bits."""
        assert log2_bigint(2 ** n) == n

    def test_non_positive(self):
        """Test that zero and negatives give zero."""
        assert log2_bigint(0) == 0.0
        assert log2_bigint(-8) == 0.0

    def test_small_values_match_math(self):
        """Test exact conversion below 53 bits."""
        assert log2_bigint(2850) == math.log2(2850)
        assert log2_bigint(2850) == pytest.approx(11.477, abs=1e-3)

    def test_large_values_keep_precision(self):
        """Test relative precision far beyond float range."""
        assert log2_bigint(3 ** 200) == pytest.approx(200 * math.log2(3), rel=1e-14)
        assert log2_bigint(94 ** 128) == pytest.approx(128 * math.log2(94), rel=1e-14)

    def test_beyond_float_range(self):
        """Test integers that would overflow a float conversion."""
        assert log2_bigint(7 ** 1000) == pytest.approx(1000 * math.log2(7), rel=1e-14)


class TestCalculateEntropy:
    """Test Hartley entropy and the method switch."""

    def test_constrained_space(self):
        """Test log2 of the covering-sequence count."""
        entropy = calculate_entropy(5, 5, [2, 3], True, Method.REJECTION_SAMPLING)
        assert entropy == pytest.approx(math.log2(2850))

    def test_combinatorial_matches_rejection(self):
        """Test that both uniform methods share one formula."""
        args = (18, 94, [26, 26, 10, 32], True)
        assert calculate_entropy(*args, Method.COMBINATORIAL_SAMPLING) == \
            calculate_entropy(*args, Method.REJECTION_SAMPLING)

    def test_unconstrained_space(self):
        """Test N^L when classes are not forced."""
        entropy = calculate_entropy(18, 94, [26, 26, 10, 32], False)
        assert entropy == pytest.approx(18 * math.log2(94))

    def test_default_scenario(self):
        """Test the default configuration lands just under 18*log2(94)."""
        entropy = calculate_entropy(18, 94, [26, 26, 10, 32], True)
        assert 110 < entropy < 18 * math.log2(94)
        assert entropy == pytest.approx(math.log2(count_valid_sequences(18, [26, 26, 10, 32])))

    def test_degenerate_input(self):
        """Test zero length or pool."""
        assert calculate_entropy(0, 94, [94], True) == 0.0
        assert calculate_entropy(-3, 94, [94], False) == 0.0
        assert calculate_entropy(10, 0, [], True) == 0.0

    def test_impossible_coverage(self):
        """Test that an empty valid space has zero entropy."""
        assert calculate_entropy(2, 3, [1, 1, 1], True) == 0.0

    def test_guaranteed_uses_shannon(self):
        """Test that the biased method switches formulas when forcing."""
        sizes = [26, 26, 10, 32]
        assert calculate_entropy(18, 94, sizes, True, Method.GUARANTEED_INCLUSION) == \
            calculate_shannon_entropy_guaranteed(18, sizes)

    def test_guaranteed_without_forcing_is_hartley(self):
        """Test that without forcing the plain formula applies."""
        entropy = calculate_entropy(10, 62, [26, 26, 10], False, Method.GUARANTEED_INCLUSION)
        assert entropy == pytest.approx(10 * math.log2(62))


class TestShannonEntropyGuaranteed:
    """Test entropy of the biased fallback."""

    @pytest.mark.parametrize("length,active_sets", [
        (3, ["a", "bc"]),
        (4, ["ab", "cd"]),
        (4, ["a", "bcd"]),
        (4, ["a", "b", "c"]),
    ])
    def test_matches_exact_distribution(self, length, active_sets):
        """Test against the enumerated output distribution."""
        dist = guaranteed_distribution(length, active_sets)
        assert sum(dist.values()) == 1

        exact = -sum(float(p) * math.log2(float(p)) for p in dist.values())
        sizes = [len(s) for s in active_sets]
        assert calculate_shannon_entropy_guaranteed(length, sizes) == pytest.approx(exact, abs=1e-9)

    @pytest.mark.parametrize("length,sizes", [
        (5, [2, 3]),
        (5, [20, 23, 5, 31]),
        (18, [26, 26, 10, 32]),
        (128, [26, 26, 10, 32]),
        (12, [20, 23, 5]),
    ])
    def test_bias_loses_information(self, length, sizes):
        """Test Shannon entropy stays below the uniform ideal."""
        shannon = calculate_shannon_entropy_guaranteed(length, sizes)
        hartley = log2_bigint(count_valid_sequences(length, sizes))
        assert 0 < shannon < hartley

    def test_single_class_is_uniform(self):
        """Test that with one class nothing is biased."""
        assert calculate_shannon_entropy_guaranteed(8, [26]) == pytest.approx(8 * math.log2(26))

    def test_length_equal_to_class_count(self):
        """Test with no free positions: k! orderings of independent picks."""
        expected = math.log2(math.factorial(3)) + math.log2(2) + math.log2(3) + math.log2(4)
        assert calculate_shannon_entropy_guaranteed(3, [2, 3, 4]) == pytest.approx(expected)

    @pytest.mark.parametrize("length,sizes", [
        (5, []),
        (2, [1, 2, 3]),
        (5.5, [2, 3]),
        (5, [2, 0]),
        (5, [2, -1]),
    ])
    def test_degenerate_input(self, length, sizes):
        """Test that impossible inputs give zero."""
        assert calculate_shannon_entropy_guaranteed(length, sizes) == 0.0

    def test_never_negative(self):
        """Test the lower clamp."""
        assert calculate_shannon_entropy_guaranteed(1, [1]) >= 0.0


class TestMaxEntropy:
    """Test the unconstrained bound."""

    def test_bound(self):
        assert max_entropy(18, 94) == pytest.approx(117.98, abs=0.01)
        assert max_entropy(0, 94) == 0.0
        assert max_entropy(10, 0) == 0.0
