"""
Unit tests for inclusion-exclusion counting.
"""

from itertools import product
import pytest

from entropass.analysis.combinatorics import (
    RemainingCounter,
    count_remaining,
    count_valid_sequences,
)


def brute_force_count(length, active_sets):
    """Count covering sequences by enumerating every sequence."""
    pool = "".join(active_sets)
    return sum(
        1 for seq in product(pool, repeat=length)
        if all(set(seq) & set(s) for s in active_sets)
    )


class TestCountValidSequences:
    """Test counting of sequences covering every class."""

    def test_two_classes(self):
        """Test 5^5 - 3^5 - 2^5 + 0^5."""
        assert count_valid_sequences(5, [2, 3]) == 2850

    def test_four_classes_excluding_ambiguous(self):
        """Test the shortest password with all four filtered classes."""
        assert count_valid_sequences(5, [20, 23, 5, 31]) == 337962000

    def test_single_class(self):
        """Test that one class only excludes the empty pool."""
        assert count_valid_sequences(4, [3]) == 81

    def test_length_below_class_count(self):
        """Test that too short sequences cannot cover every class."""
        assert count_valid_sequences(2, [1, 1, 1]) == 0
        assert count_valid_sequences(0, [2, 3]) == 0

    @pytest.mark.parametrize("length,active_sets", [
        (4, ["ab", "cd"]),
        (3, ["a", "bc"]),
        (5, ["ab", "c", "de"]),
        (4, ["a", "b", "c", "d"]),
        (6, ["abc", "d"]),
    ])
    def test_matches_brute_force(self, length, active_sets):
        """Test against exhaustive enumeration."""
        sizes = [len(s) for s in active_sets]
        assert count_valid_sequences(length, sizes) == brute_force_count(length, active_sets)

    def test_large_values_are_exact(self):
        """Test that no precision is lost at maximum length."""
        total = count_valid_sequences(128, [26, 26, 10, 32])
        assert isinstance(total, int)
        assert 0 < total < 94 ** 128
        assert total.bit_length() > 800

    @pytest.mark.parametrize("length", [-1, 2.5, True, "5"])
    def test_invalid_length(self, length):
        """Test that a bad length is a contract violation."""
        with pytest.raises(ValueError):
            count_valid_sequences(length, [2, 3])

    def test_negative_size(self):
        """Test that negative class sizes are refused, not clamped."""
        with pytest.raises(ValueError):
            count_valid_sequences(5, [2, -3])


class TestCountRemaining:
    """Test completions given partial coverage."""

    def test_nothing_satisfied_equals_total(self):
        """Test that an empty mask gives the full count."""
        assert count_remaining(5, [2, 3], 0) == count_valid_sequences(5, [2, 3])

    def test_everything_satisfied_is_unconstrained(self):
        """Test that a full mask leaves any filling valid."""
        assert count_remaining(4, [2, 3], 0b11) == 5 ** 4

    def test_partial_mask(self):
        """Test one class still missing."""
        # class 1 (size 3) still needed: 5^3 - 2^3
        assert count_remaining(3, [2, 3], 0b01) == 125 - 8
        # class 0 (size 2) still needed: 5^3 - 3^3
        assert count_remaining(3, [2, 3], 0b10) == 125 - 27

    def test_zero_remaining_positions(self):
        """Test completion of a finished sequence."""
        assert count_remaining(0, [2, 3], 0b11) == 1
        assert count_remaining(0, [2, 3], 0b01) == 0

    @pytest.mark.parametrize("mask", [-1, 4, 1.0])
    def test_mask_out_of_range(self, mask):
        """Test that masks outside [0, 2**k) are refused."""
        with pytest.raises(ValueError):
            count_remaining(3, [2, 3], mask)

    def test_negative_length(self):
        """Test that a negative remaining length is refused."""
        with pytest.raises(ValueError):
            count_remaining(-1, [2, 3], 0)


class TestRemainingCounter:
    """Test the per-call memo."""

    def test_memoizes_by_length_and_mask(self):
        """Test that repeated lookups hit the cache."""
        counter = RemainingCounter([2, 3])

        assert counter(3, 0b01) == 117
        assert counter(3, 0b01) == 117
        assert counter(3, 0b10) == 98

        assert counter.cache_size == 2
        assert counter.hits == 1

    def test_counters_do_not_share_state(self):
        """Test that each counter starts empty."""
        first = RemainingCounter([2, 3])
        first(4, 0)

        second = RemainingCounter([2, 3])
        assert second.cache_size == 0
