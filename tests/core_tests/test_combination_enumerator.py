# tests/core_tests/test_combination_enumerator.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Test suite for lexicographic k-combination enumeration

"""Test suite for the combination enumerator.

Covers the count and ordering of produced combinations, the degenerate
sizes k = 0 and k > n, the in-place successor function and the snapshot
semantics of the iterator.
"""

from itertools import combinations
from math import comb

import pytest

from core.combination import CombinationEnumerator, next_combination

SHAPES = [(n, k) for n in range(0, 8) for k in range(1, n + 1)]


class TestCombinationEnumerator:
    """Enumeration count, order and shape."""

    @pytest.mark.parametrize("n, k", SHAPES)
    def test_produces_binomial_count(self, n, k):
        produced = list(CombinationEnumerator(k, n))

        assert len(produced) == comb(n, k)
        assert len(set(produced)) == len(produced)

    @pytest.mark.parametrize("n, k", SHAPES)
    def test_combinations_are_strictly_increasing_and_in_range(self, n, k):
        for combination in CombinationEnumerator(k, n):
            assert len(combination) == k
            assert all(a < b for a, b in zip(combination, combination[1:]))
            assert all(0 <= i < n for i in combination)

    @pytest.mark.parametrize("n, k", SHAPES)
    def test_order_is_lexicographic(self, n, k):
        produced = list(CombinationEnumerator(k, n))

        assert produced == sorted(produced)
        assert produced == list(combinations(range(n), k))

    @pytest.mark.parametrize("n", [0, 1, 5, 8])
    def test_zero_size_yields_nothing(self, n):
        enumerator = CombinationEnumerator(0, n)

        assert list(enumerator) == []
        with pytest.raises(StopIteration):
            next(enumerator)

    @pytest.mark.parametrize("n, k", [(0, 1), (3, 4), (5, 9)])
    def test_size_above_bound_yields_nothing(self, n, k):
        assert list(CombinationEnumerator(k, n)) == []

    @pytest.mark.parametrize("n", [1, 4, 8])
    def test_full_size_yields_identity(self, n):
        assert list(CombinationEnumerator(n, n)) == [tuple(range(n))]

    def test_snapshots_are_independent_of_the_cursor(self):
        enumerator = CombinationEnumerator(2, 4)
        first = next(enumerator)
        second = next(enumerator)

        assert first == (0, 1)
        assert second == (0, 2)
        assert isinstance(first, tuple)

    def test_forward_only_and_finite(self):
        enumerator = CombinationEnumerator(2, 3)

        assert list(enumerator) == [(0, 1), (0, 2), (1, 2)]
        assert list(enumerator) == []
        with pytest.raises(StopIteration):
            next(enumerator)

    def test_restart_requires_new_instance(self):
        first = list(CombinationEnumerator(3, 5))
        second = list(CombinationEnumerator(3, 5))

        assert first == second

    @pytest.mark.parametrize("size, bound", [(-1, 3), (2, -1)])
    def test_negative_shape_rejected(self, size, bound):
        with pytest.raises(ValueError):
            CombinationEnumerator(size, bound)


class TestNextCombination:
    """In-place successor function."""

    @pytest.mark.parametrize(
        "before, bound, after",
        [
            ([0, 1, 2], 4, [0, 1, 3]),
            ([0, 1, 3], 4, [0, 2, 3]),
            ([0, 2, 3], 4, [1, 2, 3]),
            ([0, 3], 5, [0, 4]),
            ([0, 4], 5, [1, 2]),
            ([2], 5, [3]),
        ],
    )
    def test_advances_to_successor(self, before, bound, after):
        buffer = list(before)

        assert next_combination(buffer, bound) is True
        assert buffer == after

    @pytest.mark.parametrize(
        "last, bound",
        [
            ([1, 2, 3], 4),
            ([4], 5),
            ([0, 1, 2, 3, 4], 5),
        ],
    )
    def test_reports_last_combination(self, last, bound):
        buffer = list(last)

        assert next_combination(buffer, bound) is False
        assert buffer == last

    def test_empty_buffer_has_no_successor(self):
        assert next_combination([], 5) is False

    def test_oversized_buffer_has_no_successor(self):
        assert next_combination([0, 1, 2], 2) is False
