# core/combination.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Lexicographic enumeration of strictly increasing index combinations

"""Combination enumerator shared by both reconstruction engines.

A trace of length k drawn from a message of length n survived at exactly one
of the C(n, k) strictly increasing position sequences in [0, n). This module
enumerates those hypotheses in lexicographic order, one at a time, from an
internal working buffer that callers never observe directly.
"""

from __future__ import annotations
from typing import List, Optional, Tuple


def next_combination(combination: List[int], bound: int) -> bool:
    """Advance `combination` in place to its lexicographic successor.

    The input must hold strictly increasing numbers in [0, bound). The
    highest-indexed element that can still grow is incremented and every
    element after it is reset to consecutive values directly above it.

    Args:
        combination: Working buffer, mutated in place
        bound: Exclusive upper bound for every element

    Returns:
        True if a successor was written, False if `combination` was the last one
    """
    size = len(combination)

    # Empty set, no combinations
    if size == 0 or size > bound:
        return False

    # Element i can reach at most bound - size + i and still leave room after it
    index = size - 1
    while index >= 0 and combination[index] >= bound - size + index:
        index -= 1

    if index < 0:
        return False

    combination[index] += 1
    for following in range(index + 1, size):
        combination[following] = combination[following - 1] + 1

    return True


class CombinationEnumerator:
    """Forward-only, finite iterator over the k-combinations of range(n).

    Each step yields an immutable tuple snapshot and then advances the private
    buffer, so consumers never alias the cursor. Restart by constructing a new
    instance.

    Attributes:
        size: Number of elements per combination (k)
        bound: Exclusive upper bound of the elements (n)
    """

    __slots__ = ("size", "bound", "_buffer")

    def __init__(self, size: int, bound: int):
        if size < 0 or bound < 0:
            raise ValueError(f"Invalid combination shape: size={size}, bound={bound}")

        self.size = size
        self.bound = bound
        # k = 0 and k > n are degenerate: nothing to enumerate
        self._buffer: Optional[List[int]] = (
            list(range(size)) if 0 < size <= bound else None
        )

    def __iter__(self) -> "CombinationEnumerator":
        return self

    def __next__(self) -> Tuple[int, ...]:
        if self._buffer is None:
            raise StopIteration

        snapshot = tuple(self._buffer)
        if not next_combination(self._buffer, self.bound):
            self._buffer = None
        return snapshot
