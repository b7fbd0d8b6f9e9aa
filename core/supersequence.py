# core/supersequence.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Weighted supersequence counting: a probabilistic alternative to clause sets

"""Supersequence counting engine.

Every length-n message containing a trace as a subsequence is a candidate.
Under an i.i.d. deletion channel the probability of observing a trace of
length k from a candidate is proportional to the number of distinct
embeddings of the trace into that candidate, so the engine keeps a table
mapping each candidate to the product of its embedding counts over all folded
traces. A candidate that cannot contain a trace drops out of the table for
good.
"""

from __future__ import annotations
from itertools import product
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from model.bits import Bits, format_bits, is_subsequence
from utils.logger import get_logger
from .combination import CombinationEnumerator
from .verdict import Estimate, Verdict

logger = get_logger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.9


def _leftmost_embedding(sequence: Sequence[bool], subsequence: Sequence[bool]) -> Optional[List[int]]:
    """Greedy leftmost match of each subsequence bit, or None if there is none."""
    positions = []
    cursor = 0
    for bit in subsequence:
        while cursor < len(sequence) and sequence[cursor] != bit:
            cursor += 1
        if cursor == len(sequence):
            return None
        positions.append(cursor)
        cursor += 1
    return positions


def permute_subsequence(
    sequence: Sequence[bool],
    subsequence: Sequence[bool],
    positions: List[int],
    nth_pos: int,
    bound: int,
) -> bool:
    """Advance `positions` to the next embedding of `subsequence` in `sequence`.

    Depth-first search over strictly increasing index tuples whose i-th entry
    matches subsequence bit i. The cursor `nth_pos` is moved to its next match
    below `bound`; when it runs out, the previous cursor is advanced (with a
    bound one lower, leaving room for this one) and this cursor is re-satisfied
    greedily right after it.

    Args:
        sequence: Candidate supersequence
        subsequence: Trace being embedded
        positions: Current embedding, mutated in place
        nth_pos: Index of the cursor to advance
        bound: Exclusive upper bound for that cursor

    Returns:
        True if `positions` now holds a new embedding, False once exhausted
    """
    while positions[nth_pos] < bound - 1:
        positions[nth_pos] += 1
        if sequence[positions[nth_pos]] == subsequence[nth_pos]:
            return True

    if nth_pos == 0:
        return False

    while permute_subsequence(sequence, subsequence, positions, nth_pos - 1, bound - 1):
        positions[nth_pos] = positions[nth_pos - 1] + 1
        while positions[nth_pos] < bound:
            if sequence[positions[nth_pos]] == subsequence[nth_pos]:
                return True
            positions[nth_pos] += 1

    return False


def count_occurrences(sequence: Sequence[bool], subsequence: Sequence[bool]) -> int:
    """Number of distinct increasing index tuples embedding `subsequence` in `sequence`.

    The empty subsequence has exactly one (empty) embedding.
    """
    positions = _leftmost_embedding(sequence, subsequence)
    if positions is None:
        return 0
    if not positions:
        return 1

    count = 1
    while permute_subsequence(sequence, subsequence, positions, len(positions) - 1, len(sequence)):
        count += 1
    return count


def supersequences(trace: Bits, message_len: int) -> Iterator[Bits]:
    """Yield each distinct length-`message_len` supersequence of `trace` once.

    Every combination places the trace bits; the remaining positions range
    over both values. Degenerate traces (k = 0 or k > n) yield nothing.
    """
    seen = set()
    for combination in CombinationEnumerator(len(trace), message_len):
        placed = dict(zip(combination, trace))
        free = [i for i in range(message_len) if i not in placed]

        for fill in product((False, True), repeat=len(free)):
            values = dict(placed)
            values.update(zip(free, fill))
            candidate = tuple(values[i] for i in range(message_len))
            if candidate not in seen:
                seen.add(candidate)
                yield candidate


def candidate_multiplicities(trace: Bits, message_len: int) -> Dict[Bits, int]:
    """Map every supersequence of `trace` to its embedding count."""
    return {
        candidate: count_occurrences(candidate, trace)
        for candidate in supersequences(trace, message_len)
    }


class SupersequenceCounter:
    """Running weight table over candidate messages.

    Attributes:
        message_len: Length n of the hidden message
        confidence_threshold: Share of the total weight the best candidate must exceed
        traces_folded: Number of traces folded in so far
    """

    def __init__(self, message_len: int, confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD):
        if message_len < 0:
            raise ValueError(f"Message length must be non-negative, got {message_len}")
        if not 0.0 <= confidence_threshold < 1.0:
            raise ValueError(
                f"Confidence threshold must lie in [0, 1), got {confidence_threshold}"
            )

        self.message_len = message_len
        self.confidence_threshold = confidence_threshold
        self.traces_folded = 0
        # Until the first informative trace every message is still possible.
        # The only message of length 0 is known before any trace arrives.
        self._weights: Dict[Bits, int] = {(): 1} if message_len == 0 else {}
        self._informed = message_len == 0

    @property
    def weights(self) -> Dict[Bits, int]:
        return dict(self._weights)

    @property
    def informed(self) -> bool:
        """False until a trace has seeded the table; before that every message is possible."""
        return self._informed

    def fold(self, trace: Bits) -> None:
        """Multiply every candidate's weight by its embedding count for `trace`.

        Candidates with zero embeddings are evicted. A trace with no surviving
        bits, or longer than the message, leaves the table unchanged.
        """
        self.traces_folded += 1

        if not 0 < len(trace) <= self.message_len:
            logger.narrowing_skipped("supersequence", f"degenerate trace of length {len(trace)}")
            return

        if not self._informed:
            self._weights = candidate_multiplicities(trace, self.message_len)
            self._informed = True
            logger.debug(f"    supersequence: {len(self._weights)} initial candidates")
            return

        narrowed: Dict[Bits, int] = {}
        for candidate, weight in self._weights.items():
            if is_subsequence(trace, candidate):
                narrowed[candidate] = weight * count_occurrences(candidate, trace)

        logger.candidates_evicted(
            "supersequence", len(self._weights) - len(narrowed), len(narrowed)
        )
        self._weights = narrowed

    def weight(self, candidate: Bits) -> int:
        return self._weights.get(tuple(candidate), 0)

    def total_weight(self) -> int:
        return sum(self._weights.values())

    def best(self) -> Optional[Tuple[Bits, float]]:
        """Heaviest candidate and its share of the total weight.

        Ties go to the lexicographically smallest candidate. None when empty.
        """
        if not self._weights:
            return None

        candidate, weight = min(self._weights.items(), key=lambda item: (-item[1], item[0]))
        return candidate, weight / self.total_weight()

    def is_exhausted(self) -> bool:
        return self._informed and not self._weights

    def verdict(self) -> Verdict:
        if self.is_exhausted():
            return Verdict.EXHAUSTED

        best = self.best()
        if best is not None and best[1] > self.confidence_threshold:
            return Verdict.RECONSTRUCTED
        return Verdict.UNDETERMINED

    def estimate(self) -> Estimate:
        best = self.best()
        if best is None:
            return Estimate(self.verdict(), traces_folded=self.traces_folded)

        candidate, share = best
        return Estimate(
            verdict=self.verdict(),
            message=candidate,
            confidence=share,
            traces_folded=self.traces_folded,
        )

    def __len__(self) -> int:
        return len(self._weights)

    def __str__(self) -> str:
        total = self.total_weight()
        ranked = sorted(self._weights.items(), key=lambda item: (-item[1], item[0]))
        lines = [
            f"    {format_bits(candidate)}  {weight}  ({weight / total:.4f})"
            for candidate, weight in ranked
        ]
        return "{\n" + "\n".join(lines) + "\n}" if lines else "{}"
