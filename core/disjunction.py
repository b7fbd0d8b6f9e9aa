# core/disjunction.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Exact clause-set engine: one DNF formula per trace, narrowed by conjunction

"""Exact reconstruction by logical narrowing.

A trace of length k is consistent with exactly those messages that contain
it at one of the C(n, k) possible surviving position sets. Each position set
becomes one conjunction fixing those positions to the trace's bits, and the
trace's knowledge is the disjunction of all of them.

Folding a further trace ANDs two such disjunctions: every pair of clauses
is merged, contradictory pairs vanish, and the surviving merges are
deduplicated. The set starts as the tautology `{()}`, so the first trace
simply installs its own clauses. The message is determined once a single
clause remains and that clause fixes every position.
"""

from __future__ import annotations
from typing import FrozenSet, Iterable, Iterator, Optional

from model.bits import Bits, format_bits
from utils.logger import get_logger
from .clause import Conjunction, Term
from .combination import CombinationEnumerator
from .verdict import Estimate, Verdict

logger = get_logger(__name__)


def clauses_from_trace(trace: Bits, message_len: int) -> Iterator[Conjunction]:
    """Yield one conjunction per embedding hypothesis of `trace`.

    For combination (c_0, ..., c_{k-1}) the conjunction asserts that message
    bit c_i equals trace bit i. Degenerate traces (k = 0 or k > n) yield
    nothing.
    """
    for combination in CombinationEnumerator(len(trace), message_len):
        yield Conjunction._from_sorted(
            tuple(Term(position, not bit) for position, bit in zip(combination, trace))
        )


class TraceDisjunction:
    """Deduplicated set of conjunctions consistent with every folded trace.

    Attributes:
        message_len: Length n of the hidden message
        traces_folded: Number of traces folded in so far
    """

    def __init__(self, message_len: int, clauses: Optional[Iterable[Conjunction]] = None):
        if message_len < 0:
            raise ValueError(f"Message length must be non-negative, got {message_len}")

        self.message_len = message_len
        self.traces_folded = 0
        self._clauses = {Conjunction()} if clauses is None else set(clauses)

    @classmethod
    def from_trace(cls, trace: Bits, message_len: int) -> TraceDisjunction:
        """Clause set describing every message consistent with `trace`."""
        disjunction = cls(message_len)
        disjunction.fold(trace)
        return disjunction

    @staticmethod
    def clauses_from_trace(trace: Bits, message_len: int) -> Iterator[Conjunction]:
        return clauses_from_trace(trace, message_len)

    @property
    def clauses(self) -> FrozenSet[Conjunction]:
        return frozenset(self._clauses)

    def and_(self, other: Iterable[Conjunction]) -> None:
        """Narrow this clause set by conjunction with `other`.

        Every (accumulated, new) clause pair is merged; contradictions are
        dropped and identical merges collapse. An empty `other` carries no
        information and leaves the set unchanged.

        Args:
            other: Clauses of the formula to AND with, e.g. a fresh trace's
        """
        rhs_clauses = set(other)
        if not rhs_clauses:
            logger.narrowing_skipped("exact", "no clauses to narrow with")
            return

        narrowed = set()
        for rhs_clause in rhs_clauses:
            for lhs_clause in self._clauses:
                merged = lhs_clause.merge(rhs_clause)
                if merged is not None:
                    narrowed.add(merged)

        logger.narrowing_result("exact", len(self._clauses), len(rhs_clauses), len(narrowed))
        self._clauses = narrowed

    def and_trace(self, trace: Bits) -> None:
        """Narrow with the clauses derived from one more trace."""
        self.and_(clauses_from_trace(trace, self.message_len))

    def fold(self, trace: Bits) -> None:
        self.and_trace(trace)
        self.traces_folded += 1

    def message(self) -> Optional[Bits]:
        """The reconstructed message, or None while it is not yet unique."""
        if len(self._clauses) != 1:
            return None

        (clause,) = self._clauses
        if not clause.is_complete(self.message_len):
            return None
        return clause.to_bits()

    def is_exhausted(self) -> bool:
        return not self._clauses

    def verdict(self) -> Verdict:
        if self.is_exhausted():
            return Verdict.EXHAUSTED
        if self.message() is not None:
            return Verdict.RECONSTRUCTED
        return Verdict.UNDETERMINED

    def estimate(self) -> Estimate:
        message = self.message()
        return Estimate(
            verdict=self.verdict(),
            message=message,
            confidence=1.0 if message is not None else 0.0,
            traces_folded=self.traces_folded,
        )

    def satisfied_by(self, message: Bits) -> bool:
        """True if `message` is still a candidate."""
        return any(clause.satisfied_by(message) for clause in self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __iter__(self) -> Iterator[Conjunction]:
        return iter(sorted(self._clauses))

    def __contains__(self, clause: object) -> bool:
        return clause in self._clauses

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TraceDisjunction):
            return NotImplemented
        return self._clauses == other._clauses

    def __str__(self) -> str:
        clauses = sorted(self._clauses)
        if not clauses:
            return "[]"
        if len(clauses) == 1:
            return f"[\n    {clauses[0]}\n]"
        return "[\n    " + " ∨\n    ".join(str(clause) for clause in clauses) + "\n]"

    def __repr__(self) -> str:
        found = self.message()
        state = format_bits(found) if found is not None else f"{len(self)} clauses"
        return f"TraceDisjunction(n={self.message_len}, {state})"
