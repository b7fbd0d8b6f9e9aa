# core/weighted.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Weighted clause-set engine: confidence-based narrowing

"""Weighted variant of the clause-set engine.

Construction and merging are the same as in the exact engine, but every
conjunction carries an integer weight: the number of ways the folded traces
can be embedded to produce it. Narrowing multiplies the weights of each
surviving pair (independent observations) and sums the products when several
pairs merge into the same conjunction.

Instead of waiting for a single clause, the engine reports the heaviest
clause as soon as its share of the total weight exceeds a confidence
threshold. This trades certainty for earlier termination.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from model.bits import Bits
from utils.logger import get_logger
from .clause import Conjunction
from .disjunction import TraceDisjunction, clauses_from_trace
from .verdict import Estimate, Verdict

logger = get_logger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 0.9


class WeightedTraceDisjunction:
    """Clause set in which each conjunction carries an accumulated weight.

    Attributes:
        message_len: Length n of the hidden message
        confidence_threshold: Share of the total weight the best clause must exceed
        traces_folded: Number of traces folded in so far
    """

    def __init__(
        self,
        message_len: int,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        weights: Optional[Dict[Conjunction, int]] = None,
    ):
        if message_len < 0:
            raise ValueError(f"Message length must be non-negative, got {message_len}")
        if not 0.0 <= confidence_threshold < 1.0:
            raise ValueError(
                f"Confidence threshold must lie in [0, 1), got {confidence_threshold}"
            )

        self.message_len = message_len
        self.confidence_threshold = confidence_threshold
        self.traces_folded = 0
        self._weights: Dict[Conjunction, int] = (
            {Conjunction(): 1} if weights is None else dict(weights)
        )

    @classmethod
    def from_trace(
        cls,
        trace: Bits,
        message_len: int,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    ) -> WeightedTraceDisjunction:
        disjunction = cls(message_len, confidence_threshold)
        disjunction.fold(trace)
        return disjunction

    @property
    def weights(self) -> Dict[Conjunction, int]:
        return dict(self._weights)

    def and_(
        self,
        other: Union[WeightedTraceDisjunction, TraceDisjunction, Iterable[Conjunction]],
    ) -> None:
        """Narrow by conjunction with `other`, multiplying pair weights.

        Args:
            other: Another weighted clause set, or plain clauses counted with
                weight 1 each. Empty input leaves the table unchanged.
        """
        rhs_weights = _as_weights(other)
        if not rhs_weights:
            logger.narrowing_skipped("weighted", "no clauses to narrow with")
            return

        narrowed: Dict[Conjunction, int] = {}
        for rhs_clause, rhs_weight in rhs_weights.items():
            for lhs_clause, lhs_weight in self._weights.items():
                merged = lhs_clause.merge(rhs_clause)
                if merged is not None:
                    narrowed[merged] = narrowed.get(merged, 0) + lhs_weight * rhs_weight

        logger.narrowing_result("weighted", len(self._weights), len(rhs_weights), len(narrowed))
        self._weights = narrowed

    def and_trace(self, trace: Bits) -> None:
        self.and_(clauses_from_trace(trace, self.message_len))

    def fold(self, trace: Bits) -> None:
        self.and_trace(trace)
        self.traces_folded += 1

    def weight(self, candidate: Bits) -> int:
        """Summed weight of every clause `candidate` satisfies.

        Partial clauses overlap, so one message may match several of them.
        """
        return sum(
            weight for clause, weight in self._weights.items() if clause.satisfied_by(candidate)
        )

    def total_weight(self) -> int:
        return sum(self._weights.values())

    def best(self) -> Optional[Tuple[Conjunction, float]]:
        """Heaviest clause and its share of the total weight.

        Ties go to the smallest clause in sort order. None when exhausted.
        """
        if not self._weights:
            return None

        clause, weight = min(self._weights.items(), key=lambda item: (-item[1], item[0]))
        return clause, weight / self.total_weight()

    def is_exhausted(self) -> bool:
        return not self._weights

    def verdict(self) -> Verdict:
        best = self.best()
        if best is None:
            return Verdict.EXHAUSTED

        clause, share = best
        if clause.is_complete(self.message_len) and share > self.confidence_threshold:
            return Verdict.RECONSTRUCTED
        return Verdict.UNDETERMINED

    def estimate(self) -> Estimate:
        best = self.best()
        if best is None:
            return Estimate(Verdict.EXHAUSTED, traces_folded=self.traces_folded)

        clause, share = best
        message = clause.to_bits() if clause.is_complete(self.message_len) else None
        return Estimate(
            verdict=self.verdict(),
            message=message,
            confidence=share if message is not None else 0.0,
            traces_folded=self.traces_folded,
        )

    def __len__(self) -> int:
        return len(self._weights)

    def __iter__(self) -> Iterator[Conjunction]:
        return iter(sorted(self._weights))

    def __str__(self) -> str:
        clauses = sorted(self._weights)
        if not clauses:
            return "[]"
        return (
            "[\n    "
            + " ∨\n    ".join(f"{clause} ×{self._weights[clause]}" for clause in clauses)
            + "\n]"
        )

    def __repr__(self) -> str:
        return (
            f"WeightedTraceDisjunction(n={self.message_len}, {len(self)} clauses, "
            f"total_weight={self.total_weight()})"
        )


def _as_weights(other) -> Dict[Conjunction, int]:
    if isinstance(other, WeightedTraceDisjunction):
        return dict(other._weights)

    weights: Dict[Conjunction, int] = {}
    for clause in other:
        weights[clause] = weights.get(clause, 0) + 1
    return weights
