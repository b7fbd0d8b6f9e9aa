# core/strategy.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Common capability shared by the interchangeable reconstruction engines

"""Reconstruction strategies.

The exact clause-set engine, the weighted clause-set engine and the
supersequence counter are independent algorithms. They share no base class,
only the capability the driving loop needs: fold one more trace, then report
the current best estimate.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, Protocol

from model.bits import Bits
from .disjunction import TraceDisjunction
from .exceptions import ConfigError
from .supersequence import SupersequenceCounter
from .verdict import Estimate
from .weighted import WeightedTraceDisjunction


class ReconstructionStrategy(Protocol):
    """Interface every reconstruction engine implements."""

    message_len: int
    traces_folded: int

    def fold(self, trace: Bits) -> None: ...

    def estimate(self) -> Estimate: ...

    def __len__(self) -> int: ...


def _exact(message_len: int, confidence_threshold: float, prior: Optional[TraceDisjunction]):
    if prior is None:
        return TraceDisjunction(message_len)
    return TraceDisjunction(message_len, prior.clauses)


def _weighted(message_len: int, confidence_threshold: float, prior: Optional[TraceDisjunction]):
    if prior is None:
        return WeightedTraceDisjunction(message_len, confidence_threshold)
    return WeightedTraceDisjunction(
        message_len, confidence_threshold, weights={clause: 1 for clause in prior.clauses}
    )


def _supersequence(message_len: int, confidence_threshold: float, prior: Optional[TraceDisjunction]):
    if prior is not None:
        raise ConfigError(
            "The supersequence strategy does not accept a prior formula",
            context={"strategy": "supersequence"},
        )
    return SupersequenceCounter(message_len, confidence_threshold)


_FACTORIES: Dict[str, Callable[..., ReconstructionStrategy]] = {
    "exact": _exact,
    "weighted": _weighted,
    "supersequence": _supersequence,
}


def create_strategy(
    name: str,
    message_len: int,
    confidence_threshold: float = 0.9,
    prior: Optional[TraceDisjunction] = None,
) -> ReconstructionStrategy:
    """Build the named reconstruction engine.

    Args:
        name: One of "exact", "weighted", "supersequence"
        message_len: Length n of the hidden message
        confidence_threshold: Decision threshold for the weighted engines
        prior: Known constraints on the message, ANDed into the clause engines

    Returns:
        A fresh engine that has folded no traces

    Raises:
        ConfigError: Unknown strategy name or unsupported prior
    """
    try:
        factory = _FACTORIES[name]
    except KeyError:
        raise ConfigError(
            f"Unknown strategy '{name}'; expected one of {sorted(_FACTORIES)}",
            context={"strategy": name},
        ) from None

    if prior is not None and prior.message_len != message_len:
        raise ConfigError(
            f"Prior formula is over {prior.message_len} bits, message has {message_len}",
            context={"prior_len": prior.message_len, "message_len": message_len},
        )

    return factory(message_len, confidence_threshold, prior)
