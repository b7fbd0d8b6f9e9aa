# core/verdict.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Verdict enumeration for reconstruction results

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from model.bits import Bits
from utils.logger import get_logger


class Verdict(Enum):
    """Three-state result of a reconstruction session.

    Values:
        UNDETERMINED: More traces are needed before a message can be reported
        RECONSTRUCTED: A message was determined (exactly, or above the
            confidence threshold for the weighted engines)
        EXHAUSTED: Every hypothesis was contradicted; no message fits the
            observed traces
    """

    UNDETERMINED = auto()
    RECONSTRUCTED = auto()
    EXHAUSTED = auto()

    def __str__(self) -> str:
        return self.name

    def is_conclusive(self) -> bool:
        """Determine if this verdict ends a reconstruction session.

        Both RECONSTRUCTED and EXHAUSTED are terminal: folding further traces
        cannot revive an exhausted candidate set, and a reconstructed message
        is final for the exact engine.

        Returns:
            True for RECONSTRUCTED or EXHAUSTED, False for UNDETERMINED
        """
        logger = get_logger()
        is_conclusive = self is not Verdict.UNDETERMINED

        logger.debug(
            f"Verdict {self.name} is {'conclusive' if is_conclusive else 'inconclusive'}"
        )
        return is_conclusive


@dataclass(frozen=True, slots=True)
class Estimate:
    """Current best answer of a reconstruction strategy.

    Attributes:
        verdict: Session state after the last folded trace
        message: Leading candidate, final only once RECONSTRUCTED. The exact
            engine leaves it None until the message is determined; the
            weighted engines report their provisional leader when it is a
            complete message
        confidence: Share of the accumulated weight held by `message`
            (1.0 for the exact engine once determined)
        traces_folded: Number of traces folded so far
    """

    verdict: Verdict
    message: Optional[Bits] = None
    confidence: float = 0.0
    traces_folded: int = 0

    def is_conclusive(self) -> bool:
        return self.verdict.is_conclusive()
