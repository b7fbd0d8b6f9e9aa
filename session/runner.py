# session/runner.py

"""
ReconstructionRunner: the driving loop that feeds traces into a
reconstruction strategy one at a time, checks the verdict after each one,
and stops as soon as it is conclusive. Traces come either from a trace file
or from a simulated deletion channel (`reconstruct`).
"""

from __future__ import annotations
from itertools import islice
from typing import Iterable, Optional, Tuple

from core.config import ReconstructionConfig
from core.exceptions import CandidatesExhausted
from core.strategy import ReconstructionStrategy, create_strategy
from core.disjunction import TraceDisjunction
from core.verdict import Estimate, Verdict
from model.bits import Bits, format_bits
from model.channel import DeletionChannel
from utils.logger import get_logger

logger = get_logger(__name__)


def describe_state(strategy: ReconstructionStrategy) -> str:
    """Short state summary for per-trace logging.

    A supersequence counter that has not seen an informative trace yet has an
    empty table, yet every message is still possible.
    """
    if not getattr(strategy, "informed", True):
        return "uninformed"
    return f"candidates={len(strategy)}"


class ReconstructionRunner:
    """
    Folds traces into one strategy until its verdict is conclusive.
    Optionally prints the accumulated state after every trace, the way the
    clause sets are meant to be inspected during debugging.
    """

    def __init__(self, strategy: ReconstructionStrategy, *, show_state: bool = False):
        self.strategy = strategy
        self.show_state = show_state

    def run(self, traces: Iterable[Bits], max_traces: Optional[int] = None) -> Estimate:
        """
        Fold traces until the verdict leaves UNDETERMINED, the source runs
        dry, or `max_traces` have been folded. Raises CandidatesExhausted
        if every hypothesis gets contradicted. A strategy that is already
        conclusive (a prior fixing every bit) folds nothing.
        """
        estimate = self.strategy.estimate()
        self._raise_if_exhausted(estimate)
        if estimate.is_conclusive():
            return self._finish(estimate)

        if max_traces is not None:
            traces = islice(traces, max_traces)

        for index, trace in enumerate(traces, start=1):
            self.strategy.fold(trace)
            estimate = self.strategy.estimate()
            logger.trace_folded(
                index, format_bits(trace), describe_state(self.strategy), str(estimate.verdict)
            )

            if self.show_state:
                print(self.strategy)

            self._raise_if_exhausted(estimate)
            if estimate.is_conclusive():
                break

        if not estimate.is_conclusive():
            logger.info(f"No conclusive verdict after {estimate.traces_folded} traces")

        return self._finish(estimate)

    def _finish(self, estimate: Estimate) -> Estimate:
        message = format_bits(estimate.message) if estimate.message is not None else None
        logger.final_estimate(str(estimate.verdict), message, estimate.confidence)
        return estimate

    def _raise_if_exhausted(self, estimate: Estimate) -> None:
        if estimate.verdict is not Verdict.EXHAUSTED:
            return

        logger.candidates_exhausted(estimate.traces_folded)
        raise CandidatesExhausted(
            f"No candidate message is consistent with the first {estimate.traces_folded} traces",
            traces_folded=estimate.traces_folded,
            context={"strategy": type(self.strategy).__name__},
        )


def reconstruct(
    config: ReconstructionConfig,
    message: Optional[Bits] = None,
    prior: Optional[TraceDisjunction] = None,
    *,
    show_state: bool = False,
) -> Tuple[Bits, Estimate]:
    """
    Simulate a full session: draw (or take) a message, stream traces of it
    through a seeded deletion channel, and reconstruct it with the configured
    strategy. Returns the original message and the final estimate.
    """
    config.validate()

    channel = DeletionChannel(config.deletion_probability, seed=config.seed)
    if message is None:
        message = channel.new_message(config.message_len)
    elif len(message) != config.message_len:
        raise ValueError(
            f"Message has {len(message)} bits, configuration expects {config.message_len}"
        )

    strategy = create_strategy(
        config.strategy, config.message_len, config.confidence_threshold, prior
    )
    logger.session_start(config.strategy, config.message_len, "simulated deletion channel")
    logger.debug(f"Hidden message: {format_bits(message)}")

    runner = ReconstructionRunner(strategy, show_state=show_state)
    return message, runner.run(channel.traces(message), config.max_traces)
