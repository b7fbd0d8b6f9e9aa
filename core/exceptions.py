# core/exceptions.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Exception hierarchy for reconstruction sessions

"""Domain-specific exceptions for trace reconstruction.

Contradicting hypotheses are not errors: `Conjunction.merge` returns None and
the narrowing step drops the pair. The exceptions below cover states a caller
must handle explicitly.
"""

from typing import Optional


class ReconstructionError(Exception):
    """Base exception for all reconstruction errors.

    Carries a structured `context` so callers can inspect the failure.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class CandidatesExhausted(ReconstructionError):
    """Raised when narrowing leaves no candidate consistent with the traces.

    Under a genuine deletion channel this cannot happen; it signals traces
    that were not produced from a single message, or a corrupted state.
    """

    def __init__(self, message: str, traces_folded: int, context: Optional[dict] = None):
        super().__init__(message, context)
        self.traces_folded = traces_folded


class ConfigError(ReconstructionError, ValueError):
    """Raised when a reconstruction configuration is invalid."""

    pass
