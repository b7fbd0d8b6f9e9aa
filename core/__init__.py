# core/__init__.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Core module public API for trace reconstruction engines

"""Core engines for reconstructing a message from deletion-channel traces.

A hidden n-bit message is observed only through traces: copies in which
every bit was independently deleted while survivors kept their order. The
engines in this package fold traces one at a time into an accumulated state
until that state pins down the message.

Primary Components:
    CombinationEnumerator: Lexicographic k-combinations of range(n)
    Term, Conjunction: Literal algebra with a linear sorted merge
    TraceDisjunction: Exact clause-set engine (logical narrowing)
    WeightedTraceDisjunction: Clause-set engine with multiplicative weights
    SupersequenceCounter: Candidate table weighted by embedding counts
    Verdict, Estimate: Session state reported after every trace
    create_strategy: Factory selecting one of the three engines

Example:
    >>> from core import TraceDisjunction
    >>> td = TraceDisjunction.from_trace((True, False), 3)
    >>> td.fold((True, False, True))
    >>> td.message()
    (True, False, True)
"""

from .combination import CombinationEnumerator, next_combination
from .clause import Term, Conjunction
from .config import ReconstructionConfig, STRATEGY_NAMES
from .disjunction import TraceDisjunction, clauses_from_trace
from .exceptions import ReconstructionError, CandidatesExhausted, ConfigError
from .strategy import ReconstructionStrategy, create_strategy
from .supersequence import (
    SupersequenceCounter,
    candidate_multiplicities,
    count_occurrences,
    supersequences,
)
from .verdict import Estimate, Verdict
from .weighted import WeightedTraceDisjunction

__all__ = [
    "CombinationEnumerator",
    "next_combination",
    "Term",
    "Conjunction",
    "ReconstructionConfig",
    "STRATEGY_NAMES",
    "TraceDisjunction",
    "clauses_from_trace",
    "ReconstructionError",
    "CandidatesExhausted",
    "ConfigError",
    "ReconstructionStrategy",
    "create_strategy",
    "SupersequenceCounter",
    "candidate_multiplicities",
    "count_occurrences",
    "supersequences",
    "Estimate",
    "Verdict",
    "WeightedTraceDisjunction",
]

__version__ = "1.0.0"
__description__ = "Core engines for deletion-channel trace reconstruction"
