# core/config.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Session configuration, validated before any trace is drawn

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .exceptions import ConfigError

STRATEGY_NAMES = ("exact", "weighted", "supersequence")


@dataclass
class ReconstructionConfig:
    message_len: int = 8
    deletion_probability: float = 0.5
    strategy: str = "exact"
    confidence_threshold: float = 0.9
    max_traces: Optional[int] = None    # None → draw until conclusive
    seed: Optional[int] = None

    def validate(self) -> ReconstructionConfig:
        """Check every field, raising ConfigError on the first invalid one."""
        if self.message_len < 0:
            raise ConfigError(
                f"message_len must be non-negative, got {self.message_len}",
                context={"message_len": self.message_len},
            )
        # p = 1 deletes every bit and never yields information
        if not 0.0 <= self.deletion_probability < 1.0:
            raise ConfigError(
                f"deletion_probability must lie in [0, 1), got {self.deletion_probability}",
                context={"deletion_probability": self.deletion_probability},
            )
        if self.strategy not in STRATEGY_NAMES:
            raise ConfigError(
                f"Unknown strategy '{self.strategy}'; expected one of {list(STRATEGY_NAMES)}",
                context={"strategy": self.strategy},
            )
        if not 0.0 <= self.confidence_threshold < 1.0:
            raise ConfigError(
                f"confidence_threshold must lie in [0, 1), got {self.confidence_threshold}",
                context={"confidence_threshold": self.confidence_threshold},
            )
        if self.max_traces is not None and self.max_traces <= 0:
            raise ConfigError(
                f"max_traces must be positive, got {self.max_traces}",
                context={"max_traces": self.max_traces},
            )
        return self
