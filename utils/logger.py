# utils/logger.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Logging utility for reconstruction sessions with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for trace reconstruction."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class ReconLogger:
    """Centralized logger for trace reconstruction with structured output."""

    def __init__(self, name: str = "tracer", level: LogLevel = LogLevel.INFO):
        """Initialize the reconstruction logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(ReconFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for reconstruction events
    def session_start(self, strategy: str, message_len: int, source: str):
        """Log the start of a reconstruction session."""
        self.info("=== Starting Reconstruction ===")
        self.info(f"Strategy: {strategy}")
        self.info(f"Message length: {message_len}")
        self.info(f"Trace source: {source}")

    def trace_folded(self, index: int, trace: str, state: str, verdict: str):
        """Log the result of folding one trace."""
        self.info(f"trace #{index} '{trace}' → {state}, verdict={verdict}")

    def narrowing_skipped(self, engine: str, reason: str):
        """Log a no-op narrowing step."""
        self.debug(f"    ⏭️  {engine}: narrowing skipped ({reason})")

    def narrowing_result(self, engine: str, before: int, pairs: int, after: int):
        """Log clause-set sizes around a narrowing step."""
        self.debug(f"    🔧 {engine}: {before} clauses x {pairs} → {after} clauses")

    def candidates_evicted(self, engine: str, evicted: int, remaining: int):
        """Log weight-table evictions."""
        self.debug(f"    🗑️  {engine}: evicted {evicted} candidates, {remaining} remain")

    def candidates_exhausted(self, traces_folded: int):
        """Log an emptied candidate set."""
        self.error(f"💥 All candidates contradicted after {traces_folded} traces")

    def final_estimate(self, verdict: str, message: Optional[str], confidence: float):
        """Log the final reconstruction result."""
        if message is None:
            self.info(f"\n>>> FINAL VERDICT: {verdict} <<<")
        else:
            self.info(
                f"\n>>> FINAL VERDICT: {verdict}: message {message} "
                f"(confidence {confidence:.4f}) <<<"
            )

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.debug(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class ReconFormatter(logging.Formatter):
    """Custom formatter for reconstruction logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[ReconLogger] = None


def get_logger(name: str = "tracer") -> ReconLogger:
    """Get or create the global reconstruction logger instance.

    Args:
        name: Logger name (default: "tracer")

    Returns:
        ReconLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = ReconLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
