#!/usr/bin/env python3
# run_reconstruction.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Command-line interface for trace reconstruction with configurable logging levels

import sys
import argparse
from pathlib import Path
from typing import Optional

from core.config import ReconstructionConfig, STRATEGY_NAMES
from core.disjunction import TraceDisjunction
from core.exceptions import CandidatesExhausted, ConfigError
from core.strategy import create_strategy
from core.verdict import Estimate, Verdict
from model.bits import Bits, format_bits, to_bits
from parser import parse_to_disjunction
from parser.exceptions import ParseError
from session.runner import ReconstructionRunner, reconstruct
from utils.trace_reader import (
    read_traces,
    validate_trace_file,
    get_message_len,
    TraceFormatError,
)
from utils.logger import LogLevel, get_logger


def read_prior_file(filepath: Path) -> str:
    """Read a prior-knowledge formula from file.

    Args:
        filepath: Path to the formula file

    Returns:
        Formula as string

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty
    """
    try:
        content = filepath.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        raise FileNotFoundError(f"Prior file not found: {filepath}") from None

    if not content:
        raise ValueError("Prior file is empty")
    return content


def configure_logging_for_session(quiet: bool = False, debug: bool = False) -> None:
    """Configure logging levels for a reconstruction session.

    Args:
        quiet: Only report warnings and errors
        debug: Enable DEBUG level logging (overrides quiet)
    """
    logger = get_logger()

    if debug:
        logger.set_level(LogLevel.DEBUG)
    elif quiet:
        logger.set_level(LogLevel.WARNING)
    else:
        logger.set_level(LogLevel.INFO)


def build_config(args: argparse.Namespace, message_len: int) -> ReconstructionConfig:
    """Map command line flags onto a validated configuration."""
    return ReconstructionConfig(
        message_len=message_len,
        deletion_probability=args.deletion_probability,
        strategy=args.strategy,
        confidence_threshold=args.threshold,
        max_traces=args.max_traces,
        seed=args.seed,
    ).validate()


def resolve_message_len(args: argparse.Namespace, message: Optional[Bits]) -> int:
    """Pick the message length from the message, the trace file or the flag."""
    if message is not None:
        if args.message_len is not None and args.message_len != len(message):
            raise ConfigError(
                f"--message has {len(message)} bits but --message-len is {args.message_len}"
            )
        return len(message)

    if args.trace is not None:
        declared = get_message_len(str(args.trace))
        if declared is not None:
            if args.message_len is not None and args.message_len != declared:
                raise ConfigError(
                    f"Trace file declares message_len {declared}, --message-len is {args.message_len}"
                )
            return declared
        if args.message_len is None:
            raise ConfigError("Trace file has no message_len directive; pass --message-len")

    return args.message_len if args.message_len is not None else 8


def print_final_analysis(estimate: Estimate, original: Optional[Bits]) -> None:
    """Report the session result and, in simulations, compare with the original."""
    logger = get_logger()

    logger.info(f"\n📊 Traces folded: {estimate.traces_folded}")
    if estimate.message is not None:
        logger.info(f"🔎 Leading candidate: {format_bits(estimate.message)} "
                    f"(confidence {estimate.confidence:.4f})")

    if original is None:
        return

    logger.info(f"🎯 Original message:  {format_bits(original)}")
    if estimate.verdict is Verdict.RECONSTRUCTED:
        if estimate.message == original:
            logger.info("✅ Reconstruction matches the original message")
        else:
            logger.warning("⚠️  Reconstruction differs from the original message")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Tracer: reconstruct a message from deletion-channel traces",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_reconstruction.py -n 8 -p 0.5 --seed 7
  python run_reconstruction.py -m 10110010 -s supersequence --threshold 0.95
  python run_reconstruction.py -t traces.csv -s weighted -q
  python run_reconstruction.py -t traces.csv --prior prior.dnf --show-state
  python run_reconstruction.py -t traces.csv --validate-only

Trace file format:
  # message_len: 8
  tid,bits
  t1,0110
  t2,10011

Prior file format:
  A formula over message bits, e.g.  x0 & !x7 | x1
        """,
    )

    parser.add_argument(
        "-t", "--trace", type=Path, help="Path to CSV trace file (simulate if omitted)"
    )

    parser.add_argument(
        "-m", "--message", type=to_bits, help="Message to simulate, as a 0/1 string"
    )

    parser.add_argument(
        "-n", "--message-len", type=int, default=None, help="Message length (default: 8)"
    )

    parser.add_argument(
        "-p",
        "--deletion-probability",
        type=float,
        default=0.5,
        help="Per-bit deletion probability of the simulated channel",
    )

    parser.add_argument(
        "-s",
        "--strategy",
        choices=STRATEGY_NAMES,
        default="exact",
        help="Reconstruction engine",
    )

    parser.add_argument(
        "--threshold",
        type=float,
        default=0.9,
        help="Confidence threshold for the weighted engines",
    )

    parser.add_argument(
        "--max-traces", type=int, default=None, help="Stop after this many traces"
    )

    parser.add_argument("--seed", type=int, default=None, help="Seed for the simulated channel")

    parser.add_argument(
        "--prior", type=Path, help="Path to a formula file with known constraints"
    )

    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only print warnings and errors"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --quiet)"
    )

    parser.add_argument(
        "--validate-only", action="store_true", help="Only validate trace file format"
    )

    parser.add_argument(
        "--show-state",
        action="store_true",
        help="Print the clause set / weight table after every trace",
    )

    return parser


def main() -> int:
    """Main entry point for the reconstruction application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args()

    configure_logging_for_session(quiet=args.quiet, debug=args.debug)
    logger = get_logger()

    try:
        if args.trace is not None:
            logger.info(f"🔍 Validating trace file: {args.trace}")
            count = validate_trace_file(str(args.trace))
            if args.validate_only:
                logger.info(f"✅ Trace validation successful ({count} traces). Exiting.")
                return 0

        message_len = resolve_message_len(args, args.message)
        config = build_config(args, message_len)

        prior: Optional[TraceDisjunction] = None
        if args.prior is not None:
            formula = read_prior_file(args.prior)
            prior = parse_to_disjunction(formula, message_len)
            logger.info(f"📋 Prior loaded: {len(prior)} clauses")

        if args.trace is not None:
            strategy = create_strategy(
                config.strategy, message_len, config.confidence_threshold, prior
            )
            logger.session_start(config.strategy, message_len, str(args.trace))
            runner = ReconstructionRunner(strategy, show_state=args.show_state)
            estimate = runner.run(read_traces(str(args.trace)), config.max_traces)
            original = None
        else:
            original, estimate = reconstruct(
                config, args.message, prior, show_state=args.show_state
            )

        print_final_analysis(estimate, original)
        return 0

    except TraceFormatError as e:
        logger.error(f"Trace file error: {e}")
        return 1

    except ParseError as e:
        logger.error(f"Prior formula error: {e}")
        return 2

    except (ConfigError, FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 3

    except CandidatesExhausted as e:
        logger.error(f"Candidates exhausted after {e.traces_folded} traces: {e}")
        return 4

    except KeyboardInterrupt:
        logger.error("Reconstruction interrupted by user")
        return 5

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 6


if __name__ == "__main__":
    sys.exit(main())
