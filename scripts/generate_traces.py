# scripts/generate_traces.py

#!/usr/bin/env python3
"""
Command-line tool to draw traces of a message through a deletion channel.

Writes a CSV trace file with a message_len directive that run_reconstruction
can replay, and prints the message the traces were drawn from.
"""

import sys
import argparse
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from model.bits import format_bits, to_bits
from utils.logger import configure_logging
from utils.trace_utils import generate_trace_file


def main():
    parser = argparse.ArgumentParser(
        description="Generate a trace file from a simulated deletion channel"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        required=True,
        help="Path of the CSV trace file to write"
    )
    parser.add_argument(
        "-k", "--num-traces",
        type=int,
        default=50,
        help="Number of traces to draw"
    )
    parser.add_argument(
        "-p", "--deletion-probability",
        type=float,
        default=0.5,
        help="Per-bit deletion probability"
    )
    parser.add_argument(
        "-m", "--message",
        type=to_bits,
        help="Message to observe, as a 0/1 string (random if omitted)"
    )
    parser.add_argument(
        "-n", "--message-len",
        type=int,
        default=8,
        help="Length of the random message"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the channel's random generator"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report the generated file"
    )
    args = parser.parse_args()

    configure_logging(verbose=args.verbose)

    try:
        message = generate_trace_file(
            str(args.output),
            args.num_traces,
            args.deletion_probability,
            message=args.message,
            message_len=args.message_len,
            seed=args.seed,
        )
    except ValueError as e:
        sys.exit(f"ERROR: invalid channel parameters: {e}")
    except OSError as e:
        sys.exit(f"ERROR: cannot write trace file: {e}")

    print(format_bits(message))
    sys.exit(0)


if __name__ == "__main__":
    main()
