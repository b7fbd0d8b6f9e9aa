# utils/trace_utils.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Trace file writer and generator

import csv
from typing import Iterable, Optional

from model.bits import Bits, format_bits
from model.channel import DeletionChannel
from utils.logger import get_logger
from utils.trace_reader import MESSAGE_LEN_DIRECTIVE


def write_trace_file(filename: str, traces: Iterable[Bits], message_len: int) -> int:
    """
    Write traces to a CSV trace file readable by `read_traces`.

    Args:
        filename: The name of the output CSV file.
        traces: Traces in the order they should be replayed.
        message_len: Length of the message, written as a directive.

    Returns:
        Number of traces written.
    """
    rows = [[f"t{i}", format_bits(trace)] for i, trace in enumerate(traces, start=1)]

    with open(filename, "w", newline="", encoding="utf-8") as f:
        f.write(f"{MESSAGE_LEN_DIRECTIVE} {message_len}\n")
        writer = csv.writer(f)
        writer.writerow(["tid", "bits"])
        writer.writerows(rows)

    get_logger().debug(f"Wrote {len(rows)} traces to {filename}")
    return len(rows)


def generate_trace_file(
        filename: str,
        num_traces: int,
        deletion_probability: float,
        message: Optional[Bits] = None,
        message_len: int = 8,
        seed: Optional[int] = None,
) -> Bits:
    """
    Draw traces of a message through a deletion channel and write them to a file.

    Args:
        filename: The name of the output CSV file.
        num_traces: Number of traces to draw.
        deletion_probability: Per-bit deletion probability of the channel.
        message: Message to observe; a random one of `message_len` bits if None.
        message_len: Length of the random message when `message` is None.
        seed: Seed for the channel's random generator.

    Returns:
        The message the traces were drawn from.
    """
    channel = DeletionChannel(deletion_probability, seed=seed)
    if message is None:
        message = channel.new_message(message_len)

    traces = [channel.new_trace(message) for _ in range(num_traces)]
    write_trace_file(filename, traces, len(message))

    get_logger().info(
        f"Generated {num_traces} traces of message {format_bits(message)}: {filename}"
    )
    return message
