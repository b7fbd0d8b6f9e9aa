# utils/trace_reader.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# CSV trace file reader for deletion-channel observations

import csv
from pathlib import Path
from typing import Iterator, Optional

from model.bits import Bits, to_bits
from utils.logger import get_logger

MESSAGE_LEN_DIRECTIVE = "# message_len:"


class TraceFormatError(Exception):
    """Exception raised when trace files contain invalid format or data."""

    pass


def read_traces(filepath: str) -> Iterator[Bits]:
    """Read traces from a CSV trace file.

    Expected CSV format:
        # message_len: 8
        tid,bits
        t1,0110
        t2,
        t3,10011

    The directive line is optional. An empty `bits` field is a trace in which
    every bit was deleted.

    Args:
        filepath: Path to the CSV trace file

    Yields:
        Bits: Parsed traces in file order

    Raises:
        TraceFormatError: If file format is invalid or a trace cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise TraceFormatError(f"Trace file not found: {filepath}")

    logger.debug(f"Reading trace file: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            # Skip the optional message length directive
            first_line = file.readline().strip()
            if not first_line.startswith(MESSAGE_LEN_DIRECTIVE):
                file.seek(0)

            reader = csv.DictReader(file)

            required_headers = {"tid", "bits"}
            if not required_headers.issubset(set(reader.fieldnames or [])):
                missing = required_headers - set(reader.fieldnames or [])
                raise TraceFormatError(f"Missing required headers: {missing}")

            for row_num, row in enumerate(reader, start=2):
                try:
                    trace = to_bits(row["bits"] or "")
                except ValueError as e:
                    raise TraceFormatError(f"Error parsing row {row_num}: {e}") from e
                logger.debug(f"Parsed trace {row['tid']} from row {row_num}")
                yield trace

    except TraceFormatError:
        raise
    except UnicodeDecodeError as e:
        raise TraceFormatError(f"Trace file is not valid UTF-8: {filepath}: {e}") from e
    except OSError as e:
        raise TraceFormatError(f"Cannot open trace file: {filepath}: {e}") from e
    except csv.Error as e:
        raise TraceFormatError(f"Error reading trace file: {e}") from e


def get_message_len(filepath: str) -> Optional[int]:
    """Extract the message length from the trace file directive.

    Args:
        filepath: Path to the trace file

    Returns:
        Declared message length, or None if no directive is present

    Raises:
        TraceFormatError: If the directive is present but malformed, or the
            file is not valid UTF-8
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as file:
            first_line = file.readline().strip()
    except UnicodeDecodeError as e:
        raise TraceFormatError(f"Trace file is not valid UTF-8: {filepath}: {e}") from e

    if not first_line.startswith(MESSAGE_LEN_DIRECTIVE):
        logger.debug("No message_len directive found")
        return None

    value = first_line[len(MESSAGE_LEN_DIRECTIVE):].strip()
    try:
        message_len = int(value)
    except ValueError:
        raise TraceFormatError(f"Invalid message_len directive: {value!r}") from None
    if message_len < 0:
        raise TraceFormatError(f"Negative message_len directive: {message_len}")

    logger.debug(f"Found message_len directive: {message_len}")
    return message_len


def validate_trace_file(filepath: str) -> int:
    """Validate trace file format by parsing every trace.

    If the file declares a message length, no trace may be longer.

    Args:
        filepath: Path to the trace file to validate

    Returns:
        Number of traces in the file

    Raises:
        TraceFormatError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating trace file: {filepath}")

    message_len = get_message_len(filepath)
    count = 0
    try:
        for count, trace in enumerate(read_traces(filepath), start=1):
            if message_len is not None and len(trace) > message_len:
                raise TraceFormatError(
                    f"Trace {count} has {len(trace)} bits, longer than message_len {message_len}"
                )
    except TraceFormatError as e:
        logger.validation_result(False, f"Trace validation failed: {e}")
        raise

    logger.validation_result(True, f"Trace validation successful: {count} traces")
    return count
