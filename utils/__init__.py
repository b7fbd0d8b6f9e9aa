# utils/__init__.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Utility module exports

from .trace_reader import (
    read_traces,
    get_message_len,
    validate_trace_file,
    TraceFormatError,
)

__all__ = [
    "read_traces",
    "get_message_len",
    "validate_trace_file",
    "TraceFormatError",
]
