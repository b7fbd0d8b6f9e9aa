# parser/exceptions.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Exceptions for clause-set formula parsing and conversion


class ParseError(RuntimeError):
    """Raised when a clause-set formula cannot be tokenized, parsed, or
    converted into a clause set over the requested message length."""

    pass
