# model/bits.py

"""
Bit sequences
=============

Messages and traces are plain tuples of booleans: immutable, hashable and
therefore usable directly as dictionary keys. A message has a fixed length
`n`; a trace is a subsequence of it with length `k <= n`.
"""

from __future__ import annotations
from typing import Iterable, Tuple, Union

Bits = Tuple[bool, ...]


def to_bits(value: Union[str, Iterable]) -> Bits:
    """
    Convert a '0'/'1' string or an iterable of bools / 0-1 ints into Bits.
    Whitespace in strings is ignored.
    """
    if isinstance(value, str):
        chars = "".join(value.split())
        if any(c not in "01" for c in chars):
            raise ValueError(f"Invalid bit string: {value!r}")
        return tuple(c == "1" for c in chars)

    bits = []
    for item in value:
        if isinstance(item, bool):
            bits.append(item)
        elif isinstance(item, int) and item in (0, 1):
            bits.append(bool(item))
        else:
            raise ValueError(f"Invalid bit value: {item!r}")
    return tuple(bits)


def format_bits(bits: Iterable[bool]) -> str:
    """Render a bit sequence as a '0'/'1' string."""
    return "".join("1" if bit else "0" for bit in bits)


def is_subsequence(trace: Bits, message: Bits) -> bool:
    """True if `trace` can be obtained from `message` by deletions only."""
    remaining = iter(message)
    return all(any(bit == candidate for candidate in remaining) for bit in trace)
