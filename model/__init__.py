# model/__init__.py

"""
Value objects for the deletion channel: bit sequences (messages and
traces) and the random channel that produces traces from a message.
These types carry no reconstruction logic.
"""

from .bits import Bits, to_bits, format_bits, is_subsequence
from .channel import DeletionChannel

__all__ = [
    "Bits",
    "to_bits",
    "format_bits",
    "is_subsequence",
    "DeletionChannel",
]
