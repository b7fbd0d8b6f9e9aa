# model/channel.py

"""
Deletion channel
================

Generates uniformly random messages and passes them through an i.i.d.
deletion channel: every bit is independently dropped with probability `p`,
survivors keep their order. This is the only place randomness enters the
system; the reconstruction engines consume pre-generated sequences.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .bits import Bits


@dataclass(slots=True)
class DeletionChannel:
    deletion_probability: float
    seed: Optional[int] = None
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self):
        if not 0.0 <= self.deletion_probability <= 1.0:
            raise ValueError(
                f"Deletion probability must lie in [0, 1], got {self.deletion_probability}"
            )
        self._rng = random.Random(self.seed)

    def new_message(self, length: int) -> Bits:
        """Draw a uniformly random message of `length` bits."""
        if length < 0:
            raise ValueError(f"Message length must be non-negative, got {length}")
        return tuple(self._rng.random() < 0.5 for _ in range(length))

    def new_trace(self, message: Bits) -> Bits:
        """Delete each bit of `message` independently with the channel's probability."""
        return tuple(bit for bit in message if self._rng.random() >= self.deletion_probability)

    def traces(self, message: Bits) -> Iterator[Bits]:
        """Endless stream of independent traces of `message`."""
        while True:
            yield self.new_trace(message)
