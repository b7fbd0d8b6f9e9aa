# session/__init__.py

"""Reconstruction session interface.

This package provides:
  • ReconstructionRunner: folds a stream of traces into a strategy until
    its verdict is conclusive
  • reconstruct: simulated session over a seeded deletion channel
"""

from .runner import ReconstructionRunner, reconstruct

__all__ = [
    "ReconstructionRunner",
    "reconstruct",
]
