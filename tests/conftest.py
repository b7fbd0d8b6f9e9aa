# tests/conftest.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for Tracer reconstruction tests.

This module ensures the project packages are importable when the test suite
runs from a source checkout, and provides the small helpers most test
modules share: bit-string conversion, complete clauses, exhaustive message
enumeration and a trace file writer.
"""

import sys
from itertools import product
from pathlib import Path

import pytest

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify the project packages are importable before any test runs.

    Yields:
        None: Control to test execution

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import core
        import model
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def b():
    """Shorthand converter from '0'/'1' strings to Bits."""
    from model.bits import to_bits

    return to_bits


@pytest.fixture
def complete_clause():
    """Factory for the conjunction fixing every bit of a '0'/'1' string."""
    from core.clause import Conjunction, Term
    from model.bits import to_bits

    def _complete_clause(bits: str):
        return Conjunction(tuple(Term(i, not bit) for i, bit in enumerate(to_bits(bits))))

    return _complete_clause


@pytest.fixture
def all_messages():
    """Factory listing every message of a given length.

    Returns:
        Callable[[int], List[Tuple[bool, ...]]]
    """

    def _all_messages(message_len: int):
        return [tuple(bits) for bits in product((False, True), repeat=message_len)]

    return _all_messages


@pytest.fixture
def trace_csv(tmp_path):
    """Factory writing raw CSV text to a trace file under tmp_path.

    Returns:
        Callable[[str, str], str]: (content, name) -> file path
    """

    def _write(content: str, name: str = "traces.csv") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
