# tests/core_tests/test_trace_disjunction.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Test suite for the exact clause-set engine

"""Test suite for TraceDisjunction.

The clause set derived from a trace must describe exactly the messages that
contain the trace as a subsequence; narrowing must describe exactly the
intersection. Both are checked against brute force over every message of a
small length.
"""

from math import comb

import pytest

from core.clause import Conjunction, Term
from core.disjunction import TraceDisjunction, clauses_from_trace
from core.verdict import Verdict
from model.bits import is_subsequence


class TestConstruction:
    """Clause sets built from a single trace."""

    @pytest.mark.parametrize(
        "trace, n",
        [("1", 4), ("10", 5), ("011", 6), ("1101", 8), ("00000", 6), ("101", 3)],
    )
    def test_one_clause_per_combination(self, b, trace, n):
        td = TraceDisjunction.from_trace(b(trace), n)

        assert len(td) == comb(n, len(trace))
        assert td.traces_folded == 1

    def test_clause_ids_follow_the_combination(self, b):
        clauses = list(clauses_from_trace(b("10"), 3))

        assert clauses == [
            Conjunction((Term(0), Term(1, True))),
            Conjunction((Term(0), Term(2, True))),
            Conjunction((Term(1), Term(2, True))),
        ]

    @pytest.mark.parametrize("trace", ["", "0", "11", "010", "1001", "11111"])
    def test_clause_set_matches_supersequence_family(self, b, all_messages, trace):
        n = 5
        td = TraceDisjunction(n)
        td.fold(b(trace))

        for message in all_messages(n):
            assert td.satisfied_by(message) == is_subsequence(b(trace), message)

    def test_full_length_trace_reconstructs(self, b):
        td = TraceDisjunction.from_trace(b("10110010"), 8)

        assert td.message() == b("10110010")
        assert td.verdict() is Verdict.RECONSTRUCTED

    def test_initial_state_is_tautology(self):
        td = TraceDisjunction(4)

        assert td.clauses == frozenset({Conjunction()})
        assert td.verdict() is Verdict.UNDETERMINED
        assert td.message() is None

    def test_empty_message_is_immediately_reconstructed(self):
        assert TraceDisjunction(0).message() == ()

    def test_negative_length_rejected(self):
        with pytest.raises(ValueError):
            TraceDisjunction(-1)


class TestNarrowing:
    """Conjunction of clause sets across traces."""

    @pytest.mark.parametrize(
        "first, second",
        [("10", "01"), ("110", "011"), ("1", "0"), ("0000", "1"), ("101", "0110")],
    )
    def test_narrowing_is_intersection(self, b, all_messages, first, second):
        n = 5
        td = TraceDisjunction(n)
        td.fold(b(first))
        td.fold(b(second))

        for message in all_messages(n):
            expected = is_subsequence(b(first), message) and is_subsequence(b(second), message)
            assert td.satisfied_by(message) == expected

    def test_short_traces_pin_down_message(self, b):
        td = TraceDisjunction(3)
        td.fold(b("10"))
        td.fold(b("01"))

        assert td.verdict() is Verdict.UNDETERMINED
        assert td.satisfied_by(b("101"))
        assert td.satisfied_by(b("010"))

        td.fold(b("11"))

        assert len(td) == 1
        assert td.message() == b("101")
        assert td.estimate().confidence == 1.0

    def test_true_message_never_eliminated(self, b):
        message = b("1001101")
        td = TraceDisjunction(len(message))
        for trace in ["101", "0011", "1110", "10101", "001", "100101"]:
            assert is_subsequence(b(trace), message)
            td.fold(b(trace))
            assert td.satisfied_by(message)

    def test_empty_trace_is_noop(self, b):
        td = TraceDisjunction.from_trace(b("101"), 5)
        before = td.clauses

        td.fold(())

        assert td.clauses == before
        assert td.traces_folded == 2

    def test_overlong_trace_is_noop(self, b):
        td = TraceDisjunction.from_trace(b("10"), 3)
        before = td.clauses

        td.fold(b("1111"))

        assert td.clauses == before

    def test_self_narrowing_preserves_logical_content(self, b, all_messages):
        td = TraceDisjunction(5)
        td.fold(b("10"))
        td.fold(b("011"))
        before = {m for m in all_messages(5) if td.satisfied_by(m)}

        td.and_(td.clauses)

        assert {m for m in all_messages(5) if td.satisfied_by(m)} == before

    def test_contradictory_traces_exhaust(self, b):
        td = TraceDisjunction.from_trace(b("111"), 3)
        td.fold(b("000"))

        assert td.is_exhausted()
        assert td.verdict() is Verdict.EXHAUSTED
        assert td.estimate().message is None

    def test_and_with_explicit_clauses(self):
        td = TraceDisjunction(3)
        td.and_([Conjunction((Term(0),)), Conjunction((Term(1, True),))])
        td.and_([Conjunction((Term(0, True),))])

        assert td.clauses == frozenset({Conjunction((Term(0, True), Term(1, True)))})


class TestRendering:
    """Deterministic textual form."""

    def test_empty_set(self):
        assert str(TraceDisjunction(3, [])) == "[]"

    def test_single_clause(self, b):
        td = TraceDisjunction.from_trace(b("10"), 2)

        assert str(td) == "[\n    (x0 ∧ ¬x1)\n]"

    def test_multiple_clauses_sorted(self, b):
        td = TraceDisjunction.from_trace(b("1"), 2)

        assert str(td) == "[\n    (x0) ∨\n    (x1)\n]"

    def test_rendering_independent_of_insertion_order(self, b):
        td = TraceDisjunction.from_trace(b("0110"), 7)
        rebuilt = TraceDisjunction(7, reversed(list(td)))

        assert rebuilt == td
        assert str(rebuilt) == str(td)

    def test_repr_reports_state(self, b):
        assert repr(TraceDisjunction.from_trace(b("1"), 2)) == "TraceDisjunction(n=2, 2 clauses)"
        assert repr(TraceDisjunction.from_trace(b("10"), 2)) == "TraceDisjunction(n=2, 10)"
