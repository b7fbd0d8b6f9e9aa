# parser/dnf_transformer.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# AST transformer from clause-set formulas to Disjunctive Normal Form

"""Transforms formula ASTs into clause sets in Disjunctive Normal Form.

The transformation:
1. Pushes negations down to variables (De Morgan, double negation)
2. Distributes conjunction over disjunction
3. Turns every DNF clause into a `Conjunction`, dropping clauses that
   assert a bit both ways or contain `false`

The result is the same kind of clause set the exact engine builds from a
trace, so a parsed formula can seed or narrow a reconstruction.
"""

from __future__ import annotations
from typing import Dict, FrozenSet, Optional, Tuple

from core.clause import Conjunction, Term
from . import ast_nodes as ast
from .exceptions import ParseError
from utils.logger import get_logger

# DNF as a tuple of clauses, each clause a tuple of terms; None marks `false`
_Clause = Optional[Tuple[Term, ...]]
_Dnf = Tuple[_Clause, ...]


class DNFTransformer(ast.Visitor):
    """Converts an AST into a set of conjunctions.

    Visits nodes in negation-normal form: `_negated` records whether the
    current subtree sits under an odd number of negations.

    Attributes:
        message_len: Variables must address positions below this bound
    """

    def __init__(self, message_len: Optional[int] = None):
        self.message_len = message_len
        self._negated = False
        self._memo: Dict[Tuple[ast.Expr, bool], _Dnf] = {}

    def transform(self, root: ast.Expr) -> FrozenSet[Conjunction]:
        """Convert `root` into a deduplicated set of consistent conjunctions.

        Raises:
            ParseError: A variable addresses a position outside the message
        """
        logger = get_logger()
        logger.debug(f"Starting DNF transformation of {type(root).__name__}")

        self._memo.clear()
        self._negated = False
        clauses = self._visit(root, False)

        conjunctions = set()
        for clause in clauses:
            if clause is None:
                continue
            conjunction = Conjunction.from_terms(clause)
            if conjunction is not None:
                conjunctions.add(conjunction)

        logger.debug(f"DNF transformation complete: {len(conjunctions)} clauses")
        return frozenset(conjunctions)

    def _visit(self, node: ast.Expr, negated: bool) -> _Dnf:
        key = (node, negated)
        if key in self._memo:
            return self._memo[key]

        outer = self._negated
        self._negated = negated
        try:
            result = node.accept(self)
        finally:
            self._negated = outer

        self._memo[key] = result
        return result

    def visit_var(self, n: ast.Var) -> _Dnf:
        if self.message_len is not None and n.id >= self.message_len:
            raise ParseError(
                f"Variable x{n.id} is outside a message of length {self.message_len}"
            )
        term = Term(n.id)
        return ((~term if self._negated else term,),)

    def visit_const(self, n: ast.Const) -> _Dnf:
        holds = n.value != self._negated
        return ((),) if holds else (None,)

    def visit_not(self, n: ast.Not) -> _Dnf:
        return self._visit(n.operand, not self._negated)

    def visit_and(self, n: ast.And) -> _Dnf:
        # De Morgan: !(A & B) -> !A | !B
        if self._negated:
            return _disjoin(self._visit(n.left, True), self._visit(n.right, True))
        return _conjoin(self._visit(n.left, False), self._visit(n.right, False))

    def visit_or(self, n: ast.Or) -> _Dnf:
        # De Morgan: !(A | B) -> !A & !B
        if self._negated:
            return _conjoin(self._visit(n.left, True), self._visit(n.right, True))
        return _disjoin(self._visit(n.left, False), self._visit(n.right, False))


def _disjoin(left: _Dnf, right: _Dnf) -> _Dnf:
    return left + right


def _conjoin(left: _Dnf, right: _Dnf) -> _Dnf:
    """Distribute: every left clause joined with every right clause."""
    return tuple(
        None if left_clause is None or right_clause is None else left_clause + right_clause
        for left_clause in left
        for right_clause in right
    )
