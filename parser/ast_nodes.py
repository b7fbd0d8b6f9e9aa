# parser/ast_nodes.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Abstract Syntax Tree node classes for clause-set formulas

"""AST node classes for parsed clause-set formulas.

Node Types:
    Var: Assertion that one message position equals 1
    Const: Boolean constants true and false
    Not, And, Or: Standard Boolean connectives

All nodes are immutable and hashable, and support the visitor pattern.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol


class Visitor(Protocol):
    """Interface for AST visitors implementing the visitor design pattern."""

    def visit_var(self, n: Var): ...

    def visit_const(self, n: Const): ...

    def visit_not(self, n: Not): ...

    def visit_and(self, n: And): ...

    def visit_or(self, n: Or): ...


@dataclass(frozen=True, slots=True)
class Expr:
    """Base class for all AST nodes."""

    def accept(self, v: Visitor):
        """Dispatch to the appropriate visitor method.

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Var(Expr):
    """Message position variable `x<id>`.

    Attributes:
        id: Message position the variable stands for
    """

    id: int

    def accept(self, v: Visitor):
        return v.visit_var(self)

    def __str__(self) -> str:
        return f"x{self.id}"


@dataclass(frozen=True, slots=True)
class Const(Expr):
    """Boolean constant.

    Attributes:
        value: True or False
    """

    value: bool

    def accept(self, v: Visitor):
        return v.visit_const(self)

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Not(Expr):
    """Logical negation.

    Attributes:
        operand: The expression being negated
    """

    operand: Expr

    def accept(self, v: Visitor):
        return v.visit_not(self)

    def __str__(self) -> str:
        return f"!{self.operand}"


@dataclass(frozen=True, slots=True)
class And(Expr):
    """Logical conjunction.

    Attributes:
        left: Left operand of the conjunction
        right: Right operand of the conjunction
    """

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_and(self)

    def __str__(self) -> str:
        return f"({self.left} & {self.right})"


@dataclass(frozen=True, slots=True)
class Or(Expr):
    """Logical disjunction.

    Attributes:
        left: Left operand of the disjunction
        right: Right operand of the disjunction
    """

    left: Expr
    right: Expr

    def accept(self, v: Visitor):
        return v.visit_or(self)

    def __str__(self) -> str:
        return f"({self.left} | {self.right})"
