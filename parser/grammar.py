# parser/grammar.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# LALR(1) grammar and parser for clause-set formulas using SLY

"""Clause-set formula grammar implemented with the SLY parser generator.

Grammar Features:
- Boolean operators NOT, AND, OR with the usual precedence
- Two bracket styles: ( ) and [ ], the latter used by rendered clause sets
- Empty groups: () is the empty conjunction (true), [] the empty
  disjunction (false)

Operator Precedence (lowest to highest):
- OR: left-associative
- AND: left-associative
- NOT: right-associative
"""

from sly import Parser
from .lexer import ClauseLexer
from .ast_nodes import Expr, Var, Const, Not, And, Or
from .exceptions import ParseError
from utils.logger import get_logger


class _ClauseParser(Parser):
    """SLY-based LALR(1) parser for clause-set formulas.

    Attributes:
        tokens: Token types from ClauseLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = ClauseLexer.tokens

    precedence = (
        ("left", "OR"),
        ("left", "AND"),
        ("right", "NOT"),
    )

    @_("expr")
    def start(self, p) -> Expr:
        """Start rule: complete formula is a single expression."""
        return p.expr

    @_("NOT expr")
    def expr(self, p) -> Expr:
        return Not(p.expr)

    @_("expr AND expr")
    def expr(self, p) -> Expr:
        return And(p.expr0, p.expr1)

    @_("expr OR expr")
    def expr(self, p) -> Expr:
        return Or(p.expr0, p.expr1)

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> Expr:
        return p.expr

    @_("LBRACKET expr RBRACKET")
    def expr(self, p) -> Expr:
        return p.expr

    @_("LPAREN RPAREN")
    def expr(self, p) -> Expr:
        """Empty conjunction."""
        return Const(True)

    @_("LBRACKET RBRACKET")
    def expr(self, p) -> Expr:
        """Empty disjunction."""
        return Const(False)

    @_("VAR")
    def expr(self, p) -> Expr:
        return Var(p.VAR)

    @_("TRUE")
    def expr(self, p) -> Expr:
        return Const(True)

    @_("FALSE")
    def expr(self, p) -> Expr:
        return Const(False)

    def parse(self, text: str) -> Expr:
        """Parse formula text into an AST.

        Args:
            text: Formula string to parse

        Returns:
            Root AST node representing the parsed formula

        Raises:
            ParseError: If formula is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing formula: {text}")

        try:
            ast_result = super().parse(ClauseLexer().tokenize(text))

            if ast_result is None and text.strip() == "":
                raise ParseError("Input formula is empty.")

            if ast_result is None:
                raise ParseError("Failed to parse formula (syntax error).")

            logger.debug(f"Successfully parsed formula into {type(ast_result).__name__}")
            return ast_result

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}") from e

    def error(self, token):
        """Handle syntax errors during parsing.

        Args:
            token: Problematic token or None for EOF errors

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of formula"

        raise ParseError(error_msg)
