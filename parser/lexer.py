# parser/lexer.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Lexical analyzer for clause-set formula tokenization using SLY

"""Lexical analyzer for clause-set formula strings.

Formulas describe constraints over message bits, in ASCII or in the same
notation the engines render clause sets with, so a rendered clause set can
be read back in.

Supported Tokens:
- Variables: x0, x1, ... (one per message position)
- Operators: ! ~ ¬ (not), & ∧ (and), | ∨ (or)
- Grouping: ( ) [ ]
- Constants: true, false
- Whitespace: ignored during tokenization
"""

from sly import Lexer
from utils.logger import get_logger


class ClauseLexer(Lexer):
    """SLY-based lexer for clause-set formula tokenization.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "VAR",
        "TRUE",
        "FALSE",
        "NOT",
        "AND",
        "OR",
        "LPAREN",
        "RPAREN",
        "LBRACKET",
        "RBRACKET",
    }

    ignore = " \t\r\n"

    NOT = r"!|~|¬"
    AND = r"&|∧"
    OR = r"\||∨"
    LPAREN = r"\("
    RPAREN = r"\)"
    LBRACKET = r"\["
    RBRACKET = r"\]"
    TRUE = r"true"
    FALSE = r"false"

    @_(r"x[0-9]+")
    def VAR(self, t):
        """Variable token; its value is the message position."""
        t.value = int(t.value[1:])
        return t

    def error(self, t):
        """Handle illegal characters during tokenization.

        Args:
            t: SLY token object containing error context

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        # Skip the illegal character
        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
