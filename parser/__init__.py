# parser/__init__.py
# This file is part of Tracer - Deletion Channel Trace Reconstruction
#
# Formula parsing and DNF conversion for clause-set formulas

"""Clause-set formula parsing.

Reads the textual form of a clause set (as rendered by the engines, or
written by hand in ASCII) and converts it into a `TraceDisjunction`. Used to
seed a reconstruction with prior knowledge about the message and to read
rendered clause sets back.

Core Functions:
    parse: Converts formula strings into Abstract Syntax Trees
    parse_to_disjunction: Parse, convert to DNF and build a clause set

Example:
    >>> from parser import parse_to_disjunction
    >>> td = parse_to_disjunction("x0 & !x2 | x1", message_len=3)
    >>> len(td)
    2
"""

from core.disjunction import TraceDisjunction
from .exceptions import ParseError
from .grammar import _ClauseParser
from .dnf_transformer import DNFTransformer
from utils.logger import get_logger


def parse(source: str):
    """Parse a formula string into an Abstract Syntax Tree.

    Uses a fresh parser instance for each invocation.

    Args:
        source: Formula string to parse

    Returns:
        Root AST node representing the parsed formula

    Raises:
        ParseError: Formula syntax is malformed
    """
    logger = get_logger()
    logger.debug(f"Parsing formula: {source}")

    parser = _ClauseParser()

    try:
        result = parser.parse(source)
        logger.debug(f"Formula parsed successfully into AST with type: {type(result).__name__}")
        return result

    except ParseError:
        logger.debug("ParseError encountered during formula parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def parse_to_disjunction(source: str, message_len: int):
    """Parse a formula and convert it into a clause set over `message_len` bits.

    Args:
        source: Formula string to parse
        message_len: Length of the message the variables address

    Returns:
        TraceDisjunction holding the formula's consistent DNF clauses

    Raises:
        ParseError: Formula parsing fails or a variable is out of range
    """
    logger = get_logger()
    logger.debug(f"Parsing and converting formula to clause set: {source}")

    ast = parse(source)
    clauses = DNFTransformer(message_len).transform(ast)

    logger.debug(f"Formula converted into {len(clauses)} clauses")
    return TraceDisjunction(message_len, clauses)


__all__ = ["parse", "parse_to_disjunction", "ParseError", "DNFTransformer"]

__version__ = "1.0.0"
__description__ = "Clause-set formula parsing and DNF conversion"
