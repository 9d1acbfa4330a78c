# parser/__init__.py
# This file is part of Procov - Process Model Test Coverage
#
# Coverage condition parsing components

"""Parsing of textual coverage conditions.

Coverage thresholds are usually configured outside the code, for instance
in an environment variable or on the command line. This module turns such
text into an immutable expression tree that can decide whether a coverage
ratio satisfies it.

Core Functions:
    parse_condition: Converts condition strings into Abstract Syntax Trees
    evaluate: Decides whether a ratio satisfies a parsed condition

Supported Syntax:
    - Comparators: >=, >, <=, <, ==, !=
    - A bare threshold meaning "at least"
    - Thresholds as ratios (0.8) or percentages (80%)
    - Boolean connectives (!, &, |), parentheses, true, false

Example:
    >>> from parser import parse_condition, evaluate
    >>> condition = parse_condition(">= 80% & < 1")
    >>> evaluate(condition, 0.9)
    True
"""

from .exceptions import ParseError
from .grammar import _ConditionParser
from .ast_nodes import Expr
from utils.logger import get_logger


def parse_condition(source: str) -> Expr:
    """Parse a coverage condition string into an Abstract Syntax Tree.

    Uses a fresh parser instance for each invocation to keep parsing
    stateless.

    Args:
        source: Condition string to parse

    Returns:
        Root AST node representing the parsed condition

    Raises:
        ParseError: Condition syntax is malformed or a threshold is out of range
    """
    logger = get_logger()
    logger.debug(f"Parsing condition: {source}")

    parser = _ConditionParser()

    try:
        return parser.parse(source)

    except ParseError:
        logger.debug("ParseError encountered during condition parsing")
        raise

    except Exception as exc:
        logger.debug(f"Unexpected parsing error: {type(exc).__name__}: {exc}")
        raise ParseError(str(exc)) from exc


def evaluate(condition: Expr, ratio: float) -> bool:
    """Decide whether `ratio` satisfies `condition`.

    Args:
        condition: Parsed condition
        ratio: Coverage ratio in [0, 1]

    Returns:
        True if the condition holds
    """
    result = condition.holds(ratio)
    get_logger().debug(f"Condition {condition} on {ratio:.4f}: {result}")
    return result


__all__ = ["parse_condition", "evaluate", "ParseError", "Expr"]

__version__ = "1.0.0"
__description__ = "Coverage condition parsing components"
