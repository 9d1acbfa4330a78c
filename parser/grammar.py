# parser/grammar.py
# This file is part of Procov - Process Model Test Coverage
#
# LALR(1) grammar and parser for coverage conditions using SLY

"""Coverage condition grammar implementation using SLY parser generator.

Grammar Features:
- Comparisons of the coverage ratio against a threshold (``>= 0.8``)
- A bare threshold as shorthand for "at least" (``0.8``)
- Percent thresholds (``80%``), scaled to ratios
- Boolean connectives and parenthetical grouping

Operator Precedence (lowest to highest):
- OR ('|'): left-associative
- AND ('&'): left-associative
- NOT ('!'): right-associative
"""

from sly import Parser
from .lexer import ConditionLexer
from .ast_nodes import Expr, Constant, Comparison, Not, And, Or
from .exceptions import ParseError
from utils.logger import get_logger


class _ConditionParser(Parser):
    """SLY-based LALR(1) parser for coverage conditions.

    Attributes:
        tokens: Token types from ConditionLexer
        precedence: Operator precedence and associativity rules
    """

    tokens = ConditionLexer.tokens

    precedence = (
        ("left", "OR"),
        ("left", "AND"),
        ("right", "NOT"),
    )

    @_("expr")
    def start(self, p) -> Expr:
        """Start rule: complete condition is a single expression."""
        return p.expr

    @_("NOT expr")
    def expr(self, p) -> Expr:
        """Negation operator."""
        return Not(p.expr)

    @_("expr AND expr")
    def expr(self, p) -> Expr:
        """Conjunction operator."""
        return And(p.expr0, p.expr1)

    @_("expr OR expr")
    def expr(self, p) -> Expr:
        """Disjunction operator."""
        return Or(p.expr0, p.expr1)

    @_("LPAREN expr RPAREN")
    def expr(self, p) -> Expr:
        """Parenthesized expression for grouping."""
        return p.expr

    @_("comparison")
    def expr(self, p) -> Expr:
        return p.comparison

    @_("TRUE")
    def expr(self, p) -> Expr:
        return Constant(True)

    @_("FALSE")
    def expr(self, p) -> Expr:
        return Constant(False)

    @_("GE threshold", "GT threshold", "LE threshold", "LT threshold", "EQ threshold", "NE threshold")
    def comparison(self, p) -> Comparison:
        """Explicit comparator followed by a threshold."""
        return Comparison(p[0], p.threshold)

    @_("threshold")
    def comparison(self, p) -> Comparison:
        """A bare threshold reads as "at least"."""
        return Comparison(">=", p.threshold)

    @_("NUMBER PERCENT")
    def threshold(self, p) -> float:
        return self._checked(p.NUMBER / 100, f"{p.NUMBER}%")

    @_("NUMBER")
    def threshold(self, p) -> float:
        return self._checked(p.NUMBER, str(p.NUMBER))

    @staticmethod
    def _checked(value: float, text: str) -> float:
        if not 0.0 <= value <= 1.0:
            raise ParseError(f"Threshold {text} is outside the range [0, 1]")
        return value

    def parse(self, text: str) -> Expr:
        """Parse condition text into an AST.

        Args:
            text: Condition string to parse

        Returns:
            Root AST node representing the parsed condition

        Raises:
            ParseError: If the condition is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing condition: {text}")

        try:
            ast_result = super().parse(ConditionLexer().tokenize(text))

            if ast_result is None and text.strip() == "":
                raise ParseError("Input condition is empty.")

            if ast_result is None:
                raise ParseError("Failed to parse condition (syntax error).")

            logger.debug(f"Successfully parsed condition into {type(ast_result).__name__}")
            return ast_result

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}")

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
            error_msg = "Syntax error: Unexpected end of condition"

        raise ParseError(error_msg)
