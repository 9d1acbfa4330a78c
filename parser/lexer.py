# parser/lexer.py
# This file is part of Procov - Process Model Test Coverage
#
# Lexical analyzer for coverage condition tokenization using SLY

"""Lexical analyzer for coverage condition strings.

Supported Tokens:
- Comparators: >=, >, <=, <, ==, !=
- Connectives: !, &, |, (, )
- Numbers with an optional trailing % sign
- Keywords: true, false
- Whitespace: ignored during tokenization
"""

from sly import Lexer
from utils.logger import get_logger


class ConditionLexer(Lexer):
    """SLY-based lexer for coverage condition tokenization.

    Two-character comparators are declared before their one-character
    prefixes so that ``>=`` never lexes as ``>`` followed by ``=``.

    Attributes:
        tokens: Set of valid token types
        ignore: Characters to skip during tokenization
    """

    tokens = {
        "GE",
        "LE",
        "EQ",
        "NE",
        "GT",
        "LT",
        "NOT",
        "AND",
        "OR",
        "LPAREN",
        "RPAREN",
        "PERCENT",
        "NUMBER",
        "ID",
        "TRUE",
        "FALSE",
    }

    ignore = " \t\r\n"

    GE = r">="
    LE = r"<="
    EQ = r"=="
    NE = r"!="
    GT = r">"
    LT = r"<"
    NOT = r"!"
    AND = r"&"
    OR = r"\|"
    LPAREN = r"\("
    RPAREN = r"\)"
    PERCENT = r"%"

    @_(r"\d+(?:\.\d*)?|\.\d+")
    def NUMBER(self, t):
        t.value = float(t.value)
        return t

    # Only the keywords are valid identifiers; anything else is a syntax error
    ID = r"[a-zA-Z_][a-zA-Z0-9_]*"
    ID["true"] = "TRUE"
    ID["false"] = "FALSE"

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

        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
