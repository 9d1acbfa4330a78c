# parser/exceptions.py
# This file is part of Procov - Process Model Test Coverage
#
# Custom exceptions for coverage condition parsing

"""Domain-specific exceptions for coverage condition processing.

Conditions are short textual predicates over a coverage ratio, such as
``>= 0.8`` or ``> 50% & < 100%``. Any problem turning such text into an
expression tree is reported as a ParseError.
"""


class ParseError(RuntimeError):
    """Exception raised when condition parsing fails.

    Indicates that the input does not conform to the condition grammar or
    that a threshold lies outside the closed interval [0, 1].
    """

    pass
