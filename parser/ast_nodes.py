# parser/ast_nodes.py
# This file is part of Procov - Process Model Test Coverage
#
# Abstract Syntax Tree node classes for coverage condition representation

"""AST node classes for representing parsed coverage conditions.

Every node is immutable and hashable, renders back to condition syntax via
``str()`` and can decide whether it holds for a given coverage ratio.

Node Types:
    Constant: Boolean constants
    Comparison: A comparator applied to a threshold in [0, 1]
    Not, And, Or: Standard Boolean connectives
"""

from __future__ import annotations
import operator
from decimal import Decimal
from dataclasses import dataclass
from typing import Callable, Dict

COMPARATORS: Dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "<=": operator.le,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def _fixed_point(value: float) -> str:
    """Shortest decimal text of `value` without an exponent, e.g. 1e-05 -> 0.00001."""
    return format(Decimal(repr(value)), "f")


@dataclass(frozen=True, slots=True)
class Expr:
    """Base class for all condition AST nodes."""

    def holds(self, ratio: float) -> bool:
        """Decide whether the condition is met by `ratio`.

        Args:
            ratio: Coverage ratio in [0, 1]

        Raises:
            NotImplementedError: Must be implemented by subclasses
        """
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class Constant(Expr):
    """Boolean constant ``true`` or ``false``."""

    value: bool

    def holds(self, ratio: float) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True, slots=True)
class Comparison(Expr):
    """Comparison of the ratio against a fixed threshold.

    Attributes:
        op: One of the keys of COMPARATORS
        threshold: Threshold ratio in [0, 1]
    """

    op: str
    threshold: float

    def __post_init__(self):
        if self.op not in COMPARATORS:
            raise ValueError(f"Unknown comparator: {self.op!r}")

    def holds(self, ratio: float) -> bool:
        return COMPARATORS[self.op](ratio, self.threshold)

    def __str__(self) -> str:
        return f"{self.op} {_fixed_point(self.threshold)}"


@dataclass(frozen=True, slots=True)
class Not(Expr):
    """Logical negation of a condition."""

    operand: Expr

    def holds(self, ratio: float) -> bool:
        return not self.operand.holds(ratio)

    def __str__(self) -> str:
        return f"!({self.operand})"


@dataclass(frozen=True, slots=True)
class And(Expr):
    """Conjunction of two conditions."""

    left: Expr
    right: Expr

    def holds(self, ratio: float) -> bool:
        return self.left.holds(ratio) and self.right.holds(ratio)

    def __str__(self) -> str:
        return f"({self.left} & {self.right})"


@dataclass(frozen=True, slots=True)
class Or(Expr):
    """Disjunction of two conditions."""

    left: Expr
    right: Expr

    def holds(self, ratio: float) -> bool:
        return self.left.holds(ratio) or self.right.holds(ratio)

    def __str__(self) -> str:
        return f"({self.left} | {self.right})"
