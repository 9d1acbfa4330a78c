# logic/assertions.py

"""
Pass/fail evaluation of coverage reports.

The coverage engine only exposes numeric ratios. This module is the
swappable collaborator that turns a ratio into a verdict: a condition is
any predicate over a ratio, built from a threshold, from condition text,
or from an arbitrary callable.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence

from core.report import CoverageReport
from parser import parse_condition
from utils.logger import get_logger
from .verdict import Verdict

logger = get_logger(__name__)


@dataclass(frozen=True)
class CoverageCondition:
    """
    A named predicate over a coverage ratio.

    Attributes:
        description: Human-readable text used in logs and failure messages.
        predicate: Callable deciding whether a ratio satisfies the condition.
    """
    description: str
    predicate: Callable[[float], bool]

    @classmethod
    def at_least(cls, threshold: float) -> CoverageCondition:
        """Condition met when the ratio is at least `threshold`."""
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Coverage threshold must be within [0, 1], got {threshold}")
        return cls(
            f"matches if the coverage ratio is at least {threshold}",
            lambda ratio: ratio >= threshold,
        )

    @classmethod
    def from_text(cls, text: str) -> CoverageCondition:
        """
        Condition parsed from condition syntax, e.g. ">= 80% & < 1".

        Raises:
            ParseError: If the text is not a valid condition.
        """
        expr = parse_condition(text)
        return cls(f"matches {expr}", expr.holds)

    def holds(self, ratio: float) -> bool:
        return bool(self.predicate(ratio))

    def __str__(self) -> str:
        return self.description


class CoverageAssertionError(AssertionError):
    """Raised when a coverage report does not satisfy its conditions."""

    def __init__(self, target: str, report: CoverageReport, failed: Sequence[CoverageCondition]):
        self.target = target
        self.report = report
        self.failed = list(failed)
        if report.ratio is None:
            message = f"{target}: coverage cannot be asserted ({report.status})"
        else:
            reasons = "; ".join(str(c) for c in self.failed)
            message = f"{target}: coverage {report.ratio:.2%} does not satisfy: {reasons}"
        super().__init__(message)


def failed_conditions(report: CoverageReport, conditions: Iterable[CoverageCondition]) -> List[CoverageCondition]:
    """Conditions not met by the report's ratio. Empty for a report without ratio."""
    if report.ratio is None:
        return []
    return [c for c in conditions if not c.holds(report.ratio)]


def evaluate_conditions(
    report: CoverageReport,
    conditions: Iterable[CoverageCondition],
    target: str = "coverage",
) -> Verdict:
    """
    Evaluates every condition against the report.

    Returns TRUE when there is nothing to check or every condition holds,
    INCONCLUSIVE when conditions exist but the report carries no ratio, and
    FALSE otherwise.
    """
    conditions = list(conditions)
    if not conditions:
        return Verdict.TRUE
    if report.ratio is None:
        logger.debug(f"{target}: {len(conditions)} condition(s) inconclusive without a ratio")
        return Verdict.INCONCLUSIVE

    verdict = Verdict.TRUE
    for condition in conditions:
        holds = condition.holds(report.ratio)
        logger.condition_result(target, condition.description, holds)
        if not holds:
            verdict = Verdict.FALSE
    return verdict


def assert_coverage(
    report: CoverageReport,
    conditions: Iterable[CoverageCondition],
    target: str = "coverage",
) -> None:
    """
    Raises CoverageAssertionError unless every condition holds.

    A report without ratio fails any non-empty set of conditions.
    """
    conditions = list(conditions)
    verdict = evaluate_conditions(report, conditions, target)
    if verdict is Verdict.TRUE:
        return
    raise CoverageAssertionError(target, report, failed_conditions(report, conditions))
