# logic/__init__.py

"""Coverage assertion and test-lifecycle interface.

This package provides:
  • CoverageCondition: named predicate over a coverage ratio
  • Verdict: tri-state outcome (TRUE, FALSE, INCONCLUSIVE)
  • CoverageSession: begin/end glue with exclusions, logging and assertions
  • TraceCoverageRunner: CLI-style runner for BPMN models + CSV trace
  • CoverageAssertionError: raised when coverage conditions are not met
"""

from .verdict import Verdict
from .assertions import (
    CoverageAssertionError,
    CoverageCondition,
    assert_coverage,
    evaluate_conditions,
)
from .session import CoverageSession, exclude_from_coverage, is_excluded
from .runner import TraceCoverageRunner

__all__ = [
    "Verdict",
    "CoverageAssertionError",
    "CoverageCondition",
    "assert_coverage",
    "evaluate_conditions",
    "CoverageSession",
    "exclude_from_coverage",
    "is_excluded",
    "TraceCoverageRunner",
]
