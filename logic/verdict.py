# logic/verdict.py

"""
Verdict enumeration for coverage assertions, capturing the three possible
outcomes of evaluating coverage conditions against a report.
"""

from enum import Enum, auto


class Verdict(Enum):
    """Three-state result of a coverage assertion."""
    INCONCLUSIVE = auto()  # report carries no ratio (inconsistent deployment)
    TRUE = auto()  # every condition holds
    FALSE = auto()  # at least one condition failed

    def __str__(self) -> str:
        return self.name
