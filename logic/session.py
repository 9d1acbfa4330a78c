# logic/session.py

"""
CoverageSession: lifecycle glue between a test framework and the coverage
engine. It brackets each test with begin/end calls on a CoverageCollector,
skips tests marked as excluded, logs coverages when detailed logging is on,
and asserts the per-method and class-level coverage conditions that were
registered for the run.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from core.collector import CoverageCollector
from core.report import CoverageReport
from model.element_index import ModelElementIndex
from model.event_log import EventLogCursor
from utils.logger import get_logger
from utils.settings import CoverageSettings
from .assertions import CoverageCondition, assert_coverage

logger = get_logger(__name__)

EXCLUDE_MARKER = "__exclude_from_process_coverage__"

ConditionLike = Union[CoverageCondition, str]


def exclude_from_coverage(obj: Any) -> Any:
    """Decorator marking a test function or class as excluded from coverage."""
    setattr(obj, EXCLUDE_MARKER, True)
    return obj


def is_excluded(*objs: Any) -> bool:
    """True if any of `objs` (typically test class and test method) is marked excluded."""
    return any(getattr(obj, EXCLUDE_MARKER, False) for obj in objs if obj is not None)


def _as_condition(condition: ConditionLike) -> CoverageCondition:
    if isinstance(condition, CoverageCondition):
        return condition
    return CoverageCondition.from_text(condition)


class CoverageSession:
    """
    Drives one CoverageCollector through a test-class run.

    Conditions may be given as CoverageCondition objects or as condition
    text (see `parser.parse_condition`). A configured class threshold is
    registered as a class condition up front.
    """

    def __init__(self, collector: CoverageCollector, settings: Optional[CoverageSettings] = None):
        self.collector = collector
        self.settings = settings or CoverageSettings()
        self._class_conditions: List[CoverageCondition] = []
        self._method_conditions: Dict[str, List[CoverageCondition]] = {}

        errors = self.settings.validate()
        if errors:
            raise ValueError(f"Invalid coverage settings: {'; '.join(errors)}")

        if self.settings.class_coverage_at_least is not None:
            self.class_coverage_at_least(self.settings.class_coverage_at_least)

    @classmethod
    def open(
        cls,
        index: ModelElementIndex,
        cursor: EventLogCursor,
        settings: Optional[CoverageSettings] = None,
        suite_name: str = "suite",
    ) -> CoverageSession:
        """Creates a session with a fresh collector configured from `settings`."""
        settings = settings or CoverageSettings()
        collector = CoverageCollector(
            index,
            cursor,
            excluded_model_keys=settings.excluded_model_keys,
            detailed_logging=settings.detailed_logging,
            suite_name=suite_name,
        )
        return cls(collector, settings)

    def add_class_condition(self, condition: ConditionLike) -> None:
        self._class_conditions.append(_as_condition(condition))

    def class_coverage_at_least(self, threshold: float) -> None:
        self._class_conditions.append(CoverageCondition.at_least(threshold))

    def add_method_condition(self, method_name: str, condition: ConditionLike) -> None:
        self._method_conditions.setdefault(method_name, []).append(_as_condition(condition))

    def before_test(self, method_name: str, excluded: bool = False) -> None:
        """Opens the recording window of a test unless it is excluded."""
        if excluded:
            logger.debug(f"Skipping coverage for excluded test {method_name}")
            return
        self.collector.begin_test(method_name)

    def after_test(self, method_name: str, excluded: bool = False) -> Optional[CoverageReport]:
        """
        Folds the test's window and asserts its method conditions.

        Returns the method report, or None for an excluded test.

        Raises:
            CoverageAssertionError: If a registered method condition fails.
        """
        if excluded:
            return None
        report = self.collector.end_test(method_name)
        if self.settings.handle_method_coverage:
            conditions = self._method_conditions.get(method_name, [])
            if conditions:
                assert_coverage(report, conditions, f"method {method_name}")
        return report

    def finish(self) -> CoverageReport:
        """
        Computes class coverage, logs it and asserts the class conditions.

        Tests still recording (aborted before after_test) contribute nothing.

        Raises:
            CoverageAssertionError: If a class condition fails or the class
                coverage is undefined while class conditions exist.
        """
        suite_name = self.collector.suite_name
        recording = self.collector.recording_methods()
        if recording:
            logger.warning(f"Tests without coverage data in {suite_name}: {', '.join(recording)}")

        report = self.collector.class_coverage()
        if self.settings.detailed_logging:
            logger.class_coverage(suite_name, report.ratio)
            for entry in report.per_model:
                logger.info(f"  {entry}")
            logger.missing_elements(suite_name, (str(ref) for ref in sorted(report.missing)))

        assert_coverage(report, self._class_conditions, f"class {suite_name}")
        return report
