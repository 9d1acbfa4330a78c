# core/collector.py
# This file is part of Procov - Process Model Test Coverage
#
# Stateful coverage engine driven by the begin/end test protocol

from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from model.element_index import ModelElementIndex
from model.event_log import EventLogCursor
from utils.logger import get_logger
from .exceptions import DuplicateWindow, NoActiveWindow
from .mapper import EventToElementMapper
from .report import CoverageReport
from .suite import SuiteAggregate
from .window import TestWindow, WindowState


class CoverageCollector:
    """Coverage aggregation engine for one test-class run.

    The collector is driven by an external scheduler through a strictly
    sequential two-call protocol per test method:

        begin_test(name)   before the test body runs
        end_test(name)     after it completed, successfully or not

    begin_test takes a watermark from the event log. end_test replays every
    event written after that watermark, maps it to a coverage mark, drops
    marks of excluded models and folds the rest into the suite aggregate.
    Reports are computed on demand and never decide pass or fail.

    One collector instance owns all state of one suite and must not be shared
    between suites; no synchronization is performed.

    Attributes:
        suite_name: Name of the test class, used in log output
        excluded_model_keys: Models omitted from every ratio
        detailed_logging: Log method ratios at INFO level when folded
    """

    def __init__(
        self,
        index: ModelElementIndex,
        cursor: EventLogCursor,
        excluded_model_keys: Iterable[str] = (),
        detailed_logging: bool = False,
        suite_name: str = "suite",
        mapper: Optional[EventToElementMapper] = None,
    ):
        self._index = index
        self._cursor = cursor
        self._mapper = mapper or EventToElementMapper()
        self._excluded: FrozenSet[str] = frozenset(excluded_model_keys)
        self._detailed_logging = detailed_logging
        self._windows: Dict[str, TestWindow] = {}
        self._suite = SuiteAggregate(name=suite_name)
        self._logger = get_logger()

    @property
    def suite_name(self) -> str:
        return self._suite.name

    @property
    def excluded_model_keys(self) -> FrozenSet[str]:
        return self._excluded

    @property
    def detailed_logging(self) -> bool:
        return self._detailed_logging

    def begin_test(self, method_name: str) -> None:
        """Open a recording window for `method_name`.

        Raises:
            DuplicateWindow: If a window for the method is already recording
        """
        if method_name in self._windows:
            raise DuplicateWindow(method_name)

        watermark = self._cursor.current_tail()
        self._windows[method_name] = TestWindow(method_name, watermark)
        self._logger.window_opened(method_name, watermark)

    def end_test(self, method_name: str) -> CoverageReport:
        """Close the window of `method_name` and fold it into the suite.

        A re-run of the same method replaces its previous per-method
        coverage; the suite-wide union keeps every fold.

        Returns:
            The method's coverage report after the fold

        Raises:
            NoActiveWindow: If begin_test was not called for the method
            UnknownModel: If an event references a model that was never
                deployed; the window stays recording in that case
        """
        window = self._windows.get(method_name)
        if window is None:
            raise NoActiveWindow(method_name)

        marks = [
            mark
            for mark in self._mapper.map_events(self._cursor.since(window.watermark))
            if mark.model_key not in self._excluded
        ]
        touched = {mark.model_key for mark in marks}
        # resolve before any state changes so a lookup failure leaves the suite untouched
        report = CoverageReport.compute(marks, touched, self._index)

        window.record(marks)
        self._suite.fold(window)
        window.close()
        del self._windows[method_name]

        self._logger.window_folded(method_name, len(window.covered), window.touched_models)
        if self._detailed_logging:
            self._logger.method_coverage(method_name, report.ratio)
        return report

    def method_coverage(self, method_name: str) -> Optional[CoverageReport]:
        """Coverage of the most recent fold of `method_name`.

        The ratio is taken over the elements of the models the method
        touched, excluding excluded models. Returns None when the method was
        never folded (not started, or aborted before end_test).
        """
        marks = self._suite.method_marks(method_name)
        if marks is None:
            return None
        return CoverageReport.compute(marks, self._suite.method_models(method_name), self._index)

    def class_coverage(self) -> CoverageReport:
        """Coverage of the union of all folded windows.

        Only folds that touched at least one model contribute to the
        deployment check. If contributing folds touched different model
        sets, the report carries INCONSISTENT_DEPLOYMENT and no ratio.
        """
        shared = self._suite.shared_models()
        union = self._suite.union
        if shared is None:
            model_sets = self._suite.distinct_model_sets()
            self._logger.inconsistent_deployment(self.suite_name, model_sets)
            return CoverageReport.inconsistent(union, frozenset().union(*model_sets))
        return CoverageReport.compute(union, shared, self._index)

    def method_state(self, method_name: str) -> WindowState:
        if method_name in self._windows:
            return WindowState.RECORDING
        if self._suite.has_method(method_name):
            return WindowState.FOLDED
        return WindowState.IDLE

    def folded_methods(self) -> Tuple[str, ...]:
        return self._suite.methods()

    def recording_methods(self) -> Tuple[str, ...]:
        return tuple(self._windows)
