# logic/runner.py

"""
TraceCoverageRunner: glue code that ties together BPMN models and a
CSV-formatted trace of recorded execution events. It deploys the models,
replays the trace into an in-memory event log test by test, brackets every
test with a CoverageSession, and produces the class coverage report.
"""

from itertools import groupby
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from core.report import CoverageReport
from model.element_index import ModelElementIndex
from model.event_log import EventLog
from utils.logger import get_logger
from utils.model_reader import ModelFormatError, read_bpmn
from utils.settings import CoverageSettings
from utils.trace_reader import TraceFormatError, read_trace
from .assertions import CoverageCondition
from .session import CoverageSession

logger = get_logger(__name__)

PathLike = Union[str, Path]


class TraceCoverageRunner:
    """
    Replays a recorded trace against deployed models.

    Consecutive trace rows with the same `test` value form one test
    execution. A test name that appears again later is treated as a re-run.
    """

    def __init__(
        self,
        model_paths: Iterable[PathLike],
        trace_path: PathLike,
        settings: Optional[CoverageSettings] = None,
        suite_name: Optional[str] = None,
    ):
        self._trace_path = Path(trace_path)
        self._settings = settings or CoverageSettings()
        self._index = ModelElementIndex()
        self._log = EventLog()

        # 1) Deploy every model found in the model files
        sources: Dict[str, Path] = {}
        for path in model_paths:
            for model in read_bpmn(path):
                try:
                    self._index.deploy(model)
                except ValueError:
                    raise ModelFormatError(
                        f"Model '{model.key}' in {path} conflicts with the one deployed from {sources[model.key]}"
                    ) from None
                sources.setdefault(model.key, Path(path))
        logger.info(f"📦 Deployed models: {', '.join(self._index.keys()) or 'none'}")

        # 2) Open a session with a fresh collector over the empty log
        self._session = CoverageSession.open(
            self._index,
            self._log.cursor(),
            self._settings,
            suite_name or self._trace_path.stem,
        )
        self.method_reports: Dict[str, CoverageReport] = {}

    @property
    def session(self) -> CoverageSession:
        return self._session

    def add_class_condition(self, condition: Union[CoverageCondition, str]) -> None:
        self._session.add_class_condition(condition)

    def run(self) -> CoverageReport:
        """
        Replays the trace and returns the class coverage report.

        Raises:
            TraceFormatError: If the trace cannot be read or positions are not increasing.
            CoverageAssertionError: If a registered condition fails.
        """
        suite_name = self._session.collector.suite_name
        logger.info(f"=== Replaying trace {self._trace_path.name} ({suite_name}) ===")

        for test, records in groupby(read_trace(str(self._trace_path)), key=lambda r: r.test):
            self._session.before_test(test)
            for record in records:
                try:
                    self._log.append(record.to_event(self._log.tail))
                except ValueError as e:
                    raise TraceFormatError(f"Test {test}: {e}")
            report = self._session.after_test(test)
            if report is not None:
                self.method_reports[test] = report

        report = self._session.finish()
        logger.info(f"\n>>> CLASS COVERAGE: {self._format(report)} <<<")
        return report

    def missing_elements(self, report: CoverageReport) -> List[str]:
        """Missing elements of `report` as sorted 'model:element' strings."""
        return [str(ref) for ref in sorted(report.missing)]

    @staticmethod
    def _format(report: CoverageReport) -> str:
        if report.ratio is None:
            return f"n/a ({report.status})"
        return f"{report.ratio:.2%}"
