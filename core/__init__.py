# core/__init__.py
# This file is part of Procov - Process Model Test Coverage
#
# Core module public API for coverage aggregation

"""Coverage aggregation engine for process-model tests.

This module observes which model elements (flow nodes and sequence flows)
were reached while test methods executed, and aggregates that information
per test method and per test class. It reads from two collaborators owned
by the execution engine: the registry of deployed models and the
append-only execution log.

Primary Components:
    EventToElementMapper: Classifies raw execution events into coverage marks
    TestWindow: Per-method accumulation window scoped by a log watermark
    SuiteAggregate: Union of folded windows and per-method results
    CoverageCollector: Stateful engine exposing the begin/end test protocol
    CoverageReport: Immutable ratio, covered and missing sets, model breakdown

Example:
    >>> from model import EventLog, ModelDefinition, ModelElementIndex
    >>> from core import CoverageCollector
    >>> index = ModelElementIndex.of([ModelDefinition("order", ["start", "end"])])
    >>> log = EventLog()
    >>> collector = CoverageCollector(index, log.cursor())
    >>> collector.begin_test("test_happy_path")
    >>> # ... the execution engine appends to `log` ...
    >>> report = collector.end_test("test_happy_path")
"""

from .exceptions import CoverageLifecycleError, DuplicateWindow, NoActiveWindow
from .mapper import EventToElementMapper
from .window import TestWindow, WindowState
from .suite import SuiteAggregate
from .report import CoverageReport, DeploymentStatus, ModelCoverage
from .collector import CoverageCollector
from model.exceptions import UnknownModel

__all__ = [
    "CoverageLifecycleError",
    "DuplicateWindow",
    "NoActiveWindow",
    "UnknownModel",
    "EventToElementMapper",
    "TestWindow",
    "WindowState",
    "SuiteAggregate",
    "CoverageReport",
    "DeploymentStatus",
    "ModelCoverage",
    "CoverageCollector",
]

__version__ = "1.0.0"
__description__ = "Core components for process model test coverage"
