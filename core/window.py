# core/window.py
# This file is part of Procov - Process Model Test Coverage
#
# Per-test accumulation window and its lifecycle states

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, Set

from model.element import ElementRef


class WindowState(Enum):
    """Lifecycle of a test method inside one collector.

    Values:
        IDLE: No window was ever opened for the method
        RECORDING: begin_test was called, end_test not yet
        FOLDED: The latest window was folded into the suite aggregate
    """

    IDLE = auto()
    RECORDING = auto()
    FOLDED = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class TestWindow:
    """Ephemeral record of one test method invocation.

    Holds the log position observed right before the test body ran and,
    once the test ends, the marks and model keys observed after it.

    Attributes:
        method_name: Name of the test method
        watermark: Log tail position captured at begin_test
        covered: Marks recorded after the watermark
        touched_models: Keys of the models those marks belong to
        state: Current lifecycle state
    """

    __test__ = False  # not a pytest test class

    method_name: str
    watermark: int
    covered: Set[ElementRef] = field(default_factory=set)
    touched_models: Set[str] = field(default_factory=set)
    state: WindowState = WindowState.RECORDING

    def record(self, marks: Iterable[ElementRef]) -> None:
        """Add marks to the covered set and remember their models."""
        for mark in marks:
            self.covered.add(mark)
            self.touched_models.add(mark.model_key)

    def close(self) -> None:
        """Mark the window as folded; it accepts no further marks."""
        self.state = WindowState.FOLDED

    @property
    def covered_set(self) -> FrozenSet[ElementRef]:
        return frozenset(self.covered)

    @property
    def model_keys(self) -> FrozenSet[str]:
        return frozenset(self.touched_models)
