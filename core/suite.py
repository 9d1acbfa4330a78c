# core/suite.py
# This file is part of Procov - Process Model Test Coverage
#
# Suite-level aggregation of folded test windows

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from model.element import ElementRef
from .window import TestWindow


@dataclass(slots=True)
class SuiteAggregate:
    """Union of all folded test windows of one test class.

    Keeps, independently of each other:
      - the covered set of the most recent fold of every method name
        (a re-run replaces the previous value),
      - the suite-wide union of every folded covered set,
      - the touched model keys of every fold, in fold order.

    Only folds that touched at least one (non-excluded) model contribute to
    the deployment consistency check; a fold without marks never makes the
    class coverage inconsistent.

    Attributes:
        name: Name of the test class, used in log output
    """

    name: str = "suite"
    _method_marks: Dict[str, FrozenSet[ElementRef]] = field(default_factory=dict)
    _method_models: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    _union: Set[ElementRef] = field(default_factory=set)
    _model_sets: List[FrozenSet[str]] = field(default_factory=list)

    def fold(self, window: TestWindow) -> None:
        """Merge a finished window into the per-method map and the union."""
        self._method_marks[window.method_name] = window.covered_set
        self._method_models[window.method_name] = window.model_keys
        self._union.update(window.covered)
        self._model_sets.append(window.model_keys)

    def has_method(self, method_name: str) -> bool:
        return method_name in self._method_marks

    def method_marks(self, method_name: str) -> Optional[FrozenSet[ElementRef]]:
        return self._method_marks.get(method_name)

    def method_models(self, method_name: str) -> Optional[FrozenSet[str]]:
        return self._method_models.get(method_name)

    def methods(self) -> Tuple[str, ...]:
        """Folded method names in first-fold order."""
        return tuple(self._method_marks)

    @property
    def union(self) -> FrozenSet[ElementRef]:
        return frozenset(self._union)

    @property
    def fold_count(self) -> int:
        return len(self._model_sets)

    def contributing_model_sets(self) -> List[FrozenSet[str]]:
        """Touched model sets of every fold that reached at least one model."""
        return [models for models in self._model_sets if models]

    def distinct_model_sets(self) -> List[FrozenSet[str]]:
        """Distinct contributing model sets, in order of first appearance."""
        distinct: List[FrozenSet[str]] = []
        for models in self.contributing_model_sets():
            if models not in distinct:
                distinct.append(models)
        return distinct

    def shared_models(self) -> Optional[FrozenSet[str]]:
        """
        The model universe shared by all contributing folds.

        Returns an empty set when nothing contributed, and None when the
        folds touched different model sets.
        """
        distinct = self.distinct_model_sets()
        if not distinct:
            return frozenset()
        if len(distinct) > 1:
            return None
        return distinct[0]
