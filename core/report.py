# core/report.py
# This file is part of Procov - Process Model Test Coverage
#
# Immutable coverage report values

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import AbstractSet, FrozenSet, Iterable, Optional, Set, Tuple

from model.element import ElementRef
from model.element_index import ModelElementIndex


class DeploymentStatus(Enum):
    """Whether a report's element universe is well defined.

    Values:
        CONSISTENT: Every contributing test touched the same model set
        INCONSISTENT_DEPLOYMENT: Contributing tests touched different model
            sets, so no ratio can be computed over a single universe
    """

    CONSISTENT = auto()
    INCONSISTENT_DEPLOYMENT = auto()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ModelCoverage:
    """Coverage of a single model inside a report."""

    model_key: str
    covered_count: int
    total_count: int

    @property
    def ratio(self) -> float:
        """Covered share of the model's elements; 1.0 for an empty model."""
        if self.total_count == 0:
            return 1.0
        return self.covered_count / self.total_count

    def __str__(self) -> str:
        return f"{self.model_key}: {self.covered_count}/{self.total_count} ({self.ratio:.2%})"


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Snapshot of element coverage for one test method or one test class.

    Attributes:
        ratio: Covered share of all considered elements, None when the
            deployment was inconsistent
        covered: Reached elements of the considered models
        missing: Elements of the considered models that were never reached
        models_considered: Model keys forming the element universe
        status: Whether the universe is well defined
        per_model: Breakdown by model, ordered by model key
    """

    ratio: Optional[float]
    covered: FrozenSet[ElementRef]
    missing: FrozenSet[ElementRef]
    models_considered: FrozenSet[str]
    status: DeploymentStatus = DeploymentStatus.CONSISTENT
    per_model: Tuple[ModelCoverage, ...] = ()

    @classmethod
    def compute(
        cls,
        marks: Iterable[ElementRef],
        model_keys: AbstractSet[str],
        index: ModelElementIndex,
    ) -> CoverageReport:
        """
        Compute a report for `marks` against the universe of `model_keys`.

        Marks outside that universe (other models, or element ids the model
        does not declare) are not counted. An empty universe is vacuously
        fully covered.

        Raises:
            UnknownModel: If one of `model_keys` was never deployed.
        """
        marks = set(marks)
        covered: Set[ElementRef] = set()
        missing: Set[ElementRef] = set()
        breakdown = []
        for model_key in sorted(model_keys):
            elements = index.elements_of(model_key)
            reached = {m for m in marks if m.model_key == model_key and m.element_id in elements}
            covered |= reached
            missing |= {ElementRef(model_key, e) for e in elements} - reached
            breakdown.append(ModelCoverage(model_key, len(reached), len(elements)))

        total = len(covered) + len(missing)
        ratio = len(covered) / total if total else 1.0
        return cls(
            ratio=ratio,
            covered=frozenset(covered),
            missing=frozenset(missing),
            models_considered=frozenset(model_keys),
            per_model=tuple(breakdown),
        )

    @classmethod
    def inconsistent(cls, marks: Iterable[ElementRef], model_keys: AbstractSet[str]) -> CoverageReport:
        """Report for a suite whose tests touched different model sets."""
        return cls(
            ratio=None,
            covered=frozenset(marks),
            missing=frozenset(),
            models_considered=frozenset(model_keys),
            status=DeploymentStatus.INCONSISTENT_DEPLOYMENT,
        )

    @property
    def inconsistent_deployment(self) -> bool:
        return self.status is DeploymentStatus.INCONSISTENT_DEPLOYMENT

    @property
    def percentage(self) -> Optional[float]:
        return None if self.ratio is None else self.ratio * 100

    def model(self, model_key: str) -> Optional[ModelCoverage]:
        """Breakdown entry for `model_key`, if the model was considered."""
        for entry in self.per_model:
            if entry.model_key == model_key:
                return entry
        return None

    def __str__(self) -> str:
        if self.ratio is None:
            return f"coverage n/a ({self.status})"
        models = ", ".join(sorted(self.models_considered)) or "no models"
        return f"coverage {self.ratio:.2%} ({len(self.covered)} of {len(self.covered) + len(self.missing)}, {models})"
