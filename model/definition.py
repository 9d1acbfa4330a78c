# model/definition.py
# This file is part of Procov - Process Model Test Coverage
#
# Immutable representation of a deployed process model

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Tuple

from .element import ElementRef


@dataclass(frozen=True)
class ModelDefinition:
    """A deployed process model reduced to its coverable elements.

    A model is identified by a stable key and declares an ordered set of
    element ids: every flow node (events, activities, gateways) and every
    sequence flow. The definition is immutable once deployed; the coverage
    engine only ever reads it.

    Duplicate element ids are collapsed while keeping declaration order.

    Attributes:
        key: Stable model key (for BPMN, the process id)
        elements: Coverable element ids in declaration order
        name: Optional human-readable model name
        version: Optional deployment version
    """

    key: str
    elements: Tuple[str, ...]
    name: Optional[str] = None
    version: Optional[int] = None

    def __init__(
        self,
        key: str,
        elements: Iterable[str] = (),
        name: Optional[str] = None,
        version: Optional[int] = None,
    ) -> None:
        """Initialize a model definition from any iterable of element ids.

        Args:
            key: Stable model key
            elements: Element ids; duplicates are dropped, order is kept
            name: Optional human-readable name
            version: Optional deployment version
        """
        if not key:
            raise ValueError("Model key must not be empty")
        ordered = tuple(dict.fromkeys(elements))
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "elements", ordered)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "version", version)

    @property
    def element_set(self) -> FrozenSet[str]:
        """Coverable element ids as an unordered set."""
        return frozenset(self.elements)

    def refs(self) -> Tuple[ElementRef, ...]:
        """Global coordinates of every coverable element, in declaration order."""
        return tuple(ElementRef(self.key, element_id) for element_id in self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __str__(self) -> str:
        version_str = f" v{self.version}" if self.version is not None else ""
        return f"{self.key}{version_str} ({len(self.elements)} elements)"
