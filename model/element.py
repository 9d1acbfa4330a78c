# model/element.py

"""
ElementRef
==========

Global coordinate of a coverable element. Element ids are only unique within
a single model definition, so coverage is always recorded against the pair
(model key, element id).
"""

from __future__ import annotations
from dataclasses import dataclass

ElementId = str
ModelKey = str


@dataclass(frozen=True, slots=True, order=True)
class ElementRef:
    model_key: ModelKey
    element_id: ElementId

    def __str__(self) -> str:
        return f"{self.model_key}:{self.element_id}"
