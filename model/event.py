# model/event.py

"""
ExecutionEvent
==============

Immutable entry of the engine's append-only execution log. Every event
occupies a unique, strictly increasing position, whether or not it is
relevant for coverage. Events reference the model they originate from by
key and, for element-related kinds, the element id and BPMN element type.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

PROCESS_ELEMENT_TYPE = "PROCESS"  #: Element type of the process itself (never coverable).
SEQUENCE_FLOW_ELEMENT_TYPE = "SEQUENCE_FLOW"


class EventKind(Enum):
    """Kinds of records written by the execution engine."""

    ELEMENT_ACTIVATING = "ELEMENT_ACTIVATING"
    ELEMENT_ACTIVATED = "ELEMENT_ACTIVATED"
    ELEMENT_COMPLETING = "ELEMENT_COMPLETING"
    ELEMENT_COMPLETED = "ELEMENT_COMPLETED"
    ELEMENT_TERMINATING = "ELEMENT_TERMINATING"
    ELEMENT_TERMINATED = "ELEMENT_TERMINATED"
    SEQUENCE_FLOW_TAKEN = "SEQUENCE_FLOW_TAKEN"
    PROCESS_DEPLOYED = "PROCESS_DEPLOYED"
    VARIABLE_CREATED = "VARIABLE_CREATED"
    VARIABLE_UPDATED = "VARIABLE_UPDATED"
    TIMER_CREATED = "TIMER_CREATED"
    TIMER_TRIGGERED = "TIMER_TRIGGERED"
    JOB_CREATED = "JOB_CREATED"
    JOB_COMPLETED = "JOB_COMPLETED"
    MESSAGE_CORRELATED = "MESSAGE_CORRELATED"
    INCIDENT_CREATED = "INCIDENT_CREATED"
    INCIDENT_RESOLVED = "INCIDENT_RESOLVED"

    @classmethod
    def parse(cls, text: str) -> EventKind:
        """Look up a kind by its (case-insensitive) name."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown event kind: {text!r}") from None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ExecutionEvent:
    position: int
    kind: EventKind
    model_key: str
    element_id: Optional[str] = None
    element_type: Optional[str] = None

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"Event position must be non-negative, got {self.position}")

    def __str__(self) -> str:
        element = f"/{self.element_id}" if self.element_id else ""
        return f"#{self.position} {self.kind.name} {self.model_key}{element}"
