# model/__init__.py

"""
Domain objects describing what the execution engine exposes to the
coverage engine: deployed model definitions and their element universe,
element coordinates, execution events, and the append-only event log with
its read-only cursor. These types carry no coverage logic.
"""

from .element import ElementRef
from .definition import ModelDefinition
from .event import EventKind, ExecutionEvent, PROCESS_ELEMENT_TYPE, SEQUENCE_FLOW_ELEMENT_TYPE
from .element_index import ModelElementIndex
from .event_log import EventLog, EventLogCursor, EMPTY_LOG_POSITION
from .exceptions import UnknownModel, EventLogError

__all__ = [
    "ElementRef",
    "ModelDefinition",
    "EventKind",
    "ExecutionEvent",
    "PROCESS_ELEMENT_TYPE",
    "SEQUENCE_FLOW_ELEMENT_TYPE",
    "ModelElementIndex",
    "EventLog",
    "EventLogCursor",
    "EMPTY_LOG_POSITION",
    "UnknownModel",
    "EventLogError",
]
