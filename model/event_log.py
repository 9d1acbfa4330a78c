# model/event_log.py

"""
EventLog is an in-memory, append-only execution log with strictly
increasing positions. EventLogCursor is the read-only view the coverage
engine uses on top of it: it can report the current tail position (used as
a watermark before a test body runs) and lazily replay everything written
after a given position.
"""

from __future__ import annotations
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .event import EventKind, ExecutionEvent
from .exceptions import EventLogError

EMPTY_LOG_POSITION = -1  #: Tail position reported for a log without events.


@dataclass(slots=True)
class EventLog:
    """
    Append-only sequence of execution events.

    Positions need not be contiguous, but each appended event must be
    positioned strictly after the current tail.
    """
    _events: List[ExecutionEvent] = field(default_factory=list)
    _positions: List[int] = field(default_factory=list)

    @property
    def tail(self) -> int:
        """Highest position written so far, or EMPTY_LOG_POSITION."""
        return self._positions[-1] if self._positions else EMPTY_LOG_POSITION

    def append(self, event: ExecutionEvent) -> ExecutionEvent:
        """
        Appends `event` to the log.

        Raises:
            EventLogError: If the event position is not after the tail.
        """
        if event.position <= self.tail:
            raise EventLogError(
                f"Event position {event.position} is not after log tail {self.tail}"
            )
        self._events.append(event)
        self._positions.append(event.position)
        return event

    def record(
        self,
        kind: EventKind,
        model_key: str,
        element_id: Optional[str] = None,
        element_type: Optional[str] = None,
    ) -> ExecutionEvent:
        """Creates an event at the next free position and appends it."""
        return self.append(ExecutionEvent(self.tail + 1, kind, model_key, element_id, element_type))

    def slice_after(self, position: int) -> Iterator[ExecutionEvent]:
        """
        Lazily yields the events positioned strictly after `position`.

        The slice ends at the tail as of this call; later appends are not
        part of it.
        """
        end = len(self._events)
        start = bisect_right(self._positions, position, 0, end)
        return (self._events[index] for index in range(start, end))

    def cursor(self) -> EventLogCursor:
        """Returns a read-only cursor over this log."""
        return EventLogCursor(self)

    def __iter__(self) -> Iterator[ExecutionEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)


class EventLogCursor:
    """Read-only view over an externally owned EventLog."""

    __slots__ = ("_log",)

    def __init__(self, log: EventLog):
        self._log = log

    def current_tail(self) -> int:
        """Returns the highest position present in the log, or EMPTY_LOG_POSITION."""
        return self._log.tail

    def since(self, position: int) -> Iterator[ExecutionEvent]:
        """
        Yields every event whose position is strictly greater than `position`,
        in ascending order.

        The sequence is bounded by the log length at the time of the call, so
        it is finite even if events are appended while it is consumed. The
        same position may be queried any number of times.
        """
        return self._log.slice_after(position)
