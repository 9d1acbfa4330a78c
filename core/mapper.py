# core/mapper.py
# This file is part of Procov - Process Model Test Coverage
#
# Classification of raw execution events into coverage marks

from typing import FrozenSet, Iterable, Iterator, Optional

from model.element import ElementRef
from model.event import EventKind, ExecutionEvent, PROCESS_ELEMENT_TYPE


class EventToElementMapper:
    """Translates execution events into (model key, element id) marks.

    A flow node counts as reached once it was activated or completed; a
    sequence flow counts once it was taken. Every other kind of record
    (lifecycle transitions in between, variables, timers, jobs, incidents,
    messages, deployments) is inert for coverage. Records about the process
    element itself are ignored because the process is not a coverable
    element of its own model.

    The mapper is stateless and total over EventKind: no kind raises.
    """

    COVERAGE_KINDS: FrozenSet[EventKind] = frozenset(
        {
            EventKind.ELEMENT_ACTIVATED,
            EventKind.ELEMENT_COMPLETED,
            EventKind.SEQUENCE_FLOW_TAKEN,
        }
    )

    def map_to_element(self, event: ExecutionEvent) -> Optional[ElementRef]:
        """Return the element reached by `event`, or None if it reaches none.

        Args:
            event: Raw execution event of any kind

        Returns:
            The coverage mark, or None for inert events
        """
        if event.kind not in self.COVERAGE_KINDS:
            return None
        if not event.element_id:
            return None
        if event.element_type == PROCESS_ELEMENT_TYPE:
            return None
        return ElementRef(event.model_key, event.element_id)

    def map_events(self, events: Iterable[ExecutionEvent]) -> Iterator[ElementRef]:
        """Yield the marks of all coverage-relevant events in `events`."""
        for event in events:
            mark = self.map_to_element(event)
            if mark is not None:
                yield mark
