# tests/core_tests/test_mapper_scenarios.py
# This file is part of Procov - Process Model Test Coverage
#
# Test suite for event classification into coverage marks

"""Test suite for EventToElementMapper.

Covers the coverage-relevant event kinds, inert kinds, records about the
process element itself and totality over the EventKind enumeration.
"""

import pytest
from core.mapper import EventToElementMapper
from model.element import ElementRef
from model.event import EventKind, ExecutionEvent, PROCESS_ELEMENT_TYPE, SEQUENCE_FLOW_ELEMENT_TYPE


def create_event(kind: EventKind, element_id="task1", element_type="SERVICE_TASK", model_key="M", position=0):
    """Factory function for creating ExecutionEvent objects in tests."""
    return ExecutionEvent(position, kind, model_key, element_id, element_type)


class TestEventToElementMapper:
    """Classification rules of the mapper."""

    def setup_method(self):
        self.mapper = EventToElementMapper()

    @pytest.mark.parametrize(
        "kind",
        [EventKind.ELEMENT_ACTIVATED, EventKind.ELEMENT_COMPLETED],
    )
    def test_flow_node_activation_and_completion_are_marks(self, kind):
        assert self.mapper.map_to_element(create_event(kind)) == ElementRef("M", "task1")

    def test_taken_sequence_flow_is_a_mark(self):
        event = create_event(EventKind.SEQUENCE_FLOW_TAKEN, "flow1", SEQUENCE_FLOW_ELEMENT_TYPE)
        assert self.mapper.map_to_element(event) == ElementRef("M", "flow1")

    @pytest.mark.parametrize(
        "kind",
        [
            EventKind.ELEMENT_ACTIVATING,
            EventKind.ELEMENT_COMPLETING,
            EventKind.ELEMENT_TERMINATING,
            EventKind.ELEMENT_TERMINATED,
            EventKind.VARIABLE_CREATED,
            EventKind.VARIABLE_UPDATED,
            EventKind.TIMER_CREATED,
            EventKind.TIMER_TRIGGERED,
            EventKind.JOB_CREATED,
            EventKind.JOB_COMPLETED,
            EventKind.PROCESS_DEPLOYED,
            EventKind.MESSAGE_CORRELATED,
            EventKind.INCIDENT_CREATED,
            EventKind.INCIDENT_RESOLVED,
        ],
    )
    def test_inert_kinds_map_to_nothing(self, kind):
        assert self.mapper.map_to_element(create_event(kind)) is None

    @pytest.mark.parametrize("kind", list(EventKind))
    def test_mapper_is_total_over_event_kinds(self, kind):
        """No kind raises, with or without element data."""
        self.mapper.map_to_element(create_event(kind))
        self.mapper.map_to_element(create_event(kind, element_id=None, element_type=None))

    def test_process_element_is_not_coverable(self):
        event = create_event(EventKind.ELEMENT_ACTIVATED, "M", PROCESS_ELEMENT_TYPE)
        assert self.mapper.map_to_element(event) is None

    def test_event_without_element_id_maps_to_nothing(self):
        event = create_event(EventKind.ELEMENT_COMPLETED, element_id=None)
        assert self.mapper.map_to_element(event) is None

    def test_marks_are_scoped_by_model(self):
        a = self.mapper.map_to_element(create_event(EventKind.ELEMENT_ACTIVATED, "start", model_key="M"))
        b = self.mapper.map_to_element(create_event(EventKind.ELEMENT_ACTIVATED, "start", model_key="N"))
        assert a != b

    def test_map_events_drops_empties(self):
        events = [
            create_event(EventKind.ELEMENT_ACTIVATED, "start", position=0),
            create_event(EventKind.VARIABLE_CREATED, None, None, position=1),
            create_event(EventKind.SEQUENCE_FLOW_TAKEN, "flow1", SEQUENCE_FLOW_ELEMENT_TYPE, position=2),
        ]
        assert list(self.mapper.map_events(events)) == [ElementRef("M", "start"), ElementRef("M", "flow1")]
