# tests/conftest.py
# This file is part of Procov - Process Model Test Coverage
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for process coverage tests.

The configuration handles:
- Python path setup for module imports
- Test environment initialization
- Common fixtures for models, event logs and collectors
"""

import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify module availability before any test runs.

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import core
        import model
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


SAMPLE_BPMN = """<?xml version="1.0" encoding="UTF-8"?>
<bpmn:definitions xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" id="Definitions_1">
  <bpmn:process id="order" name="Order handling" isExecutable="true">
    <bpmn:startEvent id="start"/>
    <bpmn:sequenceFlow id="flow1" sourceRef="start" targetRef="check"/>
    <bpmn:exclusiveGateway id="check"/>
    <bpmn:sequenceFlow id="flow2" sourceRef="check" targetRef="ship"/>
    <bpmn:sequenceFlow id="flow3" sourceRef="check" targetRef="reject"/>
    <bpmn:serviceTask id="ship"/>
    <bpmn:userTask id="reject"/>
    <bpmn:sequenceFlow id="flow4" sourceRef="ship" targetRef="end"/>
    <bpmn:sequenceFlow id="flow5" sourceRef="reject" targetRef="end"/>
    <bpmn:endEvent id="end"/>
  </bpmn:process>
</bpmn:definitions>
"""


@pytest.fixture
def sample_bpmn():
    """Provide a single-process BPMN document with 10 coverable elements."""
    return SAMPLE_BPMN


@pytest.fixture
def order_model():
    """Provide model M = {start, task1, end}."""
    from model.definition import ModelDefinition

    return ModelDefinition("M", ["start", "task1", "end"])


@pytest.fixture
def billing_model():
    """Provide model N = {receive, bill}."""
    from model.definition import ModelDefinition

    return ModelDefinition("N", ["receive", "bill"])


@pytest.fixture
def empty_model():
    """Provide a model without coverable elements."""
    from model.definition import ModelDefinition

    return ModelDefinition("E", [])


@pytest.fixture
def event_log():
    from model.event_log import EventLog

    return EventLog()


@pytest.fixture
def index(order_model, billing_model, empty_model):
    from model.element_index import ModelElementIndex

    return ModelElementIndex.of([order_model, billing_model, empty_model])


@pytest.fixture
def make_collector(index, event_log):
    """Factory for collectors over the shared index and event log."""
    from core.collector import CoverageCollector

    def _make(**kwargs):
        return CoverageCollector(index, event_log.cursor(), **kwargs)

    return _make


@pytest.fixture
def reach(event_log):
    """Append ELEMENT_ACTIVATED events for (model_key, element_id) pairs."""
    from model.event import EventKind

    def _reach(model_key, *element_ids):
        for element_id in element_ids:
            event_log.record(EventKind.ELEMENT_ACTIVATED, model_key, element_id, "TASK")

    return _reach
