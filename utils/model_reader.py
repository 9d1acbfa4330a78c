# utils/model_reader.py
# This file is part of Procov - Process Model Test Coverage
#
# BPMN 2.0 XML reader producing coverable model definitions

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, List, Union

from model.definition import ModelDefinition
from utils.logger import get_logger

# Local names of BPMN flow nodes; each one is a coverable element
FLOW_NODE_TAGS = frozenset(
    {
        "startEvent",
        "endEvent",
        "intermediateCatchEvent",
        "intermediateThrowEvent",
        "boundaryEvent",
        "task",
        "serviceTask",
        "userTask",
        "manualTask",
        "scriptTask",
        "businessRuleTask",
        "sendTask",
        "receiveTask",
        "callActivity",
        "subProcess",
        "transaction",
        "adHocSubProcess",
        "exclusiveGateway",
        "inclusiveGateway",
        "parallelGateway",
        "eventBasedGateway",
        "complexGateway",
    }
)
SEQUENCE_FLOW_TAG = "sequenceFlow"
PROCESS_TAG = "process"

# Elements whose children belong to the same model
CONTAINER_TAGS = frozenset({"subProcess", "transaction", "adHocSubProcess"})


class ModelFormatError(Exception):
    """Exception raised when a model file cannot be read or is not valid BPMN."""

    pass


def _local_name(tag: str) -> str:
    """Strip the namespace from an ElementTree tag."""
    return tag.rsplit("}", 1)[-1]


def _coverable_ids(container: ET.Element) -> Iterator[str]:
    """Yield ids of flow nodes and sequence flows, descending into sub-processes."""
    for child in container:
        name = _local_name(child.tag)
        if name in FLOW_NODE_TAGS or name == SEQUENCE_FLOW_TAG:
            element_id = child.get("id")
            if not element_id:
                raise ModelFormatError(f"<{name}> element without id")
            yield element_id
        if name in CONTAINER_TAGS:
            yield from _coverable_ids(child)


def parse_bpmn(text: str) -> List[ModelDefinition]:
    """Parse BPMN XML text into one ModelDefinition per process.

    The process id becomes the model key. Coverable elements are all flow
    nodes (including the content of embedded sub-processes) and all
    sequence flows, in document order.

    Args:
        text: BPMN 2.0 XML document

    Returns:
        Model definitions in document order

    Raises:
        ModelFormatError: If the XML is malformed or declares no process
    """
    logger = get_logger()

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ModelFormatError(f"Malformed BPMN XML: {e}") from e

    models = []
    for process in root.iter():
        if _local_name(process.tag) != PROCESS_TAG:
            continue
        key = process.get("id")
        if not key:
            raise ModelFormatError("<process> element without id")
        model = ModelDefinition(key, _coverable_ids(process), name=process.get("name"))
        logger.debug(f"Read model {model}")
        models.append(model)

    if not models:
        raise ModelFormatError("No process definition found")
    return models


def read_bpmn(filepath: Union[str, Path]) -> List[ModelDefinition]:
    """Read a BPMN file into model definitions.

    Args:
        filepath: Path to the .bpmn file

    Raises:
        ModelFormatError: If the file cannot be read or parsed
    """
    path = Path(filepath)
    get_logger().debug(f"Reading model file: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ModelFormatError(f"Model file not found: {filepath}")
    except OSError as e:
        raise ModelFormatError(f"Could not read model file {filepath}: {e}")
    return parse_bpmn(text)
