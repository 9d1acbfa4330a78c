# utils/trace_reader.py
# This file is part of Procov - Process Model Test Coverage
#
# CSV trace file reader for recorded execution events

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from model.event import EventKind, ExecutionEvent
from utils.logger import get_logger

REQUIRED_HEADERS = frozenset({"test", "kind", "model_key"})


class TraceFormatError(Exception):
    """Exception raised when trace files contain invalid format or data."""

    pass


@dataclass(frozen=True)
class TraceRecord:
    """One recorded execution event, attributed to the test that produced it.

    Attributes:
        test: Name of the test method that was running
        kind: Kind of engine record
        model_key: Key of the originating model
        element_id: Element the record refers to, if any
        element_type: BPMN element type, if any
        position: Explicit log position, or None to append at the tail
    """

    test: str
    kind: EventKind
    model_key: str
    element_id: Optional[str] = None
    element_type: Optional[str] = None
    position: Optional[int] = None

    def to_event(self, tail: int) -> ExecutionEvent:
        """Build the execution event, positioned right after `tail` unless explicit."""
        position = self.position if self.position is not None else tail + 1
        return ExecutionEvent(position, self.kind, self.model_key, self.element_id, self.element_type)


def read_trace(filepath: str) -> Iterator[TraceRecord]:
    """Read recorded execution events from a CSV trace file.

    Expected CSV format (element_id, element_type and position optional):
        test,kind,model_key,element_id,element_type
        test_happy_path,ELEMENT_ACTIVATED,order,start,START_EVENT
        test_happy_path,SEQUENCE_FLOW_TAKEN,order,flow1,SEQUENCE_FLOW

    Lines starting with '#' are comments.

    Args:
        filepath: Path to the CSV trace file

    Yields:
        TraceRecord: Parsed records in file order

    Raises:
        TraceFormatError: If file format is invalid or records cannot be parsed
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise TraceFormatError(f"Trace file not found: {filepath}")

    logger.debug(f"Reading trace file: {filepath}")

    try:
        with open(path, "r", newline="", encoding="utf-8") as file:
            lines = (line for line in file if not line.lstrip().startswith("#"))
            reader = csv.DictReader(lines)

            missing = REQUIRED_HEADERS - set(reader.fieldnames or [])
            if missing:
                raise TraceFormatError(f"Missing required headers: {sorted(missing)}")

            for row_num, row in enumerate(reader, start=2):
                try:
                    record = _parse_record_row(row)
                except (ValueError, KeyError) as e:
                    raise TraceFormatError(f"Error parsing row {row_num}: {e}")
                logger.debug(f"Parsed {record.kind.name} for {record.test} from row {row_num}")
                yield record

    except TraceFormatError:
        raise
    except OSError as e:
        raise TraceFormatError(f"Error reading trace file: {e}")


def validate_trace_file(filepath: str) -> int:
    """Validate trace file format by parsing every record.

    Args:
        filepath: Path to the trace file to validate

    Returns:
        Number of records in the file

    Raises:
        TraceFormatError: If validation fails
    """
    logger = get_logger()
    logger.debug(f"Validating trace file: {filepath}")

    try:
        count = sum(1 for _ in read_trace(filepath))
    except TraceFormatError as e:
        logger.debug(f"Trace validation failed: {e}")
        raise

    logger.debug(f"Trace validation successful: {count} records")
    return count


def _parse_record_row(row: dict) -> TraceRecord:
    """Parse a single CSV row into a TraceRecord.

    Raises:
        ValueError: If a field is missing or invalid
    """
    test = _required(row, "test")
    model_key = _required(row, "model_key")
    kind = EventKind.parse(_required(row, "kind"))

    position_str = _optional(row, "position")
    position = None
    if position_str is not None:
        try:
            position = int(position_str)
        except ValueError:
            raise ValueError(f"Invalid position: {position_str!r}") from None

    return TraceRecord(
        test=test,
        kind=kind,
        model_key=model_key,
        element_id=_optional(row, "element_id"),
        element_type=_optional(row, "element_type"),
        position=position,
    )


def _required(row: dict, column: str) -> str:
    value = _optional(row, column)
    if value is None:
        raise ValueError(f"Empty {column} field")
    return value


def _optional(row: dict, column: str) -> Optional[str]:
    value = (row.get(column) or "").strip()
    return value or None
