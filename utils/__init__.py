# utils/__init__.py
# This file is part of Procov - Process Model Test Coverage
#
# Utility module exports

from .trace_reader import (
    read_trace,
    validate_trace_file,
    TraceRecord,
    TraceFormatError,
)
from .model_reader import read_bpmn, parse_bpmn, ModelFormatError
from .settings import CoverageSettings

__all__ = [
    "read_trace",
    "validate_trace_file",
    "TraceRecord",
    "TraceFormatError",
    "read_bpmn",
    "parse_bpmn",
    "ModelFormatError",
    "CoverageSettings",
]
