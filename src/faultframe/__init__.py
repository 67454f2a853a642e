"""faultframe - turn exceptions into structured, transmittable diagnostic events."""

__version__ = "0.1.0"

from faultframe.application.services.pipeline import (
    extract_stack_from_error,
    get_exception_from_error,
    parse_error,
    parse_message,
    parse_stack,
)
from faultframe.domain.model.configuration import ParserConfig, PathHeuristic
from faultframe.domain.model.frame import NormalizedFrame
from faultframe.domain.model.raw_entry import RawStackEntry
from faultframe.domain.model.records import EventRecord, ExceptionRecord
from faultframe.presentation.api.capture import capture_exception, capture_message

__all__ = [
    "EventRecord",
    "ExceptionRecord",
    "NormalizedFrame",
    "ParserConfig",
    "PathHeuristic",
    "RawStackEntry",
    "__version__",
    "capture_exception",
    "capture_message",
    "extract_stack_from_error",
    "get_exception_from_error",
    "parse_error",
    "parse_message",
    "parse_stack",
]
