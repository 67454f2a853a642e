"""Domain model: immutable value objects of the capture pipeline."""

from faultframe.domain.model.configuration import ParserConfig, PathHeuristic
from faultframe.domain.model.frame import NormalizedFrame
from faultframe.domain.model.outcomes import (
    ContextStatus,
    Enrichment,
    ReadOutcome,
    SourceLoaded,
    SourceUnavailable,
)
from faultframe.domain.model.raw_entry import RawStackEntry
from faultframe.domain.model.records import EventRecord, ExceptionRecord

__all__ = [
    "ContextStatus",
    "Enrichment",
    "EventRecord",
    "ExceptionRecord",
    "NormalizedFrame",
    "ParserConfig",
    "PathHeuristic",
    "RawStackEntry",
    "ReadOutcome",
    "SourceLoaded",
    "SourceUnavailable",
]
