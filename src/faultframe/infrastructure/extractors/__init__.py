"""Stack extractors: error-like value -> RawStackEntry tuple."""

from faultframe.infrastructure.extractors.chained import ChainedExtractor, default_extractor
from faultframe.infrastructure.extractors.formatted import (
    FormattedStackExtractor,
    parse_formatted_stack,
)
from faultframe.infrastructure.extractors.live import stack_from_frame
from faultframe.infrastructure.extractors.raw_entries import RawEntriesExtractor
from faultframe.infrastructure.extractors.traceback_extractor import TracebackExtractor

__all__ = [
    "ChainedExtractor",
    "FormattedStackExtractor",
    "RawEntriesExtractor",
    "TracebackExtractor",
    "default_extractor",
    "parse_formatted_stack",
    "stack_from_frame",
]
