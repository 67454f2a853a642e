"""Capture pipeline: error -> raw stack -> frames -> context -> event.

Orchestrates the stages. No exception escapes parse_error() or
parse_message(); anything unexpected degrades to a minimal record.
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

import structlog

from faultframe.application.services.assembler import (
    NO_MESSAGE,
    build_exception_record,
    collect_extra,
    fallback_event,
    prepare_frames_for_event,
    resolve_message,
    resolve_type_name,
    summary_message,
)
from faultframe.application.services.enricher import add_source_context
from faultframe.application.services.normalizer import normalize_stack
from faultframe.domain.model.configuration import ParserConfig
from faultframe.domain.model.records import EventRecord, ExceptionRecord
from faultframe.infrastructure.adapters.file_reader import AsyncFileReader
from faultframe.infrastructure.extractors.chained import default_extractor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from faultframe.domain.model.frame import NormalizedFrame
    from faultframe.domain.model.raw_entry import RawStackEntry
    from faultframe.domain.ports.source_reader import SourceReader
    from faultframe.domain.ports.stack_extractor import StackExtractor

logger = structlog.get_logger(__name__).bind(component="pipeline")


@cache
def default_config() -> ParserConfig:
    """Process-wide default configuration, built on first use."""
    return ParserConfig()


async def extract_stack_from_error(
    error: object,
    extractor: StackExtractor | None = None,
) -> tuple[RawStackEntry, ...]:
    """Raw stack entries of error, innermost first. Empty on any failure."""
    extractor = extractor or default_extractor()
    # BLE001: custom extractors may raise; no stack is not an error.
    try:
        return tuple(await extractor.extract(error))
    except Exception as exc:  # noqa: BLE001
        logger.debug("stack_extraction_failed", error_type=type(exc).__name__)
        return ()


async def parse_stack(
    stack: Sequence[RawStackEntry],
    config: ParserConfig,
    reader: SourceReader | None = None,
) -> tuple[NormalizedFrame, ...]:
    """Normalize entries and attach source context.

    Returns:
        Frames in the input order (innermost first).
    """
    frames = normalize_stack(stack, config)
    enrichment = await add_source_context(frames, config, reader or AsyncFileReader())
    return enrichment.frames


async def get_exception_from_error(
    error: object,
    config: ParserConfig,
    *,
    extractor: StackExtractor | None = None,
    reader: SourceReader | None = None,
) -> ExceptionRecord:
    """ExceptionRecord for a single error (no chaining).

    A traceback starts at the frame that caught the exception, so it never
    holds a capture entry point and capture markers apply only to stacks
    of error-like objects.
    """
    stack = await extract_stack_from_error(error, extractor)
    frames = await parse_stack(stack, config, reader)
    markers = () if isinstance(error, BaseException) else config.capture_markers
    return build_exception_record(
        resolve_type_name(error),
        resolve_message(error),
        frames,
        markers,
    )


def exception_chain(error: object) -> tuple[object, ...]:
    """error and its causes, oldest cause first.

    Follows __cause__, else __context__ unless __suppress_context__.
    Cycle-safe.
    """
    chain: list[object] = []
    seen: set[int] = set()
    current: object | None = error

    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(current)
        if not isinstance(current, BaseException):
            break
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__

    chain.reverse()
    return tuple(chain)


async def parse_error(
    error: object,
    config: ParserConfig | None = None,
    *,
    extractor: StackExtractor | None = None,
    reader: SourceReader | None = None,
) -> EventRecord:
    """Convert an exception or error-like object into an EventRecord.

    Never raises Exception. Worst case is a record with type and message
    but no frames.

    Args:
        error: Exception, or object with name/message/stack attributes.
        config: Parser configuration. None = default_config().
        extractor: Stack extractor. None = default_extractor().
        reader: Source reader. None = AsyncFileReader().

    Returns:
        EventRecord with one exception record (more with include_chained).
    """
    # BLE001: diagnostic capture must never fail the host.
    try:
        config = config or default_config()
        reader = reader or AsyncFileReader()
        type_name = resolve_type_name(error)

        members = exception_chain(error) if config.include_chained else (error,)
        exceptions = [
            await _exception_record(member, config, extractor=extractor, reader=reader)
            for member in members
        ]

        return EventRecord(
            message=summary_message(type_name, resolve_message(error)),
            exceptions=tuple(exceptions),
            extra=collect_extra(error, type_name, max_depth=config.extra_max_depth),
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("parse_error_fallback", error_type=type(exc).__name__)
        return fallback_event(error)


async def _exception_record(
    error: object,
    config: ParserConfig,
    *,
    extractor: StackExtractor | None,
    reader: SourceReader,
) -> ExceptionRecord:
    """get_exception_from_error(), degrading to a record without frames."""
    # BLE001: a failed frames step must not cost the event its extra.
    try:
        return await get_exception_from_error(error, config, extractor=extractor, reader=reader)
    except Exception as exc:  # noqa: BLE001
        logger.debug("exception_frames_failed", error_type=type(exc).__name__)
        return ExceptionRecord(type=resolve_type_name(error), value=resolve_message(error))


async def parse_message(
    message: str,
    config: ParserConfig | None = None,
    *,
    stack: Sequence[RawStackEntry] = (),
    reader: SourceReader | None = None,
) -> EventRecord:
    """EventRecord for a plain message, with the given live stack.

    Args:
        message: Message text.
        config: Parser configuration. None = default_config().
        stack: Entries innermost first (see stack_from_frame).
        reader: Source reader. None = AsyncFileReader().

    Returns:
        EventRecord with no exceptions and the stack as its frames.
    """
    text = message if isinstance(message, str) and message else NO_MESSAGE
    # BLE001: diagnostic capture must never fail the host.
    try:
        config = config or default_config()
        frames = await parse_stack(stack, config, reader)
        return EventRecord(
            message=text,
            exceptions=(),
            frames=prepare_frames_for_event(frames, config.capture_markers),
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("parse_message_fallback", error_type=type(exc).__name__)
        return EventRecord(message=text, exceptions=())
