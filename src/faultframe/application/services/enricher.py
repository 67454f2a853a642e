"""Source context enricher: attach surrounding source lines to in-app frames.

The only pipeline step with side effects (filesystem reads). Reads are
deduplicated, concurrent and best-effort: a failed read only means the
affected frames get no context.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from faultframe.application.services.snip import snip_line
from faultframe.domain.model.outcomes import (
    ContextStatus,
    Enrichment,
    SourceLoaded,
    SourceUnavailable,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from faultframe.domain.model.configuration import ParserConfig
    from faultframe.domain.model.frame import NormalizedFrame
    from faultframe.domain.model.outcomes import ReadOutcome
    from faultframe.domain.ports.source_reader import SourceReader

logger = structlog.get_logger(__name__).bind(component="source_context")


async def add_source_context(
    frames: Sequence[NormalizedFrame],
    config: ParserConfig,
    reader: SourceReader,
) -> Enrichment:
    """Attach pre_context/context_line/post_context to in-app frames.

    If the step fails as a whole (e.g. the runtime forbids file access
    altogether), frames are returned unmodified with status SKIPPED.

    Args:
        frames: Normalized frames, any order.
        config: Parser configuration (lines_of_context, read bound).
        reader: Source reader port.

    Returns:
        Enrichment with frames in the same order as given.
    """
    # BLE001: enrichment must never abort event capture.
    try:
        return await _enrich(frames, config, reader)
    except Exception as exc:  # noqa: BLE001
        logger.debug("enrichment_skipped", error_type=type(exc).__name__)
        return Enrichment(frames=tuple(frames), status=ContextStatus.SKIPPED)


def files_to_read(frames: Iterable[NormalizedFrame]) -> tuple[str, ...]:
    """Unique filenames of in-app frames, first-seen order."""
    return tuple(dict.fromkeys(frame.filename for frame in frames if frame.in_app and frame.filename))


async def read_source_files(
    filenames: Sequence[str],
    reader: SourceReader,
    *,
    limit: int,
) -> tuple[ReadOutcome, ...]:
    """Read all filenames concurrently, at most limit in flight.

    Waits for every read to settle. No retry, no cancellation of
    in-flight reads.

    Returns:
        One outcome per filename, same order.
    """
    if not filenames:
        return ()

    semaphore = asyncio.Semaphore(limit)

    async def _read(filename: str) -> ReadOutcome:
        async with semaphore:
            # BLE001: third-party readers may raise despite the port contract.
            try:
                return await reader.read(filename)
            except Exception as exc:  # noqa: BLE001
                return SourceUnavailable(filename=filename, reason=type(exc).__name__)

    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(_read(filename)) for filename in filenames]

    return tuple(task.result() for task in tasks)


def with_context(frame: NormalizedFrame, lines: Sequence[str], lines_of_context: int) -> NormalizedFrame:
    """New frame with context fields computed from the file's lines.

    Line number None/0 gives empty pre_context and no context_line.
    Line number past end of file gives no context_line.
    """
    lineno = frame.lineno or 0
    fault_index = max(lineno - 1, 0)

    pre_context = tuple(
        snip_line(line, 0) for line in lines[max(fault_index - lines_of_context, 0) : fault_index]
    )
    context_line = snip_line(lines[lineno - 1], frame.colno or 0) if 0 < lineno <= len(lines) else None
    post_context = tuple(snip_line(line, 0) for line in lines[lineno : lineno + lines_of_context])

    return replace(
        frame,
        pre_context=pre_context,
        context_line=context_line,
        post_context=post_context,
    )


async def _enrich(
    frames: Sequence[NormalizedFrame],
    config: ParserConfig,
    reader: SourceReader,
) -> Enrichment:
    filenames = files_to_read(frames)
    if not filenames:
        return Enrichment(frames=tuple(frames), status=ContextStatus.SKIPPED)

    outcomes = await read_source_files(filenames, reader, limit=config.max_concurrent_reads)

    # Per-capture source cache: filename -> lines. Unreadable files absent.
    sources: dict[str, list[str]] = {}
    unavailable: list[SourceUnavailable] = []
    for outcome in outcomes:
        match outcome:
            case SourceLoaded():
                sources[outcome.filename] = outcome.content.split("\n")
            case SourceUnavailable():
                logger.debug("source_unavailable", filename=outcome.filename, reason=outcome.reason)
                unavailable.append(outcome)

    enriched: list[NormalizedFrame] = []
    degraded = False
    for frame in frames:
        lines = sources.get(frame.filename) if frame.in_app else None
        if lines is None:
            enriched.append(frame)
            continue
        # BLE001: one malformed frame must not cost the others their context.
        try:
            enriched.append(with_context(frame, lines, config.lines_of_context))
        except Exception as exc:  # noqa: BLE001
            logger.debug("frame_context_failed", filename=frame.filename, error_type=type(exc).__name__)
            degraded = True
            enriched.append(frame)

    status = ContextStatus.PARTIAL if unavailable or degraded else ContextStatus.COMPLETE
    return Enrichment(frames=tuple(enriched), status=status, unavailable=tuple(unavailable))
