"""Synchronous capture entry points.

For hosts without a running event loop (sys.excepthook, WSGI handlers,
scripts). Inside a running loop the pipeline runs on a worker thread
with its own loop, so the caller's loop is never re-entered.
"""

from __future__ import annotations

import asyncio
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

import structlog

from faultframe.application.services.assembler import NO_MESSAGE, fallback_event
from faultframe.application.services.pipeline import parse_error, parse_message
from faultframe.domain.model.records import EventRecord
from faultframe.infrastructure.extractors.live import stack_from_frame

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from faultframe.domain.model.configuration import ParserConfig

logger = structlog.get_logger(__name__).bind(component="capture")


def capture_exception(
    error: object | None = None,
    config: ParserConfig | None = None,
) -> EventRecord:
    """Build the EventRecord for error. Never raises Exception.

    Args:
        error: Exception or error-like object. None = exception currently
            being handled (sys.exception()).
        config: Parser configuration. None = default configuration.
    """
    if error is None:
        error = sys.exception()
    # BLE001: diagnostic capture must never fail the host.
    try:
        return _run(parse_error(error, config))
    except Exception as exc:  # noqa: BLE001
        logger.debug("capture_exception_fallback", error_type=type(exc).__name__)
        return fallback_event(error)


def capture_message(message: str, config: ParserConfig | None = None) -> EventRecord:
    """Build a message EventRecord carrying the caller's stack.

    The capture_message frame itself is dropped by the capture-marker rule.
    """
    # BLE001: diagnostic capture must never fail the host.
    try:
        stack = stack_from_frame(sys._getframe())  # noqa: SLF001
        return _run(parse_message(message, config, stack=stack))
    except Exception as exc:  # noqa: BLE001
        logger.debug("capture_message_fallback", error_type=type(exc).__name__)
        return EventRecord(message=message if isinstance(message, str) and message else NO_MESSAGE, exceptions=())


def _run(coro: Coroutine[object, object, EventRecord]) -> EventRecord:
    """Run coroutine to completion from synchronous code."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="faultframe") as executor:
        return executor.submit(asyncio.run, coro).result()
