"""Chained extractor: first extractor with a non-empty result wins."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from faultframe.infrastructure.extractors.formatted import FormattedStackExtractor
from faultframe.infrastructure.extractors.raw_entries import RawEntriesExtractor
from faultframe.infrastructure.extractors.traceback_extractor import TracebackExtractor

if TYPE_CHECKING:
    from faultframe.domain.model.raw_entry import RawStackEntry
    from faultframe.domain.ports.stack_extractor import StackExtractor

logger = structlog.get_logger(__name__).bind(component="stack_extractor")


class ChainedExtractor:
    """Tries extractors in order. Never raises.

    A failing extractor counts as "no stack" and the next one is tried.
    """

    __slots__ = ("_extractors",)

    def __init__(self, *extractors: StackExtractor) -> None:
        """Initialize with extractors in priority order.

        Raises:
            ValueError: No extractors given.
        """
        if not extractors:
            raise ValueError("at least one extractor required")
        self._extractors = extractors

    async def extract(self, error: object) -> tuple[RawStackEntry, ...]:
        """Entries from the first extractor that finds any, else empty."""
        for extractor in self._extractors:
            # BLE001: extractor failure must not fail the capture.
            try:
                entries = await extractor.extract(error)
            except Exception as exc:  # noqa: BLE001
                logger.debug(
                    "extractor_failed",
                    extractor=type(extractor).__name__,
                    error_type=type(exc).__name__,
                )
                continue
            if entries:
                return tuple(entries)
        return ()


def default_extractor() -> ChainedExtractor:
    """Traceback first, then pre-parsed entries, then formatted text."""
    return ChainedExtractor(
        TracebackExtractor(),
        RawEntriesExtractor(),
        FormattedStackExtractor(),
    )
