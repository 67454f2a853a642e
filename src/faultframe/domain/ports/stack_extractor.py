"""Stack extractor port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from faultframe.domain.model.raw_entry import RawStackEntry


class StackExtractor(Protocol):
    """Turns an error-like value into raw stack entries.

    Isolates the interpreter's stack representation from the rest of
    the pipeline: structured entries out, never a raw string.
    """

    async def extract(self, error: object) -> tuple[RawStackEntry, ...]:
        """Extract stack entries, innermost call first.

        Args:
            error: Exception or error-like object.

        Returns:
            Entries innermost first. Empty if no stack is available.

        Raises:
            StackExtractionError: Value has a stack this extractor cannot read.
        """
        ...
