"""Source reader port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from faultframe.domain.model.outcomes import ReadOutcome


class SourceReader(Protocol):
    """Reads one source file. Never raises: failure is SourceUnavailable."""

    async def read(self, filename: str) -> ReadOutcome:
        """Read full text of filename.

        Args:
            filename: Absolute path as reported by the frame.

        Returns:
            SourceLoaded with the content, or SourceUnavailable with a reason.
        """
        ...
