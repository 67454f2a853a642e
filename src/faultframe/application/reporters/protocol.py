"""Reporter protocol: contract for all reporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from faultframe.domain.model.records import EventRecord


class ReporterProtocol(Protocol):
    """Protocol for event reporters.

    Output is str, not print(). Caller decides destination.
    """

    def report(self, event: EventRecord) -> str:
        """Format event as string.

        Args:
            event: Event to format.

        Returns:
            Formatted string representation.
        """
        ...
