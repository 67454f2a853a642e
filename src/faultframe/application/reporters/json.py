"""JSON reporter: EventRecord -> JSON string."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from faultframe.domain.model.records import EventRecord


class JsonReporter:
    """JSON reporter: the wire representation of the event."""

    def __init__(self, *, indent: int | None = 2, sort_keys: bool = False) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
            sort_keys: Sort object keys (stable diffs).
        """
        self._indent = indent
        self._sort_keys = sort_keys

    def report(self, event: EventRecord) -> str:
        """Format event as JSON string."""
        return json.dumps(event.to_dict(), indent=self._indent, sort_keys=self._sort_keys)
