"""Formatted traceback extractor: stack string -> RawStackEntry tuple.

Handles error-like objects whose "stack" attribute holds the text
produced by traceback.format_exception() (e.g. errors shipped from a
worker process as plain data).
"""

from __future__ import annotations

import re
from typing import Final

from faultframe.domain.model.raw_entry import RawStackEntry
from faultframe.infrastructure.extractors._frames import is_pseudo_filename

_BLOCK_HEADER: Final = "Traceback (most recent call last):"

# File "/app/main.py", line 10, in handler
# Exception group members are indented behind "|" bars
_FRAME_LINE = re.compile(
    r'^(?:\s*\|)*\s*File "(?P<filename>[^"]*)", line (?P<lineno>\d+)(?:, in (?P<function>.+?))?\s*$'
)


class FormattedStackExtractor:
    """Parses a formatted Python traceback held in error.stack."""

    async def extract(self, error: object) -> tuple[RawStackEntry, ...]:
        """Parse error.stack. Empty if it is not a string."""
        stack = getattr(error, "stack", None)
        if not isinstance(stack, str):
            return ()
        return parse_formatted_stack(stack)


def parse_formatted_stack(text: str) -> tuple[RawStackEntry, ...]:
    """Parse the last traceback block of text.

    Chained exceptions print one block per exception; the last block
    belongs to the exception that was actually raised.

    Returns:
        Entries innermost first. Columns are not recoverable from text.
    """
    _, _, block = text.rpartition(_BLOCK_HEADER)

    entries: list[RawStackEntry] = []
    for line in block.splitlines():
        match = _FRAME_LINE.match(line)
        if match is None:
            continue
        filename = match.group("filename") or None
        function = match.group("function")
        entries.append(
            RawStackEntry(
                filename=filename,
                lineno=int(match.group("lineno")),
                function_name=function,
                method_name=function,
                is_native=is_pseudo_filename(filename),
            )
        )

    entries.reverse()
    return tuple(entries)
