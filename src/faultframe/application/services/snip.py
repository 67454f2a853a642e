"""Bounded-length source lines."""

from __future__ import annotations

from typing import Final

# Lines up to this length are kept whole
SNIP_THRESHOLD: Final = 150
# Length of the kept window for longer lines
SNIP_WINDOW: Final = 140
# Characters kept before the target column
SNIP_LEAD: Final = 60
# Window edges closer than this to the line edges snap to them
SNIP_SLACK: Final = 5
SNIP_MARKER: Final = "{snip}"


def snip_line(line: str, colno: int) -> str:
    """Cut a long line to a window around colno.

    Minified or generated sources can have megabyte-long lines; only a
    window around the column of interest is kept. Cut edges are marked
    with "{snip}".

    Args:
        line: Source line.
        colno: Column of interest (0-based). 0 keeps the line start.

    Returns:
        line unchanged if short enough, else the marked window.
    """
    length = len(line)
    if length <= SNIP_THRESHOLD:
        return line

    colno = min(max(colno, 0), length)

    start = max(colno - SNIP_LEAD, 0)
    if start < SNIP_SLACK:
        start = 0

    end = min(start + SNIP_WINDOW, length)
    if end > length - SNIP_SLACK:
        end = length
    if end == length:
        start = max(end - SNIP_WINDOW, 0)

    snipped = line[start:end]
    if start > 0:
        snipped = f"{SNIP_MARKER} {snipped}"
    if end < length:
        snipped = f"{snipped} {SNIP_MARKER}"
    return snipped
