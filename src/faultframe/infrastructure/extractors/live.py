"""Live stack: entries for the frames currently executing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from faultframe.infrastructure.extractors._frames import entry_from_frame

if TYPE_CHECKING:
    from types import FrameType

    from faultframe.domain.model.raw_entry import RawStackEntry


def stack_from_frame(frame: FrameType | None) -> tuple[RawStackEntry, ...]:
    """Walk f_back from frame to the outermost caller.

    Args:
        frame: Innermost frame (usually sys._getframe() of the caller).

    Returns:
        Entries innermost first. Column is unknown for live frames.
    """
    entries: list[RawStackEntry] = []
    current = frame
    while current is not None:
        entries.append(entry_from_frame(current, current.f_lineno, None))
        current = current.f_back
    return tuple(entries)
