"""Traceback extractor: BaseException.__traceback__ -> RawStackEntry tuple."""

from __future__ import annotations

from itertools import islice
from types import TracebackType
from typing import TYPE_CHECKING

from faultframe.infrastructure.extractors._frames import entry_from_frame

if TYPE_CHECKING:
    from collections.abc import Iterator

    from faultframe.domain.model.raw_entry import RawStackEntry


class TracebackExtractor:
    """Reads the traceback attached to a raised exception.

    Traceback chain runs outermost -> innermost (tb_next), so entries are
    reversed to innermost first.
    """

    async def extract(self, error: object) -> tuple[RawStackEntry, ...]:
        """Extract entries from error.__traceback__. Empty if none attached."""
        tb = getattr(error, "__traceback__", None)
        if not isinstance(tb, TracebackType):
            return ()

        entries = [
            entry_from_frame(item.tb_frame, *_position(item)) for item in _walk(tb)
        ]
        entries.reverse()
        return tuple(entries)


def _walk(tb: TracebackType) -> Iterator[TracebackType]:
    """Iterate traceback chain, outermost first."""
    current: TracebackType | None = tb
    while current is not None:
        yield current
        current = current.tb_next


def _position(tb: TracebackType) -> tuple[int | None, int | None]:
    """Line and 0-based column of the instruction that was executing.

    Column comes from the code position table; None when unavailable
    (python -X no_debug_ranges, synthetic code objects).
    """
    lineno = tb.tb_lineno
    if tb.tb_lasti < 0:
        return lineno, None

    # Each code unit is 2 bytes; co_positions yields one entry per unit
    position = next(islice(tb.tb_frame.f_code.co_positions(), tb.tb_lasti // 2, None), None)
    if position is None:
        return lineno, None

    start_line, _end_line, col, _end_col = position
    if lineno is None:
        lineno = start_line
    return lineno, col
