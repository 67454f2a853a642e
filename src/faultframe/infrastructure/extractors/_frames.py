"""Shared helpers: interpreter frame -> RawStackEntry fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

from faultframe.domain.model.raw_entry import RawStackEntry

if TYPE_CHECKING:
    from types import FrameType

# First positional parameter names that identify a receiver
_RECEIVER_NAMES = ("self", "cls")


def is_pseudo_filename(filename: str | None) -> bool:
    """True for interpreter pseudo filenames: <frozen ...>, <string>, <stdin>."""
    return filename is not None and filename.startswith("<") and filename.endswith(">")


def receiver_type_name(frame: FrameType) -> str | None:
    """Class name of the frame's self/cls argument.

    Returns None if the frame has no receiver or it cannot be resolved.
    """
    # BLE001: f_locals access and exotic receivers may raise anything;
    # an unresolvable type name degrades to None.
    try:
        code = frame.f_code
        if code.co_argcount == 0:
            return None
        first = code.co_varnames[0]
        if first not in _RECEIVER_NAMES:
            return None
        receiver = frame.f_locals.get(first)
        if receiver is None:
            return None
        if first == "cls" and isinstance(receiver, type):
            return receiver.__name__
        return type(receiver).__name__
    except Exception:  # noqa: BLE001
        return None


def entry_from_frame(frame: FrameType, lineno: int | None, colno: int | None) -> RawStackEntry:
    """Build RawStackEntry for one interpreter frame."""
    code = frame.f_code
    filename = code.co_filename or None
    name = code.co_name or None
    return RawStackEntry(
        filename=filename,
        lineno=_non_negative(lineno),
        colno=_non_negative(colno),
        function_name=name,
        type_name=receiver_type_name(frame),
        method_name=name,
        is_native=is_pseudo_filename(filename),
    )


def _non_negative(value: int | None) -> int | None:
    """Interpreter reports -1/None for unknown positions."""
    if not isinstance(value, int) or value < 0:
        return None
    return value
