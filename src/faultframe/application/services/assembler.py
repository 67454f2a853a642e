"""Event assembler: frames + error metadata -> records.

Pure reducer over the frame sequence. Name/message resolution degrades
to placeholders instead of raising.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from faultframe.domain.model.records import EventRecord, ExceptionRecord
from faultframe.infrastructure.sanitize import to_plain_mapping

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from faultframe.domain.model.frame import NormalizedFrame

# Type label for values whose type cannot be resolved
UNKNOWN_TYPE: Final = "Error"

# Summary placeholder for empty messages
NO_MESSAGE: Final = "<no message>"

# Attributes never copied into extra
RESERVED_ATTRIBUTES: Final = frozenset({"name", "message", "stack", "domain"})


def resolve_type_name(error: object) -> str:
    """Type label of error.

    Exceptions use their class name (ImportError.name and friends are
    data, not type names). Other error-like objects use a non-empty
    string "name" attribute, else their class name.
    """
    # BLE001: "name" may be a property that raises.
    try:
        if not isinstance(error, BaseException):
            name = getattr(error, "name", None)
            if isinstance(name, str) and name:
                return name
        return type(error).__name__ or UNKNOWN_TYPE
    except Exception:  # noqa: BLE001
        return UNKNOWN_TYPE


def resolve_message(error: object) -> str:
    """Message of error: str() for exceptions, "message" attribute otherwise."""
    # BLE001: user __str__ / properties may raise.
    try:
        if isinstance(error, BaseException):
            return str(error)
        message = getattr(error, "message", None)
        return message if isinstance(message, str) else ""
    except Exception:  # noqa: BLE001
        return ""


def summary_message(type_name: str, message: str) -> str:
    """Event summary "<Type>: <message>"."""
    return f"{type_name}: {message or NO_MESSAGE}"


def prepare_frames_for_event(
    frames: Sequence[NormalizedFrame],
    capture_markers: tuple[str, ...],
) -> tuple[NormalizedFrame, ...]:
    """Presentation order: outermost caller first, fault frame last.

    Input is innermost first. If its first frame is one of the library's
    own capture entry points, that frame is dropped.
    """
    if not frames:
        return ()

    local = list(frames)
    if any(marker in local[0].function for marker in capture_markers):
        local = local[1:]

    local.reverse()
    return tuple(local)


def collect_extra(
    error: object,
    type_name: str,
    *,
    max_depth: int,
) -> Mapping[str, Mapping[str, object]]:
    """Instance attributes of error keyed by type name.

    Reserved attributes are skipped, values sanitized to plain data.
    Empty mapping if nothing remains.
    """
    # BLE001: vars() fails for __slots__ objects; exotic __dict__ may raise.
    try:
        attributes = {
            key: value
            for key, value in vars(error).items()
            if key not in RESERVED_ATTRIBUTES
        }
        plain = to_plain_mapping(attributes, max_depth=max_depth)
    except Exception:  # noqa: BLE001
        return MappingProxyType({})

    if not plain:
        return MappingProxyType({})
    return MappingProxyType({type_name: MappingProxyType(plain)})


def build_exception_record(
    type_name: str,
    message: str,
    frames: Sequence[NormalizedFrame],
    capture_markers: tuple[str, ...],
) -> ExceptionRecord:
    """ExceptionRecord with frames in presentation order."""
    return ExceptionRecord(
        type=type_name,
        value=message,
        frames=prepare_frames_for_event(frames, capture_markers),
    )


def fallback_event(error: object) -> EventRecord:
    """Minimal valid event: type and message, no frames."""
    type_name = resolve_type_name(error)
    message = resolve_message(error)
    return EventRecord(
        message=summary_message(type_name, message),
        exceptions=(ExceptionRecord(type=type_name, value=message),),
    )
