"""Output records: ExceptionRecord and EventRecord."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from faultframe.domain.model.frame import NormalizedFrame

_EMPTY_EXTRA: Mapping[str, Mapping[str, object]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ExceptionRecord:
    """One exception: type, message and frames.

    Invariant: frames are outermost caller first, fault frame last.
    """

    type: str
    value: str
    frames: tuple[NormalizedFrame, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.type:
            raise ValueError("type must be non-empty")

    @property
    def fault_frame(self) -> NormalizedFrame | None:
        """Frame where the fault occurred (last), None if no frames."""
        return self.frames[-1] if self.frames else None

    def to_dict(self) -> dict[str, object]:
        """Wire representation."""
        return {
            "type": self.type,
            "value": self.value,
            "stacktrace": {"frames": [frame.to_dict() for frame in self.frames]},
        }


@dataclass(frozen=True, slots=True)
class EventRecord:
    """Top-level diagnostic record handed to the transport layer.

    Attributes:
        message: Summary "<Type>: <message>".
        exceptions: Exception records, normally one. With chaining enabled,
            oldest cause first and the raised exception last.
        extra: Error attributes keyed by error type name. Plain data only.
        frames: Stack of a message event (no exception), fault frame last.
    """

    message: str
    exceptions: tuple[ExceptionRecord, ...]
    extra: Mapping[str, Mapping[str, object]] = field(default=_EMPTY_EXTRA)
    frames: tuple[NormalizedFrame, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must be non-empty")

    def to_dict(self) -> dict[str, object]:
        """Wire representation. "exception", "stacktrace" and "extra" are omitted when empty."""
        data: dict[str, object] = {"message": self.message}
        if self.exceptions:
            data["exception"] = {"values": [exc.to_dict() for exc in self.exceptions]}
        if self.frames:
            data["stacktrace"] = {"frames": [frame.to_dict() for frame in self.frames]}
        if self.extra:
            data["extra"] = {key: dict(value) for key, value in self.extra.items()}
        return data
