"""Engine-level call site, as reported by a stack extractor."""

from __future__ import annotations

import os
from dataclasses import dataclass

from faultframe.domain.exceptions import ConversionError


@dataclass(frozen=True, slots=True)
class RawStackEntry:
    """One call site reported by the interpreter.

    Produced once per capture, discarded after normalization.

    Attributes:
        filename: Absolute or pseudo filename. None for frames without one.
            os.PathLike values are converted to str.
        lineno: Line number (1-based). None if unknown.
        colno: Column number (0-based). None if unknown.
        function_name: Reported function name. None if unknown.
        type_name: Class of the receiver (self/cls). None if unresolvable.
        method_name: Method name on the receiver. None if unresolvable.
        is_native: Frame belongs to interpreter internals (frozen modules,
            exec'd strings).
    """

    filename: str | None
    lineno: int | None
    colno: int | None = None
    function_name: str | None = None
    type_name: str | None = None
    method_name: str | None = None
    is_native: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if isinstance(self.filename, os.PathLike):
            object.__setattr__(self, "filename", os.fspath(self.filename))
        if self.filename is not None and not isinstance(self.filename, str):
            raise ConversionError(expected="str, os.PathLike or None", got=type(self.filename))
        if self.lineno is not None and self.lineno < 0:
            raise ValueError(f"lineno must be >= 0, got {self.lineno}")
        if self.colno is not None and self.colno < 0:
            raise ValueError(f"colno must be >= 0, got {self.colno}")
