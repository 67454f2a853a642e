"""Normalized stack frame value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# Function name used when neither a name nor Type.method can be resolved
ANONYMOUS: Final = "<anonymous>"


@dataclass(frozen=True, slots=True)
class NormalizedFrame:
    """Frame as it travels through the rest of the pipeline.

    Context fields are None until the source context enricher derives a
    new frame with them set. They are only ever set on in-app frames whose
    source file was read.

    Attributes:
        filename: Source filename, "" when the interpreter gave none.
        lineno: Line number (1-based), None if unknown.
        colno: Column number (0-based), None if unknown.
        function: Function name, ANONYMOUS when unresolvable.
        module: Module name derived from filename, None without filename.
        in_app: Frame belongs to the application being diagnosed.
        pre_context: Source lines before the fault line.
        context_line: The fault line itself.
        post_context: Source lines after the fault line.
    """

    filename: str
    lineno: int | None
    colno: int | None
    function: str = ANONYMOUS
    module: str | None = None
    in_app: bool = False
    pre_context: tuple[str, ...] | None = None
    context_line: str | None = None
    post_context: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.function:
            raise ValueError("function must be non-empty (use ANONYMOUS)")
        if self.in_app and not self.filename:
            raise ValueError("in_app frame must have a filename")

    @property
    def has_context(self) -> bool:
        """Source context was attached."""
        return self.pre_context is not None or self.post_context is not None

    def to_dict(self) -> dict[str, object]:
        """Wire representation. Keys with None values are omitted."""
        data: dict[str, object] = {
            "filename": self.filename,
            "function": self.function,
            "in_app": self.in_app,
        }
        if self.lineno is not None:
            data["lineno"] = self.lineno
        if self.colno is not None:
            data["colno"] = self.colno
        if self.module is not None:
            data["module"] = self.module
        if self.pre_context is not None:
            data["pre_context"] = list(self.pre_context)
        if self.context_line is not None:
            data["context_line"] = self.context_line
        if self.post_context is not None:
            data["post_context"] = list(self.post_context)
        return data
