"""Frame normalizer: RawStackEntry -> NormalizedFrame.

No I/O. Total: every entry yields exactly one frame, never an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from faultframe.application.services.module_namer import has_dependency_segment, module_name
from faultframe.domain.model.frame import ANONYMOUS, NormalizedFrame

if TYPE_CHECKING:
    from collections.abc import Iterable

    from faultframe.domain.model.configuration import ParserConfig, PathHeuristic
    from faultframe.domain.model.raw_entry import RawStackEntry

logger = structlog.get_logger(__name__).bind(component="normalizer")

# Stand-in for an entry that could not be normalized
UNKNOWN_FRAME = NormalizedFrame(filename="", lineno=None, colno=None, function=ANONYMOUS)


def normalize_stack(
    entries: Iterable[RawStackEntry],
    config: ParserConfig,
) -> tuple[NormalizedFrame, ...]:
    """Normalize entries, preserving order (innermost first).

    An entry that cannot be normalized becomes UNKNOWN_FRAME, so the
    frame count always equals the entry count.
    """
    frames: list[NormalizedFrame] = []
    for entry in entries:
        # BLE001: one malformed entry must not cost the other frames.
        try:
            frames.append(normalize_frame(entry, config))
        except Exception as exc:  # noqa: BLE001
            logger.debug("frame_normalization_failed", error_type=type(exc).__name__)
            frames.append(UNKNOWN_FRAME)
    return tuple(frames)


def normalize_frame(entry: RawStackEntry, config: ParserConfig) -> NormalizedFrame:
    """Normalize one entry.

    in_app rules:
    - internal (native, or filename not path-shaped) -> False
    - no filename -> False
    - filename under a dependency directory -> False
    - otherwise True
    """
    filename = entry.filename or ""
    internal = is_internal(entry, config.path_heuristic)
    in_app = (
        not internal
        and bool(filename)
        and not has_dependency_segment(filename, config.dependency_dirs)
    )

    return NormalizedFrame(
        filename=filename,
        lineno=entry.lineno,
        colno=entry.colno,
        function=function_name(entry),
        module=module_name(filename, config.base_dir, config.dependency_dirs) if filename else None,
        in_app=in_app,
    )


def is_internal(entry: RawStackEntry, heuristic: PathHeuristic) -> bool:
    """Interpreter-internal frame: native, or filename is not a path."""
    if entry.is_native:
        return True
    return bool(entry.filename) and not heuristic.looks_like_path(entry.filename or "")


def function_name(entry: RawStackEntry) -> str:
    """Reported name, else "Type.method", else ANONYMOUS."""
    # BLE001: exotic type/method values may break str formatting;
    # the name degrades to ANONYMOUS.
    try:
        if entry.function_name:
            return str(entry.function_name)
        if entry.type_name and entry.method_name:
            return f"{entry.type_name}.{entry.method_name}"
    except Exception:  # noqa: BLE001
        return ANONYMOUS
    return ANONYMOUS
