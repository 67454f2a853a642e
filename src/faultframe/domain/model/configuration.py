"""Parser configuration.

Computed once by the caller (base directory included) and threaded
explicitly through the pipeline. Immutable, FAIL-FIRST validated.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Final

# Directories holding third-party installed packages
DEFAULT_DEPENDENCY_DIRS: Final = ("site-packages", "dist-packages", "node_modules")

# Substrings marking the library's own capture entry points
DEFAULT_CAPTURE_MARKERS: Final = (
    "capture_exception",
    "capture_message",
    "captureException",
    "captureMessage",
)

LINES_OF_CONTEXT: Final = 7
MAX_CONCURRENT_READS: Final = 16
EXTRA_MAX_DEPTH: Final = 5


def default_base_dir() -> str:
    """Directory of the __main__ module file with trailing separator.

    Falls back to the current working directory (interactive sessions,
    python -c, embedded interpreters).
    """
    main = sys.modules.get("__main__")
    main_file = getattr(main, "__file__", None)
    if isinstance(main_file, str) and main_file:
        directory = os.path.dirname(os.path.abspath(main_file))
    else:
        directory = os.getcwd()
    return directory.rstrip(os.sep) + os.sep


@dataclass(frozen=True, slots=True)
class PathHeuristic:
    """Decides whether a filename looks like a filesystem path.

    Filenames that do not look like paths (bare module specifiers, URLs,
    "<frozen ...>" pseudo names) classify a frame as internal.

    Attributes:
        path_prefixes: A filename starting with any of these is a path.
        drive_separator: Windows drive separator ("C:\\...").
        drive_separator_offset: Index the drive separator must occur at.
    """

    path_prefixes: tuple[str, ...] = ("/", ".")
    drive_separator: str = ":\\"
    drive_separator_offset: int = 1

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.path_prefixes:
            raise ValueError("path_prefixes must not be empty")
        if any(not prefix for prefix in self.path_prefixes):
            raise ValueError("path_prefixes must not contain empty strings")
        if not self.drive_separator:
            raise ValueError("drive_separator must be non-empty")
        if self.drive_separator_offset < 0:
            raise ValueError(
                f"drive_separator_offset must be >= 0, got {self.drive_separator_offset}"
            )

    def looks_like_path(self, filename: str) -> bool:
        """True for absolute, relative-dot and Windows drive paths."""
        if filename.startswith(self.path_prefixes):
            return True
        return filename.find(self.drive_separator) == self.drive_separator_offset


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Configuration DTO for the capture pipeline.

    Attributes:
        base_dir: Application root. Frames below it get app-relative
            module names. Default: main module directory.
        lines_of_context: Source lines captured before and after the fault line.
        dependency_dirs: Directory names holding installed dependencies.
        capture_markers: Function name substrings of capture entry points.
        path_heuristic: Path-shape test for internal frame detection.
        max_concurrent_reads: Upper bound of in-flight source file reads.
        include_chained: Follow __cause__/__context__ into extra exception records.
        extra_max_depth: Nesting depth kept when sanitizing extra attributes.
    """

    base_dir: str = field(default_factory=default_base_dir)
    lines_of_context: int = LINES_OF_CONTEXT
    dependency_dirs: tuple[str, ...] = DEFAULT_DEPENDENCY_DIRS
    capture_markers: tuple[str, ...] = DEFAULT_CAPTURE_MARKERS
    path_heuristic: PathHeuristic = field(default_factory=PathHeuristic)
    max_concurrent_reads: int = MAX_CONCURRENT_READS
    include_chained: bool = False
    extra_max_depth: int = EXTRA_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.base_dir, str):
            raise TypeError(f"base_dir must be str, got {type(self.base_dir).__name__}")
        if not self.base_dir:
            raise ValueError("base_dir must be non-empty")
        if self.lines_of_context < 0:
            raise ValueError(f"lines_of_context must be >= 0, got {self.lines_of_context}")
        if any(not name for name in self.dependency_dirs):
            raise ValueError("dependency_dirs must not contain empty names")
        if any(not marker for marker in self.capture_markers):
            raise ValueError("capture_markers must not contain empty strings")
        if self.max_concurrent_reads <= 0:
            raise ValueError(
                f"max_concurrent_reads must be > 0, got {self.max_concurrent_reads}"
            )
        if self.extra_max_depth < 0:
            raise ValueError(f"extra_max_depth must be >= 0, got {self.extra_max_depth}")
