"""Module namer: absolute filename -> human-readable module path.

Pure path manipulation, no I/O. Both "/" and "\\" separate path parts.
"""

from __future__ import annotations

import os

from faultframe.domain.model.configuration import DEFAULT_DEPENDENCY_DIRS


def module_name(
    filename: str,
    base_dir: str,
    dependency_dirs: tuple[str, ...] = DEFAULT_DEPENDENCY_DIRS,
) -> str:
    """Derive module name for filename.

    Algorithm:
    1. Inside a dependency directory: path after the LAST dependency
       segment, dotted, then ":" and the file stem.
    2. Inside base_dir: path relative to base_dir, dotted, then "." and
       the file stem.
    3. Otherwise: the file stem.

    Args:
        filename: Absolute source filename.
        base_dir: Application root directory.
        dependency_dirs: Directory names holding installed packages.

    Returns:
        Module name, never empty for a non-empty filename.

    Example:
        >>> module_name("/app/lib/foo.py", "/app/")
        'lib.foo'
        >>> module_name("/app/node_modules/pkg/sub/bar.js", "/app/")
        'pkg.sub:bar'
    """
    path = filename.replace("\\", "/")
    directory, _, basename = path.rpartition("/")
    stem = os.path.splitext(basename)[0] or basename

    cut = _dependency_cut(directory, dependency_dirs)
    if cut is not None:
        return f"{directory[cut:].replace('/', '.')}:{stem}"

    base = base_dir.replace("\\", "/")
    if not base.endswith("/"):
        base += "/"

    # Directory equal to base ("/app" vs "/app/") or below it
    if f"{directory}/".startswith(base):
        relative = directory[len(base) :].replace("/", ".")
        return f"{relative}.{stem}" if relative else stem

    return stem


def has_dependency_segment(filename: str, dependency_dirs: tuple[str, ...]) -> bool:
    """True if any path segment of filename is a dependency directory."""
    path = filename.replace("\\", "/")
    return any(f"/{name}/" in path for name in dependency_dirs)


def _dependency_cut(directory: str, dependency_dirs: tuple[str, ...]) -> int | None:
    """Index right after the last "/<dependency>/" segment in directory."""
    cut: int | None = None
    for name in dependency_dirs:
        marker = f"/{name}/"
        index = directory.rfind(marker)
        if index > -1 and (cut is None or index + len(marker) > cut):
            cut = index + len(marker)
    return cut
