"""Filesystem source reader."""

from __future__ import annotations

import asyncio
from pathlib import Path

from faultframe.domain.model.outcomes import ReadOutcome, SourceLoaded, SourceUnavailable


class AsyncFileReader:
    """Reads source files on a worker thread.

    Blocking read_text() runs via asyncio.to_thread so concurrent reads
    overlap. OSError (missing file, permission, zip/frozen archives that
    reject reads) and decode errors become SourceUnavailable.
    """

    __slots__ = ("_encoding",)

    def __init__(self, *, encoding: str = "utf-8") -> None:
        """Initialize reader.

        Args:
            encoding: Source file encoding. Undecodable bytes are replaced.
        """
        self._encoding = encoding

    async def read(self, filename: str) -> ReadOutcome:
        """Read whole file. Never raises."""
        try:
            content = await asyncio.to_thread(self._read_text, filename)
        except (OSError, ValueError) as exc:
            return SourceUnavailable(filename=filename, reason=type(exc).__name__)
        return SourceLoaded(filename=filename, content=content)

    def _read_text(self, filename: str) -> str:
        return Path(filename).read_text(encoding=self._encoding, errors="replace")
