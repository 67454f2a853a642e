"""Tagged outcomes of the best-effort pipeline steps.

Degradation is explicit: a source read either loaded or is unavailable,
and enrichment reports how much context it could attach.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from faultframe.domain.model.frame import NormalizedFrame


@dataclass(frozen=True, slots=True)
class SourceLoaded:
    """Source file read successfully."""

    filename: str
    content: str


@dataclass(frozen=True, slots=True)
class SourceUnavailable:
    """Source file could not be read. Final for this capture (no retry)."""

    filename: str
    reason: str


ReadOutcome = SourceLoaded | SourceUnavailable


class ContextStatus(Enum):
    """How much source context enrichment attached."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class Enrichment:
    """Frames after source context enrichment.

    SKIPPED means frames are returned exactly as given.
    """

    frames: tuple[NormalizedFrame, ...]
    status: ContextStatus
    unavailable: tuple[SourceUnavailable, ...] = ()
