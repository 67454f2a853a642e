"""Convert arbitrary attribute values into plain, serializable data.

Output contains only None, bool, int, float, str, list and dict with str
keys. Callables are dropped, reference cycles and excess nesting are
replaced by markers, anything else becomes its repr().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

CYCLE_MARKER: Final = "<cyclic>"
DEPTH_MARKER: Final = "<max depth>"
UNREPRESENTABLE: Final = "<unrepresentable>"

_SCALARS: Final = (bool, int, float, str)


class _Dropped:
    """Sentinel for values removed from the output (callables)."""


_DROPPED: Final = _Dropped()


def to_plain_mapping(values: Mapping[str, object], *, max_depth: int) -> dict[str, object]:
    """Sanitize a mapping of attribute name -> value.

    Args:
        values: Attributes to sanitize.
        max_depth: Container nesting kept below the top level.

    Returns:
        New dict, callables dropped.
    """
    result: dict[str, object] = {}
    for key, value in values.items():
        plain = _to_plain(value, max_depth, set())
        if plain is not _DROPPED:
            result[str(key)] = plain
    return result


def _to_plain(value: object, depth: int, ancestors: set[int]) -> object:
    """Recursive conversion. ancestors holds ids of containers on the path."""
    if value is None or type(value) in _SCALARS:
        return value
    if callable(value):
        return _DROPPED
    if not isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return _safe_repr(value)

    if id(value) in ancestors:
        return CYCLE_MARKER
    if depth <= 0:
        return DEPTH_MARKER

    ancestors.add(id(value))
    try:
        if isinstance(value, Mapping):
            mapping: dict[str, object] = {}
            for key, item in value.items():
                plain = _to_plain(item, depth - 1, ancestors)
                if plain is not _DROPPED:
                    mapping[key if isinstance(key, str) else _safe_repr(key)] = plain
            return mapping

        items = sorted(value, key=_safe_repr) if isinstance(value, (set, frozenset)) else value
        sequence: list[object] = []
        for item in items:
            plain = _to_plain(item, depth - 1, ancestors)
            if plain is not _DROPPED:
                sequence.append(plain)
        return sequence
    finally:
        ancestors.discard(id(value))


def _safe_repr(value: object) -> str:
    # BLE001: user __repr__ may raise anything.
    try:
        return repr(value)
    except Exception:  # noqa: BLE001
        return UNREPRESENTABLE
