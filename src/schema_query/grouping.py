"""GroupingEngine — bucket fetched rows by a (possibly nested) field."""

from __future__ import annotations

import json
from collections.abc import Hashable, Iterable, Mapping
from typing import Any

UNASSIGNED = "unassigned"

_MISSING = object()
_LEAVES = (str, bytes, int, float, list, tuple, set)


def get_nested_value(obj: Any, path: str) -> Any:
    """
    Follow *path* (``"vendor.name"``) through mappings or attributes.

    Returns ``None`` as soon as a segment is missing.
    """
    current = obj
    for key in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(key, _MISSING)
        elif current is not None and not isinstance(current, _LEAVES):
            current = getattr(current, key, _MISSING)
        else:
            return None
        if current is _MISSING:
            return None
    return current


def _bucket_key(value: Any, unassigned: str) -> Hashable:
    if value is None:
        return unassigned
    # bools would share a dict slot with 1 and 0
    if isinstance(value, bool):
        return "true" if value else "false"
    try:
        hash(value)
    except TypeError:
        return json.dumps(value, sort_keys=True, default=str)
    return value


def group_by(
    rows: Iterable[Any],
    path: str,
    *,
    unassigned: str = UNASSIGNED,
) -> dict[Hashable, list[Any]]:
    """
    Group *rows* by the value at *path*.

    Rows with a missing or ``None`` value land under *unassigned*.
    Buckets appear in first-seen order and keep the input row order.
    """
    grouped: dict[Hashable, list[Any]] = {}
    for row in rows:
        key = _bucket_key(get_nested_value(row, path), unassigned)
        grouped.setdefault(key, []).append(row)
    return grouped
