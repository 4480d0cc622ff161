"""ProjectionBuilder — ``?fields=name,vendor.name`` to a selection tree."""

from __future__ import annotations

from typing import Any

ProjectionTree = dict[str, Any]

SELECT = "select"


def parse_field_list(fields: str | None) -> list[list[str]]:
    """Split a comma-separated field list into dotted paths."""
    if not fields:
        return []
    paths = []
    for entry in fields.split(","):
        stripped = entry.strip()
        if not stripped:
            continue
        paths.append([part.strip() for part in stripped.split(".")])
    return paths


def build_projection(fields: str | None) -> ProjectionTree | None:
    """
    Build a nested selection tree; ``None`` when no fields were given.

    ``id`` is always selected at the root. Entries sharing a prefix are
    merged, so ``"vendor.name,vendor.code"`` selects both under one
    ``vendor`` node::

        {"id": True, "vendor": {"select": {"name": True, "code": True}}}

    A nested selection is kept when the same field is also listed on
    its own, which makes the result independent of entry order.
    """
    paths = parse_field_list(fields)
    if not paths:
        return None
    tree: ProjectionTree = {"id": True}
    for path in paths:
        _merge_path(tree, path)
    return tree


def _merge_path(tree: ProjectionTree, path: list[str]) -> None:
    current = tree
    for segment in path[:-1]:
        node = current.get(segment)
        if not isinstance(node, dict):
            node = {SELECT: {}}
            current[segment] = node
        current = node[SELECT]
    leaf = path[-1]
    if leaf not in current:
        current[leaf] = True
