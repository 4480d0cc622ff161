"""FilterConditionBuilder — ``?filter=key:value,key:value`` to conditions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .coercion import coerce_value
from .conditions import Condition, any_of, equals, has, wrap_nested
from .resolver import FieldPathResolver

if TYPE_CHECKING:
    from .schema import SchemaRegistry

logger = logging.getLogger(__name__)


def parse_filter_pairs(raw: str | None) -> dict[str, list[str]]:
    """
    Group ``key:value`` pairs by key, keeping first-seen order.

    Values cannot contain ``,`` or ``:``; anything after a second colon
    is ignored. Pairs without a colon are skipped.
    """
    groups: dict[str, list[str]] = {}
    if not raw:
        return groups
    for item in raw.split(","):
        parts = item.split(":")
        if len(parts) < 2:
            logger.debug("Skipping filter item without a value: %r", item)
            continue
        groups.setdefault(parts[0], []).append(parts[1])
    return groups


class FilterConditionBuilder:
    """
    Build filter conditions from a comma-separated filter string.

    Filters are best-effort: pieces that do not resolve against the
    schema are dropped rather than reported. Repeated keys are OR'd;
    the returned list is meant to be AND'd by the caller.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._resolver = FieldPathResolver(registry)

    def build(self, model_name: str, filter_string: str | None) -> list[Condition]:
        conditions: list[Condition] = []
        for key, values in parse_filter_pairs(filter_string).items():
            path = key.split(".")
            if len(values) == 1:
                condition = self.build_condition(model_name, path, values[0])
                if condition is None:
                    logger.debug("Dropping unresolved filter %s:%s", key, values[0])
                    continue
                conditions.append(condition)
                continue
            alternatives = []
            for value in values:
                condition = self.build_condition(model_name, path, value)
                if condition is None:
                    logger.debug("Dropping unresolved filter %s:%s", key, value)
                    continue
                alternatives.append(condition)
            if alternatives:
                conditions.append(any_of(alternatives))
        return conditions

    def build_condition(
        self, model_name: str, path: Sequence[str], raw_value: str
    ) -> Condition | None:
        """Condition for a single path/value, or ``None`` if unresolvable."""
        if not path:
            return None
        meta = self._resolver.lookup(model_name, path[0])
        if meta is None:
            return None

        if len(path) == 1:
            if not meta.is_terminal:
                return None
            value = coerce_value(meta, raw_value)
            if meta.is_list:
                return has(meta.name, value)
            return equals(meta.name, value)

        if not meta.is_object:
            return None
        nested = self.build_condition(meta.type, path[1:], raw_value)
        if nested is None:
            return None
        return wrap_nested(meta, nested)
