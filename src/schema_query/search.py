"""SearchConditionBuilder — free-text search over allowlisted fields."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .conditions import INSENSITIVE, Condition, contains, wrap_nested
from .exceptions import (
    NoSearchableFieldsError,
    SchemaValidationError,
    UnknownModelError,
)
from .resolver import FieldPathResolver

if TYPE_CHECKING:
    from .schema import SchemaRegistry

logger = logging.getLogger(__name__)


class SearchConditionBuilder:
    """
    Build substring-match conditions for a search term.

    The field list is declared by the calling code, not the end user,
    so it is validated strictly: every invalid path is collected and
    reported in a single :class:`SchemaValidationError`. The returned
    list is meant to be OR'd by the caller.
    """

    def __init__(
        self, registry: SchemaRegistry, *, mode: str | None = INSENSITIVE
    ) -> None:
        self._registry = registry
        self._resolver = FieldPathResolver(registry)
        self._mode = mode

    def build(
        self,
        model_name: str,
        term: str | None,
        field_paths: Sequence[str],
    ) -> list[Condition]:
        """
        Raises:
            UnknownModelError: *model_name* is not a registered model.
            NoSearchableFieldsError: *field_paths* is empty, or no
                condition could be produced.
            SchemaValidationError: One or more paths are not a non-list
                String scalar or an enum.
        """
        if not self._registry.is_model(model_name):
            raise UnknownModelError(model_name, self._registry.model_names)
        fields = list(field_paths)
        if not fields:
            raise NoSearchableFieldsError(model_name, fields)

        self.validate(model_name, fields)
        if not term:
            return []

        conditions = []
        for field_path in fields:
            condition = self.build_condition(model_name, field_path.split("."), term)
            if condition is not None:
                conditions.append(condition)
        if not conditions:
            raise NoSearchableFieldsError(model_name, fields)
        return conditions

    def validate(self, model_name: str, field_paths: Sequence[str]) -> None:
        """Raise one error naming every path that cannot be searched."""
        invalid = [
            path
            for path in field_paths
            if not self._resolver.is_searchable(model_name, path.split("."))
        ]
        if invalid:
            schema = self._registry.get_schema(model_name)
            available = []
            if schema is not None:
                available = [f.name for f in schema.fields if f.is_searchable]
            logger.warning(
                "Rejected search fields for %s: %s", model_name, ", ".join(invalid)
            )
            raise SchemaValidationError(model_name, invalid, available)

    def build_condition(
        self, model_name: str, path: Sequence[str], term: str
    ) -> Condition | None:
        if not path:
            return None
        meta = self._resolver.lookup(model_name, path[0])
        if meta is None:
            return None

        if len(path) == 1:
            if not meta.is_searchable:
                return None
            return contains(meta.name, term, mode=self._mode)

        if not meta.is_object:
            return None
        nested = self.build_condition(meta.type, path[1:], term)
        if nested is None:
            return None
        return wrap_nested(meta, nested)
