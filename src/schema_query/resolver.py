"""FieldPathResolver — walk dotted field paths through the schema registry."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import FieldMetadata, SchemaRegistry


class FieldPathResolver:
    """
    Resolve ``["contactInfo", "address", "city"]`` style paths.

    Each non-final segment must be an object field (relation or
    composite); its ``type`` becomes the scope for the next segment.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry

    def lookup(self, model_name: str, field_name: str) -> FieldMetadata | None:
        """Metadata for a single field, or ``None``."""
        return self._registry.get_field(model_name, field_name)

    def resolve(self, model_name: str, path: Sequence[str]) -> FieldMetadata | None:
        """Return the terminal field's metadata, or ``None`` if unresolvable."""
        if not path:
            return None
        scope = model_name
        for index, segment in enumerate(path):
            meta = self.lookup(scope, segment)
            if meta is None:
                return None
            if index == len(path) - 1:
                return meta
            if not meta.is_object:
                return None
            scope = meta.type
        return None

    def is_searchable(self, model_name: str, path: Sequence[str]) -> bool:
        """True if *path* ends on a non-list String scalar or an enum."""
        meta = self.resolve(model_name, path)
        return meta is not None and meta.is_searchable
