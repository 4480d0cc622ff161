"""
Immutable schema metadata: field kinds, models and the registry.

The registry is built once (usually from a DMMF-style document produced
by the data-modelling tool) and only read afterwards, so a single
instance can be shared by every request handler.

Example::

    registry = SchemaRegistry.from_dmmf({
        "models": [
            {
                "name": "Vendor",
                "fields": [
                    {"name": "id", "kind": "scalar", "type": "String"},
                    {"name": "name", "kind": "scalar", "type": "String"},
                    {
                        "name": "products",
                        "kind": "object",
                        "type": "Product",
                        "isList": True,
                        "relationName": "ProductToVendor",
                    },
                ],
            },
        ],
    })
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .exceptions import SchemaDefinitionError

# ---------------------------------------------------------------------------
# Field kinds
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScalarKind:
    """Directly stored primitive value (String, Int, DateTime, ...)."""

    type_name: str


@dataclass(frozen=True, slots=True)
class EnumKind:
    """Value restricted to the members of a named enum."""

    enum_name: str


@dataclass(frozen=True, slots=True)
class ObjectKind:
    """Reference to another model (relation) or an embedded composite type.

    ``relation_name`` is set for relations and ``None`` for composites.
    """

    type_name: str
    relation_name: str | None = None

    @property
    def is_relation(self) -> bool:
        return self.relation_name is not None


FieldKind = ScalarKind | EnumKind | ObjectKind


@dataclass(frozen=True, slots=True)
class FieldMetadata:
    """Metadata for a single field of a model or composite type."""

    name: str
    kind: FieldKind
    is_list: bool = False

    @property
    def type(self) -> str:
        """Primitive name, enum name, or referenced model/type name."""
        if isinstance(self.kind, EnumKind):
            return self.kind.enum_name
        return self.kind.type_name

    @property
    def relation_name(self) -> str | None:
        if isinstance(self.kind, ObjectKind):
            return self.kind.relation_name
        return None

    @property
    def is_object(self) -> bool:
        return isinstance(self.kind, ObjectKind)

    @property
    def is_terminal(self) -> bool:
        """Scalars and enums can be compared directly."""
        return isinstance(self.kind, ScalarKind | EnumKind)

    @property
    def is_searchable(self) -> bool:
        """Non-list ``String`` scalars and enums support substring search."""
        if isinstance(self.kind, EnumKind):
            return True
        return (
            isinstance(self.kind, ScalarKind)
            and self.kind.type_name == "String"
            and not self.is_list
        )

    # -- constructors -------------------------------------------------------

    @classmethod
    def scalar(
        cls, name: str, type_name: str, *, is_list: bool = False
    ) -> FieldMetadata:
        return cls(name, ScalarKind(type_name), is_list)

    @classmethod
    def enum(
        cls, name: str, enum_name: str, *, is_list: bool = False
    ) -> FieldMetadata:
        return cls(name, EnumKind(enum_name), is_list)

    @classmethod
    def relation(
        cls,
        name: str,
        type_name: str,
        relation_name: str,
        *,
        is_list: bool = False,
    ) -> FieldMetadata:
        return cls(name, ObjectKind(type_name, relation_name), is_list)

    @classmethod
    def composite(
        cls, name: str, type_name: str, *, is_list: bool = False
    ) -> FieldMetadata:
        return cls(name, ObjectKind(type_name), is_list)


@dataclass(frozen=True)
class ModelSchema:
    """A model (separately stored entity) or an embedded composite type."""

    name: str
    fields: tuple[FieldMetadata, ...] = ()
    is_composite: bool = False
    _index: Mapping[str, FieldMetadata] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(
            self, "_index", MappingProxyType({f.name: f for f in self.fields})
        )

    def get_field(self, name: str) -> FieldMetadata | None:
        return self._index.get(name)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class SchemaRegistry(Mapping[str, ModelSchema]):
    """
    Read-only catalogue of models and composite types.

    Lookups check models first, then composite types. The registry is
    never mutated after construction.
    """

    def __init__(
        self,
        models: list[ModelSchema] | tuple[ModelSchema, ...] = (),
        types: list[ModelSchema] | tuple[ModelSchema, ...] = (),
        enums: Mapping[str, list[str]] | None = None,
    ) -> None:
        self._models = MappingProxyType({m.name: m for m in models})
        self._types = MappingProxyType(
            {t.name: _as_composite(t) for t in types}
        )
        self._enums = MappingProxyType(
            {name: tuple(values) for name, values in (enums or {}).items()}
        )

    # -- Mapping protocol ---------------------------------------------------

    def __getitem__(self, name: str) -> ModelSchema:
        schema = self.get_schema(name)
        if schema is None:
            raise KeyError(name)
        return schema

    def __iter__(self) -> Iterator[str]:
        yield from self._models
        for name in self._types:
            if name not in self._models:
                yield name

    def __len__(self) -> int:
        return len(set(self._models) | set(self._types))

    def __repr__(self) -> str:
        return (
            f"SchemaRegistry(models={list(self._models)}, "
            f"types={list(self._types)})"
        )

    # -- lookups ------------------------------------------------------------

    def get_schema(self, name: str) -> ModelSchema | None:
        """Return the model or composite type called *name*."""
        return self._models.get(name) or self._types.get(name)

    def get_field(self, model_name: str, field_name: str) -> FieldMetadata | None:
        schema = self.get_schema(model_name)
        if schema is None:
            return None
        return schema.get_field(field_name)

    def is_model(self, name: str) -> bool:
        """True for separately stored models, False for composites."""
        return name in self._models

    @property
    def model_names(self) -> list[str]:
        return list(self._models)

    @property
    def type_names(self) -> list[str]:
        return list(self._types)

    def enum_values(self, name: str) -> tuple[str, ...] | None:
        return self._enums.get(name)

    # -- loading ------------------------------------------------------------

    @classmethod
    def from_dmmf(cls, document: Mapping[str, Any]) -> SchemaRegistry:
        """
        Build a registry from a DMMF-style datamodel document.

        Accepts either the datamodel itself (``{"models", "types",
        "enums"}``) or a full document wrapping it under ``"datamodel"``.

        Raises:
            SchemaDefinitionError: If the document is malformed.
        """
        if not isinstance(document, Mapping):
            raise SchemaDefinitionError("Schema document must be a mapping")
        datamodel = document.get("datamodel", document)
        models = [
            _parse_model(raw, composite=False)
            for raw in _as_list(datamodel, "models")
        ]
        types = [
            _parse_model(raw, composite=True) for raw in _as_list(datamodel, "types")
        ]
        enums: dict[str, list[str]] = {}
        for raw in _as_list(datamodel, "enums"):
            name = raw.get("name")
            if not name:
                raise SchemaDefinitionError(f"Enum without a name: {raw!r}")
            enums[name] = [
                v["name"] if isinstance(v, Mapping) else str(v)
                for v in raw.get("values", [])
            ]
        return cls(models, types, enums)

    @classmethod
    def from_json_file(cls, path: str | Path) -> SchemaRegistry:
        """Load a DMMF-style JSON document from *path*."""
        try:
            document = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SchemaDefinitionError(
                f"Cannot load schema from {str(path)!r}: {exc}"
            ) from exc
        return cls.from_dmmf(document)


def _as_composite(schema: ModelSchema) -> ModelSchema:
    if schema.is_composite:
        return schema
    return ModelSchema(schema.name, schema.fields, is_composite=True)


def _as_list(datamodel: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    raw = datamodel.get(key, [])
    if not isinstance(raw, list):
        raise SchemaDefinitionError(f"'{key}' must be a list")
    return raw


def _parse_model(raw: Mapping[str, Any], *, composite: bool) -> ModelSchema:
    name = raw.get("name")
    if not name:
        raise SchemaDefinitionError(f"Model without a name: {raw!r}")
    fields = tuple(_parse_field(name, f) for f in raw.get("fields", []))
    return ModelSchema(name, fields, is_composite=composite)


def _parse_field(model_name: str, raw: Mapping[str, Any]) -> FieldMetadata:
    name = raw.get("name")
    type_name = raw.get("type")
    if not name or not type_name:
        raise SchemaDefinitionError(
            f"Field on '{model_name}' needs 'name' and 'type': {raw!r}"
        )
    kind_tag = str(raw.get("kind", "")).lower()
    kind: FieldKind
    if kind_tag == "scalar":
        kind = ScalarKind(type_name)
    elif kind_tag == "enum":
        kind = EnumKind(type_name)
    elif kind_tag == "object":
        kind = ObjectKind(type_name, raw.get("relationName") or None)
    else:
        raise SchemaDefinitionError(
            f"Unsupported kind {raw.get('kind')!r} for field "
            f"'{model_name}.{name}'"
        )
    return FieldMetadata(name, kind, bool(raw.get("isList", False)))
