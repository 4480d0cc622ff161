"""Schema-driven filter, search and projection compiler for list queries."""

from __future__ import annotations

from .assembler import QueryDescriptor, build_find_many_query, build_order_by
from .coercion import InvalidDateTime, coerce_value
from .compiler import QueryCompiler
from .conditions import Condition, all_of, any_of
from .config import QueryConfig
from .exceptions import (
    NoSearchableFieldsError,
    QueryParamsError,
    SchemaDefinitionError,
    SchemaQueryError,
    SchemaValidationError,
    UnknownModelError,
    ValidationError,
)
from .filters import FilterConditionBuilder
from .grouping import UNASSIGNED, get_nested_value, group_by
from .params import Pagination, QueryParams, build_pagination
from .projection import ProjectionTree, build_projection
from .resolver import FieldPathResolver
from .schema import (
    EnumKind,
    FieldKind,
    FieldMetadata,
    ModelSchema,
    ObjectKind,
    ScalarKind,
    SchemaRegistry,
)
from .search import SearchConditionBuilder

__all__ = [
    # Schema
    "EnumKind",
    "FieldKind",
    "FieldMetadata",
    "ModelSchema",
    "ObjectKind",
    "ScalarKind",
    "SchemaRegistry",
    "FieldPathResolver",
    # Builders
    "Condition",
    "all_of",
    "any_of",
    "coerce_value",
    "InvalidDateTime",
    "FilterConditionBuilder",
    "SearchConditionBuilder",
    "ProjectionTree",
    "build_projection",
    "QueryDescriptor",
    "build_find_many_query",
    "build_order_by",
    "UNASSIGNED",
    "get_nested_value",
    "group_by",
    # Request handling
    "QueryConfig",
    "QueryParams",
    "Pagination",
    "build_pagination",
    "QueryCompiler",
    # Exceptions
    "SchemaQueryError",
    "ValidationError",
    "QueryParamsError",
    "SchemaDefinitionError",
    "SchemaValidationError",
    "UnknownModelError",
    "NoSearchableFieldsError",
]
