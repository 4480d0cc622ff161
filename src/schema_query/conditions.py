"""
Predicate-tree construction helpers.

Conditions are plain dicts in the shape the executor understands::

    {"role": "ADMIN"}                                  # equality
    {"tags": {"has": "urgent"}}                        # list contains
    {"name": {"contains": "acme", "mode": "insensitive"}}
    {"OR": [...]}, {"AND": [...]}                      # combinators
    {"products": {"some": {...}}}                      # to-many relation
    {"address": {"is": {...}}}                         # embedded composite

``None`` stands for "no condition".
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .schema import FieldMetadata

Condition = dict[str, Any]

AND = "AND"
OR = "OR"
SOME = "some"
IS = "is"
HAS = "has"
CONTAINS = "contains"
MODE = "mode"
INSENSITIVE = "insensitive"


def equals(field: str, value: Any) -> Condition:
    return {field: value}


def has(field: str, value: Any) -> Condition:
    """Scalar list *field* contains *value*."""
    return {field: {HAS: value}}


def contains(field: str, term: str, *, mode: str | None = INSENSITIVE) -> Condition:
    """Substring match; case-insensitive unless *mode* is ``None``."""
    leaf: dict[str, Any] = {CONTAINS: term}
    if mode:
        leaf[MODE] = mode
    return {field: leaf}


def any_of(conditions: Sequence[Condition]) -> Condition:
    return {OR: list(conditions)}


def all_of(conditions: Sequence[Condition]) -> Condition:
    return {AND: list(conditions)}


def wrap_nested(field: FieldMetadata, nested: Condition) -> Condition:
    """
    Wrap a condition built against *field*'s target type.

    Relations filter through a join (``some`` for to-many), composites
    match the embedded structure with ``is``.
    """
    inner = nested if field.relation_name else {IS: nested}
    if field.is_list:
        return {field.name: {SOME: inner}}
    return {field.name: inner}
