"""
Type-driven coercion of raw filter values.

Values arrive as strings from the query string; the terminal field's
primitive type decides what they become. Coercion never raises:
unparseable numbers become ``nan`` and unparseable dates become an
:class:`InvalidDateTime` marker, so the resulting predicate simply
matches nothing.
"""

from __future__ import annotations

import datetime
import json
import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .schema import ScalarKind

if TYPE_CHECKING:
    from .schema import FieldMetadata

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX_RE = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)"
)

_TRUTHY = frozenset({"true", "yes", "1"})

INTEGER_TYPES = frozenset({"Int", "BigInt"})
FLOAT_TYPES = frozenset({"Float", "Decimal"})


@dataclass(frozen=True)
class InvalidDateTime:
    """Stands in for a date that could not be parsed."""

    raw: str

    def __str__(self) -> str:
        return "Invalid Date"


def parse_int(raw: str) -> int | float:
    """Parse the leading base-10 integer of *raw*; ``nan`` if there is none."""
    match = _INT_PREFIX_RE.match(raw)
    if match is None:
        return math.nan
    digits = match.group(1)
    try:
        return int(digits, 10)
    except ValueError:
        # beyond the int conversion digit limit
        return float(digits)


def parse_float(raw: str) -> float:
    """Parse the leading decimal number of *raw*; ``nan`` if there is none."""
    match = _FLOAT_PREFIX_RE.match(raw)
    if match is None:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))


def parse_bool(raw: str) -> bool:
    return raw.lower() in _TRUTHY


def parse_datetime(raw: str) -> datetime.datetime | InvalidDateTime:
    """Parse an ISO-8601 timestamp; aware values are normalised to UTC."""
    text = raw.strip().replace("Z", "+00:00")
    try:
        result = datetime.datetime.fromisoformat(text)
        if result.tzinfo is not None:
            result = result.astimezone(datetime.timezone.utc)
    except (ValueError, OverflowError):
        return InvalidDateTime(raw)
    return result


def parse_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return raw


def coerce_value(field: FieldMetadata, raw: str) -> Any:
    """
    Convert *raw* according to *field*'s primitive type.

    ``String``, enums and unknown types pass through unchanged.
    """
    if not isinstance(field.kind, ScalarKind):
        return raw
    type_name = field.kind.type_name
    if type_name == "String":
        return raw
    if type_name in INTEGER_TYPES:
        return parse_int(raw)
    if type_name in FLOAT_TYPES:
        return parse_float(raw)
    if type_name == "Boolean":
        return parse_bool(raw)
    if type_name == "DateTime":
        return parse_datetime(raw)
    if type_name == "Json":
        return parse_json(raw)
    return raw
