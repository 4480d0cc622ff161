"""Compiler configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """Defaults applied when compiling list queries.

    Attributes:
        default_limit: Page size when the request gives none.
        default_order: Sort direction when the request gives none.
        max_limit: Upper bound for ``limit``; ``None`` means unbounded.
        unassigned_key: Bucket for rows whose group-by value is missing.
        search_mode: ``mode`` attached to search leaves; ``None`` makes
            search case-sensitive.
    """

    default_limit: int = 10
    default_order: SortOrder = "desc"
    max_limit: int | None = None
    unassigned_key: str = "unassigned"
    search_mode: str | None = "insensitive"


DEFAULT_CONFIG = QueryConfig()
