"""
QueryAssembler — where clause, page window, ordering and projection.

The resulting :class:`QueryDescriptor` is store-agnostic; the executor
that runs it decides how ``where``/``orderBy``/``select`` map onto the
storage engine.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from .projection import ProjectionTree, build_projection

SortInput = str | dict[str, Any] | list[Any] | None


@dataclass(frozen=True)
class QueryDescriptor:
    """
    Immutable find-many request handed to the executor.

    Attributes:
        where: Predicate tree (``None`` or ``{}`` = no filter).
        skip: Number of rows to skip.
        take: Maximum number of rows to return.
        order_by: Ordering clause, e.g. ``{"id": "desc"}`` or a decoded
            JSON ordering passed through verbatim.
        select: Projection tree; ``None`` lets the executor choose.
    """

    where: dict[str, Any] | None = None
    skip: int = 0
    take: int | None = None
    order_by: Any = field(default_factory=dict)
    select: ProjectionTree | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the executor's keyword layout."""
        result: dict[str, Any] = {
            "where": self.where,
            "skip": self.skip,
            "take": self.take,
            "orderBy": self.order_by,
        }
        if self.select is not None:
            result["select"] = self.select
        return result


def build_order_by(order: str, sort: SortInput) -> Any:
    """
    Ordering for *sort* in direction *order*.

    ``None`` orders by ``id``; a bare field name orders by that field;
    a JSON string is decoded and used as-is. Malformed JSON raises
    ``json.JSONDecodeError``.
    """
    if not sort:
        return {"id": order}
    if isinstance(sort, str):
        if sort.startswith("{"):
            return json.loads(sort)
        return {sort: order}
    return sort


def build_find_many_query(
    where: dict[str, Any] | None,
    skip: int,
    limit: int | None,
    order: str,
    sort: SortInput = None,
    fields: str | None = None,
) -> QueryDescriptor:
    """Compose a :class:`QueryDescriptor`; *skip*/*limit* are not re-validated."""
    return QueryDescriptor(
        where=where,
        skip=skip,
        take=limit,
        order_by=build_order_by(order, sort),
        select=build_projection(fields),
    )
