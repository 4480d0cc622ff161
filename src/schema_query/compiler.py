"""
QueryCompiler — one entry point for list endpoints.

Example::

    compiler = QueryCompiler(registry)
    params = QueryParams.from_query(request.query_params)
    descriptor = compiler.compile("Vendor", params, search_fields=["name", "code"])
    rows = await executor.find_many("Vendor", descriptor)
    body = compiler.group(rows, params)
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Sequence
from typing import TYPE_CHECKING, Any

from .assembler import QueryDescriptor, build_find_many_query
from .conditions import AND, OR
from .config import DEFAULT_CONFIG, QueryConfig
from .filters import FilterConditionBuilder
from .grouping import group_by
from .search import SearchConditionBuilder

if TYPE_CHECKING:
    from .params import QueryParams
    from .schema import SchemaRegistry

logger = logging.getLogger(__name__)


class QueryCompiler:
    """
    Compile validated request parameters into a :class:`QueryDescriptor`.

    Search conditions are OR'd, filter conditions AND'd, and both sit
    side by side in the same where clause. Holds no per-request state.
    """

    def __init__(
        self, registry: SchemaRegistry, config: QueryConfig | None = None
    ) -> None:
        self._registry = registry
        self._config = config or DEFAULT_CONFIG
        self._filters = FilterConditionBuilder(registry)
        self._search = SearchConditionBuilder(registry, mode=self._config.search_mode)

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    @property
    def config(self) -> QueryConfig:
        return self._config

    def build_where(
        self,
        model_name: str,
        query: str | None = None,
        search_fields: Sequence[str] = (),
        filter_string: str | None = None,
    ) -> dict[str, Any]:
        """
        Combine search and filter conditions into one where clause.

        Search runs only when both a term and search fields are given;
        its errors propagate.
        """
        where: dict[str, Any] = {}
        if query and search_fields:
            search_conditions = self._search.build(model_name, query, search_fields)
            if search_conditions:
                where[OR] = search_conditions
        if filter_string:
            filter_conditions = self._filters.build(model_name, filter_string)
            if filter_conditions:
                where[AND] = filter_conditions
        return where

    def compile(
        self,
        model_name: str,
        params: QueryParams,
        search_fields: Sequence[str] = (),
    ) -> QueryDescriptor:
        where = self.build_where(
            model_name,
            query=params.query,
            search_fields=search_fields,
            filter_string=params.filter,
        )
        descriptor = build_find_many_query(
            where,
            params.skip,
            params.limit,
            params.order,
            sort=params.sort,
            fields=params.fields,
        )
        logger.debug("Compiled %s query: %s", model_name, descriptor)
        return descriptor

    def group(
        self, rows: Iterable[Any], params: QueryParams
    ) -> dict[Hashable, list[Any]] | list[Any]:
        """Group *rows* by ``params.group_by``; rows unchanged otherwise."""
        if not params.group_by:
            return list(rows)
        return group_by(rows, params.group_by, unassigned=self._config.unassigned_key)
