"""End-to-end tests for QueryCompiler."""

from __future__ import annotations

import logging

import pytest

from schema_query import (
    QueryCompiler,
    QueryConfig,
    QueryParams,
    SchemaValidationError,
)

SEARCH_FIELDS = ["name", "email", "vendor.name"]


def _params(**query: str) -> QueryParams:
    return QueryParams.from_query({"document": "true", **query})


class TestBuildWhere:
    def test_exposes_registry_and_config(self, registry):
        config = QueryConfig(default_limit=25)
        compiler = QueryCompiler(registry, config)
        assert compiler.registry is registry
        assert compiler.config is config

    def test_empty(self, compiler):
        assert compiler.build_where("User") == {}

    def test_search_is_ored_and_filters_anded(self, compiler):
        where = compiler.build_where(
            "User",
            query="ann",
            search_fields=["name", "vendor.name"],
            filter_string="role:ADMIN,role:MANAGER,isActive:true",
        )
        assert where == {
            "OR": [
                {"name": {"contains": "ann", "mode": "insensitive"}},
                {"vendor": {"name": {"contains": "ann", "mode": "insensitive"}}},
            ],
            "AND": [
                {"OR": [{"role": "ADMIN"}, {"role": "MANAGER"}]},
                {"isActive": True},
            ],
        }

    def test_search_skipped_without_term(self, compiler):
        assert compiler.build_where("User", query="", search_fields=["bogus"]) == {}

    def test_search_errors_propagate(self, compiler):
        with pytest.raises(SchemaValidationError):
            compiler.build_where("User", query="x", search_fields=["bogus"])

    def test_unresolved_filters_leave_no_and(self, compiler):
        assert compiler.build_where("User", filter_string="bogus:1") == {}


class TestCompile:
    def test_compile(self, compiler):
        params = _params(
            page="2",
            limit="5",
            order="asc",
            query="ann",
            filter="orders.status:PAID",
            fields="name,orders.status",
        )
        descriptor = compiler.compile("User", params, search_fields=SEARCH_FIELDS)
        assert descriptor.skip == 5
        assert descriptor.take == 5
        assert descriptor.order_by == {"id": "asc"}
        assert descriptor.where["AND"] == [{"orders": {"some": {"status": "PAID"}}}]
        assert len(descriptor.where["OR"]) == 3
        assert descriptor.select == {
            "id": True,
            "name": True,
            "orders": {"select": {"status": True}},
        }

    def test_compile_with_json_sort(self, compiler):
        descriptor = compiler.compile("User", _params(sort='{"name": "asc"}'))
        assert descriptor.order_by == {"name": "asc"}

    def test_compile_with_bare_sort(self, compiler):
        descriptor = compiler.compile("User", _params(sort="createdAt"))
        assert descriptor.order_by == {"createdAt": "desc"}
        assert descriptor.select is None

    def test_compile_logs_descriptor(self, compiler, caplog):
        with caplog.at_level(logging.DEBUG, logger="schema_query.compiler"):
            compiler.compile("User", _params())
        assert "Compiled User query" in caplog.text

    def test_case_sensitive_config(self, registry):
        compiler = QueryCompiler(registry, QueryConfig(search_mode=None))
        where = compiler.build_where("User", query="Ann", search_fields=["name"])
        assert where == {"OR": [{"name": {"contains": "Ann"}}]}


class TestGroup:
    ROWS = [
        {"id": "1", "role": "ADMIN"},
        {"id": "2"},
        {"id": "3", "role": "ADMIN"},
    ]

    def test_group(self, compiler):
        grouped = compiler.group(self.ROWS, _params(groupBy="role"))
        assert list(grouped) == ["ADMIN", "unassigned"]

    def test_no_group_by_returns_rows(self, compiler):
        assert compiler.group(self.ROWS, _params()) == self.ROWS

    def test_configured_unassigned_key(self, registry):
        compiler = QueryCompiler(registry, QueryConfig(unassigned_key="none"))
        grouped = compiler.group(self.ROWS, _params(groupBy="role"))
        assert "none" in grouped
