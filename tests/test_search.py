"""Tests for SearchConditionBuilder."""

from __future__ import annotations

import pytest

from schema_query import (
    NoSearchableFieldsError,
    SchemaValidationError,
    SearchConditionBuilder,
    UnknownModelError,
)


@pytest.fixture
def builder(registry):
    return SearchConditionBuilder(registry)


def _contains(term: str) -> dict:
    return {"contains": term, "mode": "insensitive"}


class TestSearchConditionBuilder:
    def test_top_level_fields(self, builder):
        assert builder.build("User", "ann", ["name", "email"]) == [
            {"name": _contains("ann")},
            {"email": _contains("ann")},
        ]

    def test_enum_field(self, builder):
        assert builder.build("User", "adm", ["role"]) == [{"role": _contains("adm")}]

    def test_nested_paths_use_filter_wrapping(self, builder):
        assert builder.build(
            "User", "42", ["orders.orderNumber", "contactInfo.phones.number"]
        ) == [
            {"orders": {"some": {"orderNumber": _contains("42")}}},
            {
                "contactInfo": {
                    "is": {"phones": {"some": {"is": {"number": _contains("42")}}}}
                }
            },
        ]

    def test_to_one_relation(self, builder):
        assert builder.build("Order", "acme", ["user.vendor.name"]) == [
            {"user": {"vendor": {"name": _contains("acme")}}}
        ]

    def test_invalid_field_is_named(self, builder):
        with pytest.raises(SchemaValidationError) as exc_info:
            builder.build("User", "x", ["name", "bogusField"])
        err = exc_info.value
        assert err.model_name == "User"
        assert err.invalid_fields == ["bogusField"]
        assert "bogusField" in str(err)
        assert "'User'" in str(err)

    def test_all_invalid_fields_are_collected(self, builder):
        with pytest.raises(SchemaValidationError) as exc_info:
            builder.build(
                "User", "x", ["age", "name", "tags", "orders.nope", "contactInfo"]
            )
        assert exc_info.value.invalid_fields == [
            "age",
            "tags",
            "orders.nope",
            "contactInfo",
        ]

    def test_validation_happens_even_without_term(self, builder):
        with pytest.raises(SchemaValidationError):
            builder.build("User", "", ["bogus"])

    def test_empty_term_with_valid_fields(self, builder):
        assert builder.build("User", "", ["name"]) == []
        assert builder.build("User", None, ["name"]) == []

    def test_empty_field_list(self, builder):
        with pytest.raises(NoSearchableFieldsError) as exc_info:
            builder.build("User", "anything", [])
        assert exc_info.value.field_paths == []
        assert not isinstance(exc_info.value, SchemaValidationError)

    def test_unknown_model(self, builder):
        with pytest.raises(UnknownModelError) as exc_info:
            builder.build("Usr", "x", ["name"])
        assert exc_info.value.suggestions == ["User"]

    def test_composite_type_is_not_a_model(self, builder):
        with pytest.raises(UnknownModelError):
            builder.build("Address", "x", ["city"])

    def test_suggestions_for_typos(self, builder):
        with pytest.raises(SchemaValidationError) as exc_info:
            builder.build("User", "x", ["nmae"])
        assert "name" in exc_info.value.suggestions

    def test_case_sensitive_mode(self, registry):
        builder = SearchConditionBuilder(registry, mode=None)
        assert builder.build("User", "Ann", ["name"]) == [{"name": {"contains": "Ann"}}]
