"""Shared fixtures: a small schema with relations and composites."""

from __future__ import annotations

from typing import Any

import pytest

from schema_query import QueryCompiler, SchemaRegistry


def _scalar(name: str, type_name: str, *, is_list: bool = False) -> dict[str, Any]:
    return {"name": name, "kind": "scalar", "type": type_name, "isList": is_list}


DATAMODEL: dict[str, Any] = {
    "models": [
        {
            "name": "User",
            "fields": [
                _scalar("id", "String"),
                _scalar("name", "String"),
                _scalar("email", "String"),
                {"name": "role", "kind": "enum", "type": "Role", "isList": False},
                _scalar("tags", "String", is_list=True),
                _scalar("age", "Int"),
                _scalar("score", "Float"),
                _scalar("isActive", "Boolean"),
                _scalar("createdAt", "DateTime"),
                _scalar("metadata", "Json"),
                {
                    "name": "contactInfo",
                    "kind": "object",
                    "type": "ContactInfo",
                    "isList": False,
                },
                {
                    "name": "orders",
                    "kind": "object",
                    "type": "Order",
                    "isList": True,
                    "relationName": "OrderToUser",
                },
                {
                    "name": "vendor",
                    "kind": "object",
                    "type": "Vendor",
                    "isList": False,
                    "relationName": "UserToVendor",
                },
            ],
        },
        {
            "name": "Order",
            "fields": [
                _scalar("id", "String"),
                _scalar("orderNumber", "String"),
                {"name": "status", "kind": "enum", "type": "OrderStatus"},
                _scalar("total", "Decimal"),
                {
                    "name": "user",
                    "kind": "object",
                    "type": "User",
                    "relationName": "OrderToUser",
                },
            ],
        },
        {
            "name": "Vendor",
            "fields": [
                _scalar("id", "String"),
                _scalar("name", "String"),
                _scalar("code", "String"),
                {
                    "name": "users",
                    "kind": "object",
                    "type": "User",
                    "isList": True,
                    "relationName": "UserToVendor",
                },
            ],
        },
    ],
    "types": [
        {
            "name": "ContactInfo",
            "fields": [
                _scalar("email", "String"),
                {"name": "address", "kind": "object", "type": "Address"},
                {
                    "name": "phones",
                    "kind": "object",
                    "type": "Phone",
                    "isList": True,
                },
            ],
        },
        {
            "name": "Address",
            "fields": [_scalar("city", "String"), _scalar("zip", "String")],
        },
        {
            "name": "Phone",
            "fields": [_scalar("number", "String"), _scalar("label", "String")],
        },
    ],
    "enums": [
        {"name": "Role", "values": [{"name": "ADMIN"}, {"name": "MANAGER"}]},
        {"name": "OrderStatus", "values": ["PENDING", "PAID"]},
    ],
}


@pytest.fixture
def datamodel() -> dict[str, Any]:
    return DATAMODEL


@pytest.fixture
def registry(datamodel: dict[str, Any]) -> SchemaRegistry:
    return SchemaRegistry.from_dmmf(datamodel)


@pytest.fixture
def compiler(registry: SchemaRegistry) -> QueryCompiler:
    return QueryCompiler(registry)
