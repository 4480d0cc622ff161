"""
Request parameter validation and pagination metadata.

``QueryParams`` is the caller-side gate in front of the compiler: it
checks the raw query-string values once, so the builders downstream
never re-validate ``skip``/``limit``/``sort``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .config import DEFAULT_CONFIG, QueryConfig, SortOrder
from .exceptions import QueryParamsError

_FLAG_VALUES = {"true": True, "false": False}


class QueryParams(BaseModel):
    """
    Validated list-endpoint parameters.

    ``document``/``pagination``/``count`` select what the response
    carries; at least one must be true and ``pagination`` (like
    ``groupBy``) only makes sense with ``document``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    order: SortOrder = "desc"
    fields: str | None = None
    sort: str | None = None
    query: str = ""
    document: bool = False
    pagination: bool = False
    count: bool = False
    filter: str | None = None
    group_by: str | None = Field(default=None, alias="groupBy")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    # -- field validators ---------------------------------------------------

    @field_validator("document", "pagination", "count", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value in _FLAG_VALUES:
            return _FLAG_VALUES[value]
        raise ValueError("must be 'true' or 'false'")

    @field_validator("limit")
    @classmethod
    def _cap_limit(cls, value: int, info: ValidationInfo) -> int:
        config = (info.context or {}).get("config", DEFAULT_CONFIG)
        if config.max_limit is not None and value > config.max_limit:
            raise ValueError(f"must not exceed {config.max_limit}")
        return value

    @field_validator("sort")
    @classmethod
    def _check_sort(cls, value: str | None) -> str | None:
        if value and value.startswith("{"):
            try:
                json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("must be a field name or a JSON object") from exc
        return value

    @field_validator("group_by")
    @classmethod
    def _check_group_by(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("must not be empty")
        return trimmed

    @model_validator(mode="after")
    def _check_combination(self) -> QueryParams:
        if not (self.document or self.pagination or self.count):
            raise ValueError(
                "At least one of document, pagination, or count must be true"
            )
        if self.pagination and not self.document:
            raise ValueError("Pagination can only be true when document is also true")
        if self.group_by is not None and not self.document:
            raise ValueError("groupBy can only be used when document is true")
        return self

    # -- construction -------------------------------------------------------

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, Any],
        config: QueryConfig | None = None,
    ) -> QueryParams:
        """
        Validate a raw query-parameter mapping.

        Missing (or ``None``) values fall back to *config* defaults.

        Raises:
            QueryParamsError: With ``{param: [messages]}`` errors.
        """
        config = config or DEFAULT_CONFIG
        data: dict[str, Any] = {"limit": config.default_limit}
        data["order"] = config.default_order
        data.update({k: v for k, v in params.items() if v is not None})
        try:
            return cls.model_validate(data, context={"config": config})
        except PydanticValidationError as exc:
            errors: dict[str, list[str]] = {}
            for error in exc.errors():
                loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
                msg = error.get("msg", "validation error")
                errors.setdefault(loc, []).append(msg)
            raise QueryParamsError(errors) from exc


class Pagination(BaseModel):
    """Pagination envelope returned alongside a page of results."""

    model_config = ConfigDict(frozen=True)

    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


def build_pagination(total: int, page: int, limit: int) -> Pagination:
    total_pages = math.ceil(total / limit) if limit else 0
    return Pagination(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
