"""
Query compiler exception hierarchy.

All exceptions inherit from ``SchemaQueryError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class SchemaQueryError(Exception):
    """Root exception for the query compiler."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(SchemaQueryError):
    """Raised when caller input fails validation.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        parts = []
        for field, messages in self.errors.items():
            joined = "; ".join(messages)
            parts.append(joined if field == "__root__" else f"{field}: {joined}")
        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": str(self),
            "errors": self.errors,
        }


class QueryParamsError(ValidationError):
    """Raised when request query parameters are malformed."""


class SchemaDefinitionError(SchemaQueryError):
    """Raised when a schema document cannot be turned into a registry."""


class SchemaValidationError(SchemaQueryError):
    """
    One or more search field paths are not valid for a model.

    Every offending path is reported at once, together with close
    matches among the model's top-level fields.

    Example error message::

        Invalid fields found for model 'Vendor': nmae, contact.fax.
        Fields must be scalar String or enum types.
        Did you mean: name?
    """

    def __init__(
        self,
        model_name: str,
        invalid_fields: list[str],
        available_fields: list[str] | None = None,
    ) -> None:
        self.model_name = model_name
        self.invalid_fields = list(invalid_fields)
        self.available_fields = sorted(available_fields or [])
        self.suggestions = self._suggest()
        super().__init__(self._build_message())

    def _suggest(self) -> list[str]:
        suggestions: list[str] = []
        for name in self.invalid_fields:
            for match in get_close_matches(
                name, self.available_fields, n=3, cutoff=0.6
            ):
                if match not in suggestions:
                    suggestions.append(match)
        return suggestions

    def _build_message(self) -> str:
        message = (
            f"Invalid fields found for model '{self.model_name}': "
            f"{', '.join(self.invalid_fields)}. "
            "Fields must be scalar String or enum types."
        )
        if self.suggestions:
            message += f"\nDid you mean: {', '.join(self.suggestions)}?"
        return message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "SCHEMA_VALIDATION_ERROR",
            "model": self.model_name,
            "invalid_fields": self.invalid_fields,
            "suggestions": self.suggestions,
        }


class UnknownModelError(SchemaValidationError):
    """The model named by a search request is not registered."""

    def __init__(self, model_name: str, available_models: list[str]) -> None:
        self.available_models = sorted(available_models)
        super().__init__(model_name, [])

    def _suggest(self) -> list[str]:
        return get_close_matches(
            self.model_name, self.available_models, n=3, cutoff=0.6
        )

    def _build_message(self) -> str:
        message = f"Model '{self.model_name}' not found in schema."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        return message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_MODEL",
            "model": self.model_name,
            "suggestions": self.suggestions,
        }


class NoSearchableFieldsError(SchemaQueryError):
    """A search was requested without any field that could match it."""

    def __init__(self, model_name: str, field_paths: list[str]) -> None:
        self.model_name = model_name
        self.field_paths = list(field_paths)
        if self.field_paths:
            message = (
                "No valid scalar String or enum fields found for model "
                f"'{model_name}' among provided fields: "
                f"{', '.join(self.field_paths)}"
            )
        else:
            message = f"No searchable fields provided for model '{model_name}'"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "NO_SEARCHABLE_FIELDS",
            "model": self.model_name,
            "fields": self.field_paths,
        }
