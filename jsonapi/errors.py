"""Errors raised by the package."""

from __future__ import annotations

import json
import uuid
from http import HTTPStatus
from typing import Any


class SchemaError(ValueError):
    """Raised when a schema, a type or one of its fields is invalid."""


class JsonApiError(Exception):
    """An error object as described by the JSON:API specification.

    Two errors compare equal when everything but their identifier matches.
    """

    def __init__(
        self,
        status: int = 500,
        title: str = "",
        detail: str = "",
        *,
        code: str = "",
        source: dict[str, str] | None = None,
        meta: dict[str, Any] | None = None,
        error_id: str | None = None,
    ) -> None:
        self.status = status
        self.title = title
        self.detail = detail
        self.code = code
        self.source = dict(source or {})
        self.meta = dict(meta or {})
        self.id = error_id if error_id is not None else uuid.uuid4().hex
        super().__init__(str(self))

    def __str__(self) -> str:
        try:
            phrase = HTTPStatus(self.status).phrase
        except ValueError:
            phrase = ""
        head = f"{self.status} {phrase}".strip()
        message = self.detail or self.title
        return f"{head}: {message}" if message else head

    def _key(self) -> tuple:
        return (self.status, self.title, self.detail, self.code, self.source, self.meta)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonApiError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self.status, self.title, self.detail, self.code))

    def __repr__(self) -> str:
        return (
            f"JsonApiError(status={self.status!r}, title={self.title!r}, "
            f"detail={self.detail!r})"
        )


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def bad_request(title: str, detail: str) -> JsonApiError:
    """Return a generic 400 error with the given title and detail."""
    return JsonApiError(400, title, detail)


def invalid_field_value_in_body(field: str, value: str, type_name: str) -> JsonApiError:
    """Return an error for a field whose value does not fit its type."""
    return JsonApiError(
        400,
        "Invalid field value in body",
        "The field value is invalid for the expected type.",
        meta={"field": field, "value": value, "type": type_name},
    )


def unknown_field_in_body(type_name: str, field: str) -> JsonApiError:
    """Return an error for a field that the type does not define."""
    return JsonApiError(
        400,
        "Unknown field in body",
        f"{_quote(field)} is not a known field.",
        meta={"unknown-field": field, "type": type_name},
    )


def malformed_filter_parameter(value: str) -> JsonApiError:
    """Return an error for a filter parameter that cannot be read."""
    return JsonApiError(
        400,
        "Malformed filter parameter",
        "The filter parameter is not a string or a valid JSON object.",
        source={"parameter": "filter"},
        meta={"bad-filter": value},
    )


def invalid_page_size_parameter(value: str) -> JsonApiError:
    """Return an error for a page size that is not an unsigned integer."""
    return JsonApiError(
        400,
        "Invalid page size parameter",
        "The page size parameter is not positive integer (including 0).",
        source={"parameter": "page[size]"},
        meta={"page-size": value},
    )


def invalid_page_number_parameter(value: str) -> JsonApiError:
    """Return an error for a page number that is not an unsigned integer."""
    return JsonApiError(
        400,
        "Invalid page number parameter",
        "The page number parameter is not positive integer (including 0).",
        source={"parameter": "page[number]"},
        meta={"page-number": value},
    )


def unknown_parameter(name: str) -> JsonApiError:
    """Return an error for a query parameter that is not recognised."""
    return JsonApiError(
        400,
        "Unknown parameter",
        f"{_quote(name)} is not a known parameter.",
        source={"parameter": name},
    )