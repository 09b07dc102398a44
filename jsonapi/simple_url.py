"""Parsing of JSON:API request URLs without a schema."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import SplitResult, parse_qsl, unquote, urlsplit

from .errors import (
    invalid_page_number_parameter,
    invalid_page_size_parameter,
    malformed_filter_parameter,
    unknown_parameter,
)

_UNSIGNED_RE = re.compile(r"[0-9]+")
_META = "meta"
_RELATIONSHIPS = "relationships"


@dataclass
class SimpleURL:
    """A URL split into its path fragments and query parameters, as given."""

    fragments: list[str] = field(default_factory=list)
    route: str = ""
    fields: dict[str, list[str]] = field(default_factory=dict)
    filter_label: str = ""
    filter: dict[str, Any] | None = None
    sorting_rules: list[str] = field(default_factory=list)
    page_size: int = 0
    page_number: int = 0
    include: list[str] = field(default_factory=list)

    def path(self) -> str:
        """Return the path without query parameters or leading slash."""
        return "/".join(self.fragments)


def parse_comma_list(value: str) -> list[str]:
    """Split a comma separated list, dropping empty items."""
    return [item for item in value.split(",") if item]


def parse_fragments(path: str) -> list[str]:
    """Split a path on slashes, dropping empty fragments."""
    return [fragment for fragment in path.split("/") if fragment]


def deduce_route(fragments: list[str]) -> str:
    """Return the route pattern, such as ``/users/:id/articles``, of a path."""
    count = len(fragments)
    route = ""
    if count >= 1:
        route = "/" + fragments[0]
    if count >= 2:
        route += "/" + _META if fragments[1] == _META else "/:id"
    if count >= 3:
        route += "/" + fragments[2]
    if count >= 4:
        if fragments[3] == _META:
            route += "/" + _META
        elif fragments[2] == _RELATIONSHIPS:
            route += "/" + fragments[3]
    if count >= 5 and fragments[4] == _META:
        route += "/" + _META
    return route


def _parse_unsigned(value: str) -> int | None:
    if not _UNSIGNED_RE.fullmatch(value):
        return None
    number = int(value)
    return number if number < 2**64 else None


def _parse_filter(value: str) -> tuple[str, dict[str, Any] | None]:
    """Return the filter label or the filter object held by ``value``."""
    try:
        if value.startswith("{"):
            parsed = json.loads(value)
            if not isinstance(parsed, dict):
                raise ValueError("filter is not an object")
            return "", parsed
        label = json.loads('"' + value + '"')
    except ValueError:
        raise malformed_filter_parameter(value) from None
    return label, None


def parse_simple_url(url: str | SplitResult) -> SimpleURL:
    """Parse a URL and return its fragments, route and query parameters.

    Raises JsonApiError for an unknown or malformed query parameter and
    ValueError when ``url`` is None.
    """
    if url is None:
        raise ValueError("jsonapi: url is None")
    parts = urlsplit(url) if isinstance(url, str) else url

    result = SimpleURL()
    result.fragments = parse_fragments(unquote(parts.path))
    result.route = deduce_route(result.fragments)

    values: dict[str, list[str]] = {}
    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        values.setdefault(name, []).append(value)

    for name, items in values.items():
        first = items[0]
        if name.startswith("fields[") and name.endswith("]") and len(name) > 8:
            if first:
                result.fields[name[7:-1]] = parse_comma_list(first)
        elif name == "filter":
            result.filter_label, result.filter = _parse_filter(first)
        elif name == "sort":
            for rules in items:
                result.sorting_rules.extend(parse_comma_list(rules))
        elif name == "page[size]":
            size = _parse_unsigned(first)
            if size is None:
                raise invalid_page_size_parameter(first)
            result.page_size = size
        elif name == "page[number]":
            number = _parse_unsigned(first)
            if number is None:
                raise invalid_page_number_parameter(first)
            result.page_number = number
        elif name == "include":
            for include in items:
                result.include.extend(parse_comma_list(include))
        else:
            raise unknown_parameter(name)

    return result