"""Reading resources from JSON payloads and comparing resources."""

from __future__ import annotations

import json
from contextlib import suppress
from dataclasses import dataclass, field
from typing import Any

from .errors import (
    SchemaError,
    bad_request,
    invalid_field_value_in_body,
    unknown_field_in_body,
)
from .schema import Schema
from .soft_resource import SoftResource
from .types import Rel, Resource, Type


class _InvalidBody(Exception):
    """The payload does not have the shape of a resource object."""


class _InvalidIdentifier(Exception):
    """Relationship data is not a valid resource identifier."""


@dataclass
class _ResourceSkeleton:
    id: str = ""
    type: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)
    relationships: dict[str, dict[str, Any]] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _member(obj: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = obj.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise _InvalidBody
    return value


def _read_skeleton(data: bytes | str) -> _ResourceSkeleton:
    try:
        payload = json.loads(data)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise _InvalidBody
        relationships = {}
        for name, body in _member(payload, "relationships", dict, {}).items():
            if body is None:
                body = {}
            if not isinstance(body, dict):
                raise _InvalidBody
            relationships[name] = body
        return _ResourceSkeleton(
            id=_member(payload, "id", str, ""),
            type=_member(payload, "type", str, ""),
            attributes=_member(payload, "attributes", dict, {}),
            relationships=relationships,
            meta=_member(payload, "meta", dict, {}),
        )
    except (ValueError, TypeError, _InvalidBody):
        raise bad_request(
            "Invalid JSON",
            "The provided JSON body could not be read.",
        ) from None


def _identifier_id(item: Any) -> str:
    if item is None:
        return ""
    if not isinstance(item, dict):
        raise _InvalidIdentifier
    ident = item.get("id")
    if ident is None:
        return ""
    if not isinstance(ident, str):
        raise _InvalidIdentifier
    return ident


def _read_rel_data(rel: Rel, data: Any) -> str | list[str]:
    if rel.to_one:
        return _identifier_id(data)
    if data is None:
        return []
    if not isinstance(data, list):
        raise _InvalidIdentifier
    return [_identifier_id(item) for item in data]


def _fill(
    skeleton: _ResourceSkeleton,
    typ: Type,
    res: Resource,
    partial_type: Type | None = None,
) -> None:
    """Copy the skeleton's fields into ``res`` using the fields of ``typ``."""
    for name, value in skeleton.attributes.items():
        attr = typ.attrs.get(name)
        if attr is None:
            raise unknown_field_in_body(typ.name, name)
        parsed = attr.unmarshal_to_type(_dump(value))
        if partial_type is not None:
            with suppress(SchemaError):
                partial_type.add_attr(attr)
        res.set(attr.name, parsed)

    for name, body in skeleton.relationships.items():
        rel = typ.rels.get(name)
        if rel is None:
            raise unknown_field_in_body(typ.name, name)
        if "data" not in body:
            continue
        try:
            value = _read_rel_data(rel, body["data"])
        except _InvalidIdentifier:
            raise invalid_field_value_in_body(
                rel.from_name, _dump(body["data"]), typ.name
            ) from None
        if partial_type is not None:
            with suppress(SchemaError):
                partial_type.add_rel(rel)
        res.set(rel.from_name, value)


def unmarshal_resource(data: bytes | str, schema: Schema) -> Resource:
    """Read a JSON resource object into a new resource of its schema type.

    Fields missing from the payload keep their zero value. Raises
    JsonApiError when the payload is unreadable or does not fit the type.
    """
    skeleton = _read_skeleton(data)
    typ = schema.get_type(skeleton.type)
    res = typ.new()
    res.set("id", skeleton.id)
    _fill(skeleton, typ, res)
    if hasattr(res, "meta"):
        res.meta = dict(skeleton.meta)
    return res


def unmarshal_partial_resource(data: bytes | str, schema: Schema) -> SoftResource:
    """Read a JSON resource object into a SoftResource holding only its fields.

    The resource's type is a new type with the schema type's name and only
    the fields present in the payload, so the fields that were set can be
    told apart from the others.
    """
    skeleton = _read_skeleton(data)
    typ = schema.get_type(skeleton.type)
    partial_type = Type(name=typ.name)
    res = SoftResource(type=partial_type, id=skeleton.id)
    _fill(skeleton, typ, res, partial_type)
    return res


def equal(r1: Resource, r2: Resource) -> bool:
    """Report whether two resources have the same type, values and relationships.

    IDs are ignored.
    """
    if r1.get_type().name != r2.get_type().name:
        return False

    attrs1 = sorted(r1.attrs().values(), key=lambda attr: attr.name)
    attrs2 = sorted(r2.attrs().values(), key=lambda attr: attr.name)
    if len(attrs1) != len(attrs2):
        return False
    for attr1, attr2 in zip(attrs1, attrs2):
        value1 = r1.get(attr1.name)
        if value1 != r2.get(attr2.name):
            if value1 is None and r2.get(attr1.name) is None:
                continue
            return False

    rels1 = sorted(r1.rels().values(), key=lambda rel: rel.from_name)
    rels2 = sorted(r2.rels().values(), key=lambda rel: rel.from_name)
    if len(rels1) != len(rels2):
        return False
    for rel1, rel2 in zip(rels1, rels2):
        if rel1.to_one != rel2.to_one:
            return False
        value1 = r1.get(rel1.from_name)
        value2 = r2.get(rel2.from_name)
        if rel1.to_one:
            if value1 != value2:
                return False
        else:
            ids1 = list(value1 or [])
            ids2 = list(value2 or [])
            if (ids1 or ids2) and ids1 != ids2:
                return False

    return True


def equal_strict(r1: Resource, r2: Resource) -> bool:
    """Like ``equal``, but the IDs must match too."""
    if r1.get("id") != r2.get("id"):
        return False
    return equal(r1, r2)