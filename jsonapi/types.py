"""Attribute types, attributes, relationships and resource types."""

from __future__ import annotations

import base64
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any, Callable

from .errors import SchemaError, invalid_field_value_in_body


class AttrType(IntEnum):
    """The possible types of an attribute."""

    INVALID = 0
    STRING = 1
    INT = 2
    INT8 = 3
    INT16 = 4
    INT32 = 5
    INT64 = 6
    UINT = 7
    UINT8 = 8
    UINT16 = 9
    UINT32 = 10
    UINT64 = 11
    BOOL = 12
    TIME = 13
    BYTES = 14


_NAMES = {
    AttrType.STRING: "string",
    AttrType.INT: "int",
    AttrType.INT8: "int8",
    AttrType.INT16: "int16",
    AttrType.INT32: "int32",
    AttrType.INT64: "int64",
    AttrType.UINT: "uint",
    AttrType.UINT8: "uint8",
    AttrType.UINT16: "uint16",
    AttrType.UINT32: "uint32",
    AttrType.UINT64: "uint64",
    AttrType.BOOL: "bool",
    AttrType.TIME: "time",
    AttrType.BYTES: "bytes",
}

_BY_NAME = {name: attr_type for attr_type, name in _NAMES.items()}
_BY_NAME.update(
    {
        "time.Time": AttrType.TIME,
        "[]uint8": AttrType.BYTES,
        "[]byte": AttrType.BYTES,
    }
)

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_ZERO_VALUES: dict[AttrType, Any] = {
    AttrType.STRING: "",
    AttrType.INT: 0,
    AttrType.INT8: 0,
    AttrType.INT16: 0,
    AttrType.INT32: 0,
    AttrType.INT64: 0,
    AttrType.UINT: 0,
    AttrType.UINT8: 0,
    AttrType.UINT16: 0,
    AttrType.UINT32: 0,
    AttrType.UINT64: 0,
    AttrType.BOOL: False,
    AttrType.TIME: ZERO_TIME,
    AttrType.BYTES: b"",
}

_SIGNED_BITS = {
    AttrType.INT: 64,
    AttrType.INT8: 8,
    AttrType.INT16: 16,
    AttrType.INT32: 32,
    AttrType.INT64: 64,
}

_UNSIGNED_BITS = {
    AttrType.UINT: 64,
    AttrType.UINT8: 8,
    AttrType.UINT16: 16,
    AttrType.UINT32: 32,
    AttrType.UINT64: 64,
}

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")
_RFC3339_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(Z|[+-][0-9]{2}:[0-9]{2})"
)


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def get_attr_type(name: str) -> tuple[AttrType, bool]:
    """Return the attribute type named by ``name`` and whether it is nullable.

    A leading ``*`` marks a nullable type. Unknown names give
    ``(AttrType.INVALID, False)``.
    """
    nullable = name.startswith("*")
    if nullable:
        name = name[1:]
    attr_type = _BY_NAME.get(name)
    if attr_type is None:
        return AttrType.INVALID, False
    return attr_type, nullable


def get_attr_type_string(attr_type: int, nullable: bool) -> str:
    """Return the name of an attribute type, prefixed by ``*`` if nullable."""
    base = _NAMES.get(attr_type, "")
    return "*" + base if nullable else base


def get_zero_value(attr_type: int, nullable: bool) -> Any:
    """Return the zero value of an attribute type; ``None`` when nullable."""
    if attr_type not in _ZERO_VALUES or nullable:
        return None
    return _ZERO_VALUES[attr_type]


class _InvalidValue(Exception):
    """A value that cannot be read as the attribute's type."""


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        raise _InvalidValue from None


def _parse_signed(text: str, bits: int) -> int:
    if not _SIGNED_RE.fullmatch(text):
        raise _InvalidValue
    number = int(text)
    if not -(2**63) <= number < 2**63:
        raise _InvalidValue
    if bits < 64:
        half = 2 ** (bits - 1)
        number = (number + half) % (2 * half) - half
    return number


def _parse_unsigned(text: str, bits: int) -> int:
    if not _UNSIGNED_RE.fullmatch(text):
        raise _InvalidValue
    number = int(text)
    if number >= 2**bits:
        raise _InvalidValue
    return number


def _parse_time(text: str) -> datetime:
    value = _load_json(text)
    if value is None:
        return ZERO_TIME
    if not isinstance(value, str):
        raise _InvalidValue
    match = _RFC3339_RE.fullmatch(value)
    if match is None:
        raise _InvalidValue
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction + "000000")[:6]) if fraction else 0
    try:
        if offset == "Z":
            tz = timezone.utc
        else:
            sign = -1 if offset[0] == "-" else 1
            delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[4:6]))
            tz = timezone(sign * delta)
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micro,
            tzinfo=tz,
        )
    except ValueError:
        raise _InvalidValue from None


def _decode_bytes(text: str) -> bytes:
    # Unreadable bytes are a programming error rather than a bad request.
    value = json.loads(text)
    if value is None:
        return b""
    if not isinstance(value, str):
        raise ValueError(f"cannot read {text!r} as base64 encoded bytes")
    return base64.b64decode(value, validate=True)


@dataclass(frozen=True)
class Attr:
    """An attribute of a resource type."""

    name: str = ""
    type: AttrType = AttrType.INVALID
    nullable: bool = False

    def unmarshal_to_type(self, data: bytes | str) -> Any:
        """Read a JSON-encoded value as a value of the attribute's type.

        Raises JsonApiError when the value does not fit the type and
        ValueError when a bytes value is not valid base64 JSON.
        """
        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode("utf-8", errors="replace")
        else:
            text = data
        if self.nullable and text == "null":
            return get_zero_value(self.type, self.nullable)
        try:
            return self._parse(text)
        except _InvalidValue:
            raise invalid_field_value_in_body(
                self.name, text, get_attr_type_string(self.type, self.nullable)
            ) from None

    def _parse(self, text: str) -> Any:
        attr_type = self.type
        if attr_type == AttrType.STRING:
            value = _load_json(text)
            if value is None:
                return ""
            if not isinstance(value, str):
                raise _InvalidValue
            return value
        if attr_type in _SIGNED_BITS:
            return _parse_signed(text, _SIGNED_BITS[attr_type])
        if attr_type in _UNSIGNED_BITS:
            return _parse_unsigned(text, _UNSIGNED_BITS[attr_type])
        if attr_type == AttrType.BOOL:
            if text == "true":
                return True
            if text == "false":
                return False
            raise _InvalidValue
        if attr_type == AttrType.TIME:
            return _parse_time(text)
        if attr_type == AttrType.BYTES:
            return _decode_bytes(text)
        raise _InvalidValue


@dataclass(frozen=True)
class Rel:
    """A relationship from one type to another."""

    from_type: str = ""
    from_name: str = ""
    to_one: bool = False
    to_type: str = ""
    to_name: str = ""
    from_one: bool = False

    def invert(self) -> Rel:
        """Return the inverse relationship."""
        return Rel(
            from_type=self.to_type,
            from_name=self.to_name,
            to_one=self.from_one,
            to_type=self.from_type,
            to_name=self.from_name,
            from_one=self.to_one,
        )

    def normalize(self) -> Rel:
        """Return the relationship in its canonical direction.

        The direction whose type and name sort first is kept; one-way
        relationships are returned unchanged.
        """
        source = self.from_type + self.from_name
        target = self.to_type + self.to_name
        if source < target or not self.to_name:
            return self
        return self.invert()

    def __str__(self) -> str:
        rel = self.normalize()
        name = f"{rel.from_type}_{rel.from_name}"
        if rel.to_name:
            name += f"_{rel.to_type}_{rel.to_name}"
        return name


class Resource(ABC):
    """An element of a collection."""

    @abstractmethod
    def new(self) -> Resource:
        """Return an empty resource of the same type."""

    @abstractmethod
    def copy(self) -> Resource:
        """Return a resource with the same type and values."""

    @abstractmethod
    def attrs(self) -> dict[str, Attr]:
        """Return the attributes by name."""

    @abstractmethod
    def rels(self) -> dict[str, Rel]:
        """Return the relationships by name."""

    @abstractmethod
    def get_type(self) -> Type:
        """Return the resource's type."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the value of a field, or the ID for ``"id"``."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Set the value of a field, or the ID for ``"id"``."""


@dataclass
class Type:
    """A resource type: its name, attributes and relationships.

    ``new_func`` builds new resources of the type; it is ignored when types
    are compared.
    """

    name: str = ""
    attrs: dict[str, Attr] = field(default_factory=dict)
    rels: dict[str, Rel] = field(default_factory=dict)
    new_func: Callable[[], Resource] | None = field(
        default=None, compare=False, repr=False
    )

    def add_attr(self, attr: Attr) -> None:
        """Add an attribute, raising SchemaError if it is invalid or taken."""
        if not attr.name:
            raise SchemaError("jsonapi: attribute name is empty")
        if get_attr_type_string(attr.type, attr.nullable) == "":
            raise SchemaError("jsonapi: attribute type is invalid")
        if any(existing.name == attr.name for existing in self.attrs.values()):
            raise SchemaError(
                f"jsonapi: attribute name {_quote(attr.name)} is already used"
            )
        self.attrs[attr.name] = attr

    def remove_attr(self, name: str) -> None:
        """Remove an attribute if it exists."""
        if any(attr.name == name for attr in self.attrs.values()):
            self.attrs.pop(name, None)

    def add_rel(self, rel: Rel) -> None:
        """Add a relationship, raising SchemaError if it is invalid or taken."""
        if not rel.from_name:
            raise SchemaError("jsonapi: relationship name is empty")
        if not rel.to_type:
            raise SchemaError("jsonapi: relationship type is empty")
        if any(existing.from_name == rel.from_name for existing in self.rels.values()):
            raise SchemaError(
                f"jsonapi: relationship name {_quote(rel.from_name)} is already used"
            )
        self.rels[rel.from_name] = rel

    def remove_rel(self, name: str) -> None:
        """Remove a relationship if it exists."""
        if any(rel.from_name == name for rel in self.rels.values()):
            self.rels.pop(name, None)

    def fields(self) -> list[str]:
        """Return the sorted names of all attributes and relationships."""
        names = [attr.name for attr in self.attrs.values()]
        names.extend(rel.from_name for rel in self.rels.values())
        return sorted(names)

    def new(self) -> Resource:
        """Return a new resource of this type.

        Uses ``new_func`` when set, otherwise a SoftResource bound to this type.
        """
        if self.new_func is not None:
            return self.new_func()
        from .soft_resource import SoftResource

        return SoftResource(type=self)

    def equal(self, other: Type) -> bool:
        """Report whether both types have the same name and fields."""
        return (
            self.name == other.name
            and self.attrs == other.attrs
            and self.rels == other.rels
        )

    def copy(self) -> Type:
        """Return a copy whose field maps are independent of this one."""
        return Type(
            name=self.name,
            attrs=dict(self.attrs),
            rels=dict(self.rels),
            new_func=self.new_func,
        )