"""A resource whose structure is defined by a mutable type."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from .types import Attr, AttrType, Rel, Resource, Type, get_zero_value

_INT_RANGES = {
    AttrType.INT: (-(2**63), 2**63 - 1),
    AttrType.INT8: (-(2**7), 2**7 - 1),
    AttrType.INT16: (-(2**15), 2**15 - 1),
    AttrType.INT32: (-(2**31), 2**31 - 1),
    AttrType.INT64: (-(2**63), 2**63 - 1),
    AttrType.UINT: (0, 2**64 - 1),
    AttrType.UINT8: (0, 2**8 - 1),
    AttrType.UINT16: (0, 2**16 - 1),
    AttrType.UINT32: (0, 2**32 - 1),
    AttrType.UINT64: (0, 2**64 - 1),
}


def _fits(attr: Attr, value: Any) -> bool:
    """Report whether ``value`` can be stored in the attribute."""
    if value is None:
        return attr.nullable
    attr_type = attr.type
    if attr_type == AttrType.STRING:
        return isinstance(value, str)
    if attr_type in _INT_RANGES:
        low, high = _INT_RANGES[attr_type]
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and low <= value <= high
        )
    if attr_type == AttrType.BOOL:
        return isinstance(value, bool)
    if attr_type == AttrType.TIME:
        return isinstance(value, datetime)
    if attr_type == AttrType.BYTES:
        return isinstance(value, (bytes, bytearray))
    return False


def _copy_value(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, bytearray):
        return bytes(value)
    return value


class SoftResource(Resource):
    """A resource whose fields are those of its ``type``.

    Changing the type changes the resource's attributes and relationships.
    A field that has not been set holds the zero value of its type.
    """

    def __init__(self, type: Type | None = None, id: str = "") -> None:
        self.type = type if type is not None else Type()
        self.id = id
        self.meta: dict[str, Any] = {}
        self._data: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"SoftResource(type={self.type.name!r}, id={self.id!r})"

    def _field_names(self) -> set[str]:
        names = {attr.name for attr in self.type.attrs.values()}
        names.update(rel.from_name for rel in self.type.rels.values())
        return names

    def _sync(self) -> None:
        """Align the stored values with the fields of the current type."""
        for attr in self.type.attrs.values():
            if attr.name not in self._data:
                self._data[attr.name] = get_zero_value(attr.type, attr.nullable)
        for rel in self.type.rels.values():
            if rel.from_name not in self._data:
                self._data[rel.from_name] = "" if rel.to_one else []
        names = self._field_names()
        for key in [key for key in self._data if key not in names]:
            del self._data[key]

    def attrs(self) -> dict[str, Attr]:
        """Return the attributes of the resource's type."""
        self._sync()
        return self.type.attrs

    def rels(self) -> dict[str, Rel]:
        """Return the relationships of the resource's type."""
        self._sync()
        return self.type.rels

    def add_attr(self, attr: Attr) -> None:
        """Add an attribute to the type unless a field has that name."""
        self._sync()
        if attr.name in self._field_names():
            return
        self.type.attrs[attr.name] = attr

    def add_rel(self, rel: Rel) -> None:
        """Add a relationship to the type unless a field has that name."""
        self._sync()
        if rel.from_name in self._field_names():
            return
        self.type.rels[rel.from_name] = rel

    def remove_field(self, field: str) -> None:
        """Remove the attribute or relationship named ``field``."""
        self._sync()
        self.type.attrs.pop(field, None)
        self.type.rels.pop(field, None)

    def attr(self, key: str) -> Attr:
        """Return the attribute named ``key``, or an empty Attr."""
        self._sync()
        return self.type.attrs.get(key, Attr())

    def rel(self, key: str) -> Rel:
        """Return the relationship named ``key``, or an empty Rel."""
        self._sync()
        return self.type.rels.get(key, Rel())

    def new(self) -> SoftResource:
        """Return an empty resource with a copy of this resource's type."""
        self._sync()
        return SoftResource(type=self.type.copy())

    def get_type(self) -> Type:
        """Return the resource's type."""
        self._sync()
        return self.type

    def get(self, key: str) -> Any:
        """Return the value of a field, the ID for ``"id"``, or None."""
        self._sync()
        if key == "id":
            return self.id
        if key in self.type.attrs or key in self.type.rels:
            return self._data.get(key)
        return None

    def set(self, key: str, value: Any) -> None:
        """Set a field's value; values that do not fit the field are ignored."""
        self._sync()
        if key == "id":
            self.id = value if isinstance(value, str) else ""
            return
        attr = self.type.attrs.get(key)
        if attr is not None:
            if _fits(attr, value):
                self._data[key] = _copy_value(value)
            return
        rel = self.type.rels.get(key)
        if rel is None:
            return
        if rel.to_one:
            if isinstance(value, str):
                self._data[key] = value
        elif isinstance(value, (list, tuple)) and all(
            isinstance(item, str) for item in value
        ):
            self._data[key] = list(value)

    def copy(self) -> SoftResource:
        """Return a resource with a copy of the type and the same values."""
        self._sync()
        duplicate = SoftResource(type=self.type.copy(), id=self.id)
        duplicate._data = {key: _copy_value(val) for key, val in self._data.items()}
        return duplicate