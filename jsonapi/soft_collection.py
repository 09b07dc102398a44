"""A collection of soft resources sharing one mutable type."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .soft_resource import SoftResource
from .types import Attr, Rel, Resource, Type


class SoftCollection:
    """A collection of SoftResources whose type can be changed all at once."""

    def __init__(self, type: Type | None = None) -> None:
        self.type = type if type is not None else Type()
        self._items: list[SoftResource] = []

    def add_attr(self, attr: Attr) -> None:
        """Add an attribute to every resource of the collection."""
        self.type.add_attr(attr)

    def add_rel(self, rel: Rel) -> None:
        """Add a relationship to every resource of the collection."""
        self.type.add_rel(rel)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SoftResource]:
        return iter(self._items)

    def at(self, index: int) -> SoftResource | None:
        """Return the resource at ``index``, or None if out of range."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def resource(self, id: str, fields: Iterable[str] | None = None) -> SoftResource | None:
        """Return the resource whose ID is ``id``, or None."""
        return next((item for item in self._items if item.id == id), None)

    def add(self, resource: Resource) -> None:
        """Add a SoftResource built from ``resource`` to the collection.

        Fields of ``resource`` missing from the collection's type are added
        to it.
        """
        item = SoftResource(type=self.type, id=resource.get("id"))
        for attr in list(resource.attrs().values()):
            item.add_attr(attr)
            item.set(attr.name, resource.get(attr.name))
        for rel in list(resource.rels().values()):
            item.add_rel(rel)
            item.set(rel.from_name, resource.get(rel.from_name))
        self._items.append(item)

    def remove(self, id: str) -> None:
        """Remove the resource whose ID is ``id``; nothing happens if none."""
        for position, item in enumerate(self._items):
            if item.id == id:
                del self._items[position]
                return