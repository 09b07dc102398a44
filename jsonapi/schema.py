"""A set of types whose relationships can be checked for consistency."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from .errors import SchemaError
from .types import Attr, Rel, Type


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class Schema:
    """A list of types.

    ``check`` validates the relationships between the types.
    """

    types: list[Type] = field(default_factory=list)

    def _find(self, name: str) -> Type | None:
        return next((typ for typ in self.types if typ.name == name), None)

    def add_type(self, typ: Type) -> None:
        """Add a type, raising SchemaError if its name is empty or taken."""
        if not typ.name:
            raise SchemaError("jsonapi: type name is empty")
        if self._find(typ.name) is not None:
            raise SchemaError(f"jsonapi: type name {_quote(typ.name)} is already used")
        self.types.append(typ)

    def remove_type(self, name: str) -> None:
        """Remove the type with the given name, if any."""
        self.types = [typ for typ in self.types if typ.name != name]

    def _require(self, type_name: str) -> Type:
        typ = self._find(type_name)
        if typ is None:
            raise SchemaError(f"jsonapi: type {_quote(type_name)} does not exist")
        return typ

    def add_attr(self, type_name: str, attr: Attr) -> None:
        """Add an attribute to the named type."""
        self._require(type_name).add_attr(attr)

    def remove_attr(self, type_name: str, name: str) -> None:
        """Remove an attribute from the named type."""
        for typ in self.types:
            if typ.name == type_name:
                typ.remove_attr(name)

    def add_rel(self, type_name: str, rel: Rel) -> None:
        """Add a relationship to the named type."""
        self._require(type_name).add_rel(rel)

    def remove_rel(self, type_name: str, name: str) -> None:
        """Remove a relationship from the named type."""
        for typ in self.types:
            if typ.name == type_name:
                typ.remove_rel(name)

    def add_two_way_rel(self, rel: Rel) -> None:
        """Add a relationship and its inverse to the two types involved.

        Both types must already exist in the schema.
        """
        rel1 = rel.normalize()
        rel2 = rel.invert()
        found1 = found2 = False
        for typ in self.types:
            if typ.name == rel1.from_type:
                found1 = True
                typ.add_rel(rel1)
            elif typ.name == rel2.from_type:
                found2 = True
                typ.add_rel(rel2)
        if not (found1 and found2):
            raise SchemaError(
                f"jsonapi: types {_quote(rel1.from_type)} and "
                f"{_quote(rel2.from_type)} must exist"
            )

    def rels(self) -> list[Rel]:
        """Return every relationship, keeping one side of two-way ones.

        Relationships are normalized and sorted by type name then name.
        """
        unique = {
            str(rel): rel.normalize()
            for typ in self.types
            for rel in typ.rels.values()
        }
        return sorted(unique.values(), key=lambda rel: rel.from_type + rel.from_name)

    def has_type(self, name: str) -> bool:
        """Report whether a type has the given name."""
        return self._find(name) is not None

    def get_type(self, name: str) -> Type:
        """Return the named type, or an empty Type if there is none."""
        typ = self._find(name)
        return typ if typ is not None else Type()

    def check(self) -> list[SchemaError]:
        """Return every inconsistency found in the relationships."""
        errors: list[SchemaError] = []
        for typ in self.types:
            for rel in typ.rels.values():
                target = self.get_type(rel.to_type)
                if not target.name:
                    errors.append(
                        SchemaError(
                            f"jsonapi: field ToType of relationship "
                            f"{_quote(rel.from_name)} of type {_quote(typ.name)} "
                            f"does not exist"
                        )
                    )
                if not rel.to_name:
                    continue
                if rel.from_type != typ.name:
                    errors.append(
                        SchemaError(
                            f"jsonapi: field FromType of relationship "
                            f"{_quote(rel.from_name)} must be its type's name "
                            f"({_quote(typ.name)}, not {_quote(rel.from_type)})"
                        )
                    )
                    continue
                inverse_found = any(
                    rel.from_name == inverse.to_name and rel.to_name == inverse.from_name
                    for inverse in target.rels.values()
                )
                if not inverse_found:
                    errors.append(
                        SchemaError(
                            f"jsonapi: relationship {_quote(rel.from_name)} of type "
                            f"{_quote(typ.name)} and its inverse do not point each other"
                        )
                    )
        return errors