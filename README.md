# jsonapi

Building blocks for JSON:API services: describe resource types in a
schema, hold resources whose type can change at run time, split request
URLs into their parts, and read resource objects from request bodies.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `jsonapi.types` | `AttrType`, `Attr`, `Rel`, `Type`, the abstract `Resource`, `get_attr_type`, `get_attr_type_string`, `get_zero_value` |
| `jsonapi.schema` | `Schema` |
| `jsonapi.soft_resource` | `SoftResource` |
| `jsonapi.soft_collection` | `SoftCollection` |
| `jsonapi.simple_url` | `SimpleURL`, `parse_simple_url`, `parse_comma_list`, `parse_fragments`, `deduce_route` |
| `jsonapi.resource` | `unmarshal_resource`, `unmarshal_partial_resource`, `equal`, `equal_strict` |
| `jsonapi.errors` | `JsonApiError`, `SchemaError` and the functions that build request errors |

## Types and schemas

A `Type` has a name, attributes (`Attr`) and relationships (`Rel`).
The kinds of attribute are the members of `AttrType` (strings, signed and
unsigned integers of several widths, booleans, times and bytes); an
attribute may be nullable.

```python
from jsonapi.types import Attr, AttrType, Rel, Type
from jsonapi.schema import Schema

users = Type(name="users")
users.add_attr(Attr(name="username", type=AttrType.STRING))

articles = Type(name="articles")
articles.add_attr(Attr(name="title", type=AttrType.STRING))

schema = Schema()
schema.add_type(users)
schema.add_type(articles)

schema.add_two_way_rel(Rel(
    from_type="articles", from_name="author", to_one=True,
    to_type="users", to_name="articles", from_one=False,
))

assert schema.check() == []
```

Adding a type, attribute or relationship that is not valid (empty name,
invalid attribute type, name already taken, unknown type) raises
`SchemaError`. `Schema.check()` does not raise: it returns a list of
`SchemaError` objects, one for each relationship that points to a missing
type or whose inverse does not point back. `Schema.rels()` lists every
relationship once, keeping one side of each two-way relationship.

`Rel.invert()` gives the other side of a relationship, `Rel.normalize()`
its canonical direction, and `str(rel)` a name such as
`type1_rel1_type2_rel2`.

`get_attr_type("*int8")` returns `(AttrType.INT8, True)`;
`get_attr_type_string` does the reverse, and `get_zero_value` returns the
value a field of a given kind starts with (`None` when nullable).
`Attr.unmarshal_to_type` reads a JSON-encoded value as a value of the
attribute's kind and raises `JsonApiError` when it does not fit.

## Soft resources and collections

A `SoftResource` takes its fields from a `Type` that can be changed. New
fields start at their zero value; a value that does not fit a field is
ignored by `set`.

```python
from jsonapi.soft_resource import SoftResource
from jsonapi.soft_collection import SoftCollection

res = SoftResource()
res.add_attr(Attr(name="username", type=AttrType.STRING))
res.set("username", "rob")
res.get("username")     # "rob"

col = SoftCollection(Type(name="users"))
col.add_attr(Attr(name="username", type=AttrType.STRING))
col.add(res)
len(col)                # 1
col.at(0).get("username")   # "rob"
```

All resources in a `SoftCollection` share the collection's type, so a
field added through the collection appears on every resource in it.
`resource(id)` finds a resource by ID and `remove(id)` drops it.

## URLs

```python
from jsonapi.simple_url import parse_simple_url

url = parse_simple_url("/users/u1/articles?sort=title,-id&page[size]=10")
url.fragments      # ["users", "u1", "articles"]
url.route          # "/users/:id/articles"
url.sorting_rules  # ["title", "-id"]
url.page_size      # 10
```

The recognised query parameters are `fields[<type>]`, `filter` (a label or
a JSON object), `sort`, `page[size]`, `page[number]` and `include`. An
unknown parameter, a malformed filter or a page value that is not an
unsigned integer raises `JsonApiError`.

## Reading payloads

```python
from jsonapi.resource import unmarshal_resource, unmarshal_partial_resource

payload = b'{"id": "u1", "type": "users", "attributes": {"username": "rob"}}'
res = unmarshal_resource(payload, schema)
partial = unmarshal_partial_resource(payload, schema)
```

`unmarshal_resource` builds a resource through the schema type's `new()`,
so fields missing from the payload keep their zero value.
`unmarshal_partial_resource` returns a `SoftResource` whose type holds only
the fields found in the payload, which tells the fields that were sent
apart from the others. Unreadable JSON, unknown fields and values that do
not fit raise `JsonApiError`, whose `str()` reads like
`400 Bad Request: "unknown" is not a known field.`

`equal` compares two resources by type name, attribute values and
relationships, ignoring IDs; `equal_strict` also compares IDs.

## What it does not do

The package reads resource objects but does not write them: there is no
serialisation of resources or whole documents to JSON, and no reading of
top-level documents with `data`, `included` or `errors`. URLs are split
into their parts but not checked against a schema. There is no server or
command-line tool.