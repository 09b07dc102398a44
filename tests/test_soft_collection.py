import pytest

from jsonapi.errors import SchemaError
from jsonapi.soft_collection import SoftCollection
from jsonapi.soft_resource import SoftResource
from jsonapi.types import Attr, AttrType, Rel, Type


def test_soft_collection():
    typ = Type(name="thistype")
    typ.add_attr(Attr(name="attr1", type=AttrType.INT, nullable=False))
    typ.add_attr(Attr(name="attr2", type=AttrType.STRING, nullable=True))
    typ.add_rel(
        Rel(
            from_name="rel1",
            from_type="thistype",
            to_one=True,
            to_name="rel2",
            to_type="othertype",
            from_one=True,
        )
    )
    typ.add_rel(
        Rel(
            from_name="rel3",
            from_type="thistype",
            to_one=False,
            to_name="rel4",
            to_type="othertype",
            from_one=True,
        )
    )

    sc = SoftCollection(typ.copy())
    assert sc.type == typ

    attr3 = Attr(name="attr3", type=AttrType.BOOL, nullable=False)
    rel5 = Rel(
        from_name="rel5",
        from_type="thistype",
        to_one=True,
        to_name="rel6",
        to_type="othertype",
        from_one=False,
    )
    typ.add_attr(attr3)
    sc.add_attr(attr3)
    typ.add_rel(rel5)
    sc.add_rel(rel5)
    assert sc.type == typ

    sr = SoftResource(type=Type(name="thirdtype"))
    attr4 = Attr(name="attr4", type=AttrType.UINT16, nullable=True)
    sr.add_attr(attr4)
    typ.add_attr(attr4)
    rel7 = Rel(
        from_name="rel7",
        from_type="thirdtype",
        to_one=True,
        to_name="rel8",
        to_type="othertype",
        from_one=True,
    )
    sr.add_rel(rel7)
    typ.add_rel(rel7)
    rel8 = Rel(
        from_name="rel8",
        from_type="thirdtype",
        to_one=False,
        to_name="rel9",
        to_type="othertype",
        from_one=True,
    )
    sr.add_rel(rel8)
    typ.add_rel(rel8)

    sc.add(sr)
    assert sc.type == typ

    sc.add(SoftResource(id="res1"))
    sc.add(SoftResource(id="res2"))
    assert len(sc) == 3

    sc.remove("res1")
    sc.remove("res99")
    assert len(sc) == 2
    assert [item.id for item in sc] == ["", "res2"]


def test_soft_collection_resource():
    sc = SoftCollection(Type())
    sc.type.name = "type1"
    sc.type.add_attr(Attr(name="attr1", type=AttrType.STRING, nullable=False))
    sc.type.add_attr(Attr(name="attr2", type=AttrType.INT, nullable=True))
    sc.type.add_rel(Rel(from_name="rel1", to_one=True, to_type="type2"))

    sr = SoftResource(type=sc.type, id="res1")
    sr.set("attr", "value1")
    sc.add(sr)

    for fields in (None, ["attr2", "rel1"]):
        found = sc.resource("res1", fields)
        assert found.id == "res1"
        assert found.get_type() is sc.type
        assert found.get("attr1") == ""
        assert found.get("attr2") is None
        assert found.get("rel1") == ""

    assert sc.resource("notfound", None) is None


def test_at_out_of_range():
    sc = SoftCollection()
    assert sc.at(99) is None
    sc.add(SoftResource(id="a"))
    assert sc.at(0).id == "a"
    assert sc.at(-1) is None


def test_added_attribute_reaches_existing_resources():
    sc = SoftCollection(Type(name="users"))
    sc.add_attr(Attr(name="username", type=AttrType.STRING, nullable=False))
    sc.add(SoftResource())
    sc.add_attr(Attr(name="admin", type=AttrType.BOOL, nullable=False))
    assert sc.at(0).get("admin") is False


def test_values_are_carried_over():
    source = SoftResource(type=Type(name="users"), id="u1")
    source.add_attr(Attr(name="age", type=AttrType.UINT8))
    source.add_rel(Rel(from_name="friends", to_one=False, to_type="users"))
    source.set("age", 30)
    source.set("friends", ["u2", "u3"])

    sc = SoftCollection(Type(name="users"))
    sc.add(source)
    item = sc.at(0)
    assert item.get("id") == "u1"
    assert item.get("age") == 30
    assert item.get("friends") == ["u2", "u3"]


def test_invalid_attribute_raises():
    sc = SoftCollection(Type(name="users"))
    with pytest.raises(SchemaError, match="attribute name is empty"):
        sc.add_attr(Attr())