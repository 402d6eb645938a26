"""Tests for deep copying of default values."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from types import SimpleNamespace

import pytest

from icarus_tables.copier import Cloneable, clone_value
from icarus_tables.errors import SchemaUnsupportedError
from icarus_tables.values import ObjectPointer, RowEnum, RowHandle


class Color(Enum):
    RED = "Red"
    BLUE = "Blue"


@dataclass
class Inner:
    value: int = 0
    tags: list[str] = field(default_factory=list)


@dataclass
class Outer:
    inner: Inner = field(default_factory=Inner)
    items: list[Inner] = field(default_factory=list)
    lookup: dict[str, int] = field(default_factory=dict)
    color: Color = Color.RED
    handle: RowHandle = field(default_factory=RowHandle)
    _cache: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Point:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class TaggedRange:
    low: int = 0
    high: int = 0
    tags: list[str] = field(default_factory=list)


class SelfCloning:
    def __init__(self, payload):
        self.payload = payload
        self.clones = 0

    def clone(self):
        self.clones += 1
        return SelfCloning(list(self.payload))


class CopyConstructed:
    def __init__(self, payload):
        self.payload = payload

    def __copy__(self):
        return CopyConstructed(dict(self.payload))


class Opaque:
    pass


class TestScalars:
    @pytest.mark.parametrize(
        "value",
        [True, 3, 2.5, "text", b"raw", Color.BLUE, RowHandle("A", "T"), RowEnum("X"), ObjectPointer("/Game/A")],
    )
    def test_immutable_values_shared(self, value):
        assert clone_value(value) is value

    def test_none(self):
        assert clone_value(None) is None

    def test_frozen_dataclass_rebuilt(self):
        point = Point(1, 2)
        duplicate = clone_value(point)
        assert duplicate == point
        assert duplicate is not point

    def test_frozen_dataclass_collections_not_shared(self):
        original = TaggedRange(1, 5, ["base"])
        duplicate = clone_value(original)

        assert duplicate == original
        assert duplicate.tags is not original.tags
        duplicate.tags.append("x")
        assert original.tags == ["base"]


class TestStrategies:
    def test_clone_method_preferred(self):
        original = SelfCloning([1, 2])
        duplicate = clone_value(original)
        assert isinstance(original, Cloneable)
        assert original.clones == 1
        assert duplicate is not original
        assert duplicate.payload == [1, 2]
        assert duplicate.payload is not original.payload

    def test_copy_protocol(self):
        original = CopyConstructed({"a": 1})
        duplicate = clone_value(original)
        assert duplicate is not original
        assert duplicate.payload == original.payload
        assert duplicate.payload is not original.payload

    def test_unsupported_type(self):
        with pytest.raises(SchemaUnsupportedError):
            clone_value(Opaque())

    def test_unsupported_type_is_type_error(self):
        with pytest.raises(TypeError):
            clone_value(Opaque())

    def test_attribute_bags_are_not_composites(self):
        with pytest.raises(SchemaUnsupportedError):
            clone_value(SimpleNamespace(value=1))


class TestCollections:
    def test_list_rebuilt(self):
        original = [1, 2, 3]
        duplicate = clone_value(original)
        assert duplicate == original
        assert duplicate is not original

    def test_dict_rebuilt(self):
        original = {"a": 1}
        duplicate = clone_value(original)
        duplicate["b"] = 2
        assert original == {"a": 1}

    def test_set_and_tuple_rebuilt(self):
        assert clone_value({1, 2}) == {1, 2}
        assert clone_value((1, 2)) == (1, 2)

    def test_elements_not_copied(self):
        shared = Inner(value=1)
        original = [shared]
        duplicate = clone_value(original)
        assert duplicate is not original
        assert duplicate[0] is shared


class TestComposites:
    def test_fields_copied_recursively(self):
        original = Outer(inner=Inner(5, ["a"]), lookup={"k": 1}, color=Color.BLUE)
        duplicate = clone_value(original)

        assert duplicate == original
        assert duplicate is not original
        assert duplicate.inner is not original.inner
        assert duplicate.inner.tags is not original.inner.tags
        assert duplicate.lookup is not original.lookup
        assert duplicate.color is Color.BLUE

    def test_mutating_copy_leaves_original(self):
        original = Outer(inner=Inner(5, ["a"]))
        duplicate = clone_value(original)

        duplicate.inner.value = 10
        duplicate.inner.tags.append("b")

        assert original.inner.value == 5
        assert original.inner.tags == ["a"]

    def test_private_fields_shared(self):
        original = Outer(_cache=[1])
        duplicate = clone_value(original)
        assert duplicate._cache is original._cache

    def test_collection_elements_shared_between_copies(self):
        original = Outer(items=[Inner(1)])
        duplicate = clone_value(original)

        assert duplicate.items is not original.items
        assert duplicate.items[0] is original.items[0]

    def test_matches_deepcopy_for_plain_structs(self):
        original = Outer(inner=Inner(3, ["x", "y"]), lookup={"a": 1})
        assert clone_value(original) == copy.deepcopy(original)
