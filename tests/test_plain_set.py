"""Tests for PlainSet, the immutable set of keys.

A PlainSet is a dict whose only value is ``True``.  Membership is
presence; edits and set algebra always return a new set.
"""

import json
from enum import Enum, IntEnum, StrEnum

import pytest

from py_plain import PlainSet


class MyStringEnum(StrEnum):
    """String-valued enum."""

    ONE = "a"
    TWO = "b"
    THREE = "c"


class MyNumericEnum(IntEnum):
    """Integer-valued enum."""

    ONE = 1
    TWO = 2
    THREE = 3


class MyHybridEnum(Enum):
    """Enum mixing integer and string values."""

    ONE = 1
    TWO = 2
    THREE = 3
    AYE = "a"
    BEE = "b"
    SEE = "c"


# The shape of a hybrid enum exported from a language whose numeric
# enums carry a reverse ``value -> name`` entry per numeric variant.
EXPORTED_HYBRID_ENUM = {
    "one": 1,
    "two": 2,
    "three": 3,
    "1": "one",
    "2": "two",
    "3": "three",
    "aye": "a",
    "bee": "b",
    "see": "c",
}

ABC = {"a": True, "b": True, "c": True}
NUMBERS = {1: True, 2: True, 3: True}
HYBRID = {1: True, 2: True, 3: True, "a": True, "b": True, "c": True}


class TestConstruction:
    """Verify building sets."""

    def test_from_items(self) -> None:
        """from_items should make a member of every item."""
        assert PlainSet.from_items(["a", "b", "c"]) == ABC

    def test_from_items_filters_duplicates(self) -> None:
        """Duplicate items should collapse into one member."""
        s = PlainSet.from_items(["a", "b", "c", "b"])
        assert s == ABC
        assert s.to_list() == ["a", "b", "c"]

    def test_constructor_accepts_keys(self) -> None:
        """PlainSet(iterable) should behave like from_items()."""
        assert PlainSet(["a", "b", "c"]) == ABC

    def test_constructor_accepts_record(self) -> None:
        """PlainSet(mapping) should accept the serialized shape."""
        assert PlainSet({"a": True}) == {"a": True}

    def test_empty(self) -> None:
        """An empty set should equal an empty dict."""
        assert PlainSet.empty() == {}
        assert PlainSet.empty().to_list() == []

    def test_member_access_by_key(self) -> None:
        """Members should be readable with bracket notation."""
        s = PlainSet.from_items(["a", "b", "c"])
        assert s["a"] is True


class TestFromEnum:
    """Verify building sets from enumerated types."""

    def test_string_enum(self) -> None:
        """A string enum should give its string values."""
        s = PlainSet.from_enum(MyStringEnum)
        assert s == ABC
        assert s[MyStringEnum.ONE] is True
        assert s.has(MyStringEnum.TWO)
        assert MyStringEnum.THREE in s

    def test_numeric_enum(self) -> None:
        """A numeric enum should give its integer values."""
        assert PlainSet.from_enum(MyNumericEnum) == NUMBERS

    def test_hybrid_enum(self) -> None:
        """A hybrid enum should give both kinds of value."""
        assert PlainSet.from_enum(MyHybridEnum) == HYBRID

    def test_enum_aliases_collapse(self) -> None:
        """An alias should not add a second member."""

        class Colour(Enum):
            RED = "r"
            CRIMSON = "r"
            BLUE = "b"

        assert PlainSet.from_enum(Colour).to_list() == ["r", "b"]

    def test_exported_hybrid_enum_skips_reverse_entries(self) -> None:
        """Reverse-lookup entries should not become members."""
        s = PlainSet.from_enum(EXPORTED_HYBRID_ENUM)
        assert s == HYBRID
        assert not s.has("one")

    def test_digit_named_variant_is_dropped(self) -> None:
        """A forward variant named only with digits looks like a reverse entry."""
        s = PlainSet.from_enum({"404": "not-found", "ok": "ok"})
        assert s == {"ok": True}


class TestEdit:
    """Verify add, remove, and toggle never touch the original."""

    def test_add(self) -> None:
        """add() should return a set with the extra member."""
        s = PlainSet.from_items(["a", "b", "c"])
        ss = s.add("d")
        assert ss == {**ABC, "d": True}
        assert s == ABC

    def test_add_existing_member(self) -> None:
        """Adding a member again should give an equal, distinct set."""
        s = PlainSet.from_items(["a"])
        ss = s.add("a")
        assert ss == s
        assert ss is not s

    def test_remove(self) -> None:
        """remove() should return a set without the member."""
        s = PlainSet.from_items(["a", "b", "c"])
        ss = s.remove("c")
        assert ss == {"a": True, "b": True}
        assert s == ABC

    def test_remove_absent_member(self) -> None:
        """Removing a non-member should give an equal, distinct set."""
        s = PlainSet.from_items(["a"])
        ss = s.remove("z")
        assert ss == s
        assert ss is not s

    def test_toggle_on(self) -> None:
        """toggle(key, True) should behave like add()."""
        s = PlainSet.from_items(["a", "b", "c"])
        assert s.toggle("d", True) == {**ABC, "d": True}
        assert s == ABC

    def test_toggle_off(self) -> None:
        """toggle(key, False) should behave like remove()."""
        s = PlainSet.from_items(["a", "b", "c"])
        assert s.toggle("c", False) == {"a": True, "b": True}
        assert s == ABC

    def test_toggle_off_absent_member(self) -> None:
        """Toggling off a non-member should give an equal, distinct set."""
        s = PlainSet.from_items(["a"])
        ss = s.toggle("z", False)
        assert ss == s
        assert ss is not s


class TestViews:
    """Verify enumeration and presence re-checks."""

    def test_to_list(self) -> None:
        """to_list() should list members in insertion order."""
        assert PlainSet.from_items(["a", "b", "c"]).to_list() == ["a", "b", "c"]

    def test_manually_removed_member_is_skipped(self) -> None:
        """A member forced to False behind the set's back is not a member."""
        s = PlainSet.from_items(["a", "b", "c"])
        dict.__setitem__(s, "c", False)
        assert s.to_list() == ["a", "b"]
        assert not s.has("c")
        assert s == {"a": True, "b": True}
        assert len(s) == len(s.to_list())

    def test_get_skips_manually_removed_member(self) -> None:
        """get() should treat a member forced to False as absent."""
        s = PlainSet.from_items(["a", "b"])
        dict.__setitem__(s, "b", False)
        assert s.get("b") is None
        assert s.get("b", "fallback") == "fallback"
        assert s.get("a") is True

    def test_serializes_as_record(self) -> None:
        """A set should serialize as ``{key: true}``."""
        s = PlainSet.from_items(["a", "b"])
        assert json.dumps(s) == '{"a": true, "b": true}'


class TestUnion:
    """Verify set union."""

    def test_union(self) -> None:
        """Union should contain the members of both sets."""
        a = PlainSet.from_items(["a", "b", "c"])
        b = PlainSet.from_items(["b", "c", "d", "e"])
        assert a.union(b) == {"a": True, "b": True, "c": True, "d": True, "e": True}

    def test_union_is_commutative(self) -> None:
        """a | b should equal b | a."""
        a = PlainSet.from_items(["a", "b", "c"])
        b = PlainSet.from_items(["b", "c", "d", "e"])
        assert a | b == b.plus(a)

    def test_union_is_associative(self) -> None:
        """(a | b) | c should equal a | (b | c)."""
        a = PlainSet.from_items(["a", "b"])
        b = PlainSet.from_items(["b", "c"])
        c = PlainSet.from_items(["c", "d"])
        assert (a | b) | c == a | (b | c)

    def test_union_with_enums(self) -> None:
        """A string enum set united with a numeric one covers both."""
        a = PlainSet.from_enum(MyStringEnum)
        b = PlainSet.from_enum(MyNumericEnum)
        assert a | b == b | a
        assert a | b == HYBRID
        assert a | b == PlainSet.from_enum(MyHybridEnum)

    def test_union_with_iterable(self) -> None:
        """union() should accept a plain iterable of keys."""
        assert PlainSet.from_items(["a"]).union(["b"]) == {"a": True, "b": True}

    def test_union_operator_rejects_list(self) -> None:
        """``set | list`` should not be supported."""
        with pytest.raises(TypeError):
            PlainSet.from_items(["a"]) | ["b"]  # type: ignore[operator]


class TestDifference:
    """Verify set difference."""

    def test_difference(self) -> None:
        """a - b should keep only members of a that are not in b."""
        a = PlainSet.from_items(["a", "b", "c"])
        b = PlainSet.from_items(["b", "c", "d", "e"])
        a_less_b = a.difference(b)
        b_less_a = b.subtract(a)
        assert a_less_b == {"a": True}
        assert b_less_a == {"d": True, "e": True}
        assert a_less_b != b_less_a

    def test_difference_operator(self) -> None:
        """``a - b`` should be difference(a, b)."""
        a = PlainSet.from_items(["a", "b"])
        b = PlainSet.from_items(["b"])
        assert a - b == {"a": True}

    def test_difference_with_enums(self) -> None:
        """Disjoint enum sets should be unchanged by difference."""
        a = PlainSet.from_enum(MyStringEnum)
        b = PlainSet.from_enum(MyNumericEnum)
        assert a - b == a
        assert b - a == b
        assert a - b != b - a

    def test_difference_with_hybrid_enums(self) -> None:
        """Removing the strings from a hybrid set should leave the numbers."""
        hybrid = PlainSet.from_enum(MyHybridEnum)
        strings = PlainSet.from_enum(MyStringEnum)
        numbers = PlainSet.from_enum(MyNumericEnum)
        assert hybrid - strings == numbers
        assert strings - hybrid == {}
        assert hybrid - strings != strings - hybrid

    def test_difference_with_iterable(self) -> None:
        """difference() should accept a plain iterable of keys."""
        assert PlainSet.from_items(["a", "b"]).difference(["a"]) == {"b": True}


class TestIntersection:
    """Verify set intersection."""

    def test_intersection(self) -> None:
        """Intersection should match the difference-based identity."""
        a = PlainSet.from_items([1, 2, 3, 4, 5])
        b = PlainSet.from_items([9, 8, 7, 6, 5, 4])
        mathematical = a.difference(a.difference(b).union(b.difference(a)))
        result = a.intersection(b)
        assert result == mathematical
        assert result == {4: True, 5: True}

    def test_intersection_is_commutative(self) -> None:
        """a & b should equal b & a."""
        a = PlainSet.from_items([1, 2, 3, 4, 5])
        b = PlainSet.from_items([9, 8, 7, 6, 5, 4])
        assert a & b == b & a

    def test_intersection_keeps_left_order(self) -> None:
        """Members should follow the left operand's order."""
        a = PlainSet.from_items([5, 4, 1])
        b = PlainSet.from_items([4, 5])
        assert a.intersection(b).to_list() == [5, 4]

    def test_disjoint_intersection_is_empty(self) -> None:
        """Sets with nothing in common should intersect to nothing."""
        assert PlainSet.from_items(["a"]) & PlainSet.from_items(["b"]) == {}


class TestFreshInstances:
    """Verify set algebra returns a new set even when nothing changes."""

    def test_union_with_empty(self) -> None:
        """Uniting with the empty set should give an equal, distinct set."""
        s = PlainSet.from_items(["a", "b"])
        result = s.union(PlainSet.empty())
        assert result == s
        assert result is not s
        assert (s | PlainSet.empty()) is not s

    def test_difference_with_empty(self) -> None:
        """Subtracting nothing should give an equal, distinct set."""
        s = PlainSet.from_items(["a", "b"])
        result = s.difference(PlainSet.empty())
        assert result == s
        assert result is not s
        assert (s - PlainSet.empty()) is not s

    def test_intersection_with_self(self) -> None:
        """Intersecting a set with itself should give an equal, distinct set."""
        s = PlainSet.from_items(["a", "b"])
        result = s.intersection(s)
        assert result == s
        assert result is not s
        assert (s & s) is not s
