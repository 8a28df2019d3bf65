"""PlainSet — an immutable set of keys stored as a plain dict.

A ``PlainSet[K]`` is a ``PlainMap`` whose only possible value is
``True``: membership is presence.  It serializes as ``{"a": true, ...}``,
so a legacy call site that does ``if flags["beta"]:`` keeps working.

Set algebra mirrors ``frozenset``:

==================  ==================  =========================
Method              Operator            Result
==================  ==================  =========================
``union``           ``a | b``           members of either
``difference``      ``a - b``           members of ``a`` not in ``b``
``intersection``    ``a & b``           members of both
==================  ==================  =========================

``plus`` and ``subtract`` are kept as aliases of ``union`` and
``difference``.  The methods accept any iterable of keys (or a record
mapping keys to ``True``); the operators accept only mappings.

A member is present only while its value is exactly ``True``.  An
entry forced to ``False`` or ``None`` behind the set's back is treated
as removed by every view.
"""

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Literal

from py_plain.keys import EnumDefinition, PropertyKey, enum_values
from py_plain.record import PlainRecord


class PlainSet[K: PropertyKey](PlainRecord[K, Literal[True]]):
    """An immutable set of scalar keys with copy-on-write edits."""

    _MEMBER: ClassVar[bool] = True

    def __init__(self, items: Iterable[K] | Mapping[K, Literal[True]] = (), /) -> None:
        """Create a set from keys, or from a record of ``key -> True``.

        Args:
            items: An iterable of keys (duplicates collapse, first
                occurrence wins the position), or a mapping whose
                values must all be ``True``.

        """
        entries = items if isinstance(items, Mapping) else dict.fromkeys(items, True)
        super().__init__(entries)

    @staticmethod
    def _is_present(value: object) -> bool:
        """Return True only for the member marker ``True``."""
        return value is True

    @classmethod
    def _members(cls, keys: Iterable[Any], operation: str) -> dict[Any, Any]:
        """Return a checked ``key -> True`` dict, first occurrence first."""
        return cls._checked(((key, True) for key in keys), operation)

    @classmethod
    def _coerce(cls, other: "Iterable[Any]", operation: str) -> "PlainSet[Any]":
        """Return *other* as a set, checking it unless it already is one."""
        if isinstance(other, PlainSet):
            return other
        if isinstance(other, Mapping):
            return cls._adopt(cls._checked(other.items(), operation))
        return cls._adopt(cls._members(other, operation))

    # -- Construction --------------------------------------------------------

    @classmethod
    def empty(cls) -> "PlainSet[K]":
        """Return a new set with no members."""
        return cls._adopt({})

    @classmethod
    def from_items(cls, items: Iterable[K]) -> "PlainSet[K]":
        """Build a set from *items*, dropping duplicates.

        Members keep the order of their first occurrence.
        """
        return cls._adopt(cls._members(items, f"{cls.__name__}.from_items"))

    @classmethod
    def from_enum(cls, enum_def: EnumDefinition) -> "PlainSet[Any]":
        """Build the set of every distinct value of an enumerated type.

        Args:
            enum_def: An ``Enum`` class, or a mapping of variant names
                to tokens.  For a mapping, synthetic reverse-lookup
                entries (digit-only names) are skipped; see
                ``keys.is_reverse_entry``.

        Returns:
            A set of the declared forward values.

        """
        return cls._adopt(cls._members(enum_values(enum_def), f"{cls.__name__}.from_enum"))

    # -- Edit ----------------------------------------------------------------

    def add[K2: PropertyKey](self, key: K2) -> "PlainSet[K | K2]":
        """Return a new set that also contains *key*."""
        return self._adopt({**self.to_dict(), **self._members([key], f"{type(self).__name__}.add")})

    def toggle[K2: PropertyKey](self, key: K2, enable: bool) -> "PlainSet[K] | PlainSet[K | K2]":  # noqa: FBT001
        """Return ``self.add(key)`` if *enable*, else ``self.remove(key)``."""
        return self.add(key) if enable else self.remove(key)

    def to_list(self) -> list[K]:
        """Return the members in insertion order."""
        return self.keys()

    # -- Set algebra ---------------------------------------------------------

    def union[K2: PropertyKey](self, other: Iterable[K2]) -> "PlainSet[K | K2]":
        """Return a new set of the members of either set."""
        extra = self._coerce(other, f"{type(self).__name__}.union")
        return self._adopt({**self.to_dict(), **extra.to_dict()})

    def difference(self, other: Iterable[Any]) -> "PlainSet[K]":
        """Return a new set of this set's members that are not in *other*."""
        excluded = self._coerce(other, f"{type(self).__name__}.difference")
        return self._adopt({key: True for key in self.keys() if not excluded.has(key)})

    def intersection(self, other: Iterable[Any]) -> "PlainSet[K]":
        """Return a new set of the members present in both sets."""
        included = self._coerce(other, f"{type(self).__name__}.intersection")
        return self._adopt({key: True for key in self.keys() if included.has(key)})

    plus = union
    subtract = difference

    def __or__(self, other: object) -> "PlainSet[Any]":
        """Return ``self.union(other)``."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.union(other)

    def __ror__(self, other: object) -> "PlainSet[Any]":
        """Return ``other`` united with this set, for ``dict | PlainSet``."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return self._coerce(other, f"{type(self).__name__}.union").union(self)

    def __sub__(self, other: object) -> "PlainSet[K]":
        """Return ``self.difference(other)``."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.difference(other)

    def __and__(self, other: object) -> "PlainSet[K]":
        """Return ``self.intersection(other)``."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.intersection(other)
