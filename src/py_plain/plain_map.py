"""PlainMap — an immutable partial mapping stored as a plain dict.

A ``PlainMap[K, V]`` is a partial function from scalar keys to values:
every key either holds exactly one value or is absent.  ``None`` is the
absent marker, so it can never be stored (see ``contracts.py``).

Because the map *is* a dict, it serializes as the flat record it
looks like::

    >>> import json
    >>> json.dumps(PlainMap.from_entries([("a", 1), ("b", 2)]))
    '{"a": 1, "b": 2}'

Operations fall into four groups:

- **Construction** — ``empty``, ``from_entries``, and three ways of
  keying a sequence of items: ``from_indexing`` (key -> item, last one
  wins), ``from_grouping`` (key -> tuple of items) and ``from_counting``
  (key -> occurrence count).
- **Lookup** — ``get``, ``has``, ``keys``, ``values``, ``entries``, ``size``.
- **Edit** — ``set`` and ``remove``, each returning a new map.
- **Projection and merge** — ``pick``, ``omit``, ``map``, ``union``.

Overwriting a key with ``set`` keeps the key where it was in iteration
order, exactly like assigning to an existing key of a dict.
"""

from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from py_plain.contracts import checker
from py_plain.keys import PropertyKey, is_property_key
from py_plain.record import PlainRecord


class PlainMap[K: PropertyKey, V](PlainRecord[K, V]):
    """An immutable ``K -> V`` record with copy-on-write edits.

    Every edit returns a new ``PlainMap``; the receiver is never
    changed.  Lookups of absent keys are never errors: ``get`` returns
    ``None`` (or the given default) and ``has`` returns False.
    """

    # -- Construction --------------------------------------------------------

    @classmethod
    def empty(cls) -> "PlainMap[K, V]":
        """Return a new map with no entries."""
        return cls._adopt({})

    @classmethod
    def from_entries(cls, pairs: Iterable[tuple[K, V]]) -> "PlainMap[K, V]":
        """Build a map from ``(key, value)`` pairs.

        On a duplicate key the later pair's value wins, but the key
        keeps the position of its first occurrence.

        Args:
            pairs: The entries, in order.

        Returns:
            A new map with one entry per distinct key.

        """
        return cls._adopt(cls._checked(pairs, f"{cls.__name__}.from_entries"))

    @classmethod
    def from_indexing[T](
        cls,
        items: Iterable[T],
        key_of: Callable[[T, int], K],
    ) -> "PlainMap[K, T]":
        """Index *items* by a derived key.

        Args:
            items: The items to index.
            key_of: Derives a key from ``(item, position)``.

        Returns:
            A map from derived key to item.  When two items share a
            key, the later one wins.

        """
        pairs = ((key_of(item, index), item) for index, item in enumerate(items))
        return cls._adopt(cls._checked(pairs, f"{cls.__name__}.from_indexing"))

    @classmethod
    def from_grouping[T](
        cls,
        items: Iterable[T],
        key_of: Callable[[T, int], K],
    ) -> "PlainMap[K, tuple[T, ...]]":
        """Group *items* by a derived key.

        Args:
            items: The items to group.
            key_of: Derives a key from ``(item, position)``.

        Returns:
            A map from derived key to the tuple of items sharing it.
            Items keep their relative order within each group.

        """
        operation = f"{cls.__name__}.from_grouping"
        contract = checker()
        groups: dict[K, list[T]] = {}
        for index, item in enumerate(items):
            key = key_of(item, index)
            if contract.admit_key(operation, key):
                groups.setdefault(key, []).append(item)
        pairs = ((key, tuple(group)) for key, group in groups.items())
        return cls._adopt(cls._checked(pairs, operation))

    @classmethod
    def from_counting[T](
        cls,
        items: Iterable[T],
        key_of: Callable[[T, int], K],
    ) -> "PlainMap[K, int]":
        """Count *items* per derived key.

        Args:
            items: The items to count.
            key_of: Derives a key from ``(item, position)``.

        Returns:
            A map from derived key to the number of items sharing it.

        """
        operation = f"{cls.__name__}.from_counting"
        contract = checker()
        keys = (key_of(item, index) for index, item in enumerate(items))
        counts = Counter(key for key in keys if contract.admit_key(operation, key))
        return cls._adopt(cls._checked(counts.items(), operation))

    # -- Edit ----------------------------------------------------------------

    def set[K2: PropertyKey, V2](self, key: K2, value: V2) -> "PlainMap[K | K2, V | V2]":
        """Return a new map with *key* set to *value*.

        An existing key is overwritten in place; a new key is appended.
        In ``warn`` contract mode a rejected value (``None``) leaves the
        key absent in the result.

        Raises:
            AbsentValueError: If *value* is None (strict mode).
            UnsupportedKeyError: If *key* is not scalar (strict mode).

        """
        checked = self._checked([(key, value)], f"{type(self).__name__}.set")
        data: dict[Any, Any] = self.to_dict()
        if checked:
            data.update(checked)
        elif is_property_key(key):
            data.pop(key, None)
        return self._adopt(data)

    # -- Projection and merge ------------------------------------------------

    def pick(self, keys: Iterable[object]) -> "PlainMap[K, V]":
        """Return a new map with only the entries whose key is in *keys*.

        Requested keys that are not present are ignored.  Entries keep
        this map's order, not the order of *keys*.
        """
        wanted = frozenset(keys)
        return self._adopt({key: value for key, value in self.items() if key in wanted})

    def omit(self, keys: Iterable[object]) -> "PlainMap[K, V]":
        """Return a new map without the entries whose key is in *keys*."""
        unwanted = frozenset(keys)
        return self._adopt({key: value for key, value in self.items() if key not in unwanted})

    def map[V2](self, transform: Callable[[V, K], V2]) -> "PlainMap[K, V2]":
        """Return a new map with every value replaced by ``transform(value, key)``.

        Keys and their order are unchanged.

        Raises:
            AbsentValueError: If *transform* returns None (strict mode).

        """
        pairs = ((key, transform(value, key)) for key, value in self.items())
        return self._adopt(self._checked(pairs, f"{type(self).__name__}.map"))

    def union[K2: PropertyKey, V2](self, other: Mapping[K2, V2]) -> "PlainMap[K | K2, V | V2]":
        """Merge *other* over this map.

        On a shared key *other*'s value wins; the key keeps this map's
        position.  Keys only in *other* follow in *other*'s order.  The
        result equals ``from_entries([*self.entries(), *other.entries()])``.

        Args:
            other: Another map, or any mapping (checked like new input).

        Returns:
            A new merged map.

        """
        if isinstance(other, PlainRecord):
            extra: dict[Any, Any] = other.to_dict()
        else:
            extra = self._checked(other.items(), f"{type(self).__name__}.union")
        return self._adopt({**self.to_dict(), **extra})

    def __or__(self, other: object) -> "PlainMap[Any, Any]":
        """Return ``self.union(other)`` for any mapping."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.union(other)

    def __ror__(self, other: object) -> "PlainMap[Any, Any]":
        """Return ``other`` merged with this map, for ``dict | PlainMap``."""
        if not isinstance(other, Mapping):
            return NotImplemented
        base = self._checked(other.items(), f"{type(self).__name__}.union")
        return self._adopt({**base, **self.to_dict()})
