"""Plain record — a frozen ``dict`` with copy-on-write edits.

Both containers in this package *are* dicts.  That is the whole trick:
a record can be handed to ``json.dumps``, returned from a Flask view,
splatted with ``**``, or read with ``record["key"]`` by code that has
never heard of this package, and it behaves exactly like the dict it
looks like.

What a record adds on top of ``dict``:

- **Immutability** — every in-place mutator (``record[k] = v``,
  ``update``, ``pop``, ``|=``, a second ``__init__``, ...) raises
  ``FrozenRecordError``.
  Edits go through copy-returning operations instead, and each of
  those returns a *new* instance, even when nothing changed.
- **Presence re-checks** — ``get`` and the views (``keys``, ``values``,
  ``items``, iteration, ``len``, ``in``, equality) look at every stored value and
  skip the ones that mean "absent".  A record never reports a key
  whose value was forced to the absent marker behind its back.
- **Contract checks** — entries pass through the process-wide
  ``ContractChecker`` on the way in (see ``contracts.py``).

``PlainRecord`` is the shared base; ``PlainMap`` and ``PlainSet`` add
their own constructors and operations.  Views return lists rather than
live dict views: a record never changes, so a snapshot is all a view
could ever show.
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, ClassVar, NoReturn, Self

from py_plain.contracts import checker
from py_plain.keys import PropertyKey, is_property_key


class FrozenRecordError(TypeError):
    """Raise when a record is mutated in place."""


class PlainRecord[K: PropertyKey, V](dict[K, V]):
    """Immutable ``dict`` base shared by ``PlainMap`` and ``PlainSet``.

    Subclasses decide which stored values count as present
    (``_is_present``) and whether entries are set members
    (``_MEMBER``), which tightens the value contract to ``True``.
    """

    _MEMBER: ClassVar[bool] = False
    _sealed: bool = False

    def __init__(self, entries: Mapping[K, V] | Iterable[tuple[K, V]] = (), /) -> None:
        """Create a record from a mapping or an iterable of pairs.

        Args:
            entries: Initial contents.  Later pairs win on duplicate
                keys, keeping the key's first position.

        Raises:
            FrozenRecordError: If called again on an existing record.

        """
        if self._sealed:
            self._frozen()
        super().__init__()
        operation = f"{type(self).__name__}()"
        dict.update(self, self._checked(dict(entries).items(), operation))
        self._sealed = True

    # -- Construction helpers ------------------------------------------------

    @classmethod
    def _adopt(cls, data: dict[Any, Any]) -> Self:
        """Wrap already-checked *data* in a new record without re-checking."""
        record: Self = cls.__new__(cls)
        dict.update(record, data)
        record._sealed = True
        return record

    @classmethod
    def _checked(cls, pairs: Iterable[tuple[Any, Any]], operation: str) -> dict[Any, Any]:
        """Return a dict of the pairs the contract checker admits.

        A rejected pair still wins over an earlier pair with the same
        key: the key ends up absent, as if the later value were stored.
        """
        contract = checker()
        data: dict[Any, Any] = {}
        for key, value in pairs:
            if contract.admit(operation, key, value, member=cls._MEMBER):
                data[key] = value
            elif is_property_key(key):
                data.pop(key, None)
        return data

    @staticmethod
    def _is_present(value: object) -> bool:
        """Return True if a stored *value* represents a present entry."""
        return value is not None

    # -- Queries -------------------------------------------------------------

    def has(self, key: object) -> bool:
        """Return True if *key* holds a present value.

        A present falsy value (``0``, ``False``, ``""``) still counts.
        """
        return self._is_present(dict.get(self, key))  # type: ignore[call-overload]

    def get(self, key: object, default: Any = None) -> V | None:  # type: ignore[override]
        """Return the value at *key*, or *default* if it is absent."""
        value = dict.get(self, key)  # type: ignore[call-overload]
        return value if self._is_present(value) else default

    def keys(self) -> list[K]:  # type: ignore[override]
        """Return the present keys in insertion order."""
        return [key for key, value in dict.items(self) if self._is_present(value)]

    def values(self) -> list[V]:  # type: ignore[override]
        """Return the present values, aligned with ``keys()``."""
        return [value for value in dict.values(self) if self._is_present(value)]

    def items(self) -> list[tuple[K, V]]:  # type: ignore[override]
        """Return the present ``(key, value)`` pairs, aligned with ``keys()``."""
        return [(key, value) for key, value in dict.items(self) if self._is_present(value)]

    def entries(self) -> list[tuple[K, V]]:
        """Return the present ``(key, value)`` pairs (alias of ``items``)."""
        return self.items()

    @property
    def size(self) -> int:
        """Return the number of present keys."""
        return sum(1 for value in dict.values(self) if self._is_present(value))

    def to_dict(self) -> dict[K, V]:
        """Return a plain, mutable ``dict`` of the present entries."""
        return dict(self.items())

    # -- Copy-returning edits ------------------------------------------------

    def remove(self, key: object) -> Self:
        """Return a new record without *key*.

        Removing an absent key is not an error; the result is a new
        record equal to this one.
        """
        data = self.to_dict()
        data.pop(key, None)  # type: ignore[call-overload]
        return self._adopt(data)

    def copy(self) -> Self:
        """Return a new record with the same entries."""
        return self._adopt(self.to_dict())

    @classmethod
    def fromkeys(cls, iterable: Iterable[Any], value: Any = None, /) -> Self:  # type: ignore[override]
        """Build a record mapping every key in *iterable* to *value*."""
        return cls(dict.fromkeys(iterable, value))

    # -- dict protocol -------------------------------------------------------

    def __getitem__(self, key: K) -> V:
        """Return the value at *key*, or raise KeyError if it is absent."""
        value = dict.__getitem__(self, key)
        if not self._is_present(value):
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        """Return True if *key* holds a present value."""
        return self.has(key)

    def __iter__(self) -> Iterator[K]:
        """Iterate over the present keys."""
        return iter(self.keys())

    def __reversed__(self) -> Iterator[K]:
        """Iterate over the present keys, last inserted first."""
        return reversed(self.keys())

    def __len__(self) -> int:
        """Return the number of present keys."""
        return self.size

    def __eq__(self, other: object) -> bool:
        """Compare present entries with any other mapping."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.to_dict() == dict(other.items())

    def __ne__(self, other: object) -> bool:
        """Negate ``__eq__`` (dict defines its own ``__ne__``)."""
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:  # type: ignore[override]
        """Hash the present entries; fails if any value is unhashable."""
        return hash(frozenset(self.items()))

    def __repr__(self) -> str:
        """Format as ``ClassName({...})``."""
        return f"{type(self).__name__}({self.to_dict()!r})"

    def __reduce__(self) -> tuple[type[Self], tuple[dict[K, V]]]:
        """Pickle and copy through the constructor, not item assignment."""
        return (type(self), (self.to_dict(),))

    # -- Forbidden in-place mutation ----------------------------------------

    def _frozen(self, *_args: object, **_kwargs: object) -> NoReturn:
        """Reject an in-place mutation."""
        msg = f"{type(self).__name__} is immutable; use its copy-returning operations instead"
        raise FrozenRecordError(msg)

    __setitem__ = _frozen  # type: ignore[assignment]
    __delitem__ = _frozen  # type: ignore[assignment]
    __ior__ = _frozen  # type: ignore[assignment]
    clear = _frozen  # type: ignore[assignment]
    pop = _frozen  # type: ignore[assignment]
    popitem = _frozen  # type: ignore[assignment]
    setdefault = _frozen  # type: ignore[assignment]
    update = _frozen  # type: ignore[assignment]
