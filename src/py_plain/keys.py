"""Key domain — which keys a plain record may hold.

A plain record is keyed the same way a JSON object or a keyword
argument dict is keyed: by **scalar** tokens.  Three kinds qualify:

- ``str`` — the common case (``{"name": ...}``).
- ``int`` — numeric ids, enum values (``bool`` is an ``int`` too).
- ``Enum`` members — named tokens, the closest thing Python has to a
  symbol.

Composite keys (tuples, frozensets, dataclasses) are out
of the domain: they would not survive a trip through JSON, and a
record that can't be serialized as a flat object stops being "plain".

This module also knows how to read the values of an enumerated-constant
definition, including the reverse-lookup quirk of exported numeric
enums (see ``is_reverse_entry``).
"""

from collections.abc import Mapping
from enum import Enum

type PropertyKey = str | int | Enum

SCALAR_KEY_TYPES: tuple[type, ...] = (str, int, Enum)

type EnumDefinition = type[Enum] | Mapping[str | int, PropertyKey]


def is_property_key(key: object) -> bool:
    """Return True if *key* is a scalar key a record can hold."""
    return isinstance(key, SCALAR_KEY_TYPES)


def is_reverse_entry(name: object) -> bool:
    """Return True if *name* looks like a synthetic reverse-lookup entry.

    Some enum encodings (an exported numeric enum object, for example)
    carry a ``value -> name`` entry for every numeric variant next to
    the declared ``name -> value`` entries::

        {"one": 1, "1": "one", "aye": "a"}

    Any name that is a non-negative integer, or a string made only of
    ASCII digits, is treated as one of those reverse entries.

    Note: this is a heuristic.  A forward variant whose *name* is all
    digits is indistinguishable from a reverse entry and is dropped.
    """
    if isinstance(name, bool):
        return False
    if isinstance(name, int):
        return name >= 0
    return isinstance(name, str) and name.isascii() and name.isdigit()


def enum_values(enum_def: EnumDefinition) -> list[PropertyKey]:
    """Return the declared forward values of an enumerated-constant type.

    Args:
        enum_def: An ``Enum`` subclass, or a mapping of variant names
            to their tokens.

    Returns:
        The values in declaration order.  Duplicates are kept; callers
        that need distinct values de-duplicate themselves.

    Raises:
        TypeError: If *enum_def* is neither an Enum class nor a mapping.

    """
    if isinstance(enum_def, type) and issubclass(enum_def, Enum):
        # Iterating an Enum class skips aliases, so every value is canonical.
        return [member.value for member in enum_def]
    if isinstance(enum_def, Mapping):
        return [value for name, value in enum_def.items() if not is_reverse_entry(name)]
    msg = f"Expected an Enum class or a mapping, got {type(enum_def).__name__}"
    raise TypeError(msg)
