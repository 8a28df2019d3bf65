"""Record persistence — save and load records as JSON.

A record already *is* its serialized shape, so saving one is just
``json.dumps``.  Loading is where the work is: JSON has ``null`` and
arbitrary values, and the loaders push every entry back through the
record constructors so the usual contracts apply (a ``null`` value is
an ``AbsentValueError`` in strict mode).

    - ``to_json(record)`` / ``map_from_json(text)`` / ``set_from_json(text)``
      — text round trip.
    - ``dump_record(record, path)`` / ``load_map(path)`` / ``load_set(path)``
      — file round trip.

JSON object keys are always strings, so integer keys come back as
``"1"`` rather than ``1``, and plain ``Enum`` keys (ones that are not
also ``str`` or ``int``) can't be dumped at all.
"""

import json
from pathlib import Path
from typing import Any

from py_plain.plain_map import PlainMap
from py_plain.plain_set import PlainSet
from py_plain.record import PlainRecord


def to_json(record: PlainRecord[Any, Any], *, indent: int | None = None) -> str:
    """Serialize a record as a JSON object.

    Args:
        record: The map or set to serialize.
        indent: Passed through to ``json.dumps``.

    Returns:
        The JSON text.

    Raises:
        TypeError: If a key or value is not JSON-serializable.

    """
    return json.dumps(record, indent=indent)


def _load_object(text: str) -> dict[str, Any]:
    """Parse *text* and check that it holds a JSON object."""
    data = json.loads(text)
    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise ValueError(msg)  # noqa: TRY004
    return data


def map_from_json(text: str) -> PlainMap[str, Any]:
    """Parse a JSON object into a ``PlainMap``.

    Raises:
        ValueError: If *text* is not a JSON object.
        AbsentValueError: If a value is ``null`` (strict mode).

    """
    return PlainMap.from_entries(_load_object(text).items())


def set_from_json(text: str) -> PlainSet[str]:
    """Parse a JSON object of ``key: true`` members into a ``PlainSet``.

    Raises:
        ValueError: If *text* is not a JSON object.
        InvalidValueError: If a value is not ``true`` (strict mode).

    """
    return PlainSet(_load_object(text))


def dump_record(record: PlainRecord[Any, Any], path: Path) -> None:
    """Save a record to a JSON file.

    Args:
        record: The map or set to save.
        path: The file path to write to.

    """
    path.write_text(to_json(record, indent=2))


def load_map(path: Path) -> PlainMap[str, Any]:
    """Load a ``PlainMap`` from a JSON file.

    Raises:
        FileNotFoundError: If the path does not exist.

    """
    return map_from_json(path.read_text())


def load_set(path: Path) -> PlainSet[str]:
    """Load a ``PlainSet`` from a JSON file.

    Raises:
        FileNotFoundError: If the path does not exist.

    """
    return set_from_json(path.read_text())
