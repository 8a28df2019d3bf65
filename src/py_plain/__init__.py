"""Immutable maps and sets that are plain dicts.

Re-exports public symbols so callers can write::

    from py_plain import PlainMap, PlainSet
"""

from py_plain.contracts import (
    AbsentValueError,
    ContractChecker,
    ContractError,
    ContractMode,
    ContractViolation,
    InvalidValueError,
    UnsupportedKeyError,
    checker,
    contract_mode,
)
from py_plain.keys import PropertyKey, is_property_key, is_reverse_entry
from py_plain.logging import LogEntry, Logger, LogLevel
from py_plain.persistence import (
    dump_record,
    load_map,
    load_set,
    map_from_json,
    set_from_json,
    to_json,
)
from py_plain.plain_map import PlainMap
from py_plain.plain_set import PlainSet
from py_plain.record import FrozenRecordError, PlainRecord

__all__ = [
    "AbsentValueError",
    "ContractChecker",
    "ContractError",
    "ContractMode",
    "ContractViolation",
    "FrozenRecordError",
    "InvalidValueError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "PlainMap",
    "PlainRecord",
    "PlainSet",
    "PropertyKey",
    "UnsupportedKeyError",
    "checker",
    "contract_mode",
    "dump_record",
    "is_property_key",
    "is_reverse_entry",
    "load_map",
    "load_set",
    "map_from_json",
    "set_from_json",
    "to_json",
]
