"""Contract enforcement for record contents.

A plain record promises two things about what it stores:

1. **Scalar keys** — ``str``, ``int`` or ``Enum`` members (see ``keys.py``).
2. **No absent marker as a value** — ``None`` means "no entry", so it
   can never *be* an entry.  Sets are stricter still: every member maps
   to exactly ``True``.

Python can't reject these at compile time, so records check them at
the boundary — construction and every copy-returning edit — through a
``ContractChecker``.  Three enforcement modes:

    - **strict** — raise a ``ContractError`` subclass (the default).
    - **warn** — record and log the violation, then leave the offending
      entry out of the result.
    - **off** — no checking; entries are stored as given.  Records
      re-check presence whenever they enumerate, so a stored ``None``
      is still never reported as a key.

The checker is process-wide (``checker()``): records are created
everywhere, and a checker is not threaded through every call site.  Its
mode, however, lives in a ``ContextVar``, so ``contract_mode`` switches
it for the current thread or asyncio task only, for the duration of a
``with`` block.  Violations and the log stay shared.
"""

import contextlib
from collections import deque
from collections.abc import Iterator
from contextvars import ContextVar
from dataclasses import dataclass
from enum import StrEnum

from py_plain.keys import is_property_key
from py_plain.logging import Logger, LogLevel


class ContractError(Exception):
    """Raise when a record would break its key or value contract."""


class InvalidValueError(ContractError, ValueError):
    """Raise when a value is not allowed in a record."""


class AbsentValueError(InvalidValueError):
    """Raise when ``None`` (the absent marker) is stored as a value."""


class UnsupportedKeyError(ContractError, TypeError):
    """Raise when a key is not a scalar property key."""


class ContractMode(StrEnum):
    """Enforcement mode for record contract checks.

    STRICT raises; WARN logs and drops the entry; OFF skips checking.
    """

    STRICT = "strict"
    WARN = "warn"
    OFF = "off"


@dataclass(frozen=True)
class ContractViolation:
    """Record of a single contract violation.

    Attributes:
        operation: The record operation that hit the violation
            (e.g. ``"PlainMap.set"``).
        key: The key of the offending entry.
        reason: Human-readable description of what was wrong.
        error: The exception type raised in strict mode.

    """

    operation: str
    key: object
    reason: str
    error: type[ContractError]


class ContractChecker:
    """Check record entries against the key and value contracts.

    Records call ``admit`` for every entry they are about to store.
    ``admit`` returns True when the entry may be stored and False when
    it must be left out (warn mode); in strict mode it raises instead.
    Every violation, whatever the mode, is kept in ``violations`` and
    written to the checker's ``logger``.
    """

    def __init__(
        self,
        *,
        mode: ContractMode = ContractMode.STRICT,
        logger: Logger | None = None,
    ) -> None:
        """Create a checker.

        Args:
            mode: Initial enforcement mode.
            logger: Where violations are logged (a fresh one if None).

        """
        self._mode: ContextVar[ContractMode] = ContextVar("contract_mode", default=mode)
        self._logger = logger if logger is not None else Logger()
        # Capped at the log capacity.
        self._violations: deque[ContractViolation] = deque(maxlen=self._logger.capacity)

    @property
    def mode(self) -> ContractMode:
        """Return the enforcement mode of the current context."""
        return self._mode.get()

    @mode.setter
    def mode(self, value: ContractMode) -> None:
        """Set the enforcement mode for the current context."""
        self._log_change(self.mode, value)
        self._mode.set(value)

    @property
    def enabled(self) -> bool:
        """Return True if contract checks are active (not OFF)."""
        return self.mode is not ContractMode.OFF

    @property
    def logger(self) -> Logger:
        """Return the logger violations are written to."""
        return self._logger

    @property
    def violations(self) -> list[ContractViolation]:
        """Return a copy of all recorded violations, oldest first."""
        return list(self._violations)

    def admit(
        self,
        operation: str,
        key: object,
        value: object,
        *,
        member: bool = False,
    ) -> bool:
        """Decide whether a ``key -> value`` entry may be stored.

        Args:
            operation: Name of the calling record operation.
            key: The entry's key.
            value: The entry's value.
            member: True for set entries, whose value must be ``True``.

        Returns:
            True if the entry may be stored, False if it must be dropped.

        Raises:
            UnsupportedKeyError: In strict mode, for a non-scalar key.
            AbsentValueError: In strict mode, for a ``None`` value.
            InvalidValueError: In strict mode, for a set value that is
                not ``True``.

        """
        if not self.admit_key(operation, key):
            return False
        if self.mode is ContractMode.OFF:
            return True
        if value is None:
            return self._reject(
                operation,
                key,
                f"cannot store None for key {key!r}; None marks an absent entry",
                AbsentValueError,
            )
        if member and value is not True:
            return self._reject(
                operation,
                key,
                f"set member {key!r} must map to True, got {value!r}",
                InvalidValueError,
            )
        return True

    def admit_key(self, operation: str, key: object) -> bool:
        """Decide whether *key* may be used as a record key.

        Record constructors that hash a derived key before they have a
        value for it (grouping, counting) call this first.

        Returns:
            True if the key is scalar (or checks are off), False if the
            entry must be dropped.

        Raises:
            UnsupportedKeyError: In strict mode, for a non-scalar key.

        """
        if self.mode is ContractMode.OFF or is_property_key(key):
            return True
        return self._reject(
            operation,
            key,
            f"key {key!r} of type {type(key).__name__} is not a str, int or Enum",
            UnsupportedKeyError,
        )

    @contextlib.contextmanager
    def scoped(self, mode: ContractMode) -> Iterator["ContractChecker"]:
        """Switch to *mode* for the current context until the block exits.

        Other threads and asyncio tasks keep their own mode.
        """
        previous = self.mode
        self._log_change(previous, mode)
        token = self._mode.set(mode)
        try:
            yield self
        finally:
            self._mode.reset(token)
            self._log_change(mode, previous)

    def clear(self) -> None:
        """Forget all recorded violations and log entries."""
        self._violations.clear()
        self._logger.clear()

    def _log_change(self, old: ContractMode, new: ContractMode) -> None:
        """Log a mode switch at INFO."""
        if new is not old:
            self._logger.log(
                LogLevel.INFO,
                f"Contract mode changed from {old} to {new}",
                source="contracts",
            )

    def _reject(
        self,
        operation: str,
        key: object,
        reason: str,
        error: type[ContractError],
    ) -> bool:
        """Record a violation, then raise (strict) or drop the entry (warn)."""
        self._violations.append(
            ContractViolation(operation=operation, key=key, reason=reason, error=error)
        )
        strict = self.mode is ContractMode.STRICT
        self._logger.log(LogLevel.ERROR if strict else LogLevel.WARNING, reason, source=operation)
        if strict:
            msg = f"{operation}: {reason}"
            raise error(msg)
        return False


_checker = ContractChecker()


def checker() -> ContractChecker:
    """Return the process-wide contract checker used by all records."""
    return _checker


def contract_mode(mode: ContractMode) -> contextlib.AbstractContextManager[ContractChecker]:
    """Run a block with the process-wide checker switched to *mode*.

    The switch is local to the calling thread or task.  The previous
    mode is restored on exit, even if the block raises::

        with contract_mode(ContractMode.WARN):
            record = PlainMap.from_entries(untrusted_pairs)
    """
    return _checker.scoped(mode)
