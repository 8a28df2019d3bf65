"""Diagnostic log for contract enforcement.

Records never log on the happy path: a ``set`` or ``union`` is a pure
function and has nothing to report.  What *is* worth recording is a
broken contract — a ``None`` value that slipped in, a tuple used as a
key — so that code running with contracts in ``warn`` mode can find
out afterwards what was tolerated.

Each entry names the record operation that hit the problem
(``"PlainMap.set"``) as its source, so ``Logger.filter`` can answer
"which call sites tolerated bad input?" without parsing messages.
Severities are integers: strict-mode failures log at ERROR and
warn-mode drops at WARNING, and a ``min_level`` filter separates them.

The checker that owns the log lives for the whole process, and a
program left in ``warn`` mode may hit the same bad input on every
request.  The log therefore keeps only the newest *capacity* entries;
older ones fall off the front.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_CAPACITY = 1000


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The operation that produced the event
            (e.g. ``"PlainMap.set"``).

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded log buffer with filtering.

    Holds at most *capacity* entries; appending past that drops the
    oldest entry.
    """

    def __init__(self, *, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty logger.

        Args:
            capacity: Maximum number of entries retained.

        Raises:
            ValueError: If *capacity* is not positive.

        """
        if capacity <= 0:
            msg = f"Logger capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Return the maximum number of retained entries."""
        return self._capacity

    @property
    def entries(self) -> list[LogEntry]:
        """Return all retained entries, oldest first."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Operation that generated the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
        ]

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of retained entries."""
        return len(self._entries)
