"""Host log level abstraction with an explicit ordering.

Purpose
-------
Represent the verbosity tiers a host application logs with, independent from
syslog's numeric severity table (which runs in the opposite direction).

Contents
--------
* :class:`LogLevel` enum with conversion helpers and ordering operators.

System Role
-----------
Used by :mod:`syslog_relay.domain.severity` to filter and map records and by the
stdlib bridge to translate :mod:`logging` level numbers.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import total_ordering


@total_ordering
class LogLevel(Enum):
    """Enumerated host logging levels, ordered from most to least verbose."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    @property
    def severity(self) -> str:
        """Return the lowercase level name used in diagnostics."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` level number matching this level."""

        return getattr(logging, self.name, self.value)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a case-insensitive level name.

        ``FINE``/``FINER``/``FINEST``, ``SEVERE`` and ``CONFIG`` are accepted as
        aliases so settings written for ``java.util.logging`` hosts keep working.

        Examples
        --------
        >>> LogLevel.from_name(" warning ") is LogLevel.WARNING
        True
        >>> LogLevel.from_name("fine") is LogLevel.DEBUG
        True
        """
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level number into :class:`LogLevel`.

        Custom numbers between the standard tiers fall back to the closest lower
        tier so the mapping stays total.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.ERROR) is LogLevel.ERROR
        True
        >>> LogLevel.from_python_level(25) is LogLevel.INFO
        True
        >>> LogLevel.from_python_level(0) is LogLevel.TRACE
        True
        """
        chosen = cls.TRACE
        for member in cls:
            if member.value <= level:
                chosen = member
        return chosen

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose value equals ``level`` exactly."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_ALIASES = {
    "FINEST": "TRACE",
    "FINER": "TRACE",
    "FINE": "DEBUG",
    "CONFIG": "INFO",
    "WARN": "WARNING",
    "SEVERE": "ERROR",
    "FATAL": "CRITICAL",
}
# Level names accepted from foreign logging frameworks.


__all__ = ["LogLevel"]
