"""Translate host log levels into syslog severities and apply level filters.

Host levels grow with importance (``DEBUG < INFO < ERROR``) while syslog codes
shrink (``0`` is most urgent). Both functions here work on the host ordering and
only invert at the very end.
"""

from __future__ import annotations

from .levels import LogLevel
from .syslog import Severity

DEFAULT_LEVEL_FILTER = LogLevel.DEBUG

_SEVERITY_MAP = {
    LogLevel.TRACE: Severity.DEBUG,
    LogLevel.DEBUG: Severity.DEBUG,
    LogLevel.INFO: Severity.INFORMATIONAL,
    LogLevel.WARNING: Severity.WARNING,
    LogLevel.ERROR: Severity.ERROR,
    LogLevel.CRITICAL: Severity.CRITICAL,
}


def to_severity(level: LogLevel) -> Severity:
    """Return the syslog severity for ``level``.

    Examples
    --------
    >>> to_severity(LogLevel.INFO).code
    6
    >>> to_severity(LogLevel.CRITICAL).code < to_severity(LogLevel.WARNING).code
    True
    """
    return _SEVERITY_MAP[level]


def passes_filter(level: LogLevel, min_level: LogLevel | None = None) -> bool:
    """Return ``True`` when ``level`` is at least as severe as ``min_level``.

    Examples
    --------
    >>> passes_filter(LogLevel.WARNING, LogLevel.INFO)
    True
    >>> passes_filter(LogLevel.DEBUG, LogLevel.INFO)
    False
    >>> passes_filter(LogLevel.TRACE)
    False
    """
    threshold = DEFAULT_LEVEL_FILTER if min_level is None else min_level
    return level >= threshold


__all__ = ["DEFAULT_LEVEL_FILTER", "passes_filter", "to_severity"]
