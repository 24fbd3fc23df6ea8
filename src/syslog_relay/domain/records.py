"""Immutable log record consumed by the delivery pipeline.

Purpose
-------
Carry the host-produced facts about one log call (level, message, logger name,
timestamp) through filtering and formatting without exposing the host's own
record type.

Contents
--------
* :class:`LogRecord` dataclass.
* :func:`_ensure_aware` timestamp validation helper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Read-only log record handed to :meth:`HandlerManager.publish`.

    Attributes
    ----------
    level:
        Host :class:`LogLevel` of the record.
    message:
        Rendered message text.
    logger_name:
        Logical logger that produced the record.
    timestamp:
        Time of the record, timezone-aware, normalised to UTC.
    process_id:
        Optional process identifier rendered as RFC 5424 ``PROCID``.
    msg_id:
        Optional message type identifier rendered as RFC 5424 ``MSGID``.
    structured_data:
        Optional RFC 5424 structured data: SD-ID mapped to parameter names and
        values.
    """

    level: LogLevel
    message: str
    logger_name: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    process_id: int | str | None = None
    msg_id: str | None = None
    structured_data: Mapping[str, Mapping[str, str]] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied."""

        return replace(self, **changes)

    @classmethod
    def from_python_record(cls, record: logging.LogRecord, message: str | None = None) -> "LogRecord":
        """Build a record from a stdlib :class:`logging.LogRecord`.

        Examples
        --------
        >>> raw = logging.LogRecord("app.db", logging.WARNING, __file__, 1, "slow %s", ("query",), None)
        >>> record = LogRecord.from_python_record(raw)
        >>> record.level is LogLevel.WARNING, record.message, record.logger_name
        (<LogLevel.WARNING: 30>, 'slow query', 'app.db')
        """
        return cls(
            level=LogLevel.from_python_level(record.levelno),
            message=record.getMessage() if message is None else message,
            logger_name=record.name,
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
            process_id=record.process,
        )


__all__ = ["LogRecord"]
