"""Port describing syslog message rendering."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from syslog_relay.domain.records import LogRecord
from syslog_relay.domain.syslog import Facility, MessageFormat, Severity


@runtime_checkable
class FormatterPort(Protocol):
    """Render a record plus static metadata into wire bytes."""

    @property
    def message_format(self) -> MessageFormat: ...

    def format(
        self,
        record: LogRecord,
        app_name: str,
        message_hostname: str | None,
        facility: Facility,
        severity: Severity,
    ) -> bytes: ...


__all__ = ["FormatterPort"]
