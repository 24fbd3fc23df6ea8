"""RFC 3164 / RFC 5424 message rendering.

Purpose
-------
Turn a :class:`LogRecord` plus the static metadata of the active configuration
into the exact bytes written to the network. Rendering is pure: the only
outside fact consulted is the local hostname, resolved once and cached.

Contents
--------
* :func:`local_hostname` - cached default for the HOSTNAME field.
* :func:`sanitize_message` - strip NUL and fold line breaks.
* :class:`MessageFormatter` - implementation of :class:`FormatterPort`.

Alignment Notes
---------------
Header grammar follows RFC 3164 section 4.1 and RFC 5424 section 6. The RFC 5424
``MSG`` part carries a UTF-8 BOM only when the text is not plain ASCII.
"""

from __future__ import annotations

import re
import socket
from datetime import datetime, timezone
from functools import lru_cache
from typing import Mapping

from syslog_relay.application.ports.formatter import FormatterPort
from syslog_relay.domain.errors import FormatError
from syslog_relay.domain.records import LogRecord
from syslog_relay.domain.syslog import Facility, MessageFormat, Severity, priority

NILVALUE = "-"
UTF8_BOM = b"\xef\xbb\xbf"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_LINE_BREAKS = re.compile(r"\r\n|\r|\n")
_PRINTUSASCII = re.compile(r"[\x21-\x7e]+")
_SD_NAME = re.compile(r'[\x21-\x7e]{1,32}')
_SD_NAME_FORBIDDEN = set('= ]"')

# RFC 5424 section 6 field limits.
_APP_NAME_MAX = 48
_PROCID_MAX = 128
_MSGID_MAX = 32
_HOSTNAME_MAX = 255


@lru_cache(maxsize=1)
def local_hostname() -> str:
    """Return the resolved local machine name used when no override is set."""

    try:
        name = socket.gethostname()
    except OSError:
        name = ""
    return name or "localhost"


def sanitize_message(text: str) -> str:
    """Remove NUL bytes and replace line breaks with a single space.

    Examples
    --------
    >>> sanitize_message("first\\r\\nsecond\\x00\\nthird")
    'first second third'
    """
    return _LINE_BREAKS.sub(" ", text.replace("\x00", ""))


def _clean_token(value: object | None, limit: int) -> str:
    """Keep printable ASCII, truncated to ``limit``; ``-`` when nothing is left."""

    if value is None:
        return NILVALUE
    cleaned = "".join(_PRINTUSASCII.findall(str(value)))[:limit]
    return cleaned or NILVALUE


def _check_app_name(app_name: str, limit: int | None) -> str:
    if not app_name or not _PRINTUSASCII.fullmatch(app_name):
        raise FormatError(f"app_name must be printable ASCII without spaces or control bytes: {app_name!r}")
    if limit is not None and len(app_name) > limit:
        raise FormatError(f"app_name longer than {limit} characters: {app_name!r}")
    return app_name


def _escape_param_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("]", "\\]")


def _check_sd_name(name: str) -> str:
    if not _SD_NAME.fullmatch(name) or _SD_NAME_FORBIDDEN.intersection(name):
        raise FormatError(f"invalid structured data name: {name!r}")
    return name


def render_structured_data(data: Mapping[str, Mapping[str, str]] | None) -> str:
    """Render RFC 5424 STRUCTURED-DATA, ``-`` when empty.

    Examples
    --------
    >>> render_structured_data({"origin@32473": {"ip": "10.0.0.1", "note": 'a "b" ]'}})
    '[origin@32473 ip="10.0.0.1" note="a \\\\"b\\\\" \\\\]"]'
    >>> render_structured_data(None)
    '-'
    """
    if not data:
        return NILVALUE
    elements: list[str] = []
    for sd_id, params in data.items():
        parts = [_check_sd_name(sd_id)]
        for key, value in params.items():
            parts.append(f'{_check_sd_name(key)}="{_escape_param_value(sanitize_message(str(value)))}"')
        elements.append("[" + " ".join(parts) + "]")
    return "".join(elements)


def rfc3164_timestamp(ts: datetime) -> str:
    """Render the fixed-width ``Mmm dd hh:mm:ss`` local timestamp.

    The month abbreviation does not depend on the process locale.

    Examples
    --------
    >>> rfc3164_timestamp(datetime(2025, 10, 3, 7, 5, 9))
    'Oct  3 07:05:09'
    """
    local = ts.astimezone() if ts.tzinfo is not None else ts
    return f"{_MONTHS[local.month - 1]} {local.day:>2} {local:%H:%M:%S}"


def rfc5424_timestamp(ts: datetime) -> str:
    """Render an RFC 3339 timestamp with microseconds.

    Examples
    --------
    >>> rfc5424_timestamp(datetime(2025, 9, 23, 12, 0, 0, 1500, tzinfo=timezone.utc))
    '2025-09-23T12:00:00.001500Z'
    """
    rendered = ts.isoformat(timespec="microseconds")
    if rendered.endswith("+00:00"):
        rendered = rendered[: -len("+00:00")] + "Z"
    return rendered


class MessageFormatter(FormatterPort):
    """Render records in one fixed :class:`MessageFormat`.

    Examples
    --------
    >>> from syslog_relay.domain import LogLevel
    >>> record = LogRecord(LogLevel.INFO, "build started", "ci", datetime(2025, 9, 23, tzinfo=timezone.utc))
    >>> formatter = MessageFormatter(MessageFormat.RFC_5424)
    >>> formatter.format(record, "ci", "build01", Facility.USER, Severity.INFORMATIONAL)
    b'<14>1 2025-09-23T00:00:00.000000Z build01 ci - - - build started'
    """

    def __init__(self, message_format: MessageFormat) -> None:
        self._message_format = message_format

    @property
    def message_format(self) -> MessageFormat:
        return self._message_format

    def format(
        self,
        record: LogRecord,
        app_name: str,
        message_hostname: str | None,
        facility: Facility,
        severity: Severity,
    ) -> bytes:
        """Return the wire bytes for ``record``; raise :class:`FormatError` on bad metadata."""

        pri = priority(facility, severity)
        hostname = sanitize_message(message_hostname).replace(" ", "") if message_hostname else ""
        hostname = hostname or local_hostname()
        message = sanitize_message(record.message)
        match self._message_format:
            case MessageFormat.RFC_3164:
                return self._format_rfc3164(record, pri, _check_app_name(app_name, None), hostname, message)
            case MessageFormat.RFC_5424:
                return self._format_rfc5424(record, pri, _check_app_name(app_name, _APP_NAME_MAX), hostname, message)

    @staticmethod
    def _format_rfc3164(record: LogRecord, pri: int, app_name: str, hostname: str, message: str) -> bytes:
        header = f"<{pri}>{rfc3164_timestamp(record.timestamp)} {hostname} {app_name}:"
        return f"{header} {message}".encode("utf-8")

    @staticmethod
    def _format_rfc5424(record: LogRecord, pri: int, app_name: str, hostname: str, message: str) -> bytes:
        header = " ".join(
            (
                f"<{pri}>1",
                rfc5424_timestamp(record.timestamp),
                _clean_token(hostname, _HOSTNAME_MAX),
                app_name,
                _clean_token(record.process_id, _PROCID_MAX),
                _clean_token(record.msg_id, _MSGID_MAX),
                render_structured_data(record.structured_data),
            )
        )
        if not message:
            return header.encode("ascii")
        body = message.encode("utf-8")
        if not message.isascii():
            body = UTF8_BOM + body
        return header.encode("ascii") + b" " + body


__all__ = [
    "MessageFormatter",
    "local_hostname",
    "render_structured_data",
    "rfc3164_timestamp",
    "rfc5424_timestamp",
    "sanitize_message",
]
