"""Error taxonomy for configuration, formatting and delivery failures."""

from __future__ import annotations

from enum import Enum


class SyslogRelayError(Exception):
    """Base class for every error raised by :mod:`syslog_relay`."""


class ConfigError(SyslogRelayError, ValueError):
    """A configuration value was rejected; the previous delivery stays active."""


class FormatError(SyslogRelayError, ValueError):
    """A record or its metadata cannot be rendered on the chosen wire format."""


class SendErrorKind(Enum):
    """Reasons a single send attempt can fail."""

    UNRESOLVABLE = "unresolvable"
    CONNECT_FAILED = "connect_failed"
    WRITE_FAILED = "write_failed"
    TLS_HANDSHAKE_FAILED = "tls_handshake_failed"
    CLOSED = "closed"


class SendError(SyslogRelayError):
    """A payload could not be delivered to the collector.

    Examples
    --------
    >>> err = SendError(SendErrorKind.CLOSED, "sender closed")
    >>> err.kind is SendErrorKind.CLOSED
    True
    >>> str(err)
    'closed: sender closed'
    """

    def __init__(self, kind: SendErrorKind, detail: str = "") -> None:
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind
        self.detail = detail


__all__ = ["ConfigError", "FormatError", "SendError", "SendErrorKind", "SyslogRelayError"]
