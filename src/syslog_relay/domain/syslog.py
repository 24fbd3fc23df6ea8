"""Syslog protocol vocabulary: facilities, severities, formats and transports.

Purpose
-------
Provide the standard syslog code tables (RFC 5424 section 6.2.1) and the closed
sets of wire formats and transports a delivery pipeline can be built from.

Contents
--------
* :class:`Facility` - originating subsystem, codes 0-23.
* :class:`Severity` - urgency, codes 0 (emergency) to 7 (debug).
* :class:`MessageFormat` - RFC 3164 or RFC 5424.
* :class:`Transport` - UDP, TCP or TCP+TLS.
* :func:`priority` - ``PRI`` value computation.
"""

from __future__ import annotations

from enum import Enum


class Facility(Enum):
    """Syslog facility codes with their conventional lowercase labels."""

    KERN = (0, "kern")
    USER = (1, "user")
    MAIL = (2, "mail")
    DAEMON = (3, "daemon")
    AUTH = (4, "auth")
    SYSLOG = (5, "syslog")
    LPR = (6, "lpr")
    NEWS = (7, "news")
    UUCP = (8, "uucp")
    CRON = (9, "cron")
    AUTHPRIV = (10, "authpriv")
    FTP = (11, "ftp")
    NTP = (12, "ntp")
    AUDIT = (13, "audit")
    ALERT = (14, "alert")
    CLOCK = (15, "clock")
    LOCAL0 = (16, "local0")
    LOCAL1 = (17, "local1")
    LOCAL2 = (18, "local2")
    LOCAL3 = (19, "local3")
    LOCAL4 = (20, "local4")
    LOCAL5 = (21, "local5")
    LOCAL6 = (22, "local6")
    LOCAL7 = (23, "local7")

    def __init__(self, code: int, label: str) -> None:
        self.code = code
        self.label = label

    @classmethod
    def from_label(cls, label: str) -> "Facility":
        """Resolve a facility by label or member name, ignoring case.

        Examples
        --------
        >>> Facility.from_label("LOCAL0").code
        16
        >>> Facility.from_label("user") is Facility.USER
        True
        """
        normalized = label.strip().lower()
        for member in cls:
            if member.label == normalized or member.name.lower() == normalized:
                return member
        raise ValueError(f"Unknown syslog facility: {label!r}")

    @classmethod
    def from_code(cls, code: int) -> "Facility":
        for member in cls:
            if member.code == code:
                return member
        raise ValueError(f"Unknown syslog facility code: {code}")


class Severity(Enum):
    """Syslog severity codes; lower codes are more urgent."""

    EMERGENCY = (0, "emergency")
    ALERT = (1, "alert")
    CRITICAL = (2, "critical")
    ERROR = (3, "error")
    WARNING = (4, "warning")
    NOTICE = (5, "notice")
    INFORMATIONAL = (6, "informational")
    DEBUG = (7, "debug")

    def __init__(self, code: int, label: str) -> None:
        self.code = code
        self.label = label

    @classmethod
    def from_label(cls, label: str) -> "Severity":
        normalized = label.strip().lower()
        for member in cls:
            if member.label == normalized or member.name.lower() == normalized:
                return member
        raise ValueError(f"Unknown syslog severity: {label!r}")

    @classmethod
    def from_code(cls, code: int) -> "Severity":
        for member in cls:
            if member.code == code:
                return member
        raise ValueError(f"Unknown syslog severity code: {code}")


class MessageFormat(Enum):
    """Syslog message wire formats."""

    RFC_3164 = "RFC_3164"
    RFC_5424 = "RFC_5424"

    @classmethod
    def from_name(cls, name: str) -> "MessageFormat":
        """Resolve ``RFC_5424``, ``rfc5424`` or ``5424`` style names.

        Examples
        --------
        >>> MessageFormat.from_name("rfc5424") is MessageFormat.RFC_5424
        True
        >>> MessageFormat.from_name("3164") is MessageFormat.RFC_3164
        True
        """
        digits = "".join(char for char in name if char.isdigit())
        for member in cls:
            if member.value.rpartition("_")[2] == digits:
                return member
        raise ValueError(f"Unknown syslog message format: {name!r}")


class Transport(Enum):
    """Closed set of network transports with display labels."""

    UDP = "UDP"
    TCP = "TCP"
    TCP_TLS = "TCP + TLS"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_stream(self) -> bool:
        return self is not Transport.UDP

    @classmethod
    def from_name(cls, name: str) -> "Transport":
        """Resolve a transport by member name or label.

        ``TCP_SSL`` is accepted for settings written by older hosts.

        Examples
        --------
        >>> Transport.from_name("tcp_ssl") is Transport.TCP_TLS
        True
        >>> Transport.from_name("TCP + TLS") is Transport.TCP_TLS
        True
        """
        normalized = name.strip().upper()
        if normalized == "TCP_SSL":
            return cls.TCP_TLS
        for member in cls:
            if normalized in (member.name, member.value):
                return member
        raise ValueError(f"Unknown syslog transport: {name!r}")


def priority(facility: Facility, severity: Severity) -> int:
    """Return the syslog ``PRI`` value ``facility * 8 + severity``.

    Examples
    --------
    >>> priority(Facility.USER, Severity.INFORMATIONAL)
    14
    >>> priority(Facility.LOCAL7, Severity.DEBUG)
    191
    """
    return facility.code * 8 + severity.code


__all__ = ["Facility", "MessageFormat", "Severity", "Transport", "priority"]
