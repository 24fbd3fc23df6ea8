"""Delivery configuration value object and its builder.

Purpose
-------
Capture everything needed to assemble one delivery pipeline (target, transport,
format, filter, message metadata) as an immutable value. Hosts build a fresh
:class:`SyslogConfig` for every settings change; instances are never mutated.

Contents
--------
* :class:`ResolvePolicy` - UDP hostname resolution policy.
* :class:`SyslogConfig` - validated, frozen configuration.
* :func:`build_config` - lenient builder accepting raw strings from settings
  stores, blank values meaning "use the default".
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .errors import ConfigError
from .levels import LogLevel
from .severity import DEFAULT_LEVEL_FILTER
from .syslog import Facility, MessageFormat, Transport

DEFAULT_TRANSPORT = Transport.UDP
DEFAULT_SERVER_PORT = 514
DEFAULT_APP_NAME = "syslog_relay"
DEFAULT_FACILITY = Facility.USER
DEFAULT_MESSAGE_FORMAT = MessageFormat.RFC_3164
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_WRITE_TIMEOUT = 5.0
DEFAULT_RETRY_BACKOFF = 1.0


class ResolvePolicy(Enum):
    """How UDP senders resolve the collector hostname."""

    PER_SEND = "per_send"
    CACHED = "cached"


@dataclass(slots=True, frozen=True)
class SyslogConfig:
    """Immutable delivery configuration.

    A configuration without ``server_hostname`` is valid and means "delivery
    disabled".

    Examples
    --------
    >>> SyslogConfig(server_hostname="collector.example").endpoint
    'collector.example:514'
    >>> SyslogConfig().enabled
    False
    >>> SyslogConfig(server_hostname="h", server_port=0)
    Traceback (most recent call last):
    ...
    syslog_relay.domain.errors.ConfigError: server_port must be within 1..65535, got 0
    """

    transport: Transport = DEFAULT_TRANSPORT
    server_hostname: str | None = None
    server_port: int = DEFAULT_SERVER_PORT
    level_filter: LogLevel = DEFAULT_LEVEL_FILTER
    app_name: str = DEFAULT_APP_NAME
    message_hostname: str | None = None
    facility: Facility = DEFAULT_FACILITY
    message_format: MessageFormat = DEFAULT_MESSAGE_FORMAT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    write_timeout: float = DEFAULT_WRITE_TIMEOUT
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    resolve_policy: ResolvePolicy = ResolvePolicy.PER_SEND
    tls_ca_file: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.transport, Transport):
            raise ConfigError(f"transport must be a Transport, got {self.transport!r}")
        if not isinstance(self.message_format, MessageFormat):
            raise ConfigError(f"message_format must be a MessageFormat, got {self.message_format!r}")
        if not isinstance(self.facility, Facility):
            raise ConfigError(f"facility must be a Facility, got {self.facility!r}")
        if not isinstance(self.level_filter, LogLevel):
            raise ConfigError(f"level_filter must be a LogLevel, got {self.level_filter!r}")
        if isinstance(self.server_port, bool) or not isinstance(self.server_port, int):
            raise ConfigError(f"server_port must be an integer, got {self.server_port!r}")
        if not 1 <= self.server_port <= 65535:
            raise ConfigError(f"server_port must be within 1..65535, got {self.server_port}")
        if self.server_hostname is not None:
            _check_hostname("server_hostname", self.server_hostname)
            _check_resolvable_name(self.server_hostname)
        if self.message_hostname is not None:
            _check_hostname("message_hostname", self.message_hostname)
        if not self.app_name or not self.app_name.strip():
            raise ConfigError("app_name must not be empty")
        for name in ("connect_timeout", "write_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.retry_backoff < 0:
            raise ConfigError("retry_backoff must not be negative")

    @property
    def enabled(self) -> bool:
        """Return ``True`` when a collector hostname is configured."""

        return bool(self.server_hostname)

    @property
    def endpoint(self) -> str:
        return f"{self.server_hostname}:{self.server_port}"

    def replace(self, **changes: Any) -> "SyslogConfig":
        """Return a new configuration with ``changes`` applied and validated."""

        return replace(self, **changes)


def _check_hostname(field_name: str, value: str) -> None:
    if not value or value != value.strip():
        raise ConfigError(f"{field_name} must be a non-empty name without surrounding whitespace")
    if any(char.isspace() or ord(char) < 0x20 or ord(char) == 0x7F for char in value):
        raise ConfigError(f"{field_name} contains whitespace or control characters: {value!r}")


def _check_resolvable_name(value: str) -> None:
    """Reject collector names the IDNA codec used by name resolution cannot encode."""

    try:
        value.encode("idna")
    except UnicodeError as exc:
        raise ConfigError(f"server_hostname is not a valid host name: {value!r} ({exc})") from exc


def trim_to_none(value: Any) -> Any:
    """Return ``None`` for ``None`` and blank strings, ``value`` otherwise.

    Examples
    --------
    >>> trim_to_none("   ") is None
    True
    >>> trim_to_none(" host ")
    'host'
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def build_config(
    *,
    transport: str | Transport | None = None,
    server_hostname: str | None = None,
    server_port: str | int | None = None,
    level_filter: str | LogLevel | None = None,
    app_name: str | None = None,
    message_hostname: str | None = None,
    facility: str | Facility | None = None,
    message_format: str | MessageFormat | None = None,
    connect_timeout: str | float | None = None,
    write_timeout: str | float | None = None,
    retry_backoff: str | float | None = None,
    resolve_policy: str | ResolvePolicy | None = None,
    tls_ca_file: str | None = None,
) -> SyslogConfig:
    """Build a :class:`SyslogConfig` from loosely typed settings values.

    Blank or missing values fall back to the documented defaults; malformed
    values raise :class:`ConfigError`.

    Examples
    --------
    >>> config = build_config(transport="tcp", server_hostname=" logs.example ", server_port="6514",
    ...                       level_filter="info", facility="local0", message_format="rfc5424")
    >>> config.transport, config.server_hostname, config.server_port
    (<Transport.TCP: 'TCP'>, 'logs.example', 6514)
    >>> config.level_filter, config.facility.code, config.message_format.name
    (<LogLevel.INFO: 20>, 16, 'RFC_5424')
    >>> build_config(server_port="").server_port
    514
    >>> build_config(server_port="syslog")
    Traceback (most recent call last):
    ...
    syslog_relay.domain.errors.ConfigError: server_port must be an integer, got 'syslog'
    """
    values: dict[str, Any] = {}
    _put(values, "transport", transport, Transport, Transport.from_name)
    _put(values, "level_filter", level_filter, LogLevel, LogLevel.from_name)
    _put(values, "facility", facility, Facility, Facility.from_label)
    _put(values, "message_format", message_format, MessageFormat, MessageFormat.from_name)
    _put(values, "resolve_policy", resolve_policy, ResolvePolicy, lambda raw: ResolvePolicy(raw.strip().lower()))
    _put(values, "server_port", server_port, int, int, label="an integer")
    for name, raw in (
        ("connect_timeout", connect_timeout),
        ("write_timeout", write_timeout),
        ("retry_backoff", retry_backoff),
    ):
        _put(values, name, raw, float, float, label="a number")
    for name, raw in (
        ("server_hostname", server_hostname),
        ("app_name", app_name),
        ("message_hostname", message_hostname),
        ("tls_ca_file", tls_ca_file),
    ):
        cleaned = trim_to_none(raw)
        if cleaned is not None:
            values[name] = cleaned
    return SyslogConfig(**values)


def _put(
    values: dict[str, Any],
    name: str,
    raw: Any,
    expected: type,
    parse: Any,
    *,
    label: str | None = None,
) -> None:
    cleaned = trim_to_none(raw)
    if cleaned is None:
        return
    if isinstance(cleaned, expected) and not isinstance(cleaned, bool):
        values[name] = cleaned
        return
    if expected is float and isinstance(cleaned, int) and not isinstance(cleaned, bool):
        values[name] = float(cleaned)
        return
    try:
        values[name] = parse(str(cleaned))
    except ValueError as exc:
        if label is not None:
            raise ConfigError(f"{name} must be {label}, got {cleaned!r}") from exc
        raise ConfigError(str(exc)) from exc


__all__ = [
    "DEFAULT_APP_NAME",
    "DEFAULT_FACILITY",
    "DEFAULT_MESSAGE_FORMAT",
    "DEFAULT_SERVER_PORT",
    "DEFAULT_TRANSPORT",
    "ResolvePolicy",
    "SyslogConfig",
    "build_config",
    "trim_to_none",
]
