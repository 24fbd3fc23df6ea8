"""Domain values and pure policies of the syslog delivery pipeline."""

from __future__ import annotations

from .config import ResolvePolicy, SyslogConfig, build_config
from .errors import ConfigError, FormatError, SendError, SendErrorKind, SyslogRelayError
from .levels import LogLevel
from .records import LogRecord
from .severity import DEFAULT_LEVEL_FILTER, passes_filter, to_severity
from .syslog import Facility, MessageFormat, Severity, Transport, priority

__all__ = [
    "ConfigError",
    "DEFAULT_LEVEL_FILTER",
    "Facility",
    "FormatError",
    "LogLevel",
    "LogRecord",
    "MessageFormat",
    "ResolvePolicy",
    "SendError",
    "SendErrorKind",
    "Severity",
    "SyslogConfig",
    "SyslogRelayError",
    "Transport",
    "build_config",
    "passes_filter",
    "priority",
    "to_severity",
]
