"""Deliver application log records to remote syslog collectors.

Hosts build :class:`SyslogConfig` values from their settings, hand them to one
:class:`HandlerManager`, and either call :meth:`HandlerManager.publish` directly
or attach :class:`SyslogHandler` to the stdlib logging tree.
"""

from __future__ import annotations

from .adapters import MessageFormatter, SyslogHandler, TransportSender, install_handler, uninstall_handlers
from .domain import (
    ConfigError,
    Facility,
    FormatError,
    LogLevel,
    LogRecord,
    MessageFormat,
    ResolvePolicy,
    SendError,
    SendErrorKind,
    Severity,
    SyslogConfig,
    Transport,
    build_config,
    passes_filter,
    to_severity,
)
from .runtime import HandlerManager, ManagerState

__all__ = [
    "ConfigError",
    "Facility",
    "FormatError",
    "HandlerManager",
    "LogLevel",
    "LogRecord",
    "ManagerState",
    "MessageFormat",
    "MessageFormatter",
    "ResolvePolicy",
    "SendError",
    "SendErrorKind",
    "Severity",
    "SyslogConfig",
    "SyslogHandler",
    "Transport",
    "TransportSender",
    "build_config",
    "install_handler",
    "passes_filter",
    "to_severity",
    "uninstall_handlers",
]
