"""Concrete adapters: message rendering, network transports, stdlib bridge."""

from __future__ import annotations

from .formatter import MessageFormatter, local_hostname
from .logging_handler import SyslogHandler, install_handler, uninstall_handlers
from .transport import ConnectionState, SenderStats, TransportSender, frame

__all__ = [
    "ConnectionState",
    "MessageFormatter",
    "SenderStats",
    "SyslogHandler",
    "TransportSender",
    "frame",
    "install_handler",
    "local_hostname",
    "uninstall_handlers",
]
