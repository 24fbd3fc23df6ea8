"""Build delivery pipelines from configuration values.

The factories are injectable so tests and hosts can substitute senders (for
example a sender with a private CA bundle or a recording fake) without touching
the manager.
"""

from __future__ import annotations

from typing import Callable

from syslog_relay.adapters.formatter import MessageFormatter
from syslog_relay.adapters.transport import TransportSender
from syslog_relay.application.ports import FormatterPort, SenderPort
from syslog_relay.domain import MessageFormat, SyslogConfig

from ._state import ActiveDelivery

SenderFactory = Callable[[SyslogConfig], SenderPort]
FormatterFactory = Callable[[MessageFormat], FormatterPort]


def default_sender_factory(config: SyslogConfig) -> SenderPort:
    return TransportSender.from_config(config)


def default_formatter_factory(message_format: MessageFormat) -> FormatterPort:
    return MessageFormatter(message_format)


def build_delivery(
    config: SyslogConfig,
    *,
    sender_factory: SenderFactory = default_sender_factory,
    formatter_factory: FormatterFactory = default_formatter_factory,
) -> ActiveDelivery:
    """Assemble a fresh sender and formatter for an enabled ``config``."""

    formatter = formatter_factory(config.message_format)
    sender = sender_factory(config)
    return ActiveDelivery(config=config, sender=sender, formatter=formatter)


__all__ = [
    "FormatterFactory",
    "SenderFactory",
    "build_delivery",
    "default_formatter_factory",
    "default_sender_factory",
]
