"""Deliver one record through a formatter/sender pair.

Purpose
-------
Hold the per-record pipeline (filter, map severity, format, send) free of any
state so the runtime can run it against whichever delivery snapshot it read.

Contents
--------
* :func:`deliver_record` - run the pipeline for one record.
* :func:`confirmation_message` / :func:`build_confirmation_record` - the
  activation notice sent first on every new delivery.
"""

from __future__ import annotations

from syslog_relay.application.ports import FormatterPort, SenderPort
from syslog_relay.domain import LogLevel, LogRecord, SyslogConfig, passes_filter, to_severity

CONFIRMATION_LOGGER = "syslog_relay.runtime"


def deliver_record(
    record: LogRecord,
    *,
    config: SyslogConfig,
    formatter: FormatterPort,
    sender: SenderPort,
) -> bool:
    """Filter, format and send ``record``.

    Returns ``False`` when the level filter rejected the record and ``True``
    once the payload has been handed to the sender.

    Raises
    ------
    FormatError
        When the record cannot be rendered.
    SendError
        When the sender failed to deliver the payload.
    """
    if not passes_filter(record.level, config.level_filter):
        return False
    payload = formatter.format(
        record,
        config.app_name,
        config.message_hostname,
        config.facility,
        to_severity(record.level),
    )
    sender.send(payload)
    return True


def confirmation_message(config: SyslogConfig) -> str:
    """Return the activation notice for ``config``.

    Examples
    --------
    >>> from syslog_relay.domain import Transport
    >>> confirmation_message(SyslogConfig(server_hostname="logs", transport=Transport.TCP_TLS))
    'syslog_relay configured to output log messages to syslog server logs:514 on transport TCP + TLS'
    """
    return (
        f"{config.app_name} configured to output log messages to syslog server "
        f"{config.endpoint} on transport {config.transport.label}"
    )


def build_confirmation_record(config: SyslogConfig) -> LogRecord:
    return LogRecord(
        level=LogLevel.INFO,
        message=confirmation_message(config),
        logger_name=CONFIRMATION_LOGGER,
    )


__all__ = ["CONFIRMATION_LOGGER", "build_confirmation_record", "confirmation_message", "deliver_record"]
