from __future__ import annotations

from typing import Any, Callable

import pytest

from syslog_relay.application.use_cases import (
    CONFIRMATION_LOGGER,
    build_confirmation_record,
    confirmation_message,
    deliver_record,
)
from syslog_relay.domain import (
    Facility,
    FormatError,
    LogLevel,
    LogRecord,
    MessageFormat,
    SendError,
    SendErrorKind,
    Severity,
    SyslogConfig,
    Transport,
)

RecordFactory = Callable[..., LogRecord]


class StubFormatter:
    message_format = MessageFormat.RFC_3164

    def __init__(self, *, error: FormatError | None = None) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self._error = error

    def format(
        self,
        record: LogRecord,
        app_name: str,
        message_hostname: str | None,
        facility: Facility,
        severity: Severity,
    ) -> bytes:
        self.calls.append((record, app_name, message_hostname, facility, severity))
        if self._error is not None:
            raise self._error
        return f"{severity.code}|{record.message}".encode("utf-8")


class StubSender:
    transport = Transport.UDP

    def __init__(self, *, error: SendError | None = None) -> None:
        self.payloads: list[bytes] = []
        self._error = error

    def send(self, payload: bytes) -> None:
        if self._error is not None:
            raise self._error
        self.payloads.append(payload)

    def close(self) -> None:
        return None


CONFIG = SyslogConfig(
    server_hostname="collector.example",
    level_filter=LogLevel.WARNING,
    app_name="jenkins",
    message_hostname="build01",
    facility=Facility.LOCAL4,
)


def test_record_passing_filter_is_formatted_and_sent(record_factory: RecordFactory) -> None:
    formatter, sender = StubFormatter(), StubSender()
    record = record_factory(LogLevel.ERROR, "disk full")

    assert deliver_record(record, config=CONFIG, formatter=formatter, sender=sender) is True

    assert formatter.calls == [(record, "jenkins", "build01", Facility.LOCAL4, Severity.ERROR)]
    assert sender.payloads == [b"3|disk full"]


@pytest.mark.parametrize("level", [LogLevel.TRACE, LogLevel.DEBUG, LogLevel.INFO])
def test_record_below_filter_never_reaches_formatter(record_factory: RecordFactory, level: LogLevel) -> None:
    formatter, sender = StubFormatter(), StubSender()

    assert deliver_record(record_factory(level), config=CONFIG, formatter=formatter, sender=sender) is False

    assert formatter.calls == []
    assert sender.payloads == []


def test_record_at_threshold_passes(record_factory: RecordFactory) -> None:
    sender = StubSender()
    assert deliver_record(record_factory(LogLevel.WARNING), config=CONFIG, formatter=StubFormatter(), sender=sender)
    assert sender.payloads == [b"4|build started"]


def test_errors_propagate_to_caller(record_factory: RecordFactory) -> None:
    record = record_factory(LogLevel.CRITICAL)

    with pytest.raises(FormatError):
        deliver_record(record, config=CONFIG, formatter=StubFormatter(error=FormatError("bad")), sender=StubSender())
    with pytest.raises(SendError) as excinfo:
        deliver_record(
            record,
            config=CONFIG,
            formatter=StubFormatter(),
            sender=StubSender(error=SendError(SendErrorKind.WRITE_FAILED, "reset")),
        )
    assert str(excinfo.value) == "write_failed: reset"


def test_confirmation_names_endpoint_and_transport() -> None:
    config = CONFIG.replace(transport=Transport.TCP, server_port=601)

    assert confirmation_message(config) == (
        "jenkins configured to output log messages to syslog server collector.example:601 on transport TCP"
    )


def test_confirmation_record_is_info_from_runtime_logger() -> None:
    record = build_confirmation_record(CONFIG)

    assert record.level is LogLevel.INFO
    assert record.logger_name == CONFIRMATION_LOGGER
    assert record.message == confirmation_message(CONFIG)
