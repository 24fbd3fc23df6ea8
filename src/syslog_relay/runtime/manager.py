"""Process-wide delivery manager with atomic reconfiguration.

Purpose
-------
Hold the one active delivery pipeline of a host application, expose a single
``publish`` entry point for log producers, and replace the pipeline wholesale
when settings change.

Contents
--------
* :class:`ManagerState` - ``UNCONFIGURED`` or ``ACTIVE``.
* :class:`HandlerManager` - ``init`` / ``reconfigure`` / ``publish`` /
  ``shutdown``.

System Role
-----------
Reconfiguration is the only writer of the active delivery and is serialised by
a private lock. ``publish`` never takes that lock: it reads the current
:class:`ActiveDelivery` reference once and works against that snapshot, so a
record is always formatted and sent by the same configuration. Retired
deliveries refuse new publishes, wait for the running ones (bounded by the
retiring configuration's timeouts), then close their sender.

Delivery failures never reach producers: send and format errors are logged on
the ``syslog_relay`` logger at DEBUG level and reported to the optional
diagnostic hook.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Callable

from syslog_relay.application.use_cases import build_confirmation_record, deliver_record
from syslog_relay.domain import ConfigError, FormatError, LogRecord, SendError, SyslogConfig, to_severity

from ._composition import (
    FormatterFactory,
    SenderFactory,
    build_delivery,
    default_formatter_factory,
    default_sender_factory,
)
from ._state import ActiveDelivery

logger = logging.getLogger(__name__)

_MAX_REPORTED_FORMAT_ERRORS = 256

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


class ManagerState(Enum):
    UNCONFIGURED = "unconfigured"
    ACTIVE = "active"


class HandlerManager:
    """Own the active delivery pipeline of one host application.

    Examples
    --------
    >>> manager = HandlerManager()
    >>> manager.state
    <ManagerState.UNCONFIGURED: 'unconfigured'>
    >>> from syslog_relay.domain import LogLevel
    >>> manager.publish(LogRecord(LogLevel.ERROR, "nobody listens"))
    False
    """

    def __init__(
        self,
        *,
        sender_factory: SenderFactory = default_sender_factory,
        formatter_factory: FormatterFactory = default_formatter_factory,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._sender_factory = sender_factory
        self._formatter_factory = formatter_factory
        self._diagnostic = diagnostic
        self._active: ActiveDelivery | None = None
        self._config: SyslogConfig | None = None
        self._write_lock = threading.Lock()
        self._initialised = False
        self._reported_format_errors: set[str] = set()
        self._report_lock = threading.Lock()

    @property
    def state(self) -> ManagerState:
        return ManagerState.UNCONFIGURED if self._active is None else ManagerState.ACTIVE

    @property
    def active(self) -> ActiveDelivery | None:
        """Return the delivery currently serving publish calls."""

        return self._active

    @property
    def config(self) -> SyslogConfig | None:
        """Return the last installed configuration, enabled or not."""

        return self._config

    @property
    def initialised(self) -> bool:
        return self._initialised

    def init(self, config: SyslogConfig) -> ManagerState:
        """Install the first configuration.

        Raises
        ------
        RuntimeError
            When called twice without :meth:`shutdown` in between.
        ConfigError
            When ``config`` cannot be activated.
        """
        with self._write_lock:
            if self._initialised:
                raise RuntimeError("HandlerManager.init() already called; use reconfigure()")
            state = self._install(config)
            self._initialised = True
            return state

    def reconfigure(self, config: SyslogConfig) -> ManagerState:
        """Replace the active configuration with ``config``.

        On :class:`ConfigError` the previous delivery stays in force.
        """
        with self._write_lock:
            state = self._install(config)
            self._initialised = True
            return state

    def shutdown(self) -> None:
        """Close the active delivery and return to ``UNCONFIGURED``."""

        with self._write_lock:
            previous, self._active = self._active, None
            self._config = None
            self._initialised = False
            if previous is not None:
                self._retire(previous)
                self._emit("deactivated", {"endpoint": previous.config.endpoint, "reason": "shutdown"})

    def publish(self, record: LogRecord) -> bool:
        """Deliver ``record`` through the active pipeline.

        Returns ``True`` when the payload reached the sender, ``False`` when the
        manager is unconfigured, the level filter rejected the record, or the
        delivery failed. Never raises for delivery problems.
        """
        delivery = self._checkout()
        if delivery is None:
            return False
        try:
            return deliver_record(
                record,
                config=delivery.config,
                formatter=delivery.formatter,
                sender=delivery.sender,
            )
        except SendError as exc:
            logger.debug("dropping record from %r: %s", record.logger_name, exc)
            self._emit(
                "send_failed",
                {"endpoint": delivery.config.endpoint, "kind": exc.kind.value, "logger": record.logger_name},
            )
            return False
        except FormatError as exc:
            self._report_format_error(record, exc)
            return False
        finally:
            delivery.lease.release()

    def _checkout(self) -> ActiveDelivery | None:
        """Read the active delivery once and register as in flight on it."""

        while True:
            delivery = self._active
            if delivery is None:
                return None
            if delivery.lease.acquire():
                return delivery

    def _install(self, config: SyslogConfig) -> ManagerState:
        """Swap in ``config``; caller holds ``self._write_lock``."""

        if not isinstance(config, SyslogConfig):
            raise ConfigError(f"expected SyslogConfig, got {type(config).__name__}")
        previous = self._active

        if not config.enabled:
            self._active = None
            self._config = config
            if previous is not None:
                self._retire(previous)
                self._emit("deactivated", {"endpoint": previous.config.endpoint, "reason": "no hostname"})
            logger.debug("syslog delivery not configured")
            return ManagerState.UNCONFIGURED

        delivery = build_delivery(
            config,
            sender_factory=self._sender_factory,
            formatter_factory=self._formatter_factory,
        )
        confirmation = build_confirmation_record(config)
        try:
            payload = delivery.formatter.format(
                confirmation,
                config.app_name,
                config.message_hostname,
                config.facility,
                to_severity(confirmation.level),
            )
        except FormatError as exc:
            delivery.sender.close()
            self._emit("config_rejected", {"endpoint": config.endpoint, "error": str(exc)})
            raise ConfigError(f"configuration cannot render messages: {exc}") from exc

        try:
            delivery.sender.send(payload)
        except SendError as exc:
            logger.debug("activation notice to %s not delivered: %s", config.endpoint, exc)
            self._emit(
                "send_failed",
                {"endpoint": config.endpoint, "kind": exc.kind.value, "logger": confirmation.logger_name},
            )

        self._active = delivery
        self._config = config
        with self._report_lock:
            self._reported_format_errors.clear()
        if previous is not None:
            self._retire(previous)
        logger.info(confirmation.message)
        self._emit(
            "activated",
            {"endpoint": config.endpoint, "transport": config.transport.name, "format": config.message_format.name},
        )
        return ManagerState.ACTIVE

    def _retire(self, delivery: ActiveDelivery) -> None:
        timeout = delivery.config.connect_timeout + delivery.config.write_timeout
        if not delivery.lease.retire(timeout):
            logger.debug(
                "closing sender for %s with %d publish calls in flight",
                delivery.config.endpoint,
                delivery.lease.in_flight,
            )
        delivery.sender.close()

    def _report_format_error(self, record: LogRecord, exc: FormatError) -> None:
        reason = str(exc)
        with self._report_lock:
            if reason in self._reported_format_errors:
                return
            if len(self._reported_format_errors) >= _MAX_REPORTED_FORMAT_ERRORS:
                self._reported_format_errors.clear()
            self._reported_format_errors.add(reason)
        logger.debug("dropping record from %r that cannot be formatted: %s", record.logger_name, exc)
        self._emit("format_failed", {"logger": record.logger_name, "error": reason})

    def _emit(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as exc:  # noqa: BLE001
            logger.error("Diagnostic hook raised an exception; continuing", exc_info=exc)


__all__ = ["DiagnosticHook", "HandlerManager", "ManagerState"]
