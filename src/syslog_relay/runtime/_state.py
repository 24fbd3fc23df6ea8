"""Active delivery snapshot and its in-flight lease."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from syslog_relay.application.ports import FormatterPort, SenderPort
from syslog_relay.domain import SyslogConfig


class DeliveryLease:
    """Count publish calls still working against one delivery.

    The condition lock is held only to bump the counter, never across I/O.

    Examples
    --------
    >>> lease = DeliveryLease()
    >>> lease.acquire()
    True
    >>> lease.retire(timeout=0)
    False
    >>> lease.release()
    >>> lease.acquire()
    False
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._in_flight = 0
        self._retired = False

    def acquire(self) -> bool:
        """Register one publish; ``False`` once the delivery is retired."""

        with self._cond:
            if self._retired:
                return False
            self._in_flight += 1
            return True

    def release(self) -> None:
        with self._cond:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._cond.notify_all()

    def retire(self, timeout: float | None) -> bool:
        """Refuse new publishes and wait for running ones; ``True`` when drained."""

        with self._cond:
            self._retired = True
            return self._cond.wait_for(lambda: self._in_flight == 0, timeout)

    @property
    def in_flight(self) -> int:
        with self._cond:
            return self._in_flight


@dataclass(slots=True, frozen=True)
class ActiveDelivery:
    """The (configuration, sender, formatter) triple serving publish calls."""

    config: SyslogConfig
    sender: SenderPort
    formatter: FormatterPort
    lease: DeliveryLease = field(default_factory=DeliveryLease, compare=False, repr=False)


__all__ = ["ActiveDelivery", "DeliveryLease"]
