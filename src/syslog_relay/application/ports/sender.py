"""Port describing a transport that writes formatted syslog payloads."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from syslog_relay.domain.syslog import Transport


@runtime_checkable
class SenderPort(Protocol):
    """Deliver one formatted payload to the collector."""

    @property
    def transport(self) -> Transport: ...

    def send(self, payload: bytes) -> None:
        """Write ``payload`` or raise :class:`~syslog_relay.domain.errors.SendError`."""

    def close(self) -> None:
        """Release sockets; later sends fail fast."""


__all__ = ["SenderPort"]
