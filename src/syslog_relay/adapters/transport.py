"""Network transports writing formatted syslog payloads.

Purpose
-------
Own the socket side of delivery: one :class:`TransportSender` per active
configuration, resolving its closed :class:`Transport` variant with a ``match``
statement instead of subclass dispatch.

Contents
--------
* :class:`ConnectionState` - stream connection lifecycle.
* :class:`SenderStats` - counters snapshot.
* :func:`frame` - stream framing per message format.
* :class:`TransportSender` - implementation of :class:`SenderPort`.

System Role
-----------
UDP sends one datagram per payload and never retries. TCP and TCP+TLS keep a
single persistent connection that is only touched while holding the sender's
private lock; a failed connect is not retried before ``retry_backoff`` seconds
have passed, so a dead collector costs producers at most one bounded connect
attempt per back-off window.

Alignment Notes
---------------
Stream framing follows RFC 6587: octet counting for RFC 5424 payloads and a
trailing LF for RFC 3164 payloads.
"""

from __future__ import annotations

import logging
import socket
import ssl
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from syslog_relay.application.ports.sender import SenderPort
from syslog_relay.application.ports.time import MonotonicClock
from syslog_relay.domain.config import ResolvePolicy, SyslogConfig
from syslog_relay.domain.errors import SendError, SendErrorKind
from syslog_relay.domain.syslog import MessageFormat, Transport

logger = logging.getLogger(__name__)

_Address = tuple[int, Any]


class ConnectionState(Enum):
    """Lifecycle of a stream transport connection."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class SenderStats:
    """Counters of one sender since construction."""

    sent: int = 0
    failed: int = 0
    bytes_sent: int = 0


def frame(payload: bytes, message_format: MessageFormat) -> bytes:
    """Apply stream framing to ``payload``.

    Examples
    --------
    >>> frame(b"<14>1 - - - - - - hi", MessageFormat.RFC_5424)
    b'20 <14>1 - - - - - - hi'
    >>> frame(b"<14>Oct  3 07:05:09 host app: hi", MessageFormat.RFC_3164)
    b'<14>Oct  3 07:05:09 host app: hi\\n'
    """
    match message_format:
        case MessageFormat.RFC_5424:
            return str(len(payload)).encode("ascii") + b" " + payload
        case MessageFormat.RFC_3164:
            return payload + b"\n"


class TransportSender(SenderPort):
    """Deliver payloads to ``host:port`` over the configured transport."""

    def __init__(
        self,
        *,
        transport: Transport,
        host: str,
        port: int,
        message_format: MessageFormat = MessageFormat.RFC_3164,
        connect_timeout: float = 5.0,
        write_timeout: float = 5.0,
        retry_backoff: float = 1.0,
        resolve_policy: ResolvePolicy = ResolvePolicy.PER_SEND,
        ssl_context: ssl.SSLContext | None = None,
        tls_ca_file: str | None = None,
        clock: MonotonicClock = time.monotonic,
    ) -> None:
        self._transport = transport
        self._host = host
        self._port = port
        self._message_format = message_format
        self._connect_timeout = connect_timeout
        self._write_timeout = write_timeout
        self._retry_backoff = retry_backoff
        self._resolve_policy = resolve_policy
        self._ssl_context = ssl_context
        self._tls_ca_file = tls_ca_file
        self._clock = clock

        self._closed = threading.Event()
        self._lock = threading.Lock()
        self._sock: socket.socket | None = None
        self._state = ConnectionState.DISCONNECTED
        self._last_error: BaseException | None = None
        self._retry_after = 0.0
        self._resolved: _Address | None = None

        self._stats_lock = threading.Lock()
        self._sent = 0
        self._failed = 0
        self._bytes_sent = 0

    @classmethod
    def from_config(
        cls,
        config: SyslogConfig,
        *,
        ssl_context: ssl.SSLContext | None = None,
        clock: MonotonicClock = time.monotonic,
    ) -> "TransportSender":
        """Build a sender for an enabled ``config``."""

        if not config.server_hostname:
            raise ValueError("cannot build a sender without server_hostname")
        return cls(
            transport=config.transport,
            host=config.server_hostname,
            port=config.server_port,
            message_format=config.message_format,
            connect_timeout=config.connect_timeout,
            write_timeout=config.write_timeout,
            retry_backoff=config.retry_backoff,
            resolve_policy=config.resolve_policy,
            ssl_context=ssl_context,
            tls_ca_file=config.tls_ca_file,
            clock=clock,
        )

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def endpoint(self) -> str:
        return f"{self._host}:{self._port}"

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def state(self) -> ConnectionState | None:
        """Connection state of stream transports; ``None`` for UDP."""

        if not self._transport.is_stream:
            return None
        return self._state

    @property
    def last_error(self) -> BaseException | None:
        return self._last_error

    @property
    def retry_after(self) -> float:
        return self._retry_after

    @property
    def stats(self) -> SenderStats:
        with self._stats_lock:
            return SenderStats(sent=self._sent, failed=self._failed, bytes_sent=self._bytes_sent)

    def send(self, payload: bytes) -> None:
        """Write one formatted payload; raise :class:`SendError` on failure."""

        if self._closed.is_set():
            self._count(failed=True)
            raise SendError(SendErrorKind.CLOSED, f"sender for {self.endpoint} is closed")
        try:
            match self._transport:
                case Transport.UDP:
                    written = self._send_datagram(payload)
                case Transport.TCP | Transport.TCP_TLS:
                    written = self._send_stream(frame(payload, self._message_format))
        except SendError:
            self._count(failed=True)
            raise
        self._count(written=written)

    def close(self) -> None:
        """Release the connection; idempotent and safe during an in-flight send."""

        if self._closed.is_set():
            return
        self._closed.set()
        if not self._lock.acquire(blocking=False):
            # A send holds the lock; interrupt its socket, then wait for it to let go.
            sock = self._sock
            if sock is not None:
                _shutdown_quietly(sock)
            if not self._lock.acquire(timeout=self._connect_timeout + self._write_timeout):
                logger.debug("send to %s still running after close; it releases the socket itself", self.endpoint)
                return
        try:
            self._teardown(ConnectionState.DISCONNECTED)
        finally:
            self._lock.release()

    def __enter__(self) -> "TransportSender":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _count(self, *, written: int = 0, failed: bool = False) -> None:
        with self._stats_lock:
            if failed:
                self._failed += 1
            else:
                self._sent += 1
                self._bytes_sent += written

    def _resolve(self, socktype: int) -> _Address:
        if self._resolve_policy is ResolvePolicy.CACHED and self._resolved is not None:
            return self._resolved
        try:
            infos = socket.getaddrinfo(self._host, self._port, type=socktype)
        except (socket.gaierror, UnicodeError) as exc:
            self._resolved = None
            raise SendError(SendErrorKind.UNRESOLVABLE, f"cannot resolve {self._host}: {exc}") from exc
        if not infos:
            raise SendError(SendErrorKind.UNRESOLVABLE, f"no address for {self._host}")
        family, _type, _proto, _canonname, sockaddr = infos[0]
        resolved = (family, sockaddr)
        if self._resolve_policy is ResolvePolicy.CACHED:
            self._resolved = resolved
        return resolved

    def _send_datagram(self, payload: bytes) -> int:
        family, sockaddr = self._resolve(socket.SOCK_DGRAM)
        try:
            with socket.socket(family, socket.SOCK_DGRAM) as sock:
                sock.settimeout(self._write_timeout)
                sock.sendto(payload, sockaddr)
        except OSError as exc:
            self._resolved = None
            raise SendError(SendErrorKind.WRITE_FAILED, f"datagram to {self.endpoint} failed: {exc}") from exc
        return len(payload)

    def _send_stream(self, data: bytes) -> int:
        with self._lock:
            if self._closed.is_set():
                raise SendError(SendErrorKind.CLOSED, f"sender for {self.endpoint} is closed")
            sock = self._sock if self._sock is not None else self._connect()
            try:
                sock.sendall(data)
            except OSError as exc:
                self._last_error = exc
                self._teardown(ConnectionState.DISCONNECTED)
                if self._closed.is_set():
                    raise SendError(SendErrorKind.CLOSED, f"sender for {self.endpoint} closed during send") from exc
                raise SendError(SendErrorKind.WRITE_FAILED, f"write to {self.endpoint} failed: {exc}") from exc
            finally:
                # close() may have given up waiting for the lock.
                if self._closed.is_set():
                    self._teardown(ConnectionState.DISCONNECTED)
            return len(data)

    def _connect(self) -> socket.socket:
        """Open the stream connection; caller holds ``self._lock``."""

        if self._state is ConnectionState.FAILED and self._clock() < self._retry_after:
            raise SendError(
                SendErrorKind.CONNECT_FAILED,
                f"{self.endpoint} unavailable, next attempt after back-off: {self._last_error}",
            )
        try:
            raw = socket.create_connection((self._host, self._port), timeout=self._connect_timeout)
        except (socket.gaierror, UnicodeError) as exc:
            self._mark_failed(exc)
            raise SendError(SendErrorKind.UNRESOLVABLE, f"cannot resolve {self._host}: {exc}") from exc
        except OSError as exc:
            self._mark_failed(exc)
            raise SendError(SendErrorKind.CONNECT_FAILED, f"connect to {self.endpoint} failed: {exc}") from exc

        sock: socket.socket = raw
        if self._transport is Transport.TCP_TLS:
            try:
                sock = self._tls_context().wrap_socket(raw, server_hostname=self._host)
            except OSError as exc:
                raw.close()
                self._mark_failed(exc)
                raise SendError(SendErrorKind.TLS_HANDSHAKE_FAILED, f"TLS with {self.endpoint} failed: {exc}") from exc

        sock.settimeout(self._write_timeout)
        if self._closed.is_set():
            sock.close()
            raise SendError(SendErrorKind.CLOSED, f"sender for {self.endpoint} closed while connecting")
        self._sock = sock
        self._state = ConnectionState.CONNECTED
        self._last_error = None
        logger.debug("connected to syslog collector %s over %s", self.endpoint, self._transport.label)
        return sock

    def _tls_context(self) -> ssl.SSLContext:
        if self._ssl_context is None:
            if self._tls_ca_file:
                self._ssl_context = ssl.create_default_context(cafile=self._tls_ca_file)
            else:
                self._ssl_context = ssl.create_default_context()
        return self._ssl_context

    def _mark_failed(self, exc: BaseException) -> None:
        self._state = ConnectionState.FAILED
        self._last_error = exc
        self._retry_after = self._clock() + self._retry_backoff
        logger.debug("connection to syslog collector %s failed: %s", self.endpoint, exc)

    def _teardown(self, state: ConnectionState) -> None:
        sock, self._sock = self._sock, None
        if sock is not None:
            try:
                sock.close()
            except OSError:
                pass
        if self._transport.is_stream:
            self._state = state


def _shutdown_quietly(sock: socket.socket) -> None:
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass


__all__ = ["ConnectionState", "SenderStats", "TransportSender", "frame"]
