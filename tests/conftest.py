from __future__ import annotations

import socket
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Iterator

import pytest

from syslog_relay.domain import LogLevel, LogRecord


@pytest.fixture
def record_factory() -> Callable[..., LogRecord]:
    def _make(level: LogLevel = LogLevel.INFO, message: str = "build started", **overrides: Any) -> LogRecord:
        values: dict[str, Any] = {
            "level": level,
            "message": message,
            "logger_name": "tests",
            "timestamp": datetime(2025, 9, 23, 12, 0, 0, 250000, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return LogRecord(**values)

    return _make


class UdpCollector:
    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(0.2)
        self.port = self._sock.getsockname()[1]

    def receive(self, timeout: float = 2.0) -> list[bytes]:
        datagrams: list[bytes] = []
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            try:
                data, _ = self._sock.recvfrom(65535)
            except socket.timeout:
                if datagrams:
                    break
                continue
            datagrams.append(data)
        return datagrams

    def close(self) -> None:
        self._sock.close()


class TcpCollector:
    """Accept connections and keep every received byte per connection."""

    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(5)
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self.connections: list[bytearray] = []
        self._lock = threading.Lock()
        self._running = threading.Event()
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)

    def start(self) -> None:
        self._running.set()
        self._thread.start()

    def _accept_loop(self) -> None:
        while self._running.is_set():
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            buffer = bytearray()
            with self._lock:
                self.connections.append(buffer)
            threading.Thread(target=self._read, args=(conn, buffer), daemon=True).start()

    def _read(self, conn: socket.socket, buffer: bytearray) -> None:
        with conn:
            while True:
                try:
                    chunk = conn.recv(4096)
                except OSError:
                    return
                if not chunk:
                    return
                with self._lock:
                    buffer.extend(chunk)

    def wait_for(self, predicate: Callable[[bytes], bool], timeout: float = 2.0) -> bytes:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                data = b"".join(bytes(item) for item in self.connections)
            if predicate(data):
                return data
            time.sleep(0.02)
        with self._lock:
            return b"".join(bytes(item) for item in self.connections)

    def close(self) -> None:
        self._running.clear()
        try:
            self._sock.close()
        finally:
            self._thread.join(timeout=1)


@pytest.fixture
def udp_collector() -> Iterator[UdpCollector]:
    collector = UdpCollector()
    try:
        yield collector
    finally:
        collector.close()


@pytest.fixture
def tcp_collector() -> Iterator[TcpCollector]:
    collector = TcpCollector()
    collector.start()
    try:
        yield collector
    finally:
        collector.close()
