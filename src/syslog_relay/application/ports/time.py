"""Port for monotonic time used by reconnect back-off."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MonotonicClock(Protocol):
    """Return seconds from an arbitrary, never decreasing origin."""

    def __call__(self) -> float: ...


__all__ = ["MonotonicClock"]
