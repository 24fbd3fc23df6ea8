"""Protocols the runtime depends on instead of concrete adapters."""

from __future__ import annotations

from .formatter import FormatterPort
from .sender import SenderPort
from .time import MonotonicClock

__all__ = ["FormatterPort", "MonotonicClock", "SenderPort"]
