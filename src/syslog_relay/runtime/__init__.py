"""Runtime façade: the injectable manager owning the active delivery.

Hosts create one :class:`HandlerManager` in their application context and drive
it with ``init`` / ``reconfigure`` / ``shutdown``; producers call ``publish``.
"""

from __future__ import annotations

from ._composition import FormatterFactory, SenderFactory, build_delivery
from ._state import ActiveDelivery, DeliveryLease
from .manager import DiagnosticHook, HandlerManager, ManagerState

__all__ = [
    "ActiveDelivery",
    "DeliveryLease",
    "DiagnosticHook",
    "FormatterFactory",
    "HandlerManager",
    "ManagerState",
    "SenderFactory",
    "build_delivery",
]
