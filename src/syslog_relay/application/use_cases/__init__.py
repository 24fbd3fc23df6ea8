"""Use cases orchestrating filtering, formatting and sending."""

from __future__ import annotations

from .deliver import CONFIRMATION_LOGGER, build_confirmation_record, confirmation_message, deliver_record

__all__ = ["CONFIRMATION_LOGGER", "build_confirmation_record", "confirmation_message", "deliver_record"]
