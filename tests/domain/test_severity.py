from __future__ import annotations

import itertools

import pytest

from syslog_relay.domain.levels import LogLevel
from syslog_relay.domain.severity import DEFAULT_LEVEL_FILTER, passes_filter, to_severity
from syslog_relay.domain.syslog import Severity


@pytest.mark.parametrize(
    "level, severity",
    [
        (LogLevel.TRACE, Severity.DEBUG),
        (LogLevel.DEBUG, Severity.DEBUG),
        (LogLevel.INFO, Severity.INFORMATIONAL),
        (LogLevel.WARNING, Severity.WARNING),
        (LogLevel.ERROR, Severity.ERROR),
        (LogLevel.CRITICAL, Severity.CRITICAL),
    ],
)
def test_to_severity_table(level: LogLevel, severity: Severity) -> None:
    assert to_severity(level) is severity


def test_to_severity_is_total() -> None:
    assert all(isinstance(to_severity(level), Severity) for level in LogLevel)


def test_to_severity_preserves_order_with_inverted_codes() -> None:
    for lower, higher in itertools.combinations(sorted(LogLevel), 2):
        assert to_severity(higher).code <= to_severity(lower).code


def test_passes_filter_uses_host_ordering() -> None:
    assert passes_filter(LogLevel.ERROR, LogLevel.WARNING)
    assert passes_filter(LogLevel.WARNING, LogLevel.WARNING)
    assert not passes_filter(LogLevel.INFO, LogLevel.WARNING)


def test_passes_filter_is_monotonic() -> None:
    for minimum in LogLevel:
        for higher, lower in itertools.product(LogLevel, repeat=2):
            if higher >= lower and passes_filter(lower, minimum):
                assert passes_filter(higher, minimum)
            if passes_filter(lower, minimum) is False and passes_filter(higher, minimum):
                assert higher >= minimum


def test_default_filter_is_debug_tier() -> None:
    assert DEFAULT_LEVEL_FILTER is LogLevel.DEBUG
    assert passes_filter(LogLevel.DEBUG)
    assert not passes_filter(LogLevel.TRACE)
