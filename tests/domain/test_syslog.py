from __future__ import annotations

import pytest

from syslog_relay.domain.syslog import Facility, MessageFormat, Severity, Transport, priority


def test_facility_codes_cover_the_standard_table() -> None:
    assert sorted(member.code for member in Facility) == list(range(24))


def test_severity_codes_cover_the_standard_table() -> None:
    assert sorted(member.code for member in Severity) == list(range(8))
    assert Severity.EMERGENCY.code == 0
    assert Severity.DEBUG.code == 7


@pytest.mark.parametrize(
    "label, expected",
    [("user", Facility.USER), ("LOCAL7", Facility.LOCAL7), (" daemon ", Facility.DAEMON), ("kern", Facility.KERN)],
)
def test_facility_from_label(label: str, expected: Facility) -> None:
    assert Facility.from_label(label) is expected


def test_facility_from_label_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown syslog facility"):
        Facility.from_label("printer")


def test_code_lookups_round_trip() -> None:
    assert Facility.from_code(16) is Facility.LOCAL0
    assert Severity.from_code(6) is Severity.INFORMATIONAL
    assert Severity.from_label("warning") is Severity.WARNING
    with pytest.raises(ValueError):
        Severity.from_code(8)


@pytest.mark.parametrize(
    "facility, severity, expected",
    [
        (Facility.KERN, Severity.EMERGENCY, 0),
        (Facility.USER, Severity.INFORMATIONAL, 14),
        (Facility.DAEMON, Severity.ERROR, 27),
        (Facility.LOCAL7, Severity.DEBUG, 191),
    ],
)
def test_priority_is_facility_times_eight_plus_severity(facility: Facility, severity: Severity, expected: int) -> None:
    assert priority(facility, severity) == expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("UDP", Transport.UDP),
        ("tcp", Transport.TCP),
        ("TCP_TLS", Transport.TCP_TLS),
        ("TCP_SSL", Transport.TCP_TLS),
        ("TCP + TLS", Transport.TCP_TLS),
    ],
)
def test_transport_from_name(name: str, expected: Transport) -> None:
    assert Transport.from_name(name) is expected


def test_transport_labels_and_stream_flag() -> None:
    assert [member.label for member in Transport] == ["UDP", "TCP", "TCP + TLS"]
    assert not Transport.UDP.is_stream
    assert Transport.TCP.is_stream and Transport.TCP_TLS.is_stream


def test_transport_from_name_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown syslog transport"):
        Transport.from_name("quic")


@pytest.mark.parametrize("name", ["RFC_5424", "rfc5424", "5424"])
def test_message_format_from_name(name: str) -> None:
    assert MessageFormat.from_name(name) is MessageFormat.RFC_5424


def test_message_format_from_name_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown syslog message format"):
        MessageFormat.from_name("json")


@pytest.mark.parametrize("name", ["4", "24", "RFC_424", "164", "RFC_15424"])
def test_message_format_from_name_requires_the_full_rfc_number(name: str) -> None:
    with pytest.raises(ValueError, match="Unknown syslog message format"):
        MessageFormat.from_name(name)
