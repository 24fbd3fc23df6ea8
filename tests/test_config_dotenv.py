from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest

from syslog_relay import config as relay_config
from syslog_relay.domain import ConfigError, Facility, LogLevel, MessageFormat, ResolvePolicy, SyslogConfig, Transport

_VARIABLES = ("SYSLOG_SERVER_HOSTNAME", "SYSLOG_SERVER_PORT", "SYSLOG_TRANSPORT")


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    """Reset shared dotenv state and the variables tests may load."""

    relay_config._reset_dotenv_state_for_testing()
    saved = {name: os.environ.pop(name) for name in _VARIABLES if name in os.environ}
    yield
    for name in _VARIABLES:
        os.environ.pop(name, None)
    os.environ.update(saved)
    relay_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_loads_nearest_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("SYSLOG_SERVER_HOSTNAME=dotenv.example\n")
    monkeypatch.chdir(nested)

    loaded = relay_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert relay_config.dotenv_loaded() == env_file.resolve()
    assert os.environ["SYSLOG_SERVER_HOSTNAME"] == "dotenv.example"


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("SYSLOG_SERVER_HOSTNAME=dotenv.example\nSYSLOG_SERVER_PORT=1514\n")
    monkeypatch.chdir(tmp_path)
    os.environ["SYSLOG_SERVER_HOSTNAME"] = "real.example"

    assert relay_config.enable_dotenv() is not None

    config = relay_config.config_from_env()
    assert config.server_hostname == "real.example"
    assert config.server_port == 1514


def test_enable_dotenv_accepts_explicit_path(tmp_path: Path) -> None:
    env_file = tmp_path / "collector.env"
    env_file.write_text("SYSLOG_TRANSPORT=tcp\n")

    assert relay_config.enable_dotenv(env_file) == env_file.resolve()
    assert os.environ["SYSLOG_TRANSPORT"] == "tcp"


def test_enable_dotenv_without_file_returns_none(tmp_path: Path) -> None:
    assert relay_config.enable_dotenv(tmp_path / "missing.env") is None
    assert relay_config.dotenv_loaded() is None


def test_config_from_env_reads_every_field() -> None:
    environ = {
        "SYSLOG_TRANSPORT": "TCP + TLS",
        "SYSLOG_SERVER_HOSTNAME": "logs.example",
        "SYSLOG_SERVER_PORT": "6514",
        "SYSLOG_LEVEL_FILTER": "warn",
        "SYSLOG_APP_NAME": "jenkins",
        "SYSLOG_MESSAGE_HOSTNAME": "build01",
        "SYSLOG_FACILITY": "daemon",
        "SYSLOG_MESSAGE_FORMAT": "5424",
        "SYSLOG_CONNECT_TIMEOUT": "1.5",
        "SYSLOG_WRITE_TIMEOUT": "2",
        "SYSLOG_RETRY_BACKOFF": "10",
        "SYSLOG_RESOLVE_POLICY": "CACHED",
        "SYSLOG_TLS_CA_FILE": "/etc/ssl/ca.pem",
    }

    config = relay_config.config_from_env(environ)

    assert config == SyslogConfig(
        transport=Transport.TCP_TLS,
        server_hostname="logs.example",
        server_port=6514,
        level_filter=LogLevel.WARNING,
        app_name="jenkins",
        message_hostname="build01",
        facility=Facility.DAEMON,
        message_format=MessageFormat.RFC_5424,
        connect_timeout=1.5,
        write_timeout=2.0,
        retry_backoff=10.0,
        resolve_policy=ResolvePolicy.CACHED,
        tls_ca_file="/etc/ssl/ca.pem",
    )


def test_config_from_env_honours_prefix() -> None:
    config = relay_config.config_from_env({"APP_SERVER_HOSTNAME": "h.example"}, prefix="APP_")
    assert config.server_hostname == "h.example"


def test_config_from_env_rejects_malformed_values() -> None:
    with pytest.raises(ConfigError, match="server_port"):
        relay_config.config_from_env({"SYSLOG_SERVER_PORT": "five-one-four"})


def test_list_choices_covers_every_enum() -> None:
    choices = relay_config.list_choices()

    assert choices["transport"] == ["UDP", "TCP", "TCP_TLS"]
    assert choices["message_format"] == ["RFC_3164", "RFC_5424"]
    assert choices["level_filter"] == ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    assert len(choices["facility"]) == 24
    assert choices["facility"][-1] == "local7"
    assert choices["severity"][0] == "emergency"
    assert choices["severity"][-1] == "debug"
