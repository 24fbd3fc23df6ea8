"""Host-side settings helpers: environment, ``.env`` files and choice lists.

Purpose
-------
The delivery core only accepts :class:`SyslogConfig` values. Hosts without a
settings store of their own can use these helpers to build one from
``SYSLOG_*`` environment variables (optionally seeded from the nearest
``.env`` file) and to populate settings forms with the valid choices.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` without overriding the
  real environment.
* :func:`config_from_env` - build a :class:`SyslogConfig` from ``SYSLOG_*``.
* :func:`list_choices` - sorted option labels for settings UIs.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from syslog_relay.domain import Facility, LogLevel, MessageFormat, Severity, SyslogConfig, Transport, build_config

ENV_PREFIX = "SYSLOG_"

_ENV_FIELDS = (
    "transport",
    "server_hostname",
    "server_port",
    "level_filter",
    "app_name",
    "message_hostname",
    "facility",
    "message_format",
    "connect_timeout",
    "write_timeout",
    "retry_backoff",
    "resolve_policy",
    "tls_ca_file",
)

_DOTENV_LOADED: Path | None = None


def enable_dotenv(path: str | Path | None = None) -> Path | None:
    """Load ``path`` or the nearest ``.env`` above the working directory.

    Variables already present in the environment keep precedence. Returns the
    resolved file that was loaded, ``None`` when no file was found.
    """
    global _DOTENV_LOADED
    candidate = str(path) if path is not None else find_dotenv(usecwd=True)
    if not candidate or not Path(candidate).is_file():
        return None
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = Path(candidate).resolve()
    return _DOTENV_LOADED


def dotenv_loaded() -> Path | None:
    """Return the ``.env`` file loaded by :func:`enable_dotenv`, if any."""

    return _DOTENV_LOADED


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def config_from_env(environ: Mapping[str, str] | None = None, *, prefix: str = ENV_PREFIX) -> SyslogConfig:
    """Build a configuration from ``SYSLOG_*`` variables.

    Missing or blank variables fall back to the defaults; malformed values raise
    :class:`~syslog_relay.domain.errors.ConfigError`.

    Examples
    --------
    >>> config = config_from_env({"SYSLOG_SERVER_HOSTNAME": "logs.example", "SYSLOG_TRANSPORT": "tcp"})
    >>> config.endpoint, config.transport.label
    ('logs.example:514', 'TCP')
    >>> config_from_env({}).enabled
    False
    """
    source = os.environ if environ is None else environ
    settings = {name: source.get(f"{prefix}{name.upper()}") for name in _ENV_FIELDS}
    return build_config(**settings)


def list_choices() -> dict[str, list[str]]:
    """Return the option labels a settings form offers for each field.

    Examples
    --------
    >>> choices = list_choices()
    >>> choices["transport"]
    ['UDP', 'TCP', 'TCP_TLS']
    >>> choices["facility"][:3]
    ['kern', 'user', 'mail']
    >>> choices["level_filter"][0], choices["level_filter"][-1]
    ('TRACE', 'CRITICAL')
    """
    return {
        "transport": [member.name for member in Transport],
        "message_format": [member.name for member in MessageFormat],
        "level_filter": [member.name for member in sorted(LogLevel)],
        "facility": [member.label for member in sorted(Facility, key=lambda item: item.code)],
        "severity": [member.label for member in sorted(Severity, key=lambda item: item.code)],
    }


__all__ = ["ENV_PREFIX", "config_from_env", "dotenv_loaded", "enable_dotenv", "list_choices"]
