"""Click command line for smoke-testing syslog delivery.

Purpose
-------
Give operators a way to verify a collector setting end to end (``send``) and to
list the valid setting values (``choices``) without writing a host
application.

Contents
--------
* :func:`cli` - click group; prints the metadata banner without a subcommand.
* ``info`` / ``choices`` / ``send`` subcommands.
* :func:`summary_info` - metadata banner as a string.
"""

from __future__ import annotations

from typing import Any

import click
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from .config import config_from_env, enable_dotenv, list_choices
from .domain import ConfigError, LogLevel, LogRecord, build_config
from .runtime import HandlerManager

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message="%(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Ship log records to a remote syslog collector."""

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("choices", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_choices() -> None:
    """List the accepted values of every setting."""

    table = Table(title="syslog_relay settings")
    table.add_column("setting", style="cyan", no_wrap=True)
    table.add_column("values")
    for name, values in list_choices().items():
        table.add_row(name, ", ".join(values))
    Console().print(table)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option("--host", "server_hostname", help="Collector hostname (SYSLOG_SERVER_HOSTNAME).")
@click.option("--port", "server_port", type=int, help="Collector port, default 514.")
@click.option(
    "--transport",
    type=click.Choice(list_choices()["transport"], case_sensitive=False),
    help="Network transport.",
)
@click.option(
    "--format",
    "message_format",
    type=click.Choice(list_choices()["message_format"], case_sensitive=False),
    help="Syslog message format.",
)
@click.option("--facility", help="Syslog facility label, e.g. user or local0.")
@click.option("--app-name", help="APP-NAME / TAG field.")
@click.option("--message-hostname", help="HOSTNAME field override.")
@click.option("--level", default="INFO", show_default=True, help="Level of the record to send.")
@click.option("--level-filter", help="Minimum level delivered by the pipeline.")
@click.option("--dotenv/--no-dotenv", default=False, help="Seed settings from the nearest .env file.")
def cli_send(message: str, level: str, dotenv: bool, **options: Any) -> None:
    """Activate a delivery pipeline, send MESSAGE once, and shut it down."""

    console = Console(highlight=False)
    if dotenv:
        enable_dotenv()
    try:
        base = config_from_env()
        overrides = {key: value for key, value in options.items() if value is not None}
        config = build_config(
            transport=overrides.get("transport", base.transport),
            server_hostname=overrides.get("server_hostname", base.server_hostname),
            server_port=overrides.get("server_port", base.server_port),
            level_filter=overrides.get("level_filter", base.level_filter),
            app_name=overrides.get("app_name", base.app_name),
            message_hostname=overrides.get("message_hostname", base.message_hostname),
            facility=overrides.get("facility", base.facility),
            message_format=overrides.get("message_format", base.message_format),
            connect_timeout=base.connect_timeout,
            write_timeout=base.write_timeout,
            retry_backoff=base.retry_backoff,
            resolve_policy=base.resolve_policy,
            tls_ca_file=base.tls_ca_file,
        )
        record_level = LogLevel.from_name(level)
    except (ConfigError, ValueError) as exc:
        raise click.BadParameter(str(exc)) from exc
    if not config.enabled:
        raise click.UsageError("a collector hostname is required (--host or SYSLOG_SERVER_HOSTNAME)")

    failures: list[dict[str, Any]] = []

    def _collect(name: str, payload: dict[str, Any]) -> None:
        if name in {"send_failed", "format_failed"}:
            failures.append(payload)

    manager = HandlerManager(diagnostic=_collect)
    try:
        manager.init(config)
        delivered = manager.publish(LogRecord(level=record_level, message=message, logger_name="cli"))
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        manager.shutdown()

    reasons = ", ".join(sorted({str(item.get("kind") or item.get("error")) for item in failures}))
    if delivered:
        console.print(f"[green]sent[/green] to {config.endpoint} over {config.transport.label}")
        if reasons:
            console.print(f"[yellow]activation notice not delivered[/yellow]: {reasons}")
        return
    if not failures:
        raise click.ClickException(
            f"record level {record_level.name} is below level filter {config.level_filter.name}"
        )
    raise click.ClickException(f"delivery to {config.endpoint} failed: {reasons}")


__all__ = ["cli", "summary_info"]
