"""Console entry point for ``python -m syslog_relay`` and ``syslog-relay``."""

from __future__ import annotations

from typing import Sequence

import click

from .cli import cli


def main(argv: Sequence[str] | None = None) -> int:
    """Run the click group and translate click errors into exit codes.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name="syslog-relay", standalone_mode=False)
    except click.exceptions.Exit as exit_request:
        return exit_request.exit_code
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
