"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

import sys
from typing import Callable

name = "syslog_relay"
title = "Ship application log records to remote syslog collectors"
version = "0.1.0"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "syslog-relay"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner through ``writer``.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0].startswith("Info for syslog_relay")
    True
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    write = writer or sys.stdout.write
    pad = max(len(label) for label, _ in fields)
    write(f"Info for {name}:\n\n")
    for label, value in fields:
        write(f"    {label.ljust(pad)} = {value}\n")


__all__ = ["author", "author_email", "name", "print_info", "shell_command", "title", "version"]
