"""Bridge from the stdlib :mod:`logging` tree to a :class:`HandlerManager`.

Purpose
-------
Let hosts that log through :mod:`logging` feed the delivery pipeline without
calling ``publish`` themselves: a :class:`SyslogHandler` attached to the root
logger converts every record and hands it to the manager.

Contents
--------
* :class:`SyslogHandler` - ``logging.Handler`` forwarding to a manager.
* :func:`install_handler` / :func:`uninstall_handlers` - attach one handler,
  replacing any previously attached instance.

System Role
-----------
Records emitted by ``syslog_relay``'s own loggers are not forwarded; the
manager's diagnostics would otherwise loop back into the pipeline they report
on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from syslog_relay.domain.records import LogRecord

if TYPE_CHECKING:  # pragma: no cover - typing only
    from syslog_relay.runtime.manager import HandlerManager

_OWN_LOGGER = "syslog_relay"


class SyslogHandler(logging.Handler):
    """Forward stdlib log records to ``manager.publish``."""

    def __init__(
        self,
        manager: "HandlerManager",
        level: int = logging.NOTSET,
        *,
        ignored_loggers: Sequence[str] = (_OWN_LOGGER,),
    ) -> None:
        super().__init__(level)
        self._manager = manager
        self._ignored = tuple(ignored_loggers)
        self.setFormatter(logging.Formatter("%(message)s"))

    @property
    def manager(self) -> "HandlerManager":
        return self._manager

    def _is_ignored(self, name: str) -> bool:
        return any(name == prefix or name.startswith(prefix + ".") for prefix in self._ignored)

    def emit(self, record: logging.LogRecord) -> None:
        if self._is_ignored(record.name):
            return
        try:
            message = self.format(record)
            converted = LogRecord.from_python_record(record, message=message)
        except Exception:  # noqa: BLE001
            self.handleError(record)
            return
        self._manager.publish(converted)


def uninstall_handlers(logger: logging.Logger | None = None) -> int:
    """Detach every :class:`SyslogHandler` from ``logger`` (root by default)."""

    target = logger if logger is not None else logging.getLogger()
    removed = 0
    for handler in list(target.handlers):
        if isinstance(handler, SyslogHandler):
            target.removeHandler(handler)
            handler.close()
            removed += 1
    return removed


def install_handler(
    manager: "HandlerManager",
    logger: logging.Logger | None = None,
    level: int = logging.NOTSET,
) -> SyslogHandler:
    """Attach a fresh :class:`SyslogHandler` for ``manager`` to ``logger``.

    Previously attached instances are removed first so repeated installation
    never duplicates delivery.

    Examples
    --------
    >>> from syslog_relay.runtime import HandlerManager
    >>> target = logging.getLogger("doctest.install")
    >>> first = install_handler(HandlerManager(), target)
    >>> second = install_handler(HandlerManager(), target)
    >>> [h for h in target.handlers if isinstance(h, SyslogHandler)] == [second]
    True
    >>> uninstall_handlers(target)
    1
    """
    target = logger if logger is not None else logging.getLogger()
    uninstall_handlers(target)
    handler = SyslogHandler(manager, level)
    target.addHandler(handler)
    return handler


__all__ = ["SyslogHandler", "install_handler", "uninstall_handlers"]
