"""Rich-powered console reporter implementing :class:`ReporterPort`.

Purpose
-------
Give the façade a human-facing sink out of the box so ``create_logger()`` prints
something useful without the host wiring a reporter first.

Contents
--------
* :data:`_STYLE_MAP` - default type-to-style mapping.
* :class:`RichConsoleReporter` - reporter constructed by :func:`lib_log_facade.create_logger`.

System Role
-----------
Default reporter; honours ``format_options`` handed over in the reporter
context (``date`` and ``colors``) and the colour overrides from configuration.
"""

from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console
from rich.markup import escape

from lib_log_facade.application.ports.reporter import ReporterContext, ReporterPort
from lib_log_facade.domain.records import LogRecord

#: Default Rich styles keyed by log type.
_STYLE_MAP: Mapping[str, str] = {
    "fatal": "bold white on red",
    "error": "red",
    "fail": "red",
    "warn": "yellow",
    "info": "cyan",
    "start": "magenta",
    "ready": "green",
    "success": "green",
    "box": "bold",
    "debug": "dim",
    "trace": "dim",
}


class RichConsoleReporter(ReporterPort):
    """Render records as single console lines using Rich."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[str, str] | None = None,
    ) -> None:
        """Configure the reporter with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        if styles:
            merged.update({key.lower(): value for key, value in styles.items()})
        self._style_map = merged

    def log(self, record: LogRecord, context: ReporterContext | None) -> None:
        """Print ``record`` using Rich.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> reporter = RichConsoleReporter(console=console)
        >>> reporter.log(LogRecord(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), "info", "db", 3, ("ready",)), None)
        >>> "[info] db: ready" in console.export_text()
        True
        """
        format_options = _format_options(context)
        colorize = bool(format_options.get("colors", True)) and not self._no_color
        style = self._style_map.get(record.type, "") if colorize else ""
        line = self.format_line(record, show_date=bool(format_options.get("date", False)))
        self._console.print(escape(line), style=style, highlight=False)

    @staticmethod
    def format_line(record: LogRecord, *, show_date: bool = False) -> str:
        """Return the plain console line for ``record``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> record = LogRecord(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), "warn", "", 1, ("disk", 93))
        >>> RichConsoleReporter.format_line(record)
        '[warn] disk 93'
        >>> RichConsoleReporter.format_line(record, show_date=True)
        '12:00:00 [warn] disk 93'
        """
        message = " ".join(str(arg) for arg in record.args)
        prefix = f"[{record.type}]"
        if record.tag:
            prefix = f"{prefix} {record.tag}:"
        line = f"{prefix} {message}" if message else prefix
        if show_date:
            line = f"{record.date.strftime('%H:%M:%S')} {line}"
        return line


def _format_options(context: ReporterContext | None) -> Mapping[str, object]:
    if context is None:
        return {}
    return context.options.format_options


__all__ = ["RichConsoleReporter"]
