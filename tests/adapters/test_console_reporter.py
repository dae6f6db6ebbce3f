from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from lib_log_facade.adapters.console.rich_console import RichConsoleReporter
from lib_log_facade.application.ports import ReporterContext
from lib_log_facade.domain.records import LogRecord
from lib_log_facade.runtime import LoggerOptions


def _record(*args: object, type_: str = "info", tag: str = "db") -> LogRecord:
    return LogRecord(datetime(2025, 9, 23, 12, 30, 5, tzinfo=timezone.utc), type_, tag, 3, args)


def _context(**format_options: object) -> ReporterContext:
    return ReporterContext(options=LoggerOptions(format_options=format_options))


def test_console_reporter_renders_expected_line(record_console: Console) -> None:
    reporter = RichConsoleReporter(console=record_console)
    reporter.log(_record("pool", "ready", 3), _context(date=False))

    assert record_console.export_text() == "[info] db: pool ready 3\n"


def test_console_reporter_prefixes_time_when_date_enabled(record_console: Console) -> None:
    reporter = RichConsoleReporter(console=record_console)
    reporter.log(_record("hello"), _context(date=True))

    assert record_console.export_text().startswith("12:30:05 [info] db: hello")


def test_console_reporter_escapes_markup(record_console: Console) -> None:
    reporter = RichConsoleReporter(console=record_console)
    reporter.log(_record("[bold]not markup[/bold]"), _context(date=False))

    assert "[bold]not markup[/bold]" in record_console.export_text()


def test_console_reporter_omits_tag_separator_without_tag() -> None:
    assert RichConsoleReporter.format_line(_record("x", tag="")) == "[info] x"
    assert RichConsoleReporter.format_line(_record(tag="")) == "[info]"


@pytest.mark.parametrize("colors", [True, False])
def test_console_reporter_applies_style_only_with_colors(colors: bool) -> None:
    console = Console(file=StringIO(), force_terminal=True, color_system="standard", width=120)
    reporter = RichConsoleReporter(console=console)
    reporter.log(_record("boom", type_="error"), _context(colors=colors, date=False))

    output = console.file.getvalue()  # type: ignore[attr-defined]
    assert "boom" in output
    assert ("\x1b[" in output) is colors


def test_console_reporter_no_color_overrides_context() -> None:
    console = Console(file=StringIO(), force_terminal=True, color_system="standard", width=120)
    reporter = RichConsoleReporter(console=console, no_color=True)
    reporter.log(_record("boom", type_="error"), _context(colors=True, date=False))

    assert "\x1b[" not in console.file.getvalue()  # type: ignore[attr-defined]


def test_console_reporter_accepts_custom_styles() -> None:
    console = Console(file=StringIO(), force_terminal=True, color_system="standard", width=120)
    reporter = RichConsoleReporter(console=console, styles={"INFO": "red"})
    reporter.log(_record("styled"), _context(colors=True, date=False))

    assert "\x1b[31m" in console.file.getvalue()  # type: ignore[attr-defined]


def test_console_reporter_handles_missing_context(record_console: Console) -> None:
    reporter = RichConsoleReporter(console=record_console)
    reporter.log(_record("plain"), None)

    assert record_console.export_text() == "[info] db: plain\n"


def test_console_reporter_uses_default_style_for_known_types() -> None:
    console = Console(file=StringIO(), force_terminal=True, color_system="standard", width=120)
    reporter = RichConsoleReporter(console=console)
    reporter.log(_record("styled"), _context(colors=True, date=False))

    assert "\x1b[36m" in console.file.getvalue()  # type: ignore[attr-defined]
