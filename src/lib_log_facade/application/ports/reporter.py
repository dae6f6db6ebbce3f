"""Reporter port describing the sinks that receive emitted records.

Purpose
-------
Define the narrow contract a reporter must satisfy so the dispatcher can fan
records out without knowing how (or where) they are rendered.

Contents
--------
* :class:`ReporterContext` - configuration snapshot handed to every reporter.
* :class:`ReporterPort` - runtime-checkable protocol with a single ``log`` method.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from lib_log_facade.domain.records import LogRecord

if TYPE_CHECKING:  # pragma: no cover - typing only
    from lib_log_facade.runtime._options import LoggerOptions


@dataclass(slots=True, frozen=True)
class ReporterContext:
    """Logger configuration visible to a reporter while it handles a record."""

    options: "LoggerOptions"


@runtime_checkable
class ReporterPort(Protocol):
    """Consume normalized log records."""

    def log(self, record: LogRecord, context: ReporterContext) -> None:
        """Handle ``record``; may raise, failures are isolated by the dispatcher."""


__all__ = ["ReporterContext", "ReporterPort"]
