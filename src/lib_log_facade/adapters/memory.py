"""In-memory reporter keeping every record it receives."""

from __future__ import annotations

from threading import Lock

from lib_log_facade.application.ports.reporter import ReporterContext, ReporterPort
from lib_log_facade.domain.records import LogRecord


class MemoryReporter(ReporterPort):
    """Collect records in arrival order.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> reporter = MemoryReporter()
    >>> reporter.log(LogRecord(datetime(2025, 1, 1, tzinfo=timezone.utc), args=("hi",)), None)
    >>> reporter.args()
    [('hi',)]
    """

    def __init__(self) -> None:
        self._records: list[LogRecord] = []
        self._lock = Lock()

    def log(self, record: LogRecord, context: ReporterContext) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> list[LogRecord]:
        with self._lock:
            return list(self._records)

    def args(self) -> list[tuple[object, ...]]:
        """Return the ``args`` of every collected record."""
        return [record.args for record in self.records]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["MemoryReporter"]
