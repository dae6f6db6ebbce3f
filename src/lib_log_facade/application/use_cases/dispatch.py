"""Fan-out of emitted records to the registered reporters.

Purpose
-------
Apply one emitted record to every reporter in registration order while keeping
a failing reporter from starving the ones registered after it.

System Role
-----------
Last stage of the pipeline. The throttle engine calls :meth:`Dispatcher.dispatch`
for literal records and for repeat summaries alike.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from lib_log_facade.application.ports.reporter import ReporterContext, ReporterPort
from lib_log_facade.domain.records import LogRecord

LOGGER = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


@dataclass(slots=True, frozen=True)
class ReporterFailure:
    """A reporter that raised while handling a record."""

    reporter: ReporterPort
    error: Exception


class Dispatcher:
    """Invoke reporters for emitted records.

    Parameters
    ----------
    reporters:
        Callable returning the current reporter list. It is read on every
        dispatch so runtime additions and removals take effect immediately.
    context:
        Callable returning the :class:`ReporterContext` handed to reporters.
    diagnostic:
        Optional hook receiving ``("reporter_error", payload)`` for each failure.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> seen = []
    >>> class Recorder:
    ...     def log(self, record, context):
    ...         seen.append(record.args)
    >>> class Broken:
    ...     def log(self, record, context):
    ...         raise RuntimeError("boom")
    >>> reporters = [Broken(), Recorder()]
    >>> dispatcher = Dispatcher(reporters=lambda: reporters, context=lambda: None)
    >>> record = LogRecord(datetime(2025, 1, 1, tzinfo=timezone.utc), args=("hi",))
    >>> failures = dispatcher.dispatch(record)
    >>> seen, len(failures)
    ([('hi',)], 1)
    """

    def __init__(
        self,
        *,
        reporters: Callable[[], Sequence[ReporterPort]],
        context: Callable[[], ReporterContext],
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._reporters = reporters
        self._context = context
        self._diagnostic = diagnostic

    def dispatch(self, record: LogRecord) -> tuple[ReporterFailure, ...]:
        """Send ``record`` to every reporter and return the failures observed."""

        context = self._context()
        failures: list[ReporterFailure] = []
        for reporter in tuple(self._reporters()):
            try:
                reporter.log(record, context)
            except Exception as exc:  # noqa: BLE001
                failures.append(ReporterFailure(reporter=reporter, error=exc))
                self._report_failure(reporter, record, exc)
        return tuple(failures)

    def _report_failure(self, reporter: ReporterPort, record: LogRecord, exc: Exception) -> None:
        LOGGER.error("Reporter %r raised an exception; continuing", reporter, exc_info=exc)
        if self._diagnostic is None:
            return
        try:
            self._diagnostic(
                "reporter_error",
                {"reporter": repr(reporter), "type": record.type, "tag": record.tag, "exception": repr(exc)},
            )
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Diagnostic hook raised while reporting reporter_error", exc_info=diagnostic_exc)


__all__ = ["DiagnosticHook", "Dispatcher", "ReporterFailure"]
