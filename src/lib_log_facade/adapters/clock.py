"""System clock adapter backed by :class:`threading.Timer`.

Purpose
-------
Provide timezone-aware UTC timestamps and cancellable deferred callbacks for
the throttle engine's delayed flush.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from lib_log_facade.application.ports.time import ClockPort

LOGGER = logging.getLogger(__name__)


class SystemClock(ClockPort):
    """Wall clock returning UTC timestamps; callbacks run on daemon timer threads.

    Examples
    --------
    >>> import threading
    >>> from datetime import timedelta
    >>> fired = threading.Event()
    >>> clock = SystemClock()
    >>> handle = clock.schedule_after(timedelta(milliseconds=1), fired.set)
    >>> fired.wait(1.0)
    True
    >>> clock.cancel(handle)
    """

    def now(self) -> datetime:
        """Return the current UTC timestamp with timezone info."""
        return datetime.now(timezone.utc)

    def schedule_after(self, delay: timedelta, callback: Callable[[], None]) -> threading.Timer:
        """Run ``callback`` once after ``delay`` on a daemon thread."""

        timer = threading.Timer(max(delay.total_seconds(), 0.0), self._guarded, args=(callback,))
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: threading.Timer) -> None:
        """Cancel a pending timer; fired or already cancelled timers are ignored."""
        handle.cancel()

    @staticmethod
    def _guarded(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Deferred callback raised an exception; continuing", exc_info=exc)


__all__ = ["SystemClock"]
