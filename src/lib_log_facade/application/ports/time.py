"""Clock port providing timestamps and deferred callbacks."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current timestamp and schedule cancellable callbacks."""

    def now(self) -> datetime: ...

    def schedule_after(self, delay: timedelta, callback: Callable[[], None]) -> Any:
        """Run ``callback`` once after ``delay`` and return a cancel handle."""

    def cancel(self, handle: Any) -> None:
        """Cancel a handle returned by :meth:`schedule_after`; unknown or fired handles are ignored."""


__all__ = ["ClockPort"]
