from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from lib_log_facade import config as log_config
from lib_log_facade.adapters.memory import MemoryReporter
from lib_log_facade.runtime import Logger, PauseController

_ENV_VARS = (
    log_config.LEVEL_ENV_VAR,
    log_config.THROTTLE_ENV_VAR,
    log_config.THROTTLE_MIN_ENV_VAR,
    log_config.TAG_ENV_VAR,
    log_config.NO_COLOR_ENV_VAR,
    log_config.FORCE_COLOR_ENV_VAR,
    log_config.DOTENV_ENV_VAR,
)


class FakeClock:
    """Manually advanced clock; timers fire from :meth:`advance`."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)
        self._timers: dict[int, tuple[datetime, Callable[[], None]]] = {}
        self._next_handle = 0
        self.cancelled: list[int] = []

    def now(self) -> datetime:
        return self.current

    def schedule_after(self, delay: timedelta, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self._timers[self._next_handle] = (self.current + delay, callback)
        return self._next_handle

    def cancel(self, handle: int) -> None:
        if self._timers.pop(handle, None) is not None:
            self.cancelled.append(handle)

    def advance(self, *, milliseconds: int = 0, seconds: float = 0) -> None:
        self.current += timedelta(milliseconds=milliseconds, seconds=seconds)
        due = sorted((when, handle) for handle, (when, _) in self._timers.items() if when <= self.current)
        for _, handle in due:
            entry = self._timers.pop(handle, None)
            if entry is not None:
                entry[1]()

    @property
    def pending(self) -> int:
        return len(self._timers)


@pytest.fixture(autouse=True)
def _clean_log_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reporter() -> MemoryReporter:
    return MemoryReporter()


@pytest.fixture
def pause_controller() -> PauseController:
    return PauseController()


@pytest.fixture
def make_logger(clock: FakeClock, reporter: MemoryReporter, pause_controller: PauseController) -> Callable[..., Logger]:
    def factory(**overrides: Any) -> Logger:
        options: dict[str, Any] = {
            "reporters": [reporter],
            "clock": clock,
            "pause_controller": pause_controller,
            "throttle": timedelta(seconds=1),
            "throttle_min": 2,
        }
        options.update(overrides)
        return Logger(**options)

    return factory


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=120, color_system=None)
