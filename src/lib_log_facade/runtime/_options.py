"""Logger configuration container."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from datetime import timedelta
from types import MappingProxyType
from typing import Any

from lib_log_facade.application.ports import ClockPort, PromptPort, ReporterPort
from lib_log_facade.application.use_cases.dispatch import DiagnosticHook
from lib_log_facade.domain.levels import DEFAULT_LEVEL, LOG_TYPES, LogTypeDefinition
from lib_log_facade.errors import ConfigurationError

from ._pause import PauseController

DEFAULT_THROTTLE = timedelta(seconds=1)
DEFAULT_THROTTLE_MIN = 5
DEFAULT_FORMAT_OPTIONS: Mapping[str, Any] = MappingProxyType({"date": True, "colors": False, "compact": True})

MockFn = Callable[[str, dict[str, Any]], Any]


@dataclass(slots=True)
class LoggerOptions:
    """Configuration of one logger instance.

    Attributes
    ----------
    level:
        Active verbosity; calls whose type level exceeds it are dropped.
        Accepts a number or a type name.
    types:
        Type table mapping names to :class:`LogTypeDefinition` (or plain
        ``{"level": ...}`` mappings).
    reporters:
        Reporters receiving emitted records, in call order.
    defaults:
        Fields merged into every record (``tag``, ...).
    throttle:
        Window within which identical records are coalesced; seconds or
        :class:`~datetime.timedelta`.
    throttle_min:
        Identical records emitted literally before suppression starts.
    format_options:
        Opaque rendering hints handed to reporters.
    prompt:
        Optional interactive prompt capability.
    mock_fn:
        Optional factory replacing the per-type log functions (see
        :meth:`Logger.mock_types`).
    diagnostic:
        Optional hook receiving pipeline diagnostics such as reporter failures.
    clock:
        Clock port; ``None`` selects the system clock.
    pause_controller:
        Pause gate; ``None`` selects the process-wide default.
    """

    level: Any = DEFAULT_LEVEL
    types: Mapping[str, LogTypeDefinition] = field(default_factory=lambda: LOG_TYPES)
    reporters: list[ReporterPort] = field(default_factory=list)
    defaults: dict[str, Any] = field(default_factory=dict)
    throttle: Any = DEFAULT_THROTTLE
    throttle_min: int = DEFAULT_THROTTLE_MIN
    format_options: Mapping[str, Any] = field(default_factory=lambda: dict(DEFAULT_FORMAT_OPTIONS))
    prompt: PromptPort | None = None
    mock_fn: MockFn | None = None
    diagnostic: DiagnosticHook = None
    clock: ClockPort | None = None
    pause_controller: PauseController | None = None


OPTION_NAMES = frozenset(option.name for option in fields(LoggerOptions))


def check_option_names(overrides: Mapping[str, Any]) -> None:
    """Raise :class:`ConfigurationError` for keys that are not logger options."""

    unknown = sorted(set(overrides) - OPTION_NAMES)
    if unknown:
        raise ConfigurationError(f"Unknown logger option(s): {', '.join(unknown)}")


def coerce_throttle(value: Any) -> timedelta:
    """Return ``value`` as a positive :class:`timedelta`.

    Examples
    --------
    >>> coerce_throttle(1.5)
    datetime.timedelta(seconds=1, microseconds=500000)
    >>> coerce_throttle(timedelta(milliseconds=250))
    datetime.timedelta(microseconds=250000)
    """

    if isinstance(value, timedelta):
        window = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        window = timedelta(seconds=value)
    else:
        raise ConfigurationError(f"throttle must be seconds or a timedelta, got {value!r}")
    if window <= timedelta(0):
        raise ConfigurationError("throttle must be positive")
    return window


def coerce_throttle_min(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"throttle_min must be a non-negative integer, got {value!r}")
    return value


__all__ = [
    "DEFAULT_FORMAT_OPTIONS",
    "DEFAULT_THROTTLE",
    "DEFAULT_THROTTLE_MIN",
    "LoggerOptions",
    "MockFn",
    "OPTION_NAMES",
    "check_option_names",
    "coerce_throttle",
    "coerce_throttle_min",
]
