"""Runtime façade wiring configuration, adapters, and the logging pipeline.

Purpose
-------
Expose :func:`create_logger`, the composition root host applications call
instead of assembling options, clock, and reporters by hand.

Contents
--------
* ``create_logger`` - logger factory honouring ``LOG_*`` environment overrides.
* Re-exports of :class:`Logger`, :class:`LoggerOptions` and the pause gate.

System Role
-----------
Outer shell of the clean-architecture stack: the domain and application
layers know nothing about environment variables or Rich; this module is where
those choices are made.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from lib_log_facade.adapters import RichConsoleReporter
from lib_log_facade.application.ports import ClockPort, PromptPort, ReporterPort
from lib_log_facade.application.use_cases.dispatch import DiagnosticHook
from lib_log_facade.config import load_settings
from lib_log_facade.domain.levels import DEFAULT_LEVEL

from ._facade import CallResult, LogFunction, Logger
from ._options import DEFAULT_FORMAT_OPTIONS, DEFAULT_THROTTLE, DEFAULT_THROTTLE_MIN, LoggerOptions, MockFn
from ._pause import DEFAULT_PAUSE_CONTROLLER, PauseController, QueuedCall


def create_logger(
    *,
    level: Any = None,
    types: Mapping[str, Any] | None = None,
    reporters: Iterable[ReporterPort] | None = None,
    defaults: Mapping[str, Any] | None = None,
    throttle: Any = None,
    throttle_min: int | None = None,
    format_options: Mapping[str, Any] | None = None,
    prompt: PromptPort | None = None,
    mock_fn: MockFn | None = None,
    diagnostic: DiagnosticHook = None,
    clock: ClockPort | None = None,
    pause_controller: PauseController | None = None,
    force_color: bool = False,
    no_color: bool = False,
) -> Logger:
    """Compose a :class:`Logger` from arguments and environment overrides.

    Inputs
    ------
    level, throttle, throttle_min:
        Overridden by ``LOG_LEVEL``, ``LOG_THROTTLE`` (seconds) and
        ``LOG_THROTTLE_MIN`` when those are set.
    reporters:
        Defaults to a single :class:`RichConsoleReporter` writing to stderr.
    defaults:
        Fields merged into every record; ``LOG_TAG`` sets the ``tag`` field.
    force_color, no_color:
        Colour control for the default console reporter (``LOG_FORCE_COLOR``,
        ``LOG_NO_COLOR``).

    Raises
    ------
    ValueError
        When throttle environment variables hold invalid values.
    ConfigurationError
        When the resolved options are invalid (negative ``throttle_min``...).

    Examples
    --------
    >>> from lib_log_facade.adapters.memory import MemoryReporter
    >>> reporter = MemoryReporter()
    >>> logger = create_logger(reporters=[reporter], level=3)  # doctest: +SKIP
    >>> _ = logger.info("ready")  # doctest: +SKIP
    """

    settings = load_settings(
        level=level,
        throttle=throttle,
        throttle_min=throttle_min,
        tag=(defaults or {}).get("tag"),
        force_color=force_color,
        no_color=no_color,
    )

    if reporters is None:
        reporters = [RichConsoleReporter(force_color=settings.force_color, no_color=settings.no_color)]

    merged_defaults = dict(defaults or {})
    if settings.tag:
        merged_defaults["tag"] = settings.tag

    merged_format = dict(DEFAULT_FORMAT_OPTIONS)
    merged_format["colors"] = not settings.no_color
    if format_options:
        merged_format.update(format_options)

    options = LoggerOptions(
        level=settings.level if settings.level is not None else DEFAULT_LEVEL,
        reporters=list(reporters),
        defaults=merged_defaults,
        throttle=settings.throttle if settings.throttle is not None else DEFAULT_THROTTLE,
        throttle_min=settings.throttle_min if settings.throttle_min is not None else DEFAULT_THROTTLE_MIN,
        format_options=merged_format,
        prompt=prompt,
        mock_fn=mock_fn,
        diagnostic=diagnostic,
        clock=clock,
        pause_controller=pause_controller,
    )
    if types is not None:
        options.types = types  # type: ignore[assignment]
    return Logger(options)


__all__ = [
    "CallResult",
    "DEFAULT_PAUSE_CONTROLLER",
    "LogFunction",
    "Logger",
    "LoggerOptions",
    "PauseController",
    "QueuedCall",
    "create_logger",
]
