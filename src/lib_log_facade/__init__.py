"""Structured logging façade with duplicate throttling and pluggable reporters.

Callers create a :class:`Logger` (usually through :func:`create_logger`) and log
through its per-type functions: ``logger.info("ready")``,
``logger.warn({"message": "disk", "additional": "93% used"})``. Identical
records arriving in a burst are collapsed into a "repeated N times" summary.
"""

from __future__ import annotations

from .adapters import MemoryReporter, RichConsoleReporter, SystemClock
from .application.ports import ClockPort, PromptPort, ReporterContext, ReporterPort
from .domain import LOG_LEVELS, LOG_TYPES, LogRecord, LogTypeDefinition, resolve_level
from .errors import ConfigurationError, LogFacadeError
from .runtime import (
    DEFAULT_PAUSE_CONTROLLER,
    LogFunction,
    Logger,
    LoggerOptions,
    PauseController,
    create_logger,
)

__all__ = [
    "ClockPort",
    "ConfigurationError",
    "DEFAULT_PAUSE_CONTROLLER",
    "LOG_LEVELS",
    "LOG_TYPES",
    "LogFacadeError",
    "LogFunction",
    "LogRecord",
    "LogTypeDefinition",
    "Logger",
    "LoggerOptions",
    "MemoryReporter",
    "PauseController",
    "PromptPort",
    "ReporterContext",
    "ReporterPort",
    "RichConsoleReporter",
    "SystemClock",
    "create_logger",
    "resolve_level",
]
