"""Domain entities and value objects used by the logging façade."""

from __future__ import annotations

from .levels import DEFAULT_LEVEL, LOG_LEVELS, LOG_TYPES, LogTypeDefinition, coerce_types, resolve_level
from .records import DEFAULT_TYPE, LogRecord, is_log_object
from .throttle import ThrottleDecision, ThrottlePhase, ThrottleState

__all__ = [
    "DEFAULT_LEVEL",
    "DEFAULT_TYPE",
    "LOG_LEVELS",
    "LOG_TYPES",
    "LogRecord",
    "LogTypeDefinition",
    "ThrottleDecision",
    "ThrottlePhase",
    "ThrottleState",
    "coerce_types",
    "is_log_object",
    "resolve_level",
]
