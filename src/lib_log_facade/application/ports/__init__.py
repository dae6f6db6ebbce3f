"""Application-layer ports consumed by the logging pipeline."""

from __future__ import annotations

from .prompt import PromptPort
from .reporter import ReporterContext, ReporterPort
from .time import ClockPort

__all__ = ["ClockPort", "PromptPort", "ReporterContext", "ReporterPort"]
