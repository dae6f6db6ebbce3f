"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .clock import SystemClock
from .console.rich_console import RichConsoleReporter
from .memory import MemoryReporter

__all__ = ["MemoryReporter", "RichConsoleReporter", "SystemClock"]
