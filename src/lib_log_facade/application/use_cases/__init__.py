"""Use cases forming the per-call logging pipeline."""

from __future__ import annotations

from .build_record import RecordBuilder
from .dispatch import Dispatcher, ReporterFailure
from .throttle import ThrottleEngine

__all__ = ["Dispatcher", "RecordBuilder", "ReporterFailure", "ThrottleEngine"]
