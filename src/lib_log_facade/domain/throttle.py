"""Mutable throttle bookkeeping owned by a single logger instance."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .records import LogRecord


class ThrottlePhase(Enum):
    """Observable phase of the throttle state machine."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FLUSH_SCHEDULED = "flush_scheduled"


class ThrottleDecision(Enum):
    """Outcome of submitting a record to the throttle engine."""

    EMITTED = "emitted"
    SUPPRESSED = "suppressed"


@dataclass(slots=True)
class ThrottleState:
    """Window of the most recent log activity.

    Attributes
    ----------
    last_object:
        Most recently emitted record; template for repeat summaries.
    last_serialized:
        Signature of the most recent candidate record, ``None`` when it could
        not be computed.
    last_time:
        Date of the most recent candidate record.
    repeat_count:
        Consecutive candidates matching ``last_serialized``.
    repeat_floor:
        Value ``repeat_count`` was last reset to; counts above it are
        duplicates still being accumulated.
    pending_flush:
        Clock handle of the armed deferred flush, if any.
    flush_generation:
        Incremented whenever a flush is armed or cancelled; a timer callback
        carrying an older generation is stale.
    """

    last_object: LogRecord | None = None
    last_serialized: str | None = None
    last_time: datetime | None = None
    repeat_count: int = 0
    repeat_floor: int = 0
    pending_flush: Any = None
    flush_generation: int = 0

    def reset_repeats(self) -> None:
        """Restart counting after a repeat summary was released."""
        self.repeat_count = 1
        self.repeat_floor = 1

    @property
    def phase(self) -> ThrottlePhase:
        if self.pending_flush is not None:
            return ThrottlePhase.FLUSH_SCHEDULED
        if self.repeat_count > self.repeat_floor:
            return ThrottlePhase.ACCUMULATING
        return ThrottlePhase.IDLE


__all__ = ["ThrottleDecision", "ThrottlePhase", "ThrottleState"]
