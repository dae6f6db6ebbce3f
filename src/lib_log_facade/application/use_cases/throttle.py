"""Throttle engine collapsing bursts of identical records.

Purpose
-------
Decide for every accepted record whether it is emitted immediately, counted as
a duplicate, or suppressed as spam, and make sure suppressed duplicates are
eventually reported as a single "repeated N times" summary.

Contents
--------
* :class:`ThrottleEngine` - the per-logger state machine.

System Role
-----------
Sits between the record builder and the dispatcher. Each logger owns exactly
one engine and therefore one :class:`ThrottleState`; derived loggers get a
fresh engine.

Behaviour
---------
Within ``throttle`` of the previous candidate, a record whose ``(type, tag,
args)`` signature matches the previous candidate increments the repeat count.
Once the count exceeds ``throttle_min`` the record is held back and a deferred
flush is armed for ``throttle``. A distinct record, a record arriving after the
window, or the deferred flush releases the summary of the held-back records.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from functools import partial
from threading import RLock
from typing import Any

from lib_log_facade.application.ports.time import ClockPort
from lib_log_facade.domain.records import LogRecord
from lib_log_facade.domain.throttle import ThrottleDecision, ThrottlePhase, ThrottleState

LOGGER = logging.getLogger(__name__)

_SIGNATURE_ERRORS = (TypeError, ValueError, RecursionError)


class ThrottleEngine:
    """Per-logger deduplication state machine.

    Parameters
    ----------
    clock:
        Clock used to arm and cancel the deferred flush.
    emit:
        Callable receiving every record that must reach the reporters.
    throttle:
        Window within which identical records are coalesced.
    throttle_min:
        Number of duplicates emitted literally before suppression starts.
    """

    def __init__(
        self,
        *,
        clock: ClockPort,
        emit: Callable[[LogRecord], Any],
        throttle: timedelta,
        throttle_min: int,
    ) -> None:
        self._clock = clock
        self._emit = emit
        self._throttle = throttle
        self._throttle_min = throttle_min
        self._state = ThrottleState()
        self._lock = RLock()

    @property
    def state(self) -> ThrottleState:
        return self._state

    @property
    def phase(self) -> ThrottlePhase:
        return self._state.phase

    def submit(self, record: LogRecord) -> ThrottleDecision:
        """Process one accepted record and report whether it was emitted now."""

        with self._lock:
            state = self._state
            self._cancel_pending()

            diff = record.date - state.last_time if state.last_time is not None else timedelta(0)
            state.last_time = record.date

            if diff < self._throttle:
                try:
                    serialized = record.signature()
                except _SIGNATURE_ERRORS:
                    LOGGER.debug("Record arguments cannot be serialised; throttling bypassed")
                else:
                    is_same = state.last_serialized == serialized
                    state.last_serialized = serialized
                    if is_same:
                        state.repeat_count += 1
                        if state.repeat_count > self._throttle_min:
                            self._arm_flush()
                            return ThrottleDecision.SUPPRESSED

            self._resolve(record)
            return ThrottleDecision.EMITTED

    def flush(self) -> None:
        """Cancel the deferred flush and release any pending repeat summary now."""

        with self._lock:
            self._cancel_pending()
            self._resolve(None)

    def _arm_flush(self) -> None:
        state = self._state
        state.flush_generation += 1
        state.pending_flush = self._clock.schedule_after(
            self._throttle, partial(self._flush_from_timer, state.flush_generation)
        )

    def _flush_from_timer(self, generation: int) -> None:
        with self._lock:
            # Cancelled timers whose callback had already started carry an old generation.
            if generation != self._state.flush_generation:
                LOGGER.debug("Ignoring stale deferred flush (generation %d)", generation)
                return
            self._state.pending_flush = None
            self._resolve(None)

    def _resolve(self, record: LogRecord | None) -> None:
        """Emit the repeat summary when one is due, then ``record`` if given."""

        state = self._state
        repeated = state.repeat_count - self._throttle_min
        if state.last_object is not None and repeated > 0:
            args = list(state.last_object.args)
            if repeated > 1:
                args.append(f"(repeated {repeated} times)")
            self._emit(state.last_object.replace(args=tuple(args)))
            state.reset_repeats()

        if record is not None:
            state.last_object = record
            self._emit(record)

    def _cancel_pending(self) -> None:
        state = self._state
        if state.pending_flush is not None:
            state.flush_generation += 1
            self._clock.cancel(state.pending_flush)
            state.pending_flush = None


__all__ = ["ThrottleEngine"]
