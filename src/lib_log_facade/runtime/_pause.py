"""Process-wide pause gate shared by every logger.

Purpose
-------
Hold log calls back while output is paused (for example while an interactive
prompt owns the terminal) and replay them in their original order on resume.

Contents
--------
* :class:`QueuedCall` - one deferred invocation.
* :class:`PauseController` - the gate and its FIFO queue.
* :data:`DEFAULT_PAUSE_CONTROLLER` - instance used by loggers unless another
  one is injected.

System Role
-----------
Injected into every :class:`~lib_log_facade.runtime._facade.Logger`. Loggers
sharing a controller pause and resume together.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from threading import RLock
from typing import Any, Deque, Protocol


class CallOwner(Protocol):
    """Logger side of a queued call; processes it without consulting the gate."""

    def process_call(self, defaults: Mapping[str, Any], args: tuple[Any, ...], raw: bool) -> Any: ...


@dataclass(slots=True, frozen=True)
class QueuedCall:
    """A log call captured while paused."""

    owner: CallOwner
    defaults: Mapping[str, Any]
    args: tuple[Any, ...]
    raw: bool = False


class PauseController:
    """Gate deferring log calls of all attached loggers while paused.

    Examples
    --------
    >>> seen = []
    >>> class Owner:
    ...     def process_call(self, defaults, args, raw):
    ...         seen.append(args)
    >>> controller = PauseController()
    >>> controller.pause()
    >>> controller.submit(Owner(), {}, ("a",))
    True
    >>> controller.submit(Owner(), {}, ("b",))
    True
    >>> seen
    []
    >>> controller.resume()
    2
    >>> seen
    [('a',), ('b',)]
    >>> controller.submit(Owner(), {}, ("c",))
    False
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._paused = False
        self._queue: Deque[QueuedCall] = deque()

    @property
    def paused(self) -> bool:
        with self._lock:
            return self._paused

    @property
    def pending(self) -> int:
        """Number of calls waiting for :meth:`resume`."""
        with self._lock:
            return len(self._queue)

    def pause(self) -> None:
        """Start queueing calls from every attached logger."""
        with self._lock:
            self._paused = True

    def submit(self, owner: CallOwner, defaults: Mapping[str, Any], args: tuple[Any, ...], raw: bool = False) -> bool:
        """Queue the call when paused; return ``False`` when the caller should process it now."""

        with self._lock:
            if not self._paused:
                return False
            self._queue.append(QueuedCall(owner=owner, defaults=defaults, args=tuple(args), raw=raw))
            return True

    def resume(self) -> int:
        """Stop queueing and replay every queued call in FIFO order.

        The queue is swapped for a fresh one under the lock and replayed after
        the lock is released, so a pause issued by a reporter during replay
        collects into the new queue and a deferred flush logging from a timer
        thread never waits on the controller. Returns the number of replayed
        calls.
        """

        with self._lock:
            self._paused = False
            queued, self._queue = self._queue, deque()
        for call in queued:
            call.owner.process_call(call.defaults, call.args, call.raw)
        return len(queued)


DEFAULT_PAUSE_CONTROLLER = PauseController()


__all__ = ["CallOwner", "DEFAULT_PAUSE_CONTROLLER", "PauseController", "QueuedCall"]
