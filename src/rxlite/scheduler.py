"""Timer primitive used by time-based operators.

A scheduler only has to run a callback after a delay and be able to cancel
it. ThreadingScheduler is the process default; VirtualTimeScheduler drives
time by hand so timing behavior can be tested deterministically.

Set the default once at startup:
    rxlite.set_scheduler(VirtualTimeScheduler())
"""

from __future__ import annotations

import heapq
import itertools
import threading
from typing import Any, Callable, Protocol


class Scheduler(Protocol):
    def schedule_after(self, delay: float, callback: Callable[[], None]) -> Any: ...

    def cancel(self, token: Any) -> None: ...


class ThreadingScheduler:
    """Runs callbacks on daemon threading.Timer threads. Delays are seconds."""

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        t = threading.Timer(delay, callback)
        t.daemon = True
        t.start()
        return t

    def cancel(self, token: threading.Timer) -> None:
        token.cancel()


class _VirtualTimer:
    __slots__ = ("due", "callback", "cancelled", "fired")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False


class VirtualTimeScheduler:
    """Scheduler with a manually advanced clock.

    Nothing fires until advance_by()/advance_to()/run() is called. Due
    callbacks fire in time order, ties in scheduling order, and callbacks
    scheduled while advancing fire in the same advance if they fall due.
    Cancelled entries are compacted out of the queue once they make up
    half of it.
    """

    def __init__(self, start: float = 0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, _VirtualTimer]] = []
        self._seq = itertools.count()
        self._cancelled = 0  # cancelled entries still in _queue

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not fired or been cancelled."""
        return len(self._queue) - self._cancelled

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> _VirtualTimer:
        timer = _VirtualTimer(self._now + delay, callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    def cancel(self, token: _VirtualTimer) -> None:
        if token.cancelled or token.fired:
            return
        token.cancelled = True
        self._cancelled += 1
        if self._cancelled * 2 > len(self._queue):
            self._queue = [entry for entry in self._queue if not entry[2].cancelled]
            heapq.heapify(self._queue)
            self._cancelled = 0

    def advance_by(self, delta: float) -> None:
        self.advance_to(self._now + delta)

    def advance_to(self, when: float) -> None:
        """Move the clock to `when`, firing everything due on the way."""
        if when < self._now:
            raise ValueError(f"cannot move virtual time backwards ({when} < {self._now})")
        while self._queue and self._queue[0][0] <= when:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                self._cancelled -= 1
                continue
            self._now = due
            timer.fired = True
            timer.callback()
        self._now = when

    def run(self) -> None:
        """Fire everything still scheduled, advancing the clock as needed."""
        while self._queue:
            self.advance_to(max(self._now, self._queue[0][0]))


# ─── Process-wide default ────────────────────────────────────────────────────
_default_scheduler: Scheduler = ThreadingScheduler()


def set_scheduler(scheduler: Scheduler | None) -> None:
    """Set the scheduler used by operators that were not given one.

    Passing None restores the ThreadingScheduler default.
    """
    global _default_scheduler
    _default_scheduler = scheduler if scheduler is not None else ThreadingScheduler()


def get_scheduler() -> Scheduler:
    return _default_scheduler
