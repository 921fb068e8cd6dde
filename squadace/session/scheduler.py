"""
Scheduler - Cancelable delayed callbacks.

The turn engine never sleeps. Every delay (AI thinking, reveal,
round-over pause, countdown tick) is a callback scheduled here.

Two implementations:
- ManualScheduler: a fake clock advanced explicitly (tests, CLI)
- ThreadingScheduler: real time via threading.Timer (API server)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import heapq
import itertools
import threading
from typing import Callable


class TimerHandle(ABC):
    """Handle to a scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Schedules callbacks to run once after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback after delay seconds."""

    def shutdown(self) -> None:
        """Release resources. Pending callbacks may be dropped."""


# =============================================================================
# Fake clock
# =============================================================================

@dataclass(order=True)
class _ManualTimer(TimerHandle):
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    _cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Deterministic scheduler driven by advance().

    Callbacks fire in due-time order (FIFO among equal due times).
    Callbacks scheduled while advancing fire in the same advance()
    if they fall due before its end.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: list[_ManualTimer] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(due=self.now + max(delay, 0.0), seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, timer)
        return timer

    @property
    def pending(self) -> int:
        """Number of callbacks still due to run."""
        return sum(1 for t in self._queue if not t.cancelled)

    def next_due(self) -> float | None:
        self._drop_cancelled()
        return self._queue[0].due if self._queue else None

    def run_next(self) -> bool:
        """Jump the clock to the next due callback and run it."""
        self._drop_cancelled()
        if not self._queue:
            return False
        timer = heapq.heappop(self._queue)
        self.now = max(self.now, timer.due)
        timer.callback()
        return True

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every callback that falls due."""
        target = self.now + seconds
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self.run_next()
            fired += 1
        self.now = target
        return fired

    def shutdown(self) -> None:
        for timer in self._queue:
            timer.cancel()
        self._queue.clear()

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)


# =============================================================================
# Real time
# =============================================================================

class _ThreadTimer(TimerHandle):
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """
    Scheduler backed by daemon threading.Timer objects.

    A cancel racing with a timer that already started is possible;
    the engine's generation check drops such stale callbacks.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._timers: set[_ThreadTimer] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle: _ThreadTimer | None = None

        def run():
            with self._lock:
                self._timers.discard(handle)
            if not handle.cancelled:
                callback()

        timer = threading.Timer(max(delay, 0.0), run)
        timer.daemon = True
        handle = _ThreadTimer(timer)
        with self._lock:
            self._timers.add(handle)
        timer.start()
        return handle

    def shutdown(self) -> None:
        with self._lock:
            timers = list(self._timers)
            self._timers.clear()
        for handle in timers:
            handle.cancel()
