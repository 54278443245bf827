"""
Tick scheduling for the snake engine.

The engine never sleeps or loops on its own. It asks a ticker for a
one-shot callback `delay_ms` in the future, and it schedules the next
tick only after the current one has finished, so ticks never overlap.
Every call returns a handle with `cancel()`, which the engine uses on
pause and game over.

Two tickers are provided:
 - TimerTicker: real time, backed by threading.Timer (used by the Flask app)
 - ManualTicker: a virtual clock advanced explicitly (tests, headless CLI)
"""

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TickHandle:
    """Cancel handle for one scheduled callback."""

    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class TimerTicker:
    """
    Real-time ticker built on threading.Timer.

    Args:
        lock: optional lock held while the callback runs, so ticks are
              serialised with anything else mutating the engine (HTTP handlers).
    """

    def __init__(self, lock: Optional[threading.RLock] = None):
        self.lock = lock

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TickHandle:
        handle = _TimerHandle()

        def fire():
            if self.lock is not None:
                with self.lock:
                    if not handle.cancelled:
                        callback()
            elif not handle.cancelled:
                callback()

        timer = threading.Timer(delay_ms / 1000.0, fire)
        timer.daemon = True
        handle.timer = timer
        timer.start()
        return handle


class _TimerHandle(TickHandle):
    def __init__(self):
        super().__init__()
        self.timer: Optional[threading.Timer] = None

    def cancel(self) -> None:
        super().cancel()
        if self.timer is not None:
            self.timer.cancel()


class ManualTicker:
    """
    Deterministic ticker driven by a virtual clock.

    Nothing runs until `advance()` or `run_next()` is called.
    """

    def __init__(self):
        self.now_ms = 0
        self._queue: List[Tuple[int, int, TickHandle, Callable[[], None]]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TickHandle:
        handle = TickHandle()
        heapq.heappush(self._queue, (self.now_ms + delay_ms, next(self._counter), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not been cancelled."""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def _pop_live(self):
        while self._queue:
            due, seq, handle, callback = heapq.heappop(self._queue)
            if not handle.cancelled:
                return due, callback
        return None

    def run_next(self) -> bool:
        """Jump the clock to the next due callback and run it. Returns False if none."""
        entry = self._pop_live()
        if entry is None:
            return False
        due, callback = entry
        self.now_ms = max(self.now_ms, due)
        callback()
        return True

    def advance(self, ms: int) -> int:
        """Move the clock forward by `ms`, running everything that falls due. Returns the count run."""
        target = self.now_ms + ms
        ran = 0
        while self._queue:
            due, _, handle, _ = self._queue[0]
            if handle.cancelled:
                heapq.heappop(self._queue)
                continue
            if due > target:
                break
            self.run_next()
            ran += 1
        self.now_ms = target
        return ran
