"""
Single-threaded timer loop.

Provides the two timer shapes the game needs: a periodic callback (the tick)
and a one-shot delayed callback (the deferred reset). Nothing runs on its own;
callers advance the loop with run_pending(), which runs every due callback to
completion in due-time order. The clock reads milliseconds and is injectable so
tests and headless runs can drive time by hand.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Intervals that fall further behind than this many periods skip ahead
MAX_CATCH_UP = 50


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ManualClock:
    """A clock in milliseconds that only moves when told to."""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms

    def __call__(self) -> float:
        return self._now

    def advance(self, ms: float):
        self._now += ms


class Timer:
    """Handle for a scheduled callback."""

    def __init__(self, callback: Callable[[], None], due_ms: float, interval_ms: Optional[float] = None):
        self.callback = callback
        self.due_ms = due_ms
        self.interval_ms = interval_ms
        self.cancelled = False
        self.fired = 0

    @property
    def repeating(self) -> bool:
        return self.interval_ms is not None

    def __repr__(self):
        kind = "interval" if self.repeating else "timeout"
        return f"<Timer {kind} due={self.due_ms:.1f}ms fired={self.fired} cancelled={self.cancelled}>"


class TimerLoop:
    """
    Cooperative scheduler for setInterval / setTimeout style callbacks.

    Timers due at the same instant run in the order they were scheduled.
    """

    def __init__(self, clock: Callable[[], float] = monotonic_ms):
        self.clock = clock
        self._queue: List[Tuple[float, int, Timer]] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        return self.clock()

    def set_interval(self, callback: Callable[[], None], interval_ms: float) -> Timer:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        timer = Timer(callback, self.now_ms() + interval_ms, interval_ms)
        self._push(timer)
        return timer

    def set_timeout(self, callback: Callable[[], None], delay_ms: float) -> Timer:
        timer = Timer(callback, self.now_ms() + max(0.0, delay_ms))
        self._push(timer)
        return timer

    def cancel(self, timer: Optional[Timer]):
        if timer is not None:
            timer.cancelled = True

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def next_due_ms(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def run_pending(self) -> int:
        """
        Run every callback that is due at the current clock time.

        Callbacks scheduled by other callbacks are picked up in the same pass
        if they are already due.

        Returns:
            Number of callbacks run
        """
        now = self.now_ms()
        ran = 0
        while self._queue and self._queue[0][0] <= now:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue

            timer.callback()
            timer.fired += 1
            ran += 1

            if timer.repeating and not timer.cancelled:
                next_due = due + timer.interval_ms
                if now - next_due > timer.interval_ms * MAX_CATCH_UP:
                    logger.debug(f"Timer fell {now - next_due:.0f}ms behind, skipping ahead")
                    next_due = now + timer.interval_ms
                timer.due_ms = next_due
                self._push(timer)
        return ran

    def run_forever(self, sleep: Callable[[float], None] = time.sleep):
        """Block, running callbacks as they come due, until no timers remain."""
        while True:
            due = self.next_due_ms()
            if due is None:
                return
            wait_ms = due - self.now_ms()
            if wait_ms > 0:
                sleep(wait_ms / 1000.0)
            self.run_pending()

    def _push(self, timer: Timer):
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))

    def _drop_cancelled(self):
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
