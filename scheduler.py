"""Delayed callbacks for timed view changes.

Streamlit has no browser timers, so the app polls ``run_due`` on every rerun
and sleeps until ``next_delay`` before triggering the next one.
"""

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple

from log import get_logger

logger = get_logger(__name__)


class Scheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, Callable[[], None]]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.clock() + delay, next(self._counter), callback))

    def run_due(self) -> int:
        """Run every callback whose time has come, earliest first."""
        ran = 0
        while self._queue and self._queue[0][0] <= self.clock():
            _, _, callback = heapq.heappop(self._queue)
            callback()
            ran += 1
        if ran:
            logger.debug("Ran %d scheduled callback(s)", ran)
        return ran

    def next_delay(self) -> Optional[float]:
        if not self._queue:
            return None
        return max(0.0, self._queue[0][0] - self.clock())

    def cancel_all(self) -> None:
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)
