from __future__ import annotations

import heapq
import itertools
import threading
from typing import Any, Callable, List, Tuple


class ThreadingScheduler:
    """Runs each callback once on a daemon timer thread after `delay` seconds."""

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> threading.Timer:
        timer = threading.Timer(delay, callback, args=args)
        timer.daemon = True
        timer.start()
        return timer


class ManualTask:
    def __init__(self, due: float, callback: Callable[..., Any], args: Tuple[Any, ...]) -> None:
        self.due = due
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Logical clock that only moves when `advance` is called.

    Callbacks fire in due-time order (ties in scheduling order), including any
    scheduled by a callback that fall inside the advanced window.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: List[Tuple[float, int, ManualTask]] = []
        self._seq = itertools.count()

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualTask:
        task = ManualTask(self.now + delay, callback, args)
        heapq.heappush(self._queue, (task.due, next(self._seq), task))
        return task

    def pending(self) -> int:
        return sum(1 for _, _, task in self._queue if not task.cancelled)

    def advance(self, seconds: float) -> int:
        """Moves the clock forward and runs every callback that came due. Returns how many ran."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now = due
            if task.cancelled:
                continue
            task.callback(*task.args)
            fired += 1
        self.now = target
        return fired
