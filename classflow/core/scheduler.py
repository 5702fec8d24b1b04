"""
Timer facilities used for auto-submit and auto-grade transitions.

Delays are logical time units. ``AsyncioScheduler`` maps them onto the running
event loop, ``VirtualScheduler`` is a manually advanced clock for tests and
simulations.
"""

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config import TIME_UNIT_SECONDS
from .exceptions import SchedulingError
from .interfaces import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class AsyncioTimer(TimerHandle):
    """Wraps an ``asyncio.TimerHandle``."""

    def __init__(self, handle: asyncio.TimerHandle, label: Optional[str] = None):
        self._handle = handle
        self.label = label

    def cancel(self) -> None:
        if not self._handle.cancelled():
            logger.debug("Cancelling timer %s", self.label)
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop with ``call_later``."""

    def __init__(self, time_unit_seconds: float = TIME_UNIT_SECONDS,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self._time_unit_seconds = time_unit_seconds
        self._loop = loop

    @property
    def time_unit_seconds(self) -> float:
        return self._time_unit_seconds

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulingError("AsyncioScheduler requires a running event loop",
                                  error_code="no_running_loop") from e

    def schedule(self, delay: float, callback: Callable[[], None], label: Optional[str] = None) -> TimerHandle:
        loop = self._get_loop()
        seconds = delay * self._time_unit_seconds
        logger.debug("Scheduling %s in %.3fs", label, seconds)
        return AsyncioTimer(loop.call_later(seconds, callback), label)


@dataclass(order=True)
class ScheduledTask(TimerHandle):
    """A pending callback on a ``VirtualScheduler``."""
    due: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    label: Optional[str] = field(default=None, compare=False)
    _cancelled: bool = field(default=False, init=False, compare=False)

    def cancel(self) -> None:
        if not self._cancelled:
            logger.debug("Cancelling timer %s", self.label)
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class VirtualScheduler(Scheduler):
    """Deterministic scheduler driven by an explicit logical clock.

    Nothing runs until ``advance`` or ``run_until_idle`` is called. Tasks run
    in due-time order; ties run in scheduling order. Callbacks may schedule
    further tasks, which run in the same call when they fall due before the
    target time.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[ScheduledTask] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._queue if not task.cancelled())

    def pending_labels(self) -> List[str]:
        return [task.label for task in sorted(self._queue) if not task.cancelled()]

    def schedule(self, delay: float, callback: Callable[[], None], label: Optional[str] = None) -> TimerHandle:
        task = ScheduledTask(self._now + delay, next(self._sequence), callback, label)
        heapq.heappush(self._queue, task)
        logger.debug("Scheduling %s at t=%s", label, task.due)
        return task

    def advance(self, units: float) -> int:
        """Move the clock forward, running every task that falls due. Returns the number run."""
        target = self._now + units
        ran = 0
        while self._queue and self._queue[0].due <= target:
            task = heapq.heappop(self._queue)
            if task.cancelled():
                continue
            self._now = task.due
            task.callback()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self, max_tasks: int = 10000) -> int:
        """Run pending tasks in order until none remain."""
        ran = 0
        while self._queue:
            task = heapq.heappop(self._queue)
            if task.cancelled():
                continue
            if ran >= max_tasks:
                heapq.heappush(self._queue, task)
                raise SchedulingError(f"Scheduler still busy after {max_tasks} tasks",
                                      error_code="scheduler_not_idle")
            self._now = max(self._now, task.due)
            task.callback()
            ran += 1
        return ran
