"""
schedulers run a callback after a delay given in milliseconds.
delay() and throttle() only ever talk to them through schedule(callback, delay).
"""
import asyncio
import heapq
import itertools
import logging
import threading
import time

from .types import *

logger = logging.getLogger(__name__)


def _fire(handle: TimerHandle, callback: Callable[[], Any]) -> None:
    if not handle._mark_done():
        return
    logger.debug(f"timer due at {handle.due:.1f}ms fired")
    callback()


class ThreadingScheduler:
    """runs each callback on its own daemon timer thread"""

    def schedule(self, callback: Callable[[], Any], delay: float) -> TimerHandle:
        delay = max(delay, 0)
        timer = threading.Timer(delay / 1000.0, lambda: _fire(handle, callback))
        timer.daemon = True
        handle = TimerHandle(time.monotonic() * 1000.0 + delay, timer.cancel)
        timer.start()
        logger.debug(f"scheduled thread timer in {delay}ms")
        return handle


class AsyncioScheduler:
    """
    runs callbacks on an asyncio event loop via call_later.
    without an explicit loop, the loop running at schedule time is used.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule(self, callback: Callable[[], Any], delay: float) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        delay = max(delay, 0)
        loop_handle = loop.call_later(delay / 1000.0, lambda: _fire(handle, callback))
        handle = TimerHandle(loop.time() * 1000.0 + delay, loop_handle.cancel)
        logger.debug(f"scheduled loop callback in {delay}ms")
        return handle


class VirtualScheduler:
    """
    a manual clock for tests. nothing runs until advance() or run_all() moves time forward;
    callbacks then fire in due order, with `now` set to each callback's due time.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: List[Tuple[float, int, TimerHandle, Callable[[], Any]]] = []
        self._counter = itertools.count()

    def schedule(self, callback: Callable[[], Any], delay: float) -> TimerHandle:
        handle = TimerHandle(self.now + max(delay, 0))
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        """number of timers that are neither fired nor cancelled"""
        return sum(1 for _, _, handle, _ in self._queue if not (handle.cancelled or handle.done))

    def advance(self, ms: float) -> int:
        """move the clock forward by ms, firing every timer that comes due. returns how many fired."""
        if ms < 0:
            raise ValueError("cannot move a virtual clock backwards")
        target = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if not handle.cancelled:
                _fire(handle, callback)
                fired += 1
        self.now = target
        return fired

    def run_all(self, limit: int = 10000) -> int:
        """fire timers until none are left. raises if callbacks keep rescheduling past limit."""
        fired = 0
        while self._queue:
            if fired >= limit:
                raise RuntimeError(f"more than {limit} timers fired; callbacks keep rescheduling")
            due, _, handle, callback = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if not handle.cancelled:
                _fire(handle, callback)
                fired += 1
        return fired
