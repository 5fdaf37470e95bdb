"""
Timer scheduler - delayed callbacks fired from the frame loop
"""

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds"""
    return time.monotonic() * 1000.0


@dataclass(order=True)
class TimerHandle:
    """
    Opaque handle to one scheduled callback.

    Ordered by (due_ms, seq) so the scheduler heap fires callbacks in due-time
    order, ties in scheduling order.
    """
    due_ms: float
    seq: int
    name: str = field(compare=False)
    callback: Optional[Callable[[], None]] = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def is_pending(self) -> bool:
        """True until the callback fires or is cancelled"""
        return not (self.cancelled or self.fired)


class TimerScheduler:
    """
    Single-threaded delayed-callback scheduler.

    Nothing runs on its own: the owner calls tick() once per frame and every
    callback whose due time has passed fires inside that call, on the caller's
    thread. That keeps all timer firings on the same control thread as input
    and completion handling.

    Example:
        scheduler = TimerScheduler(logger)
        handle = scheduler.schedule(1333, play_next, "next-step")
        ...
        scheduler.cancel(handle)   # never fires now

        # In the frame loop:
        scheduler.tick()
    """

    def __init__(self, logger, clock: Optional[Callable[[], float]] = None):
        """
        Initialize the scheduler.

        Args:
            logger: ClassLogger instance for logging
            clock: Callable returning the current time in milliseconds
        """
        self._logger = logger
        self._clock = clock or monotonic_ms
        self._heap: List[TimerHandle] = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        """Current clock reading in milliseconds"""
        return self._clock()

    def schedule(self, delay_ms: float, callback: Callable[[], None], name: str = "task") -> TimerHandle:
        """
        Schedule callback to fire at or after delay_ms from now.

        Args:
            delay_ms: Delay in milliseconds (negative values count as 0)
            callback: Zero-argument callable
            name: Purpose of the timer, used in logs

        Returns:
            TimerHandle that can be passed to cancel()
        """
        due = self._clock() + max(0.0, delay_ms)
        handle = TimerHandle(due_ms=due, seq=next(self._seq), name=name, callback=callback)
        heapq.heappush(self._heap, handle)
        self._logger.debug(f"Scheduled '{name}' in {max(0.0, delay_ms):.0f}ms")
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        """
        Cancel a scheduled callback.

        Cancelling None, an already-fired or an already-cancelled handle is a no-op.
        """
        if handle is None or not handle.is_pending:
            return
        handle.cancelled = True
        handle.callback = None
        self._logger.debug(f"Cancelled '{handle.name}'")

    def cancel_all(self) -> None:
        """Cancel every pending callback"""
        for handle in self._heap:
            if handle.is_pending:
                handle.cancelled = True
                handle.callback = None
        self._heap.clear()

    def pending_count(self) -> int:
        """Number of callbacks that are still waiting to fire"""
        return sum(1 for handle in self._heap if handle.is_pending)

    def tick(self) -> int:
        """
        Fire every callback whose due time has passed.

        Callbacks scheduled from inside a callback fire in the same tick if
        they are already due.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while self._heap:
            now = self._clock()
            head = self._heap[0]
            if head.is_pending and head.due_ms > now:
                break

            heapq.heappop(self._heap)
            if not head.is_pending:
                continue

            callback = head.callback
            head.fired = True
            head.callback = None
            fired += 1
            try:
                callback()
            except Exception as e:
                self._logger.error(f"Timer '{head.name}' callback failed: {e}", exception=e)
        return fired
