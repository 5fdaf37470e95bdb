"""
Throttle helper for work that should run at most once per interval
"""

from typing import Callable, Optional

from .timer_scheduler import monotonic_ms


class OnceInMs:
    """
    Gate that opens at most once per interval.

    The frame loop runs every ~20ms; use this for housekeeping that only needs
    to happen occasionally (health logging, for example).

    Example:
        self._health_monitor = OnceInMs(60000)  # Once per minute

        # In the frame loop:
        if self._health_monitor.should_execute():
            self._log_process_health()
    """

    def __init__(self, interval_ms: int, clock: Optional[Callable[[], float]] = None):
        """
        Initialize gate with interval.

        Args:
            interval_ms: Minimum milliseconds between executions
            clock: Callable returning the current time in milliseconds
        """
        self.interval_ms = interval_ms
        self._clock = clock or monotonic_ms
        self._last_execution: Optional[float] = None

    def should_execute(self) -> bool:
        """
        Check if the interval has passed and restart it if so.

        The first call always returns True.
        """
        now = self._clock()
        if self._last_execution is None or now - self._last_execution >= self.interval_ms:
            self._last_execution = now
            return True
        return False

    def reset(self) -> None:
        """Force next should_execute() call to return True"""
        self._last_execution = None

    def remaining_ms(self) -> float:
        """Milliseconds until the gate opens again (0 when already open)"""
        if self._last_execution is None:
            return 0.0
        return max(0.0, self.interval_ms - (self._clock() - self._last_execution))
