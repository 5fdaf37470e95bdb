"""
Gesture classifier - turns press events into short taps and long presses
"""

from typing import Optional

from utils.timer_scheduler import TimerHandle, TimerScheduler

from .interfaces import IGestureListener, IInteractionGate
from .press_event import Gesture, PressEvent


class GestureClassifier:
    """
    Classifies press events using one long-press timer armed on press-down.

    - A press held for long_press_ms emits LONG_PRESS and suppresses the tap
      that its release would otherwise produce.
    - A press released earlier emits SHORT_TAP.
    - Nothing is emitted while the gate is not interactive, and every event is
      ignored once the gate reports closing.

    Example:
        classifier = GestureClassifier(scheduler, controller, controller, logger)
        classifier.handle(PressEvent.DOWN)
        ...  # 2 seconds of scheduler.tick()
        # controller.on_long_press() has been called
    """

    def __init__(self,
                 scheduler: TimerScheduler,
                 gate: IInteractionGate,
                 listener: IGestureListener,
                 logger,
                 long_press_ms: int = 2000):
        """
        Initialize classifier.

        Args:
            scheduler: Scheduler used for the long-press timer
            gate: Source of the interactive / closing flags
            listener: Receives SHORT_TAP / LONG_PRESS
            logger: ClassLogger instance for logging
            long_press_ms: Hold time that makes a press a long press
        """
        self._scheduler = scheduler
        self._gate = gate
        self._listener = listener
        self._logger = logger
        self.long_press_ms = long_press_ms

        self._pending_long_press: Optional[TimerHandle] = None
        self._long_press_fired = False

    @property
    def long_press_pending(self) -> bool:
        """True while a long-press timer is armed"""
        return self._pending_long_press is not None and self._pending_long_press.is_pending

    def handle(self, event: PressEvent) -> Optional[Gesture]:
        """
        Process one press event.

        Returns:
            Gesture emitted synchronously by this event (SHORT_TAP), or None
        """
        if self._gate.is_closing():
            return None

        if event is PressEvent.DOWN:
            self._on_press_down()
            return None

        return self._on_press_end(event)

    def reset(self) -> None:
        """Disarm the long-press timer"""
        self._scheduler.cancel(self._pending_long_press)
        self._pending_long_press = None

    def _on_press_down(self) -> None:
        self._long_press_fired = False
        if not self._gate.is_interactive():
            self._logger.debug("Press ignored (not interactive yet)")
            return

        self.reset()
        self._pending_long_press = self._scheduler.schedule(
            self.long_press_ms, self._on_long_press_timer, "long-press"
        )

    def _on_press_end(self, event: PressEvent) -> Optional[Gesture]:
        self.reset()

        if not self._gate.is_interactive():
            return None
        if self._long_press_fired:
            # Release of a press that was already handled as a long press
            return None

        self._logger.info(f"👆 Short tap ({event.value})")
        self._listener.on_short_tap()
        return Gesture.SHORT_TAP

    def _on_long_press_timer(self) -> None:
        self._pending_long_press = None
        # Checked at fire time, not arm time
        if not self._gate.is_interactive() or self._gate.is_closing():
            return

        self._long_press_fired = True
        self._logger.info(f"✋ Long press ({self.long_press_ms}ms)")
        self._listener.on_long_press()
