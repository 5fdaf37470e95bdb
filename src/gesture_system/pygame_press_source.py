"""
Pygame press source - maps pygame input events onto raw press events
"""

from typing import Hashable, Optional, Set

import pygame

from .press_event import PressEvent


class PygamePressSource:
    """
    Translates pygame events into PressEvent values.

    The whole screen is one touch surface, so every pointer counts the same:
    the first pointer going down is a DOWN, the last one lifting is an UP.
    Losing focus or the pointer leaving the window while pressed is a CANCEL.

    Sources:
    - touch fingers (FINGERDOWN / FINGERUP)
    - left mouse button (mouse events synthesized from touch are skipped so a
      finger is not counted twice)
    - space bar, for testing on a development machine without a touch screen

    Example:
        source = PygamePressSource(logger)
        for event in pygame.event.get():
            press = source.translate(event)
            if press:
                classifier.handle(press)
    """

    DEV_KEY = pygame.K_SPACE

    def __init__(self, logger):
        """
        Args:
            logger: ClassLogger instance for logging
        """
        self._logger = logger
        self._active: Set[Hashable] = set()

    @property
    def is_pressed(self) -> bool:
        """True while at least one pointer is down"""
        return bool(self._active)

    def translate(self, event: 'pygame.event.Event') -> Optional[PressEvent]:
        """
        Map one pygame event.

        Returns:
            PressEvent if the event changes the pressed state, None otherwise
        """
        pointer = self._pointer_for(event)

        if event.type in (pygame.FINGERDOWN, pygame.MOUSEBUTTONDOWN, pygame.KEYDOWN):
            if pointer is None:
                return None
            was_pressed = self.is_pressed
            self._active.add(pointer)
            return None if was_pressed else PressEvent.DOWN

        if event.type in (pygame.FINGERUP, pygame.MOUSEBUTTONUP, pygame.KEYUP):
            if pointer is None or pointer not in self._active:
                return None
            self._active.discard(pointer)
            return None if self.is_pressed else PressEvent.UP

        if event.type in (pygame.WINDOWFOCUSLOST, pygame.WINDOWLEAVE):
            if not self.is_pressed:
                return None
            self._active.clear()
            self._logger.debug("Press cancelled (window lost pointer/focus)")
            return PressEvent.CANCEL

        return None

    def _pointer_for(self, event: 'pygame.event.Event') -> Optional[Hashable]:
        """Identify the pointer an event belongs to (None = not a press pointer)"""
        if event.type in (pygame.FINGERDOWN, pygame.FINGERUP):
            return ("finger", event.touch_id, event.finger_id)
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            if getattr(event, "touch", False) or event.button != 1:
                return None
            return "mouse"
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            return "key" if event.key == self.DEV_KEY else None
        return None
