"""
Haptic feedback through pygame joystick/controller rumble
"""

from typing import List

import pygame

from .errors import PeripheralError
from .interfaces import IHaptic


class PygameRumbleHaptic(IHaptic):
    """
    Pulses every rumble-capable device pygame can see.

    Kiosk enclosures expose their vibration motor as a game-controller style
    rumble device; desktops usually have none, in which case pulse() raises
    PeripheralError and the caller carries on.
    """

    def __init__(self, logger, strength: float = 1.0):
        """
        Args:
            logger: ClassLogger instance for logging
            strength: Rumble strength for both motors (0.0-1.0)
        """
        self._logger = logger
        self.strength = strength
        self._devices: List['pygame.joystick.JoystickType'] = []

    def setup(self) -> None:
        """Discover rumble devices (call after pygame.init())"""
        try:
            pygame.joystick.init()
            self._devices = [pygame.joystick.Joystick(i) for i in range(pygame.joystick.get_count())]
        except pygame.error as e:
            self._logger.warning(f"Haptic discovery failed: {e}")
            self._devices = []
        self._logger.info(f"📳 Haptic devices found: {len(self._devices)}")

    def pulse(self, duration_ms: int) -> None:
        if not self._devices:
            raise PeripheralError("No haptic device available")

        accepted = 0
        for device in self._devices:
            try:
                if device.rumble(self.strength, self.strength, duration_ms):
                    accepted += 1
            except pygame.error as e:
                self._logger.debug(f"Rumble failed on {device.get_name()}: {e}")

        if accepted == 0:
            raise PeripheralError("No haptic device accepted the rumble request")
        self._logger.debug(f"Haptic pulse {duration_ms}ms on {accepted} device(s)")
