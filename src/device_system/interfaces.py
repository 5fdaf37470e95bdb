"""
Abstract interfaces for kiosk peripherals and the host shell
"""

from abc import ABC, abstractmethod


class IHaptic(ABC):
    """Fire-and-forget haptic feedback"""

    @abstractmethod
    def pulse(self, duration_ms: int) -> None:
        """
        Request one vibration pulse.

        Raises:
            PeripheralError: If no haptic device accepted the request
        """
        pass


class IHostShell(ABC):
    """The environment hosting the presentation window and process"""

    @abstractmethod
    def close_window(self) -> None:
        """Close the presentation window"""
        pass

    @abstractmethod
    def exit_process(self) -> None:
        """End the process (one-way, best-effort)"""
        pass
