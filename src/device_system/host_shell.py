"""
Host shell - closes the pygame window and asks the frame loop to end
"""

import pygame

from .interfaces import IHostShell


class PygameHostShell(IHostShell):
    """
    Window/process control for the pygame kiosk.

    close_window() tears down the display immediately; exit_process() only sets
    a flag that the frame loop reads, so the process ends from the main thread
    after its normal cleanup.
    """

    def __init__(self, logger):
        """
        Args:
            logger: ClassLogger instance for logging
        """
        self._logger = logger
        self.window_closed = False
        self.exit_requested = False

    def close_window(self) -> None:
        if self.window_closed:
            return
        self.window_closed = True
        try:
            pygame.display.quit()
            self._logger.info("Presentation window closed")
        except pygame.error as e:
            self._logger.warning(f"Error closing window: {e}")

    def exit_process(self) -> None:
        self.exit_requested = True
        self._logger.info("Process exit requested")
