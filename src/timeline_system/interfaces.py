"""
Abstract interface for the animation timeline collaborator
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from .stages import TimelineStep


class ITimelinePlayer(ABC):
    """
    Runs one timeline at a time and signals a single end-of-timeline completion.

    The presentation core only composes stage lists and reacts to on_end; it
    never touches pixels.
    """

    @abstractmethod
    def play(self, steps: Sequence[TimelineStep], on_end: Optional[Callable[[], None]], name: str = "timeline") -> int:
        """
        Start a timeline, replacing any running one (whose on_end never fires).

        Args:
            steps: Ordered stages / parallel groups
            on_end: Called once when the last step finishes
            name: Timeline name for logs

        Returns:
            Total timeline duration in milliseconds

        Raises:
            TimelineError: If the steps cannot be run
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Abandon the running timeline without signalling completion"""
        pass

    @abstractmethod
    def update(self) -> None:
        """Advance the running timeline to the current time (once per frame)"""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """True while a timeline is in progress"""
        pass
