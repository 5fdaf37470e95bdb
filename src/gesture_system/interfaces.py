"""
Abstract interfaces connecting the gesture classifier to its owner
"""

from abc import ABC, abstractmethod


class IInteractionGate(ABC):
    """
    Tells the classifier whether gestures are currently accepted.

    Both answers are read at the moment an event is handled or a timer fires,
    never cached.
    """

    @abstractmethod
    def is_interactive(self) -> bool:
        """True when gestures may trigger transitions"""
        pass

    @abstractmethod
    def is_closing(self) -> bool:
        """True once the exit flow has begun (all presses are ignored)"""
        pass


class IGestureListener(ABC):
    """Receives classified gestures"""

    @abstractmethod
    def on_short_tap(self) -> None:
        """A press was released before the long-press threshold"""
        pass

    @abstractmethod
    def on_long_press(self) -> None:
        """A press was held for the long-press threshold"""
        pass
