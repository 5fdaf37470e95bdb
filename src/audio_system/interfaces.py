"""
Abstract interfaces for audio playback collaborators
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional


class IPlayable(ABC):
    """
    One opened clip, ready to play once.

    Implementations report natural end of playback by calling the completion
    listener from poll(), which the owner calls on the control thread.
    """

    @abstractmethod
    def start(self) -> None:
        """
        Start playback.

        Raises:
            PlaybackStartError: If playback could not be started
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop playback (no completion is reported afterwards)"""
        pass

    @abstractmethod
    def release(self) -> None:
        """Free the underlying audio resources"""
        pass

    @abstractmethod
    def duration_ms(self) -> int:
        """
        Get clip length.

        Returns:
            Duration in milliseconds, 0 if unknown
        """
        pass

    @abstractmethod
    def poll(self) -> None:
        """Check for natural end of playback and notify the listener once"""
        pass

    @abstractmethod
    def set_completion_listener(self, listener: Optional[Callable[[], None]]) -> None:
        """Set (or clear with None) the natural-completion listener"""
        pass


class IAudioPlayer(ABC):
    """
    Abstract audio output device.

    Allows different implementations: pygame mixer, mock, network, etc.
    """

    @abstractmethod
    def open(self, clip_id: str) -> IPlayable:
        """
        Open a clip for playback.

        Args:
            clip_id: Clip identifier from the clip catalog

        Returns:
            IPlayable ready to start

        Raises:
            ClipUnavailableError: If the clip cannot be opened
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release the audio device"""
        pass
