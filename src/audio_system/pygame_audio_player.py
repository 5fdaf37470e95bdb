"""
Pygame audio player - plays clip files through pygame.mixer
"""

import os
from typing import Callable, Optional

import pygame

from .errors import ClipUnavailableError, PlaybackStartError
from .interfaces import IAudioPlayer, IPlayable


# Extensions tried, in order, when resolving a clip id to a file
CLIP_EXTENSIONS = (".mp3", ".ogg", ".wav")


class PygamePlayable(IPlayable):
    """One pygame Sound played on its own mixer channel"""

    def __init__(self, clip_id: str, sound: 'pygame.mixer.Sound'):
        self.clip_id = clip_id
        self._sound: Optional['pygame.mixer.Sound'] = sound
        self._channel: Optional['pygame.mixer.Channel'] = None
        self._listener: Optional[Callable[[], None]] = None
        self._finished = False

    def start(self) -> None:
        if self._sound is None:
            raise PlaybackStartError(f"Clip '{self.clip_id}' was already released")
        try:
            self._channel = self._sound.play()
        except pygame.error as e:
            raise PlaybackStartError(f"Mixer refused clip '{self.clip_id}': {e}") from e
        if self._channel is None:
            raise PlaybackStartError(f"No free mixer channel for clip '{self.clip_id}'")

    def stop(self) -> None:
        if self._channel is not None:
            self._channel.stop()
        self._finished = True

    def release(self) -> None:
        self._channel = None
        self._sound = None
        self._listener = None

    def duration_ms(self) -> int:
        if self._sound is None:
            return 0
        return int(self._sound.get_length() * 1000)

    def poll(self) -> None:
        if self._finished or self._channel is None:
            return

        # The channel keeps reporting busy while our sound is on it
        if self._channel.get_busy() and self._channel.get_sound() is self._sound:
            return

        self._finished = True
        listener = self._listener
        if listener:
            listener()

    def set_completion_listener(self, listener: Optional[Callable[[], None]]) -> None:
        self._listener = listener


class PygameAudioPlayer(IAudioPlayer):
    """
    Opens clips from a sounds folder with pygame.mixer.

    A mixer that fails to initialize does not stop the kiosk: every open() then
    raises ClipUnavailableError, which the sequencer turns into an immediate
    completion.
    """

    def __init__(self, sounds_folder: str, logger):
        """
        Initialize pygame mixer.

        Args:
            sounds_folder: Folder holding <clip_id>.mp3/.ogg/.wav files
            logger: ClassLogger instance for logging
        """
        self.sounds_folder = sounds_folder
        self.logger = logger
        self.mixer = pygame.mixer
        self._available = False

        try:
            self.mixer.init()
            self._available = True
            self.logger.info(f"🔈 Mixer initialized: {self.mixer.get_init()}")
        except pygame.error as e:
            self.logger.error(f"❌ Mixer init failed - clips will be skipped: {e}")

        if not os.path.isdir(sounds_folder):
            self.logger.warning(f"⚠️ Sounds folder not found: {sounds_folder}")

    def resolve_path(self, clip_id: str) -> Optional[str]:
        """
        Find the file for a clip id.

        Returns:
            Path of the first existing <clip_id><ext>, None if none exists
        """
        for extension in CLIP_EXTENSIONS:
            path = os.path.join(self.sounds_folder, clip_id + extension)
            if os.path.exists(path):
                return path
        return None

    def open(self, clip_id: str) -> IPlayable:
        if not self._available:
            raise ClipUnavailableError(clip_id, "audio device not available")

        path = self.resolve_path(clip_id)
        if path is None:
            raise ClipUnavailableError(clip_id, f"no file in {self.sounds_folder}")

        try:
            sound = pygame.mixer.Sound(path)
        except pygame.error as e:
            raise ClipUnavailableError(clip_id, f"failed to load {path}: {e}") from e

        self.logger.debug(f"Opened clip '{clip_id}' from {path}")
        return PygamePlayable(clip_id, sound)

    def cleanup(self) -> None:
        """Stop all channels and close the audio device"""
        if not self._available:
            return
        try:
            self.mixer.stop()
            self.mixer.quit()
            self.logger.info("Mixer closed")
        except pygame.error as e:
            self.logger.warning(f"Error closing mixer: {e}")
        self._available = False
