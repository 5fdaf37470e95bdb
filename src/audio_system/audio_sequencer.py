"""
Audio sequencer - one exclusive playback slot with completion callbacks
"""

from typing import Callable, Optional

from .errors import ClipUnavailableError, PlaybackStartError
from .interfaces import IAudioPlayer, IPlayable


class AudioSequencer:
    """
    Plays one clip at a time and reports when it ends.

    Rules:
    - play() always stops the previous clip first (never two clips at once)
    - a clip that cannot be opened or started completes immediately with duration 0
    - natural end fires on_complete exactly once
    - stop() discards the pending completion; it never raises

    Example:
        sequencer = AudioSequencer(PygameAudioPlayer("sounds", logger), logger)
        duration_ms = sequencer.play("i5eng", on_complete=lambda: print("done"))

        # In the frame loop:
        sequencer.update()
    """

    def __init__(self, player: IAudioPlayer, logger):
        """
        Initialize sequencer with injected player.

        Args:
            player: IAudioPlayer instance (pygame, mock, ...)
            logger: ClassLogger instance for logging
        """
        self._player = player
        self._logger = logger
        self._current: Optional[IPlayable] = None
        self._current_clip: Optional[str] = None
        self._on_complete: Optional[Callable[[], None]] = None

    @property
    def current_clip(self) -> Optional[str]:
        """Clip id currently owning the slot, if any"""
        return self._current_clip

    def is_playing(self) -> bool:
        """True while a started clip owns the slot"""
        return self._current is not None

    def play(self, clip_id: str, on_complete: Optional[Callable[[], None]] = None) -> int:
        """
        Stop whatever is playing, then start clip_id.

        Args:
            clip_id: Clip identifier to open
            on_complete: Called once on natural end, or immediately on failure

        Returns:
            Clip duration in milliseconds, 0 if unknown or on failure
        """
        self.stop()

        # 1. Open the clip - a missing clip must never stall the sequence
        try:
            playable = self._player.open(clip_id)
        except ClipUnavailableError as e:
            self._logger.warning(f"⚠️ {e} - completing immediately")
            self._complete_now(on_complete)
            return 0
        except Exception as e:
            self._logger.error(f"Failed to open clip '{clip_id}'", exception=e)
            self._complete_now(on_complete)
            return 0

        self._current = playable
        self._current_clip = clip_id
        self._on_complete = on_complete
        playable.set_completion_listener(lambda: self._handle_natural_completion(playable))

        # 2. Start playback
        try:
            playable.start()
        except PlaybackStartError as e:
            self._logger.warning(f"⚠️ Clip '{clip_id}' failed to start: {e} - completing immediately")
            self._abort_current(on_complete)
            return 0
        except Exception as e:
            self._logger.error(f"Failed to start clip '{clip_id}'", exception=e)
            self._abort_current(on_complete)
            return 0

        # 3. Report duration (best-effort)
        try:
            duration_ms = int(playable.duration_ms())
        except Exception as e:
            self._logger.warning(f"Could not read duration of '{clip_id}': {e}")
            duration_ms = 0

        self._logger.info(f'🔊 Playing clip "{clip_id}" ({duration_ms}ms)')
        return max(0, duration_ms)

    def stop(self) -> None:
        """
        Stop and release the current clip.

        Idempotent; the stopped clip never reports completion. Errors are
        logged and swallowed so audio teardown cannot block shutdown.
        """
        playable = self._current
        if playable is None:
            return

        clip_id = self._current_clip
        self._current = None
        self._current_clip = None
        self._on_complete = None

        try:
            playable.set_completion_listener(None)
            playable.stop()
        except Exception as e:
            self._logger.warning(f"Error stopping clip '{clip_id}': {e}")
        finally:
            try:
                playable.release()
            except Exception as e:
                self._logger.warning(f"Error releasing clip '{clip_id}': {e}")

        self._logger.debug(f"Stopped clip '{clip_id}'")

    def update(self) -> None:
        """Poll the active clip for natural end (call once per frame)"""
        playable = self._current
        if playable is None:
            return
        try:
            playable.poll()
        except Exception as e:
            self._logger.error(f"Polling clip '{self._current_clip}' failed - treating as finished", exception=e)
            self._handle_natural_completion(playable)

    def _handle_natural_completion(self, playable: IPlayable) -> None:
        """Release the finished clip and fire its completion once"""
        if playable is not self._current:
            # Stale notification from a clip that was already replaced
            return

        on_complete = self._on_complete
        self._logger.debug(f"Clip '{self._current_clip}' finished")
        self.stop()
        if on_complete:
            on_complete()

    def _abort_current(self, on_complete: Optional[Callable[[], None]]) -> None:
        """Release a clip that failed to start and complete immediately"""
        self.stop()
        self._complete_now(on_complete)

    @staticmethod
    def _complete_now(on_complete: Optional[Callable[[], None]]) -> None:
        if on_complete:
            on_complete()
