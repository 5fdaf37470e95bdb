"""
Exit barrier - joins the closing clip and the exit animation
"""

from typing import Callable, Optional


class ExitBarrier:
    """
    Two-flag join that releases exactly once.

    The exit flow waits for two independent completions: the closing clip and
    the exit animation. Whichever arrives second triggers on_release; repeated
    or late notifications do nothing.

    Usage:
        barrier = ExitBarrier(on_release=terminate)
        audio.play(closing_clip, on_complete=barrier.mark_audio_done)
        timeline.play(exit_steps, on_end=barrier.mark_animation_done)
    """

    def __init__(self, on_release: Optional[Callable[[], None]] = None):
        self.audio_done = False
        self.animation_done = False
        self.released = False
        self._on_release = on_release

    def mark_audio_done(self) -> None:
        self.audio_done = True
        self._maybe_release()

    def mark_animation_done(self) -> None:
        self.animation_done = True
        self._maybe_release()

    def _maybe_release(self) -> None:
        if self.released or not (self.audio_done and self.animation_done):
            return
        self.released = True
        on_release = self._on_release
        self._on_release = None
        if on_release:
            on_release()
