"""
Mock audio player - simulated playback for running without audio hardware
"""

from typing import Callable, Dict, Iterable, List, Optional

from utils.timer_scheduler import monotonic_ms

from .errors import ClipUnavailableError, PlaybackStartError
from .interfaces import IAudioPlayer, IPlayable


class MockPlayable(IPlayable):
    """Simulated clip that 'plays' for its configured duration"""

    def __init__(self, player: 'MockAudioPlayer', clip_id: str, duration_ms: int, fail_start: bool,
                 reported_duration_ms: Optional[int] = None):
        self._player = player
        self.clip_id = clip_id
        self._duration_ms = duration_ms
        self._reported_duration_ms = duration_ms if reported_duration_ms is None else reported_duration_ms
        self._fail_start = fail_start
        self._started_at: Optional[float] = None
        self._listener: Optional[Callable[[], None]] = None
        self.stopped = False
        self.released = False
        self.finished = False

    def start(self) -> None:
        if self._fail_start:
            raise PlaybackStartError(f"Mock: clip '{self.clip_id}' configured to fail on start")
        self._started_at = self._player.now_ms()
        self._player.played.append(self.clip_id)
        self._player.logger.debug(f"Mock: Started clip '{self.clip_id}' ({self._duration_ms}ms)")

    def stop(self) -> None:
        if self._started_at is not None and not self.finished and not self.stopped:
            self._player.stopped.append(self.clip_id)
            self._player.logger.debug(f"Mock: Stopped clip '{self.clip_id}'")
        self.stopped = True

    def release(self) -> None:
        self.released = True
        self._listener = None

    def duration_ms(self) -> int:
        return self._reported_duration_ms

    def poll(self) -> None:
        if self._started_at is None or self.stopped or self.finished:
            return
        if self._player.now_ms() - self._started_at >= self._duration_ms:
            self.finished = True
            listener = self._listener
            if listener:
                listener()

    def set_completion_listener(self, listener: Optional[Callable[[], None]]) -> None:
        self._listener = listener


class MockAudioPlayer(IAudioPlayer):
    """
    Mock implementation of IAudioPlayer that performs no audio operations.

    Every clip "plays" for its configured duration (or default_duration_ms)
    measured on the injected clock. Clips can be marked missing (open fails) or
    broken (start fails). Started and stopped clip ids are recorded in
    `played` / `stopped` for inspection.
    """

    def __init__(self,
                 logger,
                 clock: Optional[Callable[[], float]] = None,
                 durations_ms: Optional[Dict[str, int]] = None,
                 default_duration_ms: int = 3000,
                 missing_clips: Iterable[str] = (),
                 failing_clips: Iterable[str] = (),
                 reported_durations_ms: Optional[Dict[str, int]] = None):
        """
        Initialize mock audio player.

        Args:
            logger: ClassLogger instance for logging
            clock: Callable returning the current time in milliseconds
            durations_ms: Per-clip simulated durations
            default_duration_ms: Duration for clips not in durations_ms
            missing_clips: Clip ids whose open() raises ClipUnavailableError
            failing_clips: Clip ids whose start() raises PlaybackStartError
            reported_durations_ms: Per-clip value returned by duration_ms() when it
                differs from the simulated duration (0 = unknown length)
        """
        self.logger = logger
        self._clock = clock or monotonic_ms
        self.durations_ms: Dict[str, int] = dict(durations_ms or {})
        self.default_duration_ms = default_duration_ms
        self.missing_clips = set(missing_clips)
        self.failing_clips = set(failing_clips)
        self.reported_durations_ms: Dict[str, int] = dict(reported_durations_ms or {})

        self.opened: List[str] = []
        self.played: List[str] = []
        self.stopped: List[str] = []

        self.logger.info("🔇 MockAudioPlayer initialized (audio disabled)")

    def now_ms(self) -> float:
        return self._clock()

    def open(self, clip_id: str) -> IPlayable:
        if clip_id in self.missing_clips:
            raise ClipUnavailableError(clip_id, "mock: marked missing")
        self.opened.append(clip_id)
        duration = self.durations_ms.get(clip_id, self.default_duration_ms)
        return MockPlayable(
            self, clip_id, duration, clip_id in self.failing_clips,
            reported_duration_ms=self.reported_durations_ms.get(clip_id)
        )

    def cleanup(self) -> None:
        self.logger.debug("Mock: cleanup")
