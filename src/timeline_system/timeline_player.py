"""
Timeline player - time-driven stage playback onto a SceneState
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from utils.timer_scheduler import monotonic_ms

from .errors import TimelineError
from .interfaces import ITimelinePlayer
from .scene import SceneState, SceneValue
from .stages import ParallelGroup, Stage, StageKind, TimelineStep, total_duration_ms


@dataclass
class _StageRun:
    """Runtime bookkeeping for one stage of the running timeline"""
    stage: Stage
    begin_ms: int
    start_value: Optional[SceneValue] = None
    begun: bool = False
    done: bool = False

    @property
    def end_ms(self) -> int:
        return self.begin_ms + self.stage.duration_ms


class TimelinePlayer(ITimelinePlayer):
    """
    Plays stage lists against a SceneState using wall-clock time.

    Non-blocking: update() is called every frame and writes the interpolated
    value of every active stage into the scene. Frames that arrive late simply
    jump ahead; stages that were skipped over still get their end value, in
    timeline order, so "from current value" stages always start from the right
    place.

    Example:
        player = TimelinePlayer(scene, logger)
        player.play([fade(SceneProperty.LOGO_ALPHA, 1.0, 1500), hold(3333)],
                    on_end=lambda: print("intro done"))

        # In the frame loop:
        player.update()
    """

    def __init__(self, scene: SceneState, logger, clock: Optional[Callable[[], float]] = None):
        """
        Initialize player.

        Args:
            scene: Scene the timeline writes into
            logger: ClassLogger instance for logging
            clock: Callable returning the current time in milliseconds
        """
        self.scene = scene
        self._logger = logger
        self._clock = clock or monotonic_ms

        self._runs: List[_StageRun] = []
        self._name: Optional[str] = None
        self._on_end: Optional[Callable[[], None]] = None
        self._started_at: float = 0.0
        self._total_ms: int = 0
        self._running = False

    def play(self, steps: Sequence[TimelineStep], on_end: Optional[Callable[[], None]], name: str = "timeline") -> int:
        self.stop()

        runs = self._flatten(steps)

        self._runs = runs
        self._name = name
        self._on_end = on_end
        self._total_ms = total_duration_ms(steps)
        self._started_at = self._clock()
        self._running = True

        self._logger.info(f"🎬 Timeline '{name}' started: {len(steps)} steps, {self._total_ms}ms")

        # Apply the first frame right away
        self.update()
        return self._total_ms

    def stop(self) -> None:
        if self._running:
            self._logger.debug(f"Timeline '{self._name}' stopped")
        self._runs = []
        self._on_end = None
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def update(self) -> None:
        if not self._running:
            return

        elapsed = self._clock() - self._started_at

        for run in self._runs:
            if run.done or elapsed < run.begin_ms:
                continue
            self._advance(run, elapsed)

        if elapsed >= self._total_ms and all(run.done for run in self._runs):
            self._finish()

    def _advance(self, run: _StageRun, elapsed: float) -> None:
        """Write one stage's value for the elapsed time"""
        stage = run.stage

        if not run.begun:
            run.begun = True
            if stage.kind is not StageKind.HOLD:
                run.start_value = stage.start if stage.start is not None else self.scene.get(stage.target)

        if stage.kind is StageKind.HOLD:
            run.done = elapsed >= run.end_ms
            return

        if elapsed >= run.end_ms:
            self.scene.set(stage.target, stage.end)
            run.done = True
        else:
            fraction = (elapsed - run.begin_ms) / stage.duration_ms
            self.scene.set(stage.target, stage.value_at(run.start_value, fraction))

    def _finish(self) -> None:
        on_end = self._on_end
        name = self._name
        self._runs = []
        self._on_end = None
        self._running = False

        self._logger.info(f"Timeline '{name}' finished")
        if on_end:
            on_end()

    @staticmethod
    def _flatten(steps: Sequence[TimelineStep]) -> List[_StageRun]:
        """Turn sequential steps into stage runs with absolute begin times"""
        runs: List[_StageRun] = []
        offset = 0
        for step in steps:
            if isinstance(step, Stage):
                runs.append(_StageRun(step, offset + step.start_delay_ms))
            elif isinstance(step, ParallelGroup):
                for stage in step.stages:
                    runs.append(_StageRun(stage, offset + stage.start_delay_ms))
            else:
                raise TimelineError(f"Unsupported timeline step: {step!r}")
            offset += step.span_ms
        return runs
