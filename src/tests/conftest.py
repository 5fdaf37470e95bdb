"""Pytest configuration and shared fixtures."""

import logging
from typing import Callable, List, Optional, Tuple

import pytest

from audio_system import AudioSequencer, ClipCatalog, MockAudioPlayer
from device_system import IHaptic, IHostShell, PeripheralError
from gesture_system import GestureClassifier, PressEvent
from presentation_system import PresentationConfig, SequenceController, compute_layout
from timeline_system import SceneState, TimelinePlayer
from utils import HybridLogger, TimerScheduler


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: float = 0.0):
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingHaptic(IHaptic):
    def __init__(self):
        self.pulses: List[int] = []

    def pulse(self, duration_ms: int) -> None:
        self.pulses.append(duration_ms)


class FailingHaptic(IHaptic):
    def __init__(self):
        self.attempts = 0

    def pulse(self, duration_ms: int) -> None:
        self.attempts += 1
        raise PeripheralError("no vibrator")


class RecordingHostShell(IHostShell):
    def __init__(self):
        self.window_closed = False
        self.exit_requested = False
        self.calls: List[str] = []

    def close_window(self) -> None:
        self.window_closed = True
        self.calls.append("close_window")

    def exit_process(self) -> None:
        self.exit_requested = True
        self.calls.append("exit_process")


class KioskRig:
    """
    The presentation core wired to mocks and a fake clock.

    frame() does what one frame-loop iteration does minus input and rendering;
    every clip that starts is recorded with its start time in `play_log`.
    """

    def __init__(self, logger, durations_ms=None, default_duration_ms: int = 3000,
                 missing_clips=(), failing_clips=(), reported_durations_ms=None,
                 haptic: Optional[IHaptic] = None, config: Optional[PresentationConfig] = None):
        self.clock = FakeClock()
        self.logger = logger
        self.config = config or PresentationConfig()

        self.scheduler = TimerScheduler(logger, clock=self.clock)
        self.player = MockAudioPlayer(
            logger,
            clock=self.clock,
            durations_ms=durations_ms,
            default_duration_ms=default_duration_ms,
            missing_clips=missing_clips,
            failing_clips=failing_clips,
            reported_durations_ms=reported_durations_ms,
        )
        self.audio = AudioSequencer(self.player, logger)
        self.scene = SceneState(background=self.config.white)
        self.timelines = TimelinePlayer(self.scene, logger, clock=self.clock)
        self.haptic = haptic or RecordingHaptic()
        self.host = RecordingHostShell()

        self.controller = SequenceController(
            scheduler=self.scheduler,
            audio=self.audio,
            timelines=self.timelines,
            catalog=ClipCatalog(),
            haptic=self.haptic,
            host_shell=self.host,
            logger=logger,
            config=self.config,
        )
        self.classifier = GestureClassifier(
            self.scheduler, self.controller, self.controller, logger,
            long_press_ms=self.config.long_press_ms
        )
        self.layout = compute_layout((1280, 800), (240, 240), (200, 40), self.config)
        self.play_log: List[Tuple[str, float]] = []

    def start(self) -> None:
        self.controller.start(self.layout)
        self._record_plays()

    def frame(self) -> None:
        self.scheduler.tick()
        self.audio.update()
        self.timelines.update()
        self._record_plays()

    def run_for(self, ms: float, step: float = 5) -> None:
        end = self.clock.now + ms
        while self.clock.now < end:
            self.clock.advance(min(step, end - self.clock.now))
            self.frame()

    def run_until(self, predicate: Callable[[], bool], limit_ms: float = 60000, step: float = 1) -> float:
        """Run frames until predicate() holds; returns the clock reading"""
        end = self.clock.now + limit_ms
        while not predicate():
            if self.clock.now >= end:
                raise AssertionError(f"Condition not reached within {limit_ms}ms")
            self.clock.advance(step)
            self.frame()
        return self.clock.now

    def press(self, event: PressEvent):
        gesture = self.classifier.handle(event)
        self._record_plays()
        return gesture

    def tap(self, hold_ms: float = 100):
        self.press(PressEvent.DOWN)
        self.run_for(hold_ms)
        return self.press(PressEvent.UP)

    def long_press(self) -> None:
        self.press(PressEvent.DOWN)
        self.run_for(self.config.long_press_ms + 10)

    @property
    def played(self) -> List[str]:
        return list(self.player.played)

    def _record_plays(self) -> None:
        while len(self.play_log) < len(self.player.played):
            self.play_log.append((self.player.played[len(self.play_log)], self.clock.now))


@pytest.fixture
def logger(tmp_path):
    """Quiet file-only logger writing into the test's temp dir."""
    hybrid = HybridLogger(f"test_{tmp_path.name}", log_dir=str(tmp_path), console=False)
    yield hybrid.get_class_logger("Test", logging.DEBUG)
    hybrid.cleanup()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(logger, clock):
    return TimerScheduler(logger, clock=clock)


@pytest.fixture
def make_rig(logger):
    """Factory for KioskRig instances sharing the test logger."""
    def factory(**kwargs) -> KioskRig:
        return KioskRig(logger, **kwargs)
    return factory


@pytest.fixture
def rig(make_rig):
    return make_rig()
