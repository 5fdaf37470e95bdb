"""Tests for the frame loop manager, driven frame by frame."""

import pygame
import pytest

from audio_system import Language
from gesture_system.pygame_press_source import PygamePressSource
from presentation_system import LifecycleState
from presentation_system.presentation_manager import PresentationManager


class FakeDisplay:
    def __init__(self, layout):
        self._layout = layout
        self.frames = 0

    def compute_layout(self, presentation_config):
        return self._layout

    def render(self, scene):
        self.frames += 1


@pytest.fixture
def video(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.display.init()
    yield
    pygame.quit()


@pytest.fixture
def manager(rig, video, logger):
    manager = PresentationManager(
        controller=rig.controller,
        classifier=rig.classifier,
        press_source=PygamePressSource(logger),
        scheduler=rig.scheduler,
        audio=rig.audio,
        audio_player=rig.player,
        timelines=rig.timelines,
        scene=rig.scene,
        display=FakeDisplay(rig.layout),
        host_shell=rig.host,
        logger=logger,
    )
    manager.start()
    return manager


def run_frames(rig, manager, ms, step=20):
    for _ in range(int(ms // step)):
        rig.clock.advance(step)
        manager.update()


def click(manager, event_type):
    manager._handle_event(pygame.event.Event(event_type, button=1, pos=(100, 100)))


class TestFrameLoop:
    """update() drives timers, audio, animation and rendering."""

    def test_start(self, rig, manager):
        assert manager.running
        assert rig.controller.state is LifecycleState.PLAYING_INTRO
        assert rig.controller.layout is rig.layout

    def test_frames_advance_presentation(self, rig, manager):
        run_frames(rig, manager, 4100)
        assert manager.display.frames == 205
        assert rig.controller.state is LifecycleState.MAIN_LOOP_RUNNING
        assert rig.player.played == ["i1all", "i2hun"]

    def test_click_switches_language(self, rig, manager):
        run_frames(rig, manager, 8200)
        click(manager, pygame.MOUSEBUTTONDOWN)
        click(manager, pygame.MOUSEBUTTONUP)
        assert rig.controller.language is Language.ENGLISH

    def test_exit_ends_loop(self, rig, manager):
        run_frames(rig, manager, 8200)
        click(manager, pygame.MOUSEBUTTONDOWN)
        run_frames(rig, manager, 2100)
        assert rig.controller.state is LifecycleState.EXIT_FLOW_ACTIVE

        run_frames(rig, manager, 8000)
        assert rig.host.exit_requested
        assert not manager.running

    def test_no_render_after_window_closed(self, rig, manager):
        rig.host.window_closed = True
        run_frames(rig, manager, 100)
        assert manager.display.frames == 0


class TestHostEvents:
    """Window events forwarded to the controller."""

    def test_quit(self, manager):
        manager._handle_event(pygame.event.Event(pygame.QUIT))
        assert not manager.running

    def test_minimize_suspends(self, rig, manager):
        run_frames(rig, manager, 4100)
        manager._handle_event(pygame.event.Event(pygame.WINDOWMINIMIZED))
        assert not rig.controller.main_loop_running
        assert not rig.audio.is_playing()

    def test_stop_shuts_down(self, rig, manager):
        run_frames(rig, manager, 4100)
        manager.stop()
        assert not manager.running
        assert rig.scheduler.pending_count() == 0
        assert not rig.audio.is_playing()
