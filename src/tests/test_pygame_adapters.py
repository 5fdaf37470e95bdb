"""Tests for the pygame-backed collaborators (input, audio, haptics, window)."""

import pygame
import pytest

from audio_system import ClipUnavailableError
from audio_system.pygame_audio_player import PygameAudioPlayer
from device_system import PeripheralError
from device_system.haptics import PygameRumbleHaptic
from device_system.host_shell import PygameHostShell
from device_system.pygame_display import PygameDisplay
from gesture_system import PressEvent
from gesture_system.pygame_press_source import PygamePressSource
from presentation_system import KioskConfig
from timeline_system import SceneState


def mouse(event_type, button=1, **extra):
    return pygame.event.Event(event_type, button=button, pos=(10, 10), **extra)


def finger(event_type, finger_id):
    return pygame.event.Event(event_type, touch_id=1, finger_id=finger_id, x=0.5, y=0.5)


@pytest.fixture
def source(logger):
    return PygamePressSource(logger)


@pytest.fixture
def dummy_sdl(monkeypatch):
    """Headless SDL drivers for window and audio."""
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    yield
    pygame.quit()


class TestPressSource:
    """pygame events → PressEvent."""

    def test_mouse_press_and_release(self, source):
        assert source.translate(mouse(pygame.MOUSEBUTTONDOWN)) is PressEvent.DOWN
        assert source.is_pressed
        assert source.translate(mouse(pygame.MOUSEBUTTONUP)) is PressEvent.UP
        assert not source.is_pressed

    def test_other_mouse_buttons_ignored(self, source):
        assert source.translate(mouse(pygame.MOUSEBUTTONDOWN, button=3)) is None
        assert source.translate(mouse(pygame.MOUSEBUTTONUP, button=3)) is None

    def test_touch_synthesized_mouse_ignored(self, source):
        assert source.translate(finger(pygame.FINGERDOWN, 0)) is PressEvent.DOWN
        assert source.translate(mouse(pygame.MOUSEBUTTONDOWN, touch=True)) is None
        assert source.translate(finger(pygame.FINGERUP, 0)) is PressEvent.UP

    def test_multiple_fingers_are_one_press(self, source):
        assert source.translate(finger(pygame.FINGERDOWN, 0)) is PressEvent.DOWN
        assert source.translate(finger(pygame.FINGERDOWN, 1)) is None
        assert source.translate(finger(pygame.FINGERUP, 0)) is None
        assert source.translate(finger(pygame.FINGERUP, 1)) is PressEvent.UP

    def test_release_without_press_ignored(self, source):
        assert source.translate(mouse(pygame.MOUSEBUTTONUP)) is None

    def test_dev_key(self, source):
        down = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
        up = pygame.event.Event(pygame.KEYUP, key=pygame.K_SPACE)
        other = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)
        assert source.translate(other) is None
        assert source.translate(down) is PressEvent.DOWN
        assert source.translate(up) is PressEvent.UP

    def test_focus_loss_cancels(self, source):
        source.translate(mouse(pygame.MOUSEBUTTONDOWN))
        assert source.translate(pygame.event.Event(pygame.WINDOWFOCUSLOST)) is PressEvent.CANCEL
        assert not source.is_pressed
        # Nothing pressed any more
        assert source.translate(pygame.event.Event(pygame.WINDOWLEAVE)) is None


class TestPygameAudioPlayer:
    """Clip resolution and failure reporting."""

    def test_resolve_path(self, dummy_sdl, tmp_path, logger):
        (tmp_path / "i2eng.ogg").write_bytes(b"")
        (tmp_path / "i2eng.wav").write_bytes(b"")
        player = PygameAudioPlayer(str(tmp_path), logger)
        try:
            assert player.resolve_path("i2eng") == str(tmp_path / "i2eng.ogg")
            assert player.resolve_path("i3eng") is None
        finally:
            player.cleanup()

    def test_missing_clip_unavailable(self, dummy_sdl, tmp_path, logger):
        player = PygameAudioPlayer(str(tmp_path), logger)
        try:
            with pytest.raises(ClipUnavailableError):
                player.open("i1all")
        finally:
            player.cleanup()

    def test_undecodable_clip_unavailable(self, dummy_sdl, tmp_path, logger):
        (tmp_path / "i1all.wav").write_bytes(b"not a wave file")
        player = PygameAudioPlayer(str(tmp_path), logger)
        try:
            with pytest.raises(ClipUnavailableError):
                player.open("i1all")
        finally:
            player.cleanup()


class TestDevices:
    """Haptics and host shell."""

    def test_haptic_without_device(self, logger):
        haptic = PygameRumbleHaptic(logger)
        with pytest.raises(PeripheralError):
            haptic.pulse(250)

    def test_host_shell_flags(self, logger):
        shell = PygameHostShell(logger)
        shell.close_window()
        shell.close_window()
        assert shell.window_closed
        assert not shell.exit_requested

        shell.exit_process()
        assert shell.exit_requested


class TestDisplay:
    """Window setup, layout and rendering on the dummy video driver."""

    @pytest.fixture
    def display(self, dummy_sdl, tmp_path, logger):
        config = KioskConfig(fullscreen=False, window_size=(640, 400), logo_path=str(tmp_path / "none.png"))
        display = PygameDisplay(config, logger)
        display.setup()
        return display

    def test_placeholder_logo_and_layout(self, display):
        layout = display.compute_layout(display.config.presentation)
        assert layout is not None
        assert layout.window_size == (640, 400)
        assert layout.logo_rect[2:] == PygameDisplay.PLACEHOLDER_LOGO_SIZE

    def test_render_scene(self, display):
        display.compute_layout(display.config.presentation)
        scene = SceneState(logo_alpha=0.5, logo_scale=0.34, text_alpha=1.0,
                           background=display.config.presentation.sky_blue)
        display.render(scene)
        assert display.surface.get_at((0, 0))[:3] == display.config.presentation.sky_blue.rgb

    def test_layout_before_setup(self, logger):
        assert PygameDisplay(KioskConfig(), logger).compute_layout(KioskConfig().presentation) is None
