"""
Presentation system configuration
"""

from dataclasses import dataclass, field
from typing import Tuple

from timeline_system.color import Color


@dataclass(frozen=True)
class PresentationConfig:
    """Fixed choreography timing and palette"""

    # Intro stages
    intro_logo_fade_in_ms: int = 1500
    intro_logo_center_hold_ms: int = 3333
    intro_move_to_corner_ms: int = 1000
    intro_text_fade_in_ms: int = 1500
    intro_bg_sky_to_dark_ms: int = 1500

    # Sequencing
    greeting_after_delay_ms: int = 1000
    lang_switch_restart_gap_ms: int = 666
    seq_gap_short_ms: int = 1333
    seq_gap_long_ms: int = 2666

    # Gestures / exit
    long_press_ms: int = 2000
    exit_vibrate_ms: int = 250
    exit_fallback_duration_ms: int = 16000
    terminate_exit_delay_ms: int = 200

    # Layout
    small_scale: float = 0.34
    corner_margin_px: int = 12
    text_gap_px: int = 10

    # Palette
    white: Color = field(default_factory=lambda: Color(0xFF, 0xFF, 0xFF))
    sky_blue: Color = field(default_factory=lambda: Color(0x5B, 0xC2, 0xE7))
    dark_blue: Color = field(default_factory=lambda: Color(0x0A, 0x23, 0x42))

    @property
    def step_gaps_ms(self) -> Tuple[int, int, int]:
        """Gap after each main loop step, indexed by the step that just finished"""
        return (self.seq_gap_short_ms, self.seq_gap_short_ms, self.seq_gap_long_ms)

    def gap_after_step(self, step: int) -> int:
        """Delay before the step following `step`"""
        return self.step_gaps_ms[step % len(self.step_gaps_ms)]

    @property
    def intro_total_ms(self) -> int:
        """Length of the intro timeline"""
        text_and_bg = max(
            self.intro_text_fade_in_ms,
            self.intro_text_fade_in_ms // 2 + self.intro_bg_sky_to_dark_ms
        )
        return (self.intro_logo_fade_in_ms + self.intro_logo_center_hold_ms
                + self.intro_move_to_corner_ms + text_and_bg)

    @property
    def exit_base_total_ms(self) -> int:
        """Nominal (unscaled) length of the exit timeline"""
        return (self.intro_text_fade_in_ms + self.intro_move_to_corner_ms
                + self.intro_logo_center_hold_ms + self.intro_logo_fade_in_ms)

    def validate(self) -> None:
        """Basic validation of configuration"""
        timings = {
            name: value for name, value in vars(self).items()
            if name.endswith("_ms")
        }
        for name, value in timings.items():
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

        if self.exit_base_total_ms <= 0:
            raise ValueError("Exit timeline stages must have a positive total duration")
        if self.long_press_ms <= 0:
            raise ValueError(f"Long press threshold must be positive, got {self.long_press_ms}")
        if not (0.0 < self.small_scale <= 1.0):
            raise ValueError(f"Small logo scale must be in (0, 1], got {self.small_scale}")


@dataclass
class KioskConfig:
    """Operational settings of the kiosk launcher"""

    # Display
    window_size: Tuple[int, int] = (1280, 800)
    fullscreen: bool = True
    frame_duration_ms: int = 20  # 50 FPS
    logo_path: str = "assets/logo.png"
    brand_text: str = "intervox"
    font_size: int = 48

    # Audio
    sounds_folder: str = "sounds"
    mock_audio: bool = False

    # Logging
    log_dir: str = "logs"
    health_log_interval_ms: int = 60000

    presentation: PresentationConfig = field(default_factory=PresentationConfig)

    @property
    def target_fps(self) -> float:
        """Target FPS derived from frame duration"""
        return 1000.0 / self.frame_duration_ms

    def validate(self) -> None:
        """Basic validation of configuration"""
        width, height = self.window_size
        if width <= 0 or height <= 0:
            raise ValueError(f"Window size must be positive, got {self.window_size}")
        if self.frame_duration_ms <= 0:
            raise ValueError("Frame duration must be positive")
        if self.font_size <= 0:
            raise ValueError(f"Font size must be positive, got {self.font_size}")
        if self.health_log_interval_ms <= 0:
            raise ValueError("Health log interval must be positive")

        self.presentation.validate()
