"""
Choreography - the intro and exit timelines of the presentation
"""

from typing import List, Optional, Tuple

from timeline_system import stages
from timeline_system.scene import SceneProperty
from timeline_system.stages import TimelineStep

from .config import PresentationConfig
from .layout import LayoutGeometry


def build_intro_timeline(config: PresentationConfig, layout: Optional[LayoutGeometry]) -> List[TimelineStep]:
    """
    Intro: logo fades in at the center, holds, moves to the top-left corner
    while shrinking and the background turns sky blue, then the brand text fades
    in while the background darkens (starting halfway through the text fade).

    Args:
        config: Timing and palette
        layout: Screen geometry; None keeps the logo centered

    Returns:
        Timeline steps
    """
    corner_dx, corner_dy = layout.corner_offset if layout else (0.0, 0.0)
    move_ms = config.intro_move_to_corner_ms

    return [
        stages.fade(SceneProperty.LOGO_ALPHA, 1.0, config.intro_logo_fade_in_ms, start=0.0),
        stages.hold(config.intro_logo_center_hold_ms),
        stages.together(
            stages.move(SceneProperty.LOGO_OFFSET_X, corner_dx, move_ms, start=0.0),
            stages.move(SceneProperty.LOGO_OFFSET_Y, corner_dy, move_ms, start=0.0),
            stages.scale(config.small_scale, move_ms, start=1.0),
            stages.color(config.sky_blue, move_ms, start=config.white),
        ),
        stages.together(
            stages.fade(SceneProperty.TEXT_ALPHA, 1.0, config.intro_text_fade_in_ms, start=0.0),
            stages.color(config.dark_blue, config.intro_bg_sky_to_dark_ms, start=config.sky_blue,
                         start_delay_ms=config.intro_text_fade_in_ms // 2),
        ),
    ]


def exit_scale_factor(config: PresentationConfig, total_duration_ms: int) -> float:
    """
    Stretch factor for the exit stages.

    Stages only ever stretch to cover a longer closing clip; they never shrink
    below their nominal length.
    """
    return max(1.0, total_duration_ms / config.exit_base_total_ms)


def build_exit_timeline(config: PresentationConfig, closing_duration_ms: int) -> Tuple[List[TimelineStep], float]:
    """
    Exit: the intro in reverse, stretched to the closing clip.

    1) text fades out while the background goes dark -> sky
    2) logo moves back to the center at full size while sky -> white
    3) hold at the center
    4) logo fades out, background ends white

    Args:
        config: Timing and palette
        closing_duration_ms: Reported closing clip duration (0 = unknown, use
            the fallback duration)

    Returns:
        (timeline steps, applied scale factor)
    """
    total_ms = closing_duration_ms if closing_duration_ms > 0 else config.exit_fallback_duration_ms
    factor = exit_scale_factor(config, total_ms)

    d1 = config.intro_text_fade_in_ms
    d2 = config.intro_move_to_corner_ms

    nominal: List[TimelineStep] = [
        stages.together(
            stages.fade(SceneProperty.TEXT_ALPHA, 0.0, d1),
            stages.color(config.sky_blue, d1, start=config.dark_blue),
        ),
        stages.together(
            stages.move(SceneProperty.LOGO_OFFSET_X, 0.0, d2),
            stages.move(SceneProperty.LOGO_OFFSET_Y, 0.0, d2),
            stages.scale(1.0, d2),
            stages.color(config.white, d2, start=config.sky_blue),
        ),
        stages.hold(config.intro_logo_center_hold_ms),
        stages.fade(SceneProperty.LOGO_ALPHA, 0.0, config.intro_logo_fade_in_ms),
    ]

    steps = [step.scaled(factor) for step in nominal]
    steps.append(stages.color(config.white, 0))
    return steps, factor
