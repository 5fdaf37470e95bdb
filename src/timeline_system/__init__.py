"""
Timeline System - stage-based transitions of the presentation scene

Provides:
- Color: packed RGB color with blending
- SceneState / SceneProperty: the animatable values the renderer draws
- Stage / ParallelGroup: timeline step descriptors and builders
- TimelinePlayer: time-driven playback with a single end-of-timeline callback
"""

from .color import Color
from .errors import TimelineError
from .scene import SceneProperty, SceneState
from .stages import (
    StageKind, Stage, ParallelGroup, TimelineStep,
    fade, move, scale, color, hold, together, total_duration_ms, ease_in_out
)
from .interfaces import ITimelinePlayer
from .timeline_player import TimelinePlayer

__all__ = [
    'Color',
    'TimelineError',
    'SceneProperty',
    'SceneState',
    'StageKind',
    'Stage',
    'ParallelGroup',
    'TimelineStep',
    'fade',
    'move',
    'scale',
    'color',
    'hold',
    'together',
    'total_duration_ms',
    'ease_in_out',
    'ITimelinePlayer',
    'TimelinePlayer'
]
