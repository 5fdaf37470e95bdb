"""
Raw press events and the logical gestures derived from them
"""

import enum


class PressEvent(enum.Enum):
    """Raw touch-surface event (coordinates are not interpreted)"""
    DOWN = "down"
    UP = "up"
    CANCEL = "cancel"


class Gesture(enum.Enum):
    """Logical gesture emitted by the classifier"""
    SHORT_TAP = "short_tap"
    LONG_PRESS = "long_press"
