"""
Gesture System Package

Turns raw press-down / press-up / press-cancel events into the two logical
gestures the presentation reacts to: short tap and long press.
"""

from .press_event import PressEvent, Gesture
from .interfaces import IInteractionGate, IGestureListener
from .gesture_classifier import GestureClassifier

__all__ = [
    "PressEvent",
    "Gesture",
    "IInteractionGate",
    "IGestureListener",
    "GestureClassifier"
]
