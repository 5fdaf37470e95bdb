"""
Presentation System - state machine and frame loop of the calm guide kiosk

This module provides the presentation lifecycle (intro, greeting, narrated main
loop, language restart, exit flow), its choreography and the single-threaded
frame loop that drives it.
"""

from .states import LifecycleState
from .config import PresentationConfig, KioskConfig
from .layout import LayoutGeometry, compute_layout
from .exit_barrier import ExitBarrier
from .choreography import build_intro_timeline, build_exit_timeline, exit_scale_factor
from .sequence_controller import SequenceController

__all__ = [
    # Lifecycle
    "LifecycleState",
    "SequenceController",
    "ExitBarrier",
    # Choreography
    "build_intro_timeline",
    "build_exit_timeline",
    "exit_scale_factor",
    # Layout
    "LayoutGeometry",
    "compute_layout",
    # Configuration
    "PresentationConfig",
    "KioskConfig",
]
