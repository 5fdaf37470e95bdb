"""
Lifecycle states of the presentation
"""

import enum


class LifecycleState(enum.Enum):
    """
    Where the presentation is in its single run.

    Transitions:
    - UNINITIALIZED → PLAYING_INTRO: start()
    - PLAYING_INTRO / MAIN_LOOP_RUNNING → AWAITING_MAIN_SEQUENCE_START: a main
      loop (re)start was scheduled (greeting finished, or language switched)
    - AWAITING_MAIN_SEQUENCE_START → MAIN_LOOP_RUNNING: first step clip started
    - any interactive state → EXIT_FLOW_ACTIVE: long press
    - EXIT_FLOW_ACTIVE → TERMINATED: closing clip AND exit animation done
    """
    UNINITIALIZED = "uninitialized"
    PLAYING_INTRO = "playing_intro"
    AWAITING_MAIN_SEQUENCE_START = "awaiting_main_sequence_start"
    MAIN_LOOP_RUNNING = "main_loop_running"
    EXIT_FLOW_ACTIVE = "exit_flow_active"
    TERMINATED = "terminated"
