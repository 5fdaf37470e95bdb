"""
Sequence controller - the presentation state machine
"""

from typing import Callable, List, Optional, TYPE_CHECKING

from audio_system.clip_catalog import ClipCatalog, ClipRole, Language
from device_system.errors import PeripheralError
from gesture_system.interfaces import IGestureListener, IInteractionGate
from timeline_system.errors import TimelineError
from timeline_system.stages import TimelineStep

from .choreography import build_exit_timeline, build_intro_timeline
from .config import PresentationConfig
from .exit_barrier import ExitBarrier
from .states import LifecycleState

if TYPE_CHECKING:
    from audio_system.audio_sequencer import AudioSequencer
    from device_system.interfaces import IHaptic, IHostShell
    from timeline_system.interfaces import ITimelinePlayer
    from utils.hybrid_logger import ClassLogger
    from utils.timer_scheduler import TimerHandle, TimerScheduler
    from .layout import LayoutGeometry


class SequenceController(IInteractionGate, IGestureListener):
    """
    Orchestrates Intro → Greeting → MainLoop ⇄ language restart → Exit → Terminated.

    Everything runs on the frame-loop thread: gestures, timer firings and
    audio/animation completions arrive one at a time, so plain attributes are
    enough for the shared state.

    Ordering rules:
    - only one "next step" timer is ever outstanding (cancel-then-schedule)
    - every clip goes through the AudioSequencer, which stops the previous one
    - scheduled continuations re-check closing / loop flags when they fire
    - collaborator failures count as immediate completions

    Example:
        controller = SequenceController(scheduler, sequencer, timeline_player,
                                        ClipCatalog(), haptic, host_shell, logger)
        controller.start(layout)
        classifier = GestureClassifier(scheduler, controller, controller, logger)
    """

    def __init__(self,
                 scheduler: 'TimerScheduler',
                 audio: 'AudioSequencer',
                 timelines: 'ITimelinePlayer',
                 catalog: ClipCatalog,
                 haptic: 'IHaptic',
                 host_shell: 'IHostShell',
                 logger: 'ClassLogger',
                 config: Optional[PresentationConfig] = None,
                 language: Language = Language.HUNGARIAN):
        """
        Initialize the controller.

        Args:
            scheduler: Scheduler for all delayed steps
            audio: Exclusive-slot audio sequencer
            timelines: Animation timeline collaborator
            catalog: (language, role) → clip id mapping
            haptic: Haptic pulse collaborator
            host_shell: Window/process control
            logger: ClassLogger instance for logging
            config: Timing constants (defaults to PresentationConfig())
            language: Initial language
        """
        self.scheduler = scheduler
        self.audio = audio
        self.timelines = timelines
        self.catalog = catalog
        self.haptic = haptic
        self.host_shell = host_shell
        self.logger = logger
        self.config = config or PresentationConfig()

        self.state = LifecycleState.UNINITIALIZED
        self.language = language
        self.step: Optional[int] = None
        self.layout: Optional['LayoutGeometry'] = None
        self.exit_barrier: Optional[ExitBarrier] = None

        self._interactive = False
        self._closing = False
        self._main_loop_running = False
        self._scheduled: Optional['TimerHandle'] = None
        self._exit_timer: Optional['TimerHandle'] = None

    # ------------------------------------------------------------------------
    # Flags
    # ------------------------------------------------------------------------

    def is_interactive(self) -> bool:
        return self._interactive

    def is_closing(self) -> bool:
        return self._closing

    @property
    def main_loop_running(self) -> bool:
        return self._main_loop_running

    @property
    def scheduled_task(self) -> Optional['TimerHandle']:
        """The single outstanding step timer, if any"""
        if self._scheduled is not None and self._scheduled.is_pending:
            return self._scheduled
        return None

    # ------------------------------------------------------------------------
    # Lifecycle entry points
    # ------------------------------------------------------------------------

    def start(self, layout: Optional['LayoutGeometry'] = None) -> None:
        """
        Begin the presentation: intro animation and greeting clip, concurrently.

        Args:
            layout: Screen geometry; None (geometry unavailable) keeps the logo
                centered for the whole run
        """
        if self.state is not LifecycleState.UNINITIALIZED:
            self.logger.warning(f"start() ignored in state {self.state.name}")
            return

        if layout is None:
            self.logger.warning("⚠️ No layout geometry - logo will stay centered")
        self.layout = layout
        self._interactive = False
        self._set_state(LifecycleState.PLAYING_INTRO)

        self._play_timeline(
            build_intro_timeline(self.config, layout), self._on_intro_finished, "intro"
        )
        self.audio.play(
            self.catalog.clip_for(self.language, ClipRole.GREETING),
            on_complete=self._on_greeting_finished
        )

    def suspend(self) -> None:
        """
        Host hid the presentation: stop the loop and audio.

        A later short tap restarts the loop. An exit flow already in progress
        is left to finish.
        """
        if self._closing or self.state is LifecycleState.TERMINATED:
            return
        self.logger.info("Presentation suspended")
        self._stop_all()

    def shutdown(self) -> None:
        """Deterministic teardown: cancel every timer, stop audio and animation"""
        self._stop_all()
        self.timelines.stop()
        self.scheduler.cancel_all()
        self._exit_timer = None
        self.logger.info("Presentation shut down")

    # ------------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------------

    def on_short_tap(self) -> None:
        """Toggle language and restart the main loop"""
        if not self._interactive or self._closing:
            return

        self.language = self.language.toggled()
        self.logger.info(f"🌐 Language switched to {self.language.name}")
        self._start_main_loop(self.config.lang_switch_restart_gap_ms)

    def on_long_press(self) -> None:
        """Begin the exit flow"""
        if not self._interactive or self._closing:
            return
        self._begin_exit_flow()

    # ------------------------------------------------------------------------
    # Intro / greeting
    # ------------------------------------------------------------------------

    def _on_intro_finished(self) -> None:
        if self._closing:
            return
        self._interactive = True
        self.logger.info("Intro finished - gestures enabled")

    def _on_greeting_finished(self) -> None:
        if self._closing:
            return
        self._schedule(self.config.greeting_after_delay_ms, self._after_greeting, "greeting-follow")

    def _after_greeting(self) -> None:
        if self._closing or self._main_loop_running:
            self.logger.debug("Greeting follow-up skipped (closing or loop already running)")
            return
        self._start_main_loop(0)

    # ------------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------------

    def _start_main_loop(self, delay_ms: int) -> None:
        """Stop current audio and the pending step, then play step 0 after delay_ms"""
        if self._closing:
            return

        self._cancel_scheduled()
        self.audio.stop()

        self._main_loop_running = True
        self._set_state(LifecycleState.AWAITING_MAIN_SEQUENCE_START)
        self._schedule(delay_ms, lambda: self._play_step(0), "main-loop-start")

    def _play_step(self, index: int) -> None:
        if self._closing or not self._main_loop_running:
            return

        self.step = index
        self._set_state(LifecycleState.MAIN_LOOP_RUNNING)

        playlist: List[str] = self.catalog.playlist(self.language)
        self.logger.debug(f"Main loop step {index} ({self.language.name})")
        self.audio.play(playlist[index], on_complete=lambda: self._on_step_finished(index, len(playlist)))

    def _on_step_finished(self, index: int, playlist_length: int) -> None:
        if self._closing or not self._main_loop_running:
            return

        gap_ms = self.config.gap_after_step(index)
        next_index = (index + 1) % playlist_length
        self._schedule(gap_ms, lambda: self._play_step(next_index), f"step-{next_index}")

    # ------------------------------------------------------------------------
    # Exit flow
    # ------------------------------------------------------------------------

    def _begin_exit_flow(self) -> None:
        self._closing = True
        self._interactive = False
        self._set_state(LifecycleState.EXIT_FLOW_ACTIVE)

        # 1. Stop the loop and current audio
        self._cancel_scheduled()
        self._main_loop_running = False
        self.audio.stop()

        # 2. Haptic feedback (best-effort)
        self._pulse_haptic(self.config.exit_vibrate_ms)

        # 3. Closing clip and exit animation, joined by the barrier
        barrier = ExitBarrier(on_release=self._terminate)
        self.exit_barrier = barrier

        duration_ms = self.audio.play(
            self.catalog.clip_for(self.language, ClipRole.CLOSING),
            on_complete=barrier.mark_audio_done
        )
        steps, factor = build_exit_timeline(self.config, duration_ms)
        self.logger.info(f"🚪 Exit flow started (clip {duration_ms}ms, animation x{factor:.2f})")
        self._play_timeline(steps, barrier.mark_animation_done, "exit")

    def _terminate(self) -> None:
        self._set_state(LifecycleState.TERMINATED)
        self._stop_all()

        try:
            self.host_shell.close_window()
        except Exception as e:
            self.logger.warning(f"Closing window failed: {e}")

        # Let window teardown begin before the process goes away
        self._exit_timer = self.scheduler.schedule(
            self.config.terminate_exit_delay_ms, self._exit_process, "process-exit"
        )

    def _exit_process(self) -> None:
        self._exit_timer = None
        try:
            self.host_shell.exit_process()
        except Exception as e:
            self.logger.warning(f"Process exit request failed: {e}")

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def _stop_all(self) -> None:
        self._cancel_scheduled()
        self._main_loop_running = False
        self.audio.stop()

    def _schedule(self, delay_ms: int, callback: Callable[[], None], name: str) -> None:
        """Replace the outstanding step timer"""
        self._cancel_scheduled()
        self._scheduled = self.scheduler.schedule(delay_ms, callback, name)

    def _cancel_scheduled(self) -> None:
        self.scheduler.cancel(self._scheduled)
        self._scheduled = None

    def _play_timeline(self, steps: List[TimelineStep], on_end: Callable[[], None], name: str) -> None:
        """Start a timeline; if it cannot run, complete it immediately"""
        try:
            self.timelines.play(steps, on_end, name)
        except TimelineError as e:
            self.logger.warning(f"⚠️ Timeline '{name}' could not run: {e} - completing immediately")
            on_end()
        except Exception as e:
            self.logger.error(f"Timeline '{name}' failed to start - completing immediately", exception=e)
            on_end()

    def _pulse_haptic(self, duration_ms: int) -> None:
        try:
            self.haptic.pulse(duration_ms)
        except PeripheralError as e:
            self.logger.debug(f"Haptic pulse skipped: {e}")
        except Exception as e:
            self.logger.warning(f"Haptic pulse failed: {e}")

    def _set_state(self, new_state: LifecycleState) -> None:
        if new_state is self.state:
            return
        self.logger.info(f"State transition: {self.state.name} → {new_state.name}")
        self.state = new_state
