"""
Presentation manager - the single-threaded frame loop
"""

import time
from typing import TYPE_CHECKING

import psutil
import pygame

from utils import OnceInMs

if TYPE_CHECKING:
    from audio_system.audio_sequencer import AudioSequencer
    from audio_system.interfaces import IAudioPlayer
    from device_system.host_shell import PygameHostShell
    from device_system.pygame_display import PygameDisplay
    from gesture_system.gesture_classifier import GestureClassifier
    from gesture_system.pygame_press_source import PygamePressSource
    from timeline_system.interfaces import ITimelinePlayer
    from timeline_system.scene import SceneState
    from utils import ClassLogger, TimerScheduler
    from .sequence_controller import SequenceController


class PresentationManager:
    """
    Main presentation manager that drives everything from one thread.

    Responsibilities:
    - Pump window/touch events into the gesture classifier
    - Fire due timers, poll audio, advance the running timeline
    - Render the scene and maintain consistent frame timing
    - Forward host lifecycle (window hidden, quit) to the controller
    """

    def __init__(self,
                 controller: 'SequenceController',
                 classifier: 'GestureClassifier',
                 press_source: 'PygamePressSource',
                 scheduler: 'TimerScheduler',
                 audio: 'AudioSequencer',
                 audio_player: 'IAudioPlayer',
                 timelines: 'ITimelinePlayer',
                 scene: 'SceneState',
                 display: 'PygameDisplay',
                 host_shell: 'PygameHostShell',
                 logger: 'ClassLogger',
                 frame_duration_ms: int = 20,
                 health_log_interval_ms: int = 60000):
        """
        Initialize the presentation manager.

        Args:
            controller: Presentation state machine
            classifier: Press → gesture classifier
            press_source: pygame event → press translation
            scheduler: Timer scheduler ticked every frame
            audio: Audio sequencer polled every frame
            audio_player: Audio device, released on stop
            timelines: Timeline player advanced every frame
            scene: Scene drawn every frame
            display: Window and renderer
            host_shell: Window/process control (exit flag)
            logger: Logger for debugging and monitoring
            frame_duration_ms: Target frame duration in milliseconds
            health_log_interval_ms: Interval between process health log lines
        """
        self.controller = controller
        self.classifier = classifier
        self.press_source = press_source
        self.scheduler = scheduler
        self.audio = audio
        self.audio_player = audio_player
        self.timelines = timelines
        self.scene = scene
        self.display = display
        self.host_shell = host_shell
        self.logger = logger
        self.target_frame_duration = frame_duration_ms / 1000.0
        self.running = False

        # Health monitoring using OnceInMs
        self._health_monitor = OnceInMs(health_log_interval_ms)
        self._process = psutil.Process()

        self.logger.info(f"PresentationManager initialized: {frame_duration_ms}ms frame duration")

    def start(self) -> None:
        """Compute layout and start the presentation"""
        layout = self.display.compute_layout(self.controller.config)
        self.controller.start(layout)
        self.running = True

    def run(self) -> None:
        """
        Run the frame loop with automatic frame duration limiting.

        Returns when the controller terminated the presentation or the window
        was closed.
        """
        self.start()
        self.logger.info(f"Starting frame loop with {int(self.target_frame_duration*1000)}ms frame duration")

        try:
            while self.running:
                frame_start = time.time()

                self.update()

                # Frame duration limiting
                frame_duration = time.time() - frame_start
                sleep_time = self.target_frame_duration - frame_duration

                if sleep_time > 0:
                    time.sleep(sleep_time)

        except KeyboardInterrupt:
            self.logger.info("Presentation stopped by user (Ctrl+C)")
            self.logger.flush()
        except Exception as e:
            self.logger.error(f"Frame loop error: {e}", exception=e)
            raise
        finally:
            self.stop()

    def update(self) -> None:
        """One frame: input, timers, audio, animation, render"""
        # 0. Log process health (once per interval)
        if self._health_monitor.should_execute():
            self._log_process_health()

        # 1. Window and touch events
        if not self.host_shell.window_closed:
            for event in pygame.event.get():
                self._handle_event(event)

        # 2. Due timers (steps, long press, process exit)
        self.scheduler.tick()

        # 3. Audio completion
        self.audio.update()

        # 4. Animation
        self.timelines.update()

        # 5. Render
        if not self.host_shell.window_closed:
            self.display.render(self.scene)

        if self.host_shell.exit_requested:
            self.running = False

    def stop(self) -> None:
        """Stop the presentation and clean up resources."""
        self.running = False
        self.classifier.reset()
        self.controller.shutdown()
        self.audio_player.cleanup()
        self.logger.info("Presentation stopped")

    def _handle_event(self, event: 'pygame.event.Event') -> None:
        if event.type == pygame.QUIT:
            self.logger.info("Window closed by host")
            self.running = False
            return

        if event.type in (pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN):
            self.classifier.reset()
            self.controller.suspend()
            return

        press = self.press_source.translate(event)
        if press is not None:
            self.classifier.handle(press)

    def _log_process_health(self) -> None:
        """Log current memory and CPU usage (process and system)"""
        try:
            process_mb = self._process.memory_info().rss / 1024 / 1024
            process_cpu_percent = self._process.cpu_percent(interval=None)

            sys_mem = psutil.virtual_memory()
            sys_used_mb = sys_mem.used / 1024 / 1024
            sys_total_mb = sys_mem.total / 1024 / 1024
            sys_cpu_percent = psutil.cpu_percent(interval=None)

            self.logger.info(
                f"💾 Memory - Process: {process_mb:.1f}MB | "
                f"System: {sys_used_mb:.0f}/{sys_total_mb:.0f}MB ({sys_mem.percent:.1f}%) | "
                f"⚙️ CPU - Process: {process_cpu_percent:.1f}% | System: {sys_cpu_percent:.1f}% | "
                f"State: {self.controller.state.name}"
            )
        except Exception as e:
            self.logger.warning(f"Failed to log system usage: {e}")
