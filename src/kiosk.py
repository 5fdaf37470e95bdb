#!/usr/bin/env python3
"""
Calm Guide Kiosk

Main application for the calm guide kiosk presentation. Shows the branded
intro, plays the greeting and then loops the narrated guidance in the chosen
language until a long press starts the exit flow.

Gestures (anywhere on screen):
- short tap: switch Hungarian ⇄ English and restart the narration
- long press (2s): closing clip + exit animation, then the app exits
"""

import os
import sys

# Configure SDL before pygame imports
os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')
os.environ.setdefault('SDL_VIDEO_ALLOW_SCREENSAVER', '0')

import argparse
import atexit
import logging
import signal
from pathlib import Path
from typing import Optional, Sequence

# Global logger reference for signal handlers
_global_logger = None


def emergency_flush_and_log(sig=None, frame=None):
    """Emergency handler - flush logs before the process dies"""
    if _global_logger:
        try:
            if sig:
                _global_logger.critical(f"⚠️  SIGNAL RECEIVED: {sig} - Process terminating")
            _global_logger.flush()
        except (OSError, ValueError):
            pass

    if sig == signal.SIGINT:
        sys.exit(0)
    elif sig:
        sys.exit(1)


# Add src to path when run as a script
sys.path.insert(0, str(Path(__file__).parent))

try:
    import pygame

    from audio_system import AudioSequencer, ClipCatalog, MockAudioPlayer
    from audio_system.pygame_audio_player import PygameAudioPlayer
    from device_system import PeripheralError
    from device_system.haptics import PygameRumbleHaptic
    from device_system.host_shell import PygameHostShell
    from device_system.pygame_display import PygameDisplay
    from gesture_system import GestureClassifier
    from gesture_system.pygame_press_source import PygamePressSource
    from presentation_system import KioskConfig, SequenceController
    from presentation_system.presentation_manager import PresentationManager
    from timeline_system import SceneState, TimelinePlayer
    from utils import HybridLogger, TimerScheduler
except ImportError as e:
    import traceback
    print(f"❌ Import error: {e}")
    print("\nFull traceback:")
    traceback.print_exc()
    print("\nMake sure required libraries are installed (pip install -e .)")
    sys.exit(1)


LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Calm guide kiosk presentation")
    parser.add_argument("--windowed", action="store_true",
                        help="run in a window instead of fullscreen")
    parser.add_argument("--mock-audio", action="store_true",
                        help="simulate clips instead of using the audio device")
    parser.add_argument("--sounds-dir", default=None,
                        help="folder holding the i1all/i2hun/... clip files")
    parser.add_argument("--logo", default=None, help="logo image path")
    parser.add_argument("--log-dir", default=None, help="folder for log files")
    parser.add_argument("--log-level", choices=sorted(LOG_LEVELS), default="info",
                        help="log level for the presentation components")
    return parser.parse_args(argv)


def create_kiosk_config(args: argparse.Namespace) -> KioskConfig:
    """Create configuration from defaults and command line overrides"""
    config = KioskConfig()
    config.fullscreen = not args.windowed
    config.mock_audio = args.mock_audio
    if args.sounds_dir:
        config.sounds_folder = args.sounds_dir
    if args.logo:
        config.logo_path = args.logo
    if args.log_dir:
        config.log_dir = args.log_dir
    return config


def create_presentation_system(config: KioskConfig, kiosk_logger, level: int = logging.INFO) -> PresentationManager:
    """
    Create and wire the complete presentation system.

    Args:
        config: KioskConfig instance with all system configuration
        kiosk_logger: ClassLogger instance for logging initialization steps
        level: Log level for the component loggers

    Returns:
        PresentationManager: Configured manager ready to run
    """
    config.validate()

    # Create class loggers for components
    manager_logger = kiosk_logger.create_class_logger("PresentationManager", level)
    controller_logger = kiosk_logger.create_class_logger("SequenceController", level)
    scheduler_logger = kiosk_logger.create_class_logger("TimerScheduler", logging.INFO)
    audio_logger = kiosk_logger.create_class_logger("Audio", level)
    timeline_logger = kiosk_logger.create_class_logger("TimelinePlayer", level)
    gesture_logger = kiosk_logger.create_class_logger("Gestures", level)
    device_logger = kiosk_logger.create_class_logger("Devices", level)

    try:
        pygame.init()

        # 1. Display (window, logo, brand text)
        display = PygameDisplay(config, device_logger)
        display.setup()

        # 2. Peripherals
        haptic = PygameRumbleHaptic(device_logger)
        haptic.setup()
        host_shell = PygameHostShell(device_logger)

        # 3. Timing, audio, animation
        scheduler = TimerScheduler(scheduler_logger)

        if config.mock_audio:
            kiosk_logger.info("🔇 Using MockAudioPlayer (audio hardware disabled)")
            audio_player = MockAudioPlayer(audio_logger)
        else:
            audio_player = PygameAudioPlayer(config.sounds_folder, audio_logger)
        sequencer = AudioSequencer(audio_player, audio_logger)

        scene = SceneState(background=config.presentation.white)
        timelines = TimelinePlayer(scene, timeline_logger)

        # 4. State machine and gestures
        controller = SequenceController(
            scheduler=scheduler,
            audio=sequencer,
            timelines=timelines,
            catalog=ClipCatalog(),
            haptic=haptic,
            host_shell=host_shell,
            logger=controller_logger,
            config=config.presentation
        )
        classifier = GestureClassifier(
            scheduler, controller, controller, gesture_logger,
            long_press_ms=config.presentation.long_press_ms
        )

        manager = PresentationManager(
            controller=controller,
            classifier=classifier,
            press_source=PygamePressSource(gesture_logger),
            scheduler=scheduler,
            audio=sequencer,
            audio_player=audio_player,
            timelines=timelines,
            scene=scene,
            display=display,
            host_shell=host_shell,
            logger=manager_logger,
            frame_duration_ms=config.frame_duration_ms,
            health_log_interval_ms=config.health_log_interval_ms
        )

        kiosk_logger.info("Presentation system initialized successfully")
        return manager

    except PeripheralError as e:
        kiosk_logger.error(f"Display unavailable: {e}", exception=e)
        raise
    except Exception as e:
        kiosk_logger.error(f"Failed to initialize presentation system: {e}", exception=e)
        raise


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main function - sets up and runs the kiosk.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    config = create_kiosk_config(args)

    # Initialize main logger first
    main_logger = HybridLogger("CalmGuideKiosk", log_dir=config.log_dir)
    kiosk_logger = main_logger.get_class_logger("Kiosk", logging.INFO)

    # Set global logger for signal handlers
    global _global_logger
    _global_logger = kiosk_logger

    signal.signal(signal.SIGTERM, emergency_flush_and_log)
    signal.signal(signal.SIGINT, emergency_flush_and_log)
    if hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, emergency_flush_and_log)
    atexit.register(emergency_flush_and_log)

    kiosk_logger.info("🌿 CALM GUIDE KIOSK")
    kiosk_logger.info(f"Display: {'fullscreen' if config.fullscreen else f'window {config.window_size}'}, "
                      f"{config.frame_duration_ms}ms frame duration ({config.target_fps:.1f} FPS)")
    kiosk_logger.info(f"Audio: {'mock' if config.mock_audio else config.sounds_folder}")
    kiosk_logger.info(f"Log file: {main_logger.log_file}")

    exit_code = 0
    try:
        manager = create_presentation_system(config, kiosk_logger, LOG_LEVELS[args.log_level])

        kiosk_logger.info("🚀 Starting presentation...")
        manager.run()

    except KeyboardInterrupt:
        kiosk_logger.info("⏹️  Kiosk stopped by user")
    except Exception as e:
        kiosk_logger.error(f"Kiosk error: {e}", exception=e)
        exit_code = 1
    finally:
        pygame.quit()
        kiosk_logger.info("✅ Kiosk shut down")
        kiosk_logger.flush()
        main_logger.cleanup()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
