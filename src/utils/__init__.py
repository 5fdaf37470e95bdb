"""
Utilities package - Logging, timing and scheduling shared by the kiosk
"""

from .hybrid_logger import HybridLogger, ClassLogger, ColoredFormatter
from .once_in_ms import OnceInMs
from .timer_scheduler import TimerScheduler, TimerHandle, monotonic_ms

__all__ = [
    'HybridLogger',
    'ClassLogger',
    'ColoredFormatter',
    'OnceInMs',
    'TimerScheduler',
    'TimerHandle',
    'monotonic_ms'
]
