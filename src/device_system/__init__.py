"""
Device System - kiosk peripherals (haptics) and the host window/process shell
"""

from .errors import PeripheralError
from .interfaces import IHaptic, IHostShell

__all__ = [
    'PeripheralError',
    'IHaptic',
    'IHostShell'
]
