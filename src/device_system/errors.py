"""
Device system exceptions
"""


class PeripheralError(Exception):
    """A peripheral (haptics, display state, window) call failed"""
