"""
Timeline system exceptions
"""


class TimelineError(Exception):
    """A stage list cannot be run by the timeline player"""
