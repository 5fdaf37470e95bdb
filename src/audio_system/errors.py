"""
Audio system exceptions
"""


class AudioError(Exception):
    """Base class for audio collaborator failures"""


class ClipUnavailableError(AudioError):
    """The clip resource does not exist or cannot be opened/decoded"""

    def __init__(self, clip_id: str, reason: str = ""):
        self.clip_id = clip_id
        self.reason = reason
        message = f"Clip '{clip_id}' unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PlaybackStartError(AudioError):
    """The clip was opened but playback could not be started"""
