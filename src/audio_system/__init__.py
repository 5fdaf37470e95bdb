"""
Audio System Module

Provides the clip catalog, the exclusive-slot audio sequencer and the
pygame/mock audio players for the kiosk presentation.
"""

from .clip_catalog import Language, ClipRole, ClipCatalog, STEP_ROLES
from .errors import AudioError, ClipUnavailableError, PlaybackStartError
from .interfaces import IAudioPlayer, IPlayable
from .audio_sequencer import AudioSequencer
from .mock_audio_player import MockAudioPlayer

__all__ = [
    'Language',
    'ClipRole',
    'ClipCatalog',
    'STEP_ROLES',
    'AudioError',
    'ClipUnavailableError',
    'PlaybackStartError',
    'IAudioPlayer',
    'IPlayable',
    'AudioSequencer',
    'MockAudioPlayer'
]
