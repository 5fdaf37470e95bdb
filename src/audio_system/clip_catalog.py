"""
Clip catalog - fixed mapping from (language, role) to clip identifier
"""

import enum
from typing import Dict, List, Tuple


class Language(enum.Enum):
    """Presentation language - selects the clip set"""
    HUNGARIAN = "hun"
    ENGLISH = "eng"

    def toggled(self) -> 'Language':
        """Get the other language"""
        return Language.ENGLISH if self is Language.HUNGARIAN else Language.HUNGARIAN


class ClipRole(enum.Enum):
    """Role of a clip within the presentation"""
    GREETING = "greeting"
    STEP_0 = "step0"
    STEP_1 = "step1"
    STEP_2 = "step2"
    CLOSING = "closing"


# Main loop playlist order
STEP_ROLES: Tuple[ClipRole, ...] = (ClipRole.STEP_0, ClipRole.STEP_1, ClipRole.STEP_2)


class ClipCatalog:
    """
    Maps (Language, ClipRole) to clip identifiers.

    Clip identifiers are file stems inside the sounds folder; the audio player
    resolves the extension. The greeting clip is shared by both languages.

    Usage:
        catalog = ClipCatalog()
        catalog.clip_for(Language.ENGLISH, ClipRole.CLOSING)   # "i5eng"
        catalog.playlist(Language.HUNGARIAN)                   # ["i2hun", "i3hun", "i4hun"]
    """

    DEFAULT_CLIPS: Dict[Tuple[Language, ClipRole], str] = {
        (Language.HUNGARIAN, ClipRole.GREETING): "i1all",
        (Language.ENGLISH, ClipRole.GREETING): "i1all",
        (Language.HUNGARIAN, ClipRole.STEP_0): "i2hun",
        (Language.HUNGARIAN, ClipRole.STEP_1): "i3hun",
        (Language.HUNGARIAN, ClipRole.STEP_2): "i4hun",
        (Language.ENGLISH, ClipRole.STEP_0): "i2eng",
        (Language.ENGLISH, ClipRole.STEP_1): "i3eng",
        (Language.ENGLISH, ClipRole.STEP_2): "i4eng",
        (Language.HUNGARIAN, ClipRole.CLOSING): "i5hun",
        (Language.ENGLISH, ClipRole.CLOSING): "i5eng",
    }

    def __init__(self, clips: Dict[Tuple[Language, ClipRole], str] = None):
        """
        Initialize catalog.

        Args:
            clips: Optional full mapping overriding DEFAULT_CLIPS

        Raises:
            ValueError: If any (language, role) pair has no clip
        """
        self._clips = dict(clips if clips is not None else self.DEFAULT_CLIPS)

        missing = [
            f"{language.name}/{role.name}"
            for language in Language
            for role in ClipRole
            if (language, role) not in self._clips
        ]
        if missing:
            raise ValueError(f"Clip catalog is missing entries: {missing}")

    def clip_for(self, language: Language, role: ClipRole) -> str:
        """Get the clip identifier for a language and role"""
        return self._clips[(language, role)]

    def playlist(self, language: Language) -> List[str]:
        """Get the main loop clips for a language, in step order"""
        return [self._clips[(language, role)] for role in STEP_ROLES]

    def all_clip_ids(self) -> List[str]:
        """Get every distinct clip identifier (sorted)"""
        return sorted(set(self._clips.values()))
