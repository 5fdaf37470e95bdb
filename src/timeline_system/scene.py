"""
Scene model - the animatable values the presentation renders
"""

import enum
from dataclasses import dataclass, field
from typing import Union

from .color import Color


class SceneProperty(enum.Enum):
    """Animatable scene properties"""
    LOGO_ALPHA = "logo_alpha"
    LOGO_OFFSET_X = "logo_offset_x"
    LOGO_OFFSET_Y = "logo_offset_y"
    LOGO_SCALE = "logo_scale"
    TEXT_ALPHA = "text_alpha"
    BACKGROUND = "background"


SceneValue = Union[float, Color]


@dataclass
class SceneState:
    """
    Current visual state of the presentation.

    The logo is drawn at its centered layout position plus (offset_x, offset_y),
    scaled around its top-left corner. Alphas are 0.0-1.0.
    """
    logo_alpha: float = 0.0
    logo_offset_x: float = 0.0
    logo_offset_y: float = 0.0
    logo_scale: float = 1.0
    text_alpha: float = 0.0
    background: Color = field(default_factory=lambda: Color(255, 255, 255))

    def get(self, prop: SceneProperty) -> SceneValue:
        """Read one property"""
        return getattr(self, prop.value)

    def set(self, prop: SceneProperty, value: SceneValue) -> None:
        """Write one property (background values are coerced to Color)"""
        if prop is SceneProperty.BACKGROUND:
            value = Color(int(value))
        else:
            value = float(value)
        setattr(self, prop.value, value)
