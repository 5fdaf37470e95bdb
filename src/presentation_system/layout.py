"""
Layout geometry - where the logo and brand text sit on screen
"""

from dataclasses import dataclass
from typing import Tuple

from .config import PresentationConfig


@dataclass(frozen=True)
class LayoutGeometry:
    """
    One-time layout computed once the window size is known.

    The logo is centered at scale 1.0 and scales around its top-left corner, so
    moving it to the corner is a plain (corner_dx, corner_dy) offset. The brand
    text sits right of the small corner logo, vertically centered on it.
    """
    window_size: Tuple[int, int]
    logo_rect: Tuple[int, int, int, int]   # left, top, width, height
    corner_offset: Tuple[float, float]
    small_scale: float
    text_position: Tuple[float, float]

    @property
    def logo_left(self) -> int:
        return self.logo_rect[0]

    @property
    def logo_top(self) -> int:
        return self.logo_rect[1]


def compute_layout(window_size: Tuple[int, int],
                   logo_size: Tuple[int, int],
                   text_size: Tuple[int, int],
                   config: PresentationConfig) -> LayoutGeometry:
    """
    Compute layout for a window.

    Args:
        window_size: (width, height) of the drawable surface
        logo_size: (width, height) of the logo at scale 1.0
        text_size: (width, height) of the rendered brand text
        config: Presentation config (margins, gap, small scale)

    Returns:
        LayoutGeometry for the intro/exit timelines and the renderer

    Raises:
        ValueError: If the window or logo has no area
    """
    window_w, window_h = window_size
    logo_w, logo_h = logo_size
    _text_w, text_h = text_size

    if window_w <= 0 or window_h <= 0:
        raise ValueError(f"Window has no area: {window_size}")
    if logo_w <= 0 or logo_h <= 0:
        raise ValueError(f"Logo has no area: {logo_size}")

    left = (window_w - logo_w) // 2
    top = (window_h - logo_h) // 2

    margin = config.corner_margin_px
    corner_dx = float(margin - left)
    corner_dy = float(margin - top)

    # Text goes right of the scaled logo in its corner position
    small_w = logo_w * config.small_scale
    small_h = logo_h * config.small_scale
    text_x = left + corner_dx + small_w + config.text_gap_px
    text_y = top + corner_dy + max(0.0, (small_h - text_h) / 2.0)

    # Keep it on screen with a minimal margin
    text_x = max(float(margin), text_x)
    text_y = max(float(margin), text_y)

    return LayoutGeometry(
        window_size=(window_w, window_h),
        logo_rect=(left, top, logo_w, logo_h),
        corner_offset=(corner_dx, corner_dy),
        small_scale=config.small_scale,
        text_position=(text_x, text_y),
    )
