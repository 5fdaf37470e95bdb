"""
Pygame display - kiosk window and scene rendering
"""

import os
from typing import Optional, Tuple

import pygame

from presentation_system.config import KioskConfig
from presentation_system.layout import LayoutGeometry, compute_layout
from timeline_system.scene import SceneState

from .errors import PeripheralError


class PygameDisplay:
    """
    Owns the presentation window and draws the SceneState every frame.

    The window keeps the screen awake (screensaver disabled) for as long as it
    is open. Missing assets never stop the kiosk: a missing logo is replaced by
    a plain placeholder and the run continues.
    """

    PLACEHOLDER_LOGO_SIZE = (240, 240)

    def __init__(self, config: KioskConfig, logger):
        """
        Args:
            config: Kiosk config (window, logo, brand text)
            logger: ClassLogger instance for logging
        """
        self.config = config
        self.logger = logger
        self.surface: Optional['pygame.Surface'] = None
        self.layout: Optional[LayoutGeometry] = None

        self._logo: Optional['pygame.Surface'] = None
        self._text: Optional['pygame.Surface'] = None
        self._scaled_logo: Optional['pygame.Surface'] = None
        self._scaled_for: Optional[float] = None

    def setup(self) -> None:
        """
        Open the window and load assets.

        Raises:
            PeripheralError: If no display surface can be created
        """
        try:
            pygame.display.init()
            pygame.font.init()
            pygame.display.set_allow_screensaver(False)

            if self.config.fullscreen:
                self.surface = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
                pygame.mouse.set_visible(False)
            else:
                self.surface = pygame.display.set_mode(self.config.window_size)
            pygame.display.set_caption("Calm Guide")
        except pygame.error as e:
            raise PeripheralError(f"Cannot open display: {e}") from e

        self._logo = self._load_logo()
        font = pygame.font.Font(None, self.config.font_size)
        self._text = font.render(self.config.brand_text, True, (255, 255, 255))

        self.logger.info(f"🖥️ Display ready: {self.surface.get_size()}")

    def compute_layout(self, presentation_config) -> Optional[LayoutGeometry]:
        """
        Compute the one-time layout for the current window.

        Returns:
            LayoutGeometry, or None if geometry is unavailable
        """
        if self.surface is None or self._logo is None or self._text is None:
            self.logger.warning("Layout requested before display setup")
            return None
        try:
            self.layout = compute_layout(
                self.surface.get_size(), self._logo.get_size(), self._text.get_size(), presentation_config
            )
        except ValueError as e:
            self.logger.warning(f"⚠️ Layout unavailable: {e}")
            self.layout = None
        return self.layout

    def render(self, scene: SceneState) -> None:
        """Draw one frame of the scene"""
        if self.surface is None:
            return

        self.surface.fill(scene.background.rgb)

        if self.layout is not None and self._logo is not None:
            left, top, _w, _h = self.layout.logo_rect
            self._blit_alpha(
                self._logo_at_scale(scene.logo_scale),
                (left + scene.logo_offset_x, top + scene.logo_offset_y),
                scene.logo_alpha
            )
            if self._text is not None:
                self._blit_alpha(self._text, self.layout.text_position, scene.text_alpha)

        pygame.display.flip()

    def window_size(self) -> Tuple[int, int]:
        if self.surface is None:
            return self.config.window_size
        return self.surface.get_size()

    def _blit_alpha(self, image: 'pygame.Surface', position: Tuple[float, float], alpha: float) -> None:
        if alpha <= 0.0:
            return
        image.set_alpha(int(round(min(1.0, alpha) * 255)))
        self.surface.blit(image, (int(position[0]), int(position[1])))

    def _logo_at_scale(self, scale: float) -> 'pygame.Surface':
        """Scaled copy of the logo, cached for the last scale used"""
        key = round(scale, 3)
        if key == 1.0:
            return self._logo
        if self._scaled_for != key:
            width, height = self._logo.get_size()
            size = (max(1, int(width * key)), max(1, int(height * key)))
            self._scaled_logo = pygame.transform.smoothscale(self._logo, size)
            self._scaled_for = key
        return self._scaled_logo

    def _load_logo(self) -> 'pygame.Surface':
        path = self.config.logo_path
        if os.path.exists(path):
            try:
                return pygame.image.load(path).convert_alpha()
            except pygame.error as e:
                self.logger.warning(f"⚠️ Failed to load logo {path}: {e}")
        else:
            self.logger.warning(f"⚠️ Logo not found: {path} - using placeholder")

        placeholder = pygame.Surface(self.PLACEHOLDER_LOGO_SIZE, pygame.SRCALPHA)
        radius = min(self.PLACEHOLDER_LOGO_SIZE) // 2
        pygame.draw.circle(placeholder, self.config.presentation.dark_blue.rgb, (radius, radius), radius)
        return placeholder
