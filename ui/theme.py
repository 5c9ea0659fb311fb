"""
UI Theme - Orrery overlay style

Colors, fonts and drawing helpers for the panels, buttons and sliders
layered over the 3D view.
"""

import pygame
from typing import Dict, Optional, Tuple
from dataclasses import dataclass


RGB = Tuple[int, int, int]


class Colors:
    """
    Overlay palette: dark translucent panels over a black sky,
    warm accent taken from the central star.
    """

    BG_DARK = (0, 0, 0)
    BG_PANEL = (18, 18, 28)
    BG_PANEL_LIGHT = (34, 34, 50)
    PANEL_ALPHA = 200

    FG_PRIMARY = (240, 240, 240)
    FG_DIM = (170, 170, 185)

    ACCENT = (255, 170, 0)        # sun glow
    ACCENT_LIGHT = (255, 221, 0)  # sun disk

    BUTTON_NORMAL = FG_PRIMARY
    BUTTON_HOVER = ACCENT_LIGHT

    BORDER_NORMAL = (120, 120, 140)
    BORDER_FOCUS = ACCENT

    SLIDER_TRACK = (70, 70, 90)
    SLIDER_FILL = ACCENT
    SLIDER_KNOB = FG_PRIMARY


@dataclass
class FontConfig:
    """Preferred family and point sizes per role"""
    family: str = "Segoe UI"
    size_title: int = 22
    size_normal: int = 16
    size_small: int = 13


class Fonts:
    """
    Lazily loaded font roles: 'title', 'normal', 'small'.

    Tries the configured family first, then common sans faces, then
    pygame's built-in font.
    """

    _fonts: Dict[str, pygame.font.Font] = {}
    _config = FontConfig()
    _fallbacks = ("Helvetica", "Arial", "sans")

    @classmethod
    def initialize(cls, config: Optional[FontConfig] = None):
        if config is not None:
            cls._config = config
        pygame.font.init()

        cfg = cls._config
        sizes = {'title': cfg.size_title, 'normal': cfg.size_normal, 'small': cfg.size_small}
        for family in (cfg.family,) + cls._fallbacks:
            try:
                cls._fonts = {role: pygame.font.SysFont(family, size, bold=(role == 'title'))
                              for role, size in sizes.items()}
                return
            except (pygame.error, OSError):
                continue
        cls._fonts = {role: pygame.font.Font(None, size) for role, size in sizes.items()}

    @classmethod
    def get(cls, size: str = 'normal') -> pygame.font.Font:
        if not cls._fonts:
            cls.initialize()
        return cls._fonts.get(size, cls._fonts['normal'])

    @classmethod
    def title(cls) -> pygame.font.Font:
        return cls.get('title')

    @classmethod
    def normal(cls) -> pygame.font.Font:
        return cls.get('normal')

    @classmethod
    def small(cls) -> pygame.font.Font:
        return cls.get('small')


class Theme:
    """Palette, fonts and the two primitives every widget draws with."""

    def __init__(self):
        self.colors = Colors()
        self.fonts = Fonts()
        self.padding = 8
        self.margin = 12

    def draw_panel(self, surface: pygame.Surface, rect: pygame.Rect,
                   title: str = "", border: Optional[RGB] = None):
        """Translucent fill, 1px border, optional title in the top-left corner."""
        fill = pygame.Surface(rect.size, pygame.SRCALPHA)
        fill.fill((*self.colors.BG_PANEL, self.colors.PANEL_ALPHA))
        surface.blit(fill, rect.topleft)
        pygame.draw.rect(surface, border or self.colors.BORDER_NORMAL, rect, 1)

        if title:
            self.draw_text(surface, self.fonts.title(),
                           rect.x + self.margin, rect.y + self.padding,
                           title, self.colors.FG_PRIMARY)

    def draw_text(self, surface: pygame.Surface, font: pygame.font.Font,
                  x: int, y: int, text: str, color: RGB,
                  align: str = 'left'):
        """align: 'left', 'center' or 'right' relative to x"""
        rendered = font.render(text, True, color)
        if align == 'center':
            x -= rendered.get_width() // 2
        elif align == 'right':
            x -= rendered.get_width()
        surface.blit(rendered, (x, y))


_theme: Optional[Theme] = None


def get_theme() -> Theme:
    """Shared theme instance"""
    global _theme
    if _theme is None:
        _theme = Theme()
    return _theme
