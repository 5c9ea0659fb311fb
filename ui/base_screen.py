"""
Base Screen Class

A screen receives, once per frame and in this order:
    handle_input(events) -> 'QUIT' | None
    update(dt)
    render(surface)
"""

import pygame
from abc import ABC, abstractmethod
from typing import List, Optional
from .theme import get_theme


class BaseScreen(ABC):

    def __init__(self, screen_name: str):
        self.screen_name = screen_name
        self.active = False
        self.theme = get_theme()

    # ── Lifecycle ────────────────────────────────────────────────────────

    def on_enter(self):
        self.active = True

    def on_exit(self):
        self.active = False

    def on_resize(self, width: int, height: int):
        """Window surface changed size (width/height may be 0)."""

    # ── Per frame ────────────────────────────────────────────────────────

    @abstractmethod
    def handle_input(self, events: List[pygame.event.Event]) -> Optional[str]:
        ...

    @abstractmethod
    def update(self, dt: float):
        ...

    @abstractmethod
    def render(self, surface: pygame.Surface):
        ...

    def draw_footer(self, surface: pygame.Surface, rect: pygame.Rect, hints: str):
        """One line of key hints, e.g. "[SPACE] Play/Pause  [L] Labels"."""
        self.theme.draw_text(surface, self.theme.fonts.small(),
                             rect.x + 12, rect.y + 8, hints, self.theme.colors.FG_DIM)
