"""
UI Components - overlay widgets

- Button: click-on-release button with hover highlight
- Panel:  translucent container with border and title
- Label:  single line of text
- Slider: horizontal range input snapped to a step
"""

import pygame
from typing import Optional, Callable, Tuple
from .theme import get_theme


class Button:
    """
    Push button. The callback fires on mouse release inside the button,
    so dragging off it cancels the click.
    """

    def __init__(self, x: int, y: int, width: int, height: int,
                 text: str, callback: Optional[Callable[[], None]] = None):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.callback = callback
        self.hovered = False
        self.pressed = False
        self.theme = get_theme()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if the event was consumed."""
        if getattr(event, 'button', None) != 1:
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and self.rect.collidepoint(event.pos):
            self.pressed = True
            return True

        if event.type == pygame.MOUSEBUTTONUP:
            was_pressed, self.pressed = self.pressed, False
            if was_pressed and self.rect.collidepoint(event.pos):
                if self.callback:
                    self.callback()
                return True

        return False

    def update(self, mouse_pos: Tuple[int, int]):
        self.hovered = self.rect.collidepoint(mouse_pos)

    def _style(self):
        """(background, text, border) for the current state"""
        c = self.theme.colors
        if self.pressed:
            return c.ACCENT, c.BG_DARK, c.ACCENT
        if self.hovered:
            return c.BG_PANEL_LIGHT, c.BUTTON_HOVER, c.BORDER_FOCUS
        return c.BG_PANEL, c.BUTTON_NORMAL, c.BORDER_NORMAL

    def draw(self, surface: pygame.Surface):
        bg, fg, border = self._style()
        pygame.draw.rect(surface, bg, self.rect, border_radius=6)
        pygame.draw.rect(surface, border, self.rect, 1, border_radius=6)

        font = self.theme.fonts.normal()
        self.theme.draw_text(surface, font, self.rect.centerx,
                             self.rect.centery - font.get_height() // 2,
                             self.text, fg, align='center')




class Panel:
    """Container panel with border and optional title"""

    def __init__(self, x: int, y: int, width: int, height: int,
                 title: str = ""):
        self.rect = pygame.Rect(x, y, width, height)
        self.title = title
        self.theme = get_theme()

    def draw(self, surface: pygame.Surface):
        self.theme.draw_panel(surface, self.rect, self.title)


class Label:
    """Static text label"""

    def __init__(self, x: int, y: int, text: str,
                 font_size: str = 'normal',
                 color: Optional[Tuple[int, int, int]] = None,
                 align: str = 'left'):
        self.x = x
        self.y = y
        self.text = text
        self.font_size = font_size
        self.color = color
        self.align = align
        self.theme = get_theme()

    def draw(self, surface: pygame.Surface):
        color = self.color if self.color else self.theme.colors.FG_PRIMARY
        font = self.theme.fonts.get(self.font_size)
        self.theme.draw_text(surface, font, self.x, self.y, self.text, color, self.align)

    def set_text(self, text: str):
        self.text = text


class Slider:
    """
    Horizontal range slider

    Value is snapped to `step` and clamped to [min_value, max_value].
    on_change(value) fires whenever user input changes the value.
    """

    def __init__(self, x: int, y: int, width: int, height: int,
                 min_value: float, max_value: float, step: float,
                 value: float,
                 on_change: Optional[Callable[[float], None]] = None):
        self.rect = pygame.Rect(x, y, width, height)
        self.min_value = min_value
        self.max_value = max_value
        self.step = step
        self.on_change = on_change
        self.dragging = False
        self.theme = get_theme()
        self.value = self._snap(value)

    def _snap(self, value: float) -> float:
        value = max(self.min_value, min(self.max_value, value))
        steps = round((value - self.min_value) / self.step)
        snapped = self.min_value + steps * self.step
        # keep float noise out of the displayed value
        return round(min(snapped, self.max_value), 10)

    @property
    def fraction(self) -> float:
        span = self.max_value - self.min_value
        return (self.value - self.min_value) / span if span > 0 else 0.0

    def value_at(self, x: int) -> float:
        """Slider value under screen x."""
        if self.rect.width <= 0:
            return self.min_value
        t = (x - self.rect.x) / self.rect.width
        t = max(0.0, min(1.0, t))
        return self._snap(self.min_value + t * (self.max_value - self.min_value))

    def set_value(self, value: float, notify: bool = False):
        new = self._snap(value)
        changed = new != self.value
        self.value = new
        if notify and changed and self.on_change:
            self.on_change(new)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Returns:
            True if event was consumed
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # generous vertical hit area around the thin track
            if self.rect.inflate(8, 10).collidepoint(event.pos):
                self.dragging = True
                self.set_value(self.value_at(event.pos[0]), notify=True)
                return True

        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.set_value(self.value_at(event.pos[0]), notify=True)
            return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.dragging:
                self.dragging = False
                return True

        return False

    def draw(self, surface: pygame.Surface):
        colors = self.theme.colors
        track = pygame.Rect(self.rect.x, self.rect.centery - 2, self.rect.width, 4)
        pygame.draw.rect(surface, colors.SLIDER_TRACK, track, border_radius=2)

        fill = track.copy()
        fill.width = int(track.width * self.fraction)
        if fill.width > 0:
            pygame.draw.rect(surface, colors.SLIDER_FILL, fill, border_radius=2)

        knob_x = self.rect.x + int(self.rect.width * self.fraction)
        pygame.draw.circle(surface, colors.SLIDER_KNOB, (knob_x, self.rect.centery),
                           self.rect.height // 2)
