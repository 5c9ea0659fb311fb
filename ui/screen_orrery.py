"""
Orrery Screen — the 3D star system view

Controls
--------
  Drag mouse          Orbit camera around the star
  Scroll              Zoom
  Space               Play / pause
  L                   Toggle labels
  S                   Toggle settings panel (spin-rate sliders)
  ESC                 Close settings, or quit
"""

import pygame
from typing import Dict, Optional

from .base_screen import BaseScreen
from .components import Button, Label, Panel, Slider
from game.session import OrrerySession
from rendering.scene_renderer import SceneRenderer


_SETTINGS_W   = 300
_SLIDER_ROW_H = 44


class OrreryScreen(BaseScreen):
    """Star system view with playback button, labels and settings panel."""

    def __init__(self, session: OrrerySession):
        super().__init__("ORRERY")
        self.session = session
        cfg = session.config
        self.renderer = SceneRenderer(star_count=cfg.star_count,
                                      starfield_extent=cfg.starfield_extent,
                                      compass_distance=cfg.compass_distance,
                                      seed=cfg.seed)
        self._quit = False
        self._create_widgets()

    # -----------------------------------------------------------------------
    # Setup
    # -----------------------------------------------------------------------

    def _create_widgets(self):
        W, H = self.session.viewport.width, self.session.viewport.height
        self.play_button = Button(20, H - 60, 120, 36, self.session.playback.label,
                                  callback=self._toggle_play)
        self.settings_button = Button(W - 140, 20, 120, 36, "SETTINGS",
                                      callback=self._open_settings)
        self._layout_settings(W, H)

    def _layout_settings(self, W: int, H: int):
        cfg = self.session.config
        bodies = self.session.system.bodies
        height = 70 + _SLIDER_ROW_H * len(bodies)
        x = max(0, W - _SETTINGS_W - 20)
        y = 70
        self.settings_panel = Panel(x, y, _SETTINGS_W, height, "Spin Rates")
        self.close_button = Button(x + _SETTINGS_W - 40, y + 8, 30, 28, "X",
                                   callback=self._close_settings)

        self.sliders: Dict[str, Slider] = {}
        self.value_labels: Dict[str, Label] = {}
        self.name_labels: Dict[str, Label] = {}
        row_y = y + 50
        for body in bodies:
            self.name_labels[body.name] = Label(x + 14, row_y, body.name, 'small')
            self.value_labels[body.name] = Label(x + _SETTINGS_W - 14, row_y,
                                                 f"{body.spin_rate:.3f}", 'small',
                                                 align='right')
            self.sliders[body.name] = Slider(
                x + 14, row_y + 18, _SETTINGS_W - 28, 14,
                cfg.slider_min, cfg.slider_max, cfg.slider_step, body.spin_rate,
                on_change=lambda v, name=body.name: self._on_spin_change(name, v))
            row_y += _SLIDER_ROW_H

    def on_resize(self, width: int, height: int):
        self.session.resize(width, height)
        self.play_button.rect.topleft = (20, height - 60)
        self.settings_button.rect.topleft = (width - 140, 20)
        values = {name: s.value for name, s in self.sliders.items()}
        self._layout_settings(width, height)
        for name, value in values.items():
            self.sliders[name].set_value(value)
            self.value_labels[name].set_text(f"{value:.3f}")

    # -----------------------------------------------------------------------
    # Callbacks
    # -----------------------------------------------------------------------

    def _toggle_play(self):
        self.session.toggle_playback()
        self.play_button.text = self.session.playback.label

    def _open_settings(self):
        self.session.state.settings_open = True

    def _close_settings(self):
        self.session.state.settings_open = False

    def _on_spin_change(self, name: str, value: float):
        self.session.set_spin_rate(name, value)
        self.value_labels[name].set_text(f"{value:.3f}")

    # -----------------------------------------------------------------------
    # Input
    # -----------------------------------------------------------------------

    def _widgets(self):
        yield self.play_button
        yield self.settings_button
        if self.session.state.settings_open:
            yield self.close_button
            yield from self.sliders.values()

    def handle_input(self, events) -> Optional[str]:
        mp = pygame.mouse.get_pos()
        for btn in (self.play_button, self.settings_button, self.close_button):
            btn.update(mp)

        controls = self.session.controls
        state = self.session.state

        for event in events:
            if event.type == pygame.KEYDOWN:
                k = event.key
                if k == pygame.K_ESCAPE:
                    if state.settings_open:
                        self._close_settings()
                    else:
                        self._quit = True
                elif k == pygame.K_SPACE: self._toggle_play()
                elif k == pygame.K_l: state.show_labels = not state.show_labels
                elif k == pygame.K_s: state.settings_open = not state.settings_open

            elif event.type == pygame.MOUSEWHEEL:
                controls.wheel(event.y)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                consumed = any(w.handle_event(event) for w in list(self._widgets()))
                if not consumed and not (state.settings_open
                                         and self.settings_panel.rect.collidepoint(event.pos)):
                    controls.begin_drag(event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                for w in list(self._widgets()):
                    w.handle_event(event)
                controls.end_drag()

            elif event.type == pygame.MOUSEMOTION:
                handled = any(w.handle_event(event) for w in self.sliders.values()
                              if state.settings_open)
                if not handled:
                    controls.drag(event.pos)

        if self._quit:
            self._quit = False
            return 'QUIT'
        return None

    # -----------------------------------------------------------------------
    # Update / render
    # -----------------------------------------------------------------------

    def update(self, dt: float):
        self.session.advance()

    def render(self, surface: pygame.Surface):
        session = self.session
        W, H = surface.get_width(), surface.get_height()
        if (W, H) != (session.viewport.width, session.viewport.height):
            self.on_resize(W, H)

        self.renderer.render(surface, session.system, session.camera, session.viewport)
        if session.state.show_labels:
            self.renderer.draw_labels(surface, session.state.labels)

        self.play_button.draw(surface)
        self.settings_button.draw(surface)
        if session.state.settings_open:
            self._draw_settings(surface)

        self.draw_footer(surface, pygame.Rect(150, H - 52, W - 150, 40),
                         "[DRAG] Orbit  [WHEEL] Zoom  [SPACE] Play/Pause  "
                         "[L] Labels  [S] Settings  [ESC] Quit")

    def _draw_settings(self, surface):
        self.settings_panel.draw(surface)
        self.close_button.draw(surface)
        for name, slider in self.sliders.items():
            self.name_labels[name].draw(surface)
            self.value_labels[name].draw(surface)
            slider.draw(surface)
