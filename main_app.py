"""
Orrery - Main Application

Animated star system with:
- Inclined orbits around a central star
- Screen-space labels that follow each body
- Play/pause and per-body spin-rate sliders
- Orbit camera (drag to rotate, wheel to zoom)

Usage:
    python main_app.py [config.json]
"""

import sys
from typing import Optional

import pygame

from core.config import ConfigError, OrreryConfig, load_config
from core.frame_loop import FrameLoop
from game.session import OrrerySession
from ui.theme import get_theme
from ui.screen_orrery import OrreryScreen


class OrreryApp:
    """
    Main application

    Owns the window and drives the frame loop:
    wait for the clock, pump events, advance the screen, draw, flip.
    """

    def __init__(self, config: Optional[OrreryConfig] = None):
        self.config = config if config is not None else OrreryConfig()
        cfg = self.config

        pygame.init()
        self.surface = pygame.display.set_mode((cfg.width, cfg.height), pygame.RESIZABLE)
        pygame.display.set_caption(cfg.title)
        self.clock = pygame.time.Clock()
        self.theme = get_theme()

        self.session = OrrerySession(cfg)
        self.screen = OrreryScreen(self.session)
        self.screen.on_enter()

        self.loop = FrameLoop(self._wait_for_frame, self._advance, self._emit)

        print(f"\n{cfg.title}")
        print("=" * 60)
        print("Initialized successfully!")
        print("=" * 60)

    # -----------------------------------------------------------------------
    # Frame loop callbacks
    # -----------------------------------------------------------------------

    def _wait_for_frame(self) -> float:
        return self.clock.tick(self.config.fps) / 1000.0

    def _advance(self, dt: float):
        events = pygame.event.get()
        for event in events:
            if event.type == pygame.QUIT:
                self.loop.stop()
            elif event.type == pygame.VIDEORESIZE:
                self.handle_resize(event.w, event.h)

        if self.screen.handle_input(events) == 'QUIT':
            self.loop.stop()

        self.screen.update(dt)

    def _emit(self):
        self.screen.render(self.surface)
        pygame.display.flip()

    # -----------------------------------------------------------------------

    def handle_resize(self, width: int, height: int):
        """Handle window resize event"""
        self.surface = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.screen.on_resize(width, height)
        print(f"Window resized to: {width}x{height}")

    def run(self, max_frames: Optional[int] = None) -> int:
        print("\nStarting main loop...")
        print("Press ESC to quit\n")
        frames = self.loop.run(max_frames)
        self.quit()
        return frames

    def quit(self):
        print("\nShutting down...")
        self.screen.on_exit()
        pygame.quit()


def main():
    """Entry point"""
    try:
        config = load_config(sys.argv[1] if len(sys.argv) > 1 else None)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        sys.exit(2)

    try:
        app = OrreryApp(config)
        app.run()
    except ConfigError as e:
        print(f"Configuration error: {e}")
        pygame.quit()
        sys.exit(2)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        pygame.quit()
        sys.exit(0)
    except Exception as e:
        print(f"\n\nFATAL ERROR: {e}")
        import traceback
        traceback.print_exc()
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
