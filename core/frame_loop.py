"""
FrameLoop — explicit driver for the per-frame pipeline.

    while running:
        dt = wait_for_frame()      # blocks until the next frame signal
        advance(dt)                # tick gate, orbit update, camera, projection
        emit()                     # draw / present

The host supplies the three callables (pygame clock, screen update, screen
render + flip). stop() ends the loop after the current frame; max_frames
bounds it for headless runs.
"""

from __future__ import annotations
from typing import Callable, Optional


class FrameLoop:

    def __init__(self,
                 wait_for_frame: Callable[[], float],
                 advance: Callable[[float], None],
                 emit: Callable[[], None]):
        self._wait    = wait_for_frame
        self._advance = advance
        self._emit    = emit
        self.running  = False
        self.frames   = 0

    def stop(self):
        self.running = False

    def run(self, max_frames: Optional[int] = None) -> int:
        """Run until stop() or max_frames. Returns frames executed."""
        self.running = True
        start = self.frames
        while self.running:
            if max_frames is not None and self.frames - start >= max_frames:
                break
            dt = self._wait()
            self._advance(dt)
            self._emit()
            self.frames += 1
        self.running = False
        return self.frames - start
