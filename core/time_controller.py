"""
PlaybackController — play/pause gate for the orrery tick.

Adapted from the shared simulated-time controller: there is no clock to
advance here, only a boolean that decides whether orbital angles accumulate
on this frame. Camera motion, projection and drawing keep running while
paused.

Controls:
    pc.toggle()   — flip play/pause, returns new state
    pc.play() / pc.pause()
    pc.step()     — called once per frame, returns True if angles advance
"""

from __future__ import annotations


class PlaybackController:
    """
    Parameters
    ----------
    playing : initial state (the orrery auto-plays by default)
    """

    def __init__(self, playing: bool = True):
        self._playing = bool(playing)
        self._ticks   = 0           # frames that advanced the simulation
        self._frames  = 0           # all frames seen

    # ── Properties ───────────────────────────────────────────────────────────────

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def paused(self) -> bool:
        return not self._playing

    @property
    def label(self) -> str:
        """Caption for the playback button: the action it will perform."""
        return "PAUSE" if self._playing else "PLAY"

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def frames(self) -> int:
        return self._frames

    # ── Controls ─────────────────────────────────────────────────────────────────

    def play(self):
        self._playing = True

    def pause(self):
        self._playing = False

    def toggle(self) -> bool:
        self._playing = not self._playing
        return self._playing

    # ── Frame update ─────────────────────────────────────────────────────────────

    def step(self) -> bool:
        self._frames += 1
        if self._playing:
            self._ticks += 1
        return self._playing
