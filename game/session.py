"""
Orrery Session

Owns the simulation state for one run and performs the per-frame pipeline:

    playing = playback.step()
    system.tick(playing)                  # rate messages, then angles
    controls.update()                     # camera damping (runs while paused)
    labels  = projector.project_system()  # world → pixels
    for consumer in overlay_consumers: consumer(labels)

Nothing here touches pygame, so the whole pipeline runs headless.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from core.config import OrreryConfig
from core.time_controller import PlaybackController
from core.types import LabelPlacement, Viewport
from rendering.camera import OrbitControls, PerspectiveCamera
from rendering.label_projector import LabelProjector
from universe import RateUpdate, StarSystem, build_star_system, load_bodies


OverlayConsumer = Callable[[List[LabelPlacement]], None]


@dataclass
class SessionState:
    """UI-facing flags"""
    show_labels: bool = True
    settings_open: bool = False
    frame: int = 0
    labels: List[LabelPlacement] = field(default_factory=list)


class OrrerySession:
    """
    Responsibilities:
    - Build the star system, camera and projector from config
    - Advance one frame at a time
    - Forward rate changes from the UI as messages
    - Hand label placements to overlay consumers
    """

    def __init__(self, config: Optional[OrreryConfig] = None,
                 system: Optional[StarSystem] = None):
        self.config = config if config is not None else OrreryConfig()
        cfg = self.config

        if system is None:
            table, central = None, None
            if cfg.bodies_path:
                central, table = load_bodies(cfg.bodies_path)
            system = build_star_system(table, central, seed=cfg.seed)
        self.system = system

        self.viewport = Viewport(cfg.width, cfg.height)
        self.camera = PerspectiveCamera.from_config(cfg.camera, cfg.width, cfg.height)
        self.controls = OrbitControls.from_config(self.camera, cfg.camera)
        self.controls.update()

        self.playback = PlaybackController(playing=cfg.start_playing)
        self.projector = LabelProjector()
        self.state = SessionState(show_labels=cfg.show_labels)
        self._consumers: List[OverlayConsumer] = []

    # -----------------------------------------------------------------------

    def add_overlay_consumer(self, consumer: OverlayConsumer):
        self._consumers.append(consumer)

    def resize(self, width: int, height: int):
        self.viewport = Viewport(width, height)
        self.camera.set_aspect(width, height)

    def toggle_playback(self) -> bool:
        return self.playback.toggle()

    def set_spin_rate(self, body_name: str, rate: float):
        self.system.send(RateUpdate(body_name, spin_rate=rate))

    def set_revolution_rate(self, body_name: str, rate: float):
        self.system.send(RateUpdate(body_name, revolution_rate=rate))

    # -----------------------------------------------------------------------

    def advance(self) -> List[LabelPlacement]:
        """One frame of the pipeline. Returns this frame's label placements."""
        playing = self.playback.step()
        self.system.tick(playing)
        self.controls.update()

        labels = self.projector.project_system(self.system, self.camera, self.viewport)
        self.state.labels = labels
        self.state.frame += 1

        for consumer in self._consumers:
            consumer(labels)
        return labels
