"""
Camera — perspective camera with orbit controls.

PerspectiveCamera
    position/target in world units, vertical FOV in degrees.
    view_matrix()             world → camera
    projection_matrix()       camera → clip
    view_projection_matrix()  world → clip  (what the label projector needs)

OrbitControls
    Keeps the camera on a sphere around its target. Input adds pending
    rotation/zoom; update() applies a damping_factor fraction of it each
    frame and decays the rest, so motion eases out after the mouse stops.
    Distance is clamped to [min_distance, max_distance].
"""

from __future__ import annotations
import math
from typing import Optional, Tuple

import numpy as np

from core.config import CameraConfig
from core.coords import cart_to_sph, clamp, sph_to_cart
from core.transforms import look_at, perspective

# keep the camera off the poles so "up" stays defined
_POLAR_EPS = 1e-3


class PerspectiveCamera:

    def __init__(self, fov_deg: float = 60.0, aspect: float = 1.0,
                 near: float = 0.1, far: float = 2000.0,
                 position: Tuple[float, float, float] = (0.0, 100.0, 200.0),
                 target: Tuple[float, float, float] = (0.0, 0.0, 0.0)):
        self.fov_deg  = float(fov_deg)
        self.aspect   = float(aspect)
        self.near     = float(near)
        self.far      = float(far)
        self.position = np.array(position, dtype=np.float64)
        self.target   = np.array(target, dtype=np.float64)
        self.up       = np.array([0.0, 1.0, 0.0])

    @classmethod
    def from_config(cls, cfg: CameraConfig, width: int, height: int) -> 'PerspectiveCamera':
        cam = cls(cfg.fov_deg, 1.0, cfg.near, cfg.far, cfg.position, cfg.target)
        cam.set_aspect(width, height)
        return cam

    def set_aspect(self, width: int, height: int):
        """Follow the window; a zero height keeps the previous aspect."""
        if width > 0 and height > 0:
            self.aspect = width / height

    @property
    def forward(self) -> np.ndarray:
        f = self.target - self.position
        n = np.linalg.norm(f)
        return f / n if n > 1e-12 else np.array([0.0, 0.0, -1.0])

    def focal_length_px(self, height: int) -> float:
        """Pixels per unit at unit depth (for apparent sizes)."""
        return height / (2.0 * math.tan(math.radians(self.fov_deg / 2.0)))

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.target, self.up)

    def projection_matrix(self) -> np.ndarray:
        return perspective(self.fov_deg, self.aspect, self.near, self.far)

    def view_projection_matrix(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()


class OrbitControls:

    def __init__(self, camera: PerspectiveCamera,
                 damping_factor: float = 0.05,
                 min_distance: float = 20.0,
                 max_distance: float = 1000.0,
                 rotate_speed: float = 0.005,
                 zoom_step: float = 0.9):
        self.camera = camera
        self.damping_factor = damping_factor
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.rotate_speed = rotate_speed
        self.zoom_step = zoom_step

        # pending motion, consumed by update()
        self._d_azimuth = 0.0
        self._d_polar   = 0.0
        self._scale     = 1.0

        self._dragging = False
        self._last_pos: Optional[Tuple[int, int]] = None

    @classmethod
    def from_config(cls, camera: PerspectiveCamera, cfg: CameraConfig) -> 'OrbitControls':
        return cls(camera, cfg.damping_factor, cfg.min_distance, cfg.max_distance,
                   cfg.rotate_speed, cfg.zoom_step)

    # ── Input ────────────────────────────────────────────────────────────

    def rotate(self, d_azimuth: float, d_polar: float):
        self._d_azimuth += d_azimuth
        self._d_polar   += d_polar

    def dolly(self, scale: float):
        """scale < 1 moves closer, > 1 moves away."""
        if scale > 0:
            self._scale *= scale

    def begin_drag(self, pos: Tuple[int, int]):
        self._dragging = True
        self._last_pos = pos

    def drag(self, pos: Tuple[int, int]):
        if not self._dragging or self._last_pos is None:
            return
        dx = pos[0] - self._last_pos[0]
        dy = pos[1] - self._last_pos[1]
        self._last_pos = pos
        # drag right → scene turns right (camera moves left around target)
        self.rotate(-dx * self.rotate_speed, -dy * self.rotate_speed)

    def end_drag(self):
        self._dragging = False
        self._last_pos = None

    @property
    def dragging(self) -> bool:
        return self._dragging

    def wheel(self, notches: int):
        """Mouse wheel: positive = towards the target."""
        self.dolly(self.zoom_step ** notches)

    # ── Frame update ─────────────────────────────────────────────────────

    def update(self):
        cam = self.camera
        offset = cam.position - cam.target
        radius, polar, azimuth = cart_to_sph(*offset)

        k = self.damping_factor
        azimuth += self._d_azimuth * k
        polar    = clamp(polar + self._d_polar * k, _POLAR_EPS, math.pi - _POLAR_EPS)
        scale    = 1.0 + (self._scale - 1.0) * k
        radius   = clamp(radius * scale, self.min_distance, self.max_distance)

        self._d_azimuth *= (1.0 - k)
        self._d_polar   *= (1.0 - k)
        self._scale      = 1.0 + (self._scale - 1.0) * (1.0 - k)

        cam.position = cam.target + np.array(sph_to_cart(radius, polar, azimuth))

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.camera.position - self.camera.target))
