"""
Label projector — world positions → overlay pixel coordinates.

    clip = VP · (x, y, z, 1)
    ndc  = clip.xyz / clip.w
    px   = (ndc.x * 0.5 + 0.5) * width
    py   = (-(ndc.y * 0.5) + 0.5) * height        (pixel y grows downwards)

Visibility is the depth test only: visible ⇔ ndc.z < 1. A point behind the
camera divides by a negative w and lands at ndc.z > 1; a point exactly at
the camera (w == 0) is hidden. There is NO left/right/top/bottom clipping:
bodies outside the view cone but in front of the camera keep a valid,
off-screen pixel coordinate. Use is_on_screen() if the consumer wants to
cull those.

Degenerate viewport (width or height 0): every label is invisible for that
frame.

The label's own offset (centred above the point) is applied by the overlay
consumer — see label_anchor().
"""

from __future__ import annotations
import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from core.types import LabelPlacement, Viewport

_W_EPS = 1e-12


def project_point(name: str, world_pos: Sequence[float],
                  view_projection: np.ndarray,
                  viewport: Viewport) -> LabelPlacement:
    """Project one world position. Pure function of its inputs."""
    if viewport.is_degenerate:
        return LabelPlacement(name, 0.0, 0.0, False, math.inf)

    x, y, z = world_pos
    cx, cy, cz, cw = view_projection @ np.array([x, y, z, 1.0])
    if abs(cw) < _W_EPS:
        return LabelPlacement(name, viewport.width / 2.0, viewport.height / 2.0,
                              False, math.inf)

    nx, ny, nz = cx / cw, cy / cw, cz / cw
    px = (nx * 0.5 + 0.5) * viewport.width
    py = (-(ny * 0.5) + 0.5) * viewport.height
    return LabelPlacement(name, float(px), float(py), bool(nz < 1.0), float(nz))


def project_points(positions: np.ndarray, view_projection: np.ndarray,
                   viewport: Viewport) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorised projection for an (N, 3) array.
    Returns (px, py, visible) arrays; same rules as project_point.
    """
    pts = np.asarray(positions, dtype=np.float64)
    n = pts.shape[0]
    if viewport.is_degenerate or n == 0:
        return np.zeros(n), np.zeros(n), np.zeros(n, dtype=bool)

    hom = np.hstack([pts, np.ones((n, 1))]) @ view_projection.T
    w = hom[:, 3]
    ok = np.abs(w) >= _W_EPS
    safe_w = np.where(ok, w, 1.0)
    ndc = hom[:, :3] / safe_w[:, None]

    px = (ndc[:, 0] * 0.5 + 0.5) * viewport.width
    py = (-(ndc[:, 1] * 0.5) + 0.5) * viewport.height
    visible = ok & (ndc[:, 2] < 1.0)
    return px, py, visible


class LabelProjector:
    """
    Projects every body of a StarSystem each frame.

    Holds no per-frame state: calling project_all twice with unchanged
    inputs yields identical output.
    """

    def project_all(self, named_positions: Iterable[Tuple[str, Sequence[float]]],
                    view_projection: np.ndarray,
                    viewport: Viewport) -> List[LabelPlacement]:
        return [project_point(name, pos, view_projection, viewport)
                for name, pos in named_positions]

    def project_system(self, system, camera, viewport: Viewport) -> List[LabelPlacement]:
        vp = camera.view_projection_matrix()
        return self.project_all(((b.name, system.world_position(b.name)) for b in system),
                                vp, viewport)


# ---------------------------------------------------------------------------
# Consumer-side helpers
# ---------------------------------------------------------------------------

def label_anchor(placement: LabelPlacement, label_w: int, label_h: int) -> Tuple[int, int]:
    """
    Top-left corner for a label box so the projected point sits under its
    bottom-centre with half a label height of margin (translate −50%, −150%).
    """
    return (int(round(placement.x - label_w * 0.5)),
            int(round(placement.y - label_h * 1.5)))


def is_on_screen(placement: LabelPlacement, viewport: Viewport, margin: float = 0.0) -> bool:
    return (placement.visible
            and -margin <= placement.x <= viewport.width + margin
            and -margin <= placement.y <= viewport.height + margin)
