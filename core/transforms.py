"""
Transforms — 4×4 homogeneous matrices for the orrery scene.

Right-handed, Y-up world:
  - X  = in-plane reference axis (ascending node direction at angle 0)
  - Y  = normal of the reference plane
  - Z  = towards the default viewer

Matrices act on column vectors (p' = M @ p), so a chain written outer → inner
composes left to right:  world = parent @ local.

All rotation helpers follow the usual right-hand rule, e.g. rotation_y(θ)
maps +X to (cos θ, 0, −sin θ).
"""

from __future__ import annotations
import math
from typing import Iterable, Sequence

import numpy as np


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = np.eye(4, dtype=np.float64)
    m[:3, 3] = (x, y, z)
    return m


def rotation_x(angle_rad: float) -> np.ndarray:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4, dtype=np.float64)
    m[1, 1] = c;  m[1, 2] = -s
    m[2, 1] = s;  m[2, 2] = c
    return m


def rotation_y(angle_rad: float) -> np.ndarray:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.eye(4, dtype=np.float64)
    m[0, 0] = c;  m[0, 2] = s
    m[2, 0] = -s; m[2, 2] = c
    return m


def compose(matrices: Iterable[np.ndarray]) -> np.ndarray:
    """Multiply matrices outer → inner."""
    out = identity()
    for m in matrices:
        out = out @ m
    return out


def position_of(matrix: np.ndarray) -> np.ndarray:
    """Translation component of an affine matrix (a copy)."""
    return np.array(matrix[:3, 3], dtype=np.float64)


def transform_point(matrix: np.ndarray, point: Sequence[float]) -> np.ndarray:
    x, y, z = point
    v = matrix @ np.array([x, y, z, 1.0])
    return v[:3]


def transform_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Transform an (N, 3) array of points.
    Returns (N, 4) homogeneous results (w is NOT divided out).
    """
    pts = np.asarray(points, dtype=np.float64)
    hom = np.hstack([pts, np.ones((pts.shape[0], 1))])
    return hom @ matrix.T


# ---------------------------------------------------------------------------
# Camera matrices (OpenGL clip conventions: NDC in [-1, 1]^3)
# ---------------------------------------------------------------------------

def look_at(eye: Sequence[float], target: Sequence[float],
            up: Sequence[float] = (0.0, 1.0, 0.0)) -> np.ndarray:
    """
    View matrix (world → camera). The camera looks down its local −Z.
    Falls back to +Z as "up" when looking straight along the up vector.
    """
    eye    = np.asarray(eye, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    up     = np.asarray(up, dtype=np.float64)

    f = target - eye
    f_len = np.linalg.norm(f)
    if f_len < 1e-12:
        f = np.array([0.0, 0.0, -1.0])
    else:
        f = f / f_len

    r = np.cross(f, up)
    r_len = np.linalg.norm(r)
    if r_len < 1e-9:              # looking straight up/down
        r = np.cross(f, np.array([0.0, 0.0, 1.0]))
        r_len = np.linalg.norm(r)
    r = r / r_len
    u = np.cross(r, f)

    m = np.eye(4, dtype=np.float64)
    m[0, :3] = r
    m[1, :3] = u
    m[2, :3] = -f
    m[:3, 3] = -m[:3, :3] @ eye
    return m


def perspective(fov_y_deg: float, aspect: float,
                near: float, far: float) -> np.ndarray:
    """Perspective projection with vertical field of view in degrees."""
    f = 1.0 / math.tan(math.radians(fov_y_deg) / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -2.0 * far * near / (far - near)
    m[3, 2] = -1.0
    return m
