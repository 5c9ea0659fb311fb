from __future__ import annotations
import math

TAU = 2.0 * math.pi


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def wrap_rad(x: float) -> float:
    """Wrap an angle into [0, 2π)."""
    x = x % TAU
    # a tiny negative x rounds up to TAU itself
    return 0.0 if x >= TAU else x


def ang_diff_rad(a: float, b: float) -> float:
    """Smallest signed difference a-b in radians in [-π, π)."""
    return (a - b + math.pi) % TAU - math.pi


def sph_to_cart(radius: float, polar: float, azimuth: float) -> tuple[float, float, float]:
    """
    Y-up spherical → cartesian.
    polar is measured from +Y, azimuth from +Z towards +X.
    """
    s = math.sin(polar)
    return (radius * s * math.sin(azimuth),
            radius * math.cos(polar),
            radius * s * math.cos(azimuth))


def cart_to_sph(x: float, y: float, z: float) -> tuple[float, float, float]:
    """Inverse of sph_to_cart. Returns (radius, polar, azimuth)."""
    r = math.sqrt(x*x + y*y + z*z)
    if r < 1e-12:
        return 0.0, 0.0, 0.0
    polar = math.acos(clamp(y / r, -1.0, 1.0))
    azimuth = math.atan2(x, z)
    return r, polar, azimuth
