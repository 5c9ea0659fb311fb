"""
Universe module — the orbiting bodies and their transform hierarchy.

Usage:
    from universe import build_star_system, RateUpdate
    system = build_star_system(seed=42)

    system.send(RateUpdate("Earth", spin_rate=0.05))
    system.tick(playing=True)
    pos = system.world_position("Earth")
"""

from .orbital_body import (
    OrbitalBody,
    CentralBody,
    PLANETS_DATA,
    SUN_DATA,
    REFERENCE_BODY,
    build_bodies,
    build_central_body,
    load_bodies,
)
from .scene_graph import TransformArena
from .star_system import (
    StarSystem,
    RateUpdate,
    UnknownBodyError,
    build_star_system,
)

__all__ = [
    "OrbitalBody",
    "CentralBody",
    "PLANETS_DATA",
    "SUN_DATA",
    "REFERENCE_BODY",
    "build_bodies",
    "build_central_body",
    "load_bodies",
    "TransformArena",
    "StarSystem",
    "RateUpdate",
    "UnknownBodyError",
    "build_star_system",
]
