"""
StarSystem — orbital transform hierarchy for all bodies.

Architecture
------------
Every OrbitalBody owns one chain in a TransformArena:

    <name>/plane   R_y(ascending_node) · R_x(inclination)     fixed
        └── <name>/pivot   R_y(revolution_angle)              per tick
                └── <name>   T(distance, 0, 0) · R_y(spin_angle)  per tick

so the body's world matrix is

    R_y(Ω) · R_x(i) · R_y(θ_rev) · T(d, 0, 0) · R_y(θ_spin)

Spin only affects orientation: the translation column does not depend on
spin_angle.

Ownership
---------
The tick driver owns the angles. UI code never writes rates directly; it
sends RateUpdate messages which are applied at the start of the next tick:

    system.send(RateUpdate("Mars", spin_rate=0.05))
    system.tick(playing=True)
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, List, Optional

import numpy as np

from core.coords import wrap_rad
from core.transforms import rotation_x, rotation_y, translation
from .orbital_body import OrbitalBody, CentralBody, build_bodies, build_central_body
from .scene_graph import TransformArena


class UnknownBodyError(KeyError):
    """A rate update or lookup named a body that is not in the system."""


@dataclass(frozen=True)
class RateUpdate:
    """Override message from a UI collaborator. None = leave unchanged."""
    body_name: str
    spin_rate: Optional[float] = None
    revolution_rate: Optional[float] = None


@dataclass(frozen=True)
class _Chain:
    plane: int
    pivot: int
    body:  int


class StarSystem:
    """
    Central body plus independently orbiting bodies.

    Query interface
    ---------------
      system.bodies                  → bodies in configuration order
      system.get("Earth")            → single body
      system.world_matrix("Earth")   → 4×4 world transform
      system.world_position("Earth") → (x, y, z)
      system.plane_matrix("Earth")   → orbital-plane transform (for orbit paths)
    """

    def __init__(self, bodies: List[OrbitalBody],
                 central: Optional[CentralBody] = None):
        self.central = central if central is not None else CentralBody()
        self.arena = TransformArena()
        self._bodies: Dict[str, OrbitalBody] = {}
        self._chains: Dict[str, _Chain] = {}
        self._inbox: Deque[RateUpdate] = deque()

        for body in bodies:
            if body.name in self._bodies:
                raise ValueError(f"duplicate body name '{body.name}'")
            self._bodies[body.name] = body
            plane = self.arena.add(f"{body.name}/plane",
                                   rotation_y(body.ascending_node_angle)
                                   @ rotation_x(body.inclination_rad))
            pivot = self.arena.add(f"{body.name}/pivot", parent=plane)
            node  = self.arena.add(body.name, parent=pivot)
            self._chains[body.name] = _Chain(plane, pivot, node)
            self._sync(body)

    # -----------------------------------------------------------------------

    @property
    def bodies(self) -> List[OrbitalBody]:
        return list(self._bodies.values())

    def __iter__(self) -> Iterator[OrbitalBody]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    def get(self, name: str) -> OrbitalBody:
        try:
            return self._bodies[name]
        except KeyError:
            raise UnknownBodyError(name) from None

    # -----------------------------------------------------------------------
    # Control interface
    # -----------------------------------------------------------------------

    def send(self, update: RateUpdate):
        """Queue a rate override; applied at the start of the next tick."""
        if update.body_name not in self._bodies:
            raise UnknownBodyError(update.body_name)
        self._inbox.append(update)

    @property
    def pending_updates(self) -> int:
        return len(self._inbox)

    def _drain_inbox(self):
        while self._inbox:
            msg = self._inbox.popleft()
            body = self._bodies[msg.body_name]
            if msg.spin_rate is not None:
                body.spin_rate = float(msg.spin_rate)
            if msg.revolution_rate is not None:
                body.revolution_rate = float(msg.revolution_rate)

    # -----------------------------------------------------------------------
    # Per-tick update
    # -----------------------------------------------------------------------

    def tick(self, playing: bool = True):
        """
        Apply queued rate updates, then (if playing) advance every body by
        one tick. Order of bodies is irrelevant: they are independent.
        """
        self._drain_inbox()
        if not playing:
            return
        for body in self._bodies.values():
            body.revolution_angle = wrap_rad(body.revolution_angle + body.revolution_rate)
            body.spin_angle       = wrap_rad(body.spin_angle + body.spin_rate)
            self._sync(body)

    def _sync(self, body: OrbitalBody):
        chain = self._chains[body.name]
        self.arena.set_local(chain.pivot, rotation_y(body.revolution_angle))
        self.arena.set_local(chain.body,
                             translation(body.distance, 0.0, 0.0)
                             @ rotation_y(body.spin_angle))

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def _chain(self, name: str) -> _Chain:
        try:
            return self._chains[name]
        except KeyError:
            raise UnknownBodyError(name) from None

    def world_matrix(self, name: str) -> np.ndarray:
        return self.arena.world(self._chain(name).body)

    def world_position(self, name: str) -> np.ndarray:
        return self.arena.world_position(self._chain(name).body)

    def plane_matrix(self, name: str) -> np.ndarray:
        return self.arena.world(self._chain(name).plane)

    def world_positions(self) -> Dict[str, np.ndarray]:
        return {name: self.world_position(name) for name in self._bodies}


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_star_system(table=None, central_data=None,
                      seed: Optional[int] = None) -> StarSystem:
    """
    Build the star system from a configuration table (default: PLANETS_DATA).
    Call once at startup; raises ConfigError before anything is created if
    the table is invalid.
    """
    from .orbital_body import PLANETS_DATA

    print("Building star system...")
    bodies  = build_bodies(PLANETS_DATA if table is None else table, seed=seed)
    central = build_central_body(central_data)
    system  = StarSystem(bodies, central)

    print(f"  Central: {central.name} (r={central.radius:g})")
    print(f"  Bodies:  {len(system)}")
    print(f"  Nodes:   {len(system.arena)}")
    return system
