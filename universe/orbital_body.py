"""
OrbitalBody — a planet on an inclined circular orbit.

Each body carries two fixed plane parameters and two angle accumulators:

  fixed     inclination_deg       tilt of the orbital plane (degrees)
            ascending_node_angle  rotation of the plane about the
                                  reference normal (radians)
  mutable   revolution_angle      position along the orbit
            spin_angle            axial rotation of the body itself

Rates are radians per tick and may be overridden at runtime through
StarSystem.send(RateUpdate(...)).

The static table PLANETS_DATA is the default configuration source;
load_bodies() reads the same fields from JSON. build_bodies() validates the
table and creates the OrbitalBody instances once at startup:

    bodies = build_bodies(PLANETS_DATA, seed=42)

Reference body:
  Earth defines the reference plane: inclination 0 and ascending node 0.
  All other ascending nodes are drawn uniformly from [0, 2π).
"""

from __future__ import annotations
import json
import math
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from core.config import ConfigError


REFERENCE_BODY = "Earth"


# ---------------------------------------------------------------------------
# OrbitalBody
# ---------------------------------------------------------------------------

@dataclass
class OrbitalBody:
    """
    One orbiting body.

    Units:
        radius, distance     : scene units
        revolution_rate      : radians per tick
        spin_rate            : radians per tick
        inclination_deg      : degrees
        ascending_node_angle : radians
    """
    name:            str
    radius:          float
    distance:        float
    revolution_rate: float = 0.0
    spin_rate:       float = 0.0
    inclination_deg: float = 0.0
    ascending_node_angle: float = 0.0

    # Presentation
    color:    Tuple[int, int, int] = (200, 200, 200)
    texture:  Optional[str] = None
    has_ring: bool = False

    # Runtime accumulators
    revolution_angle: float = field(default=0.0, repr=False)
    spin_angle:       float = field(default=0.0, repr=False)

    @property
    def inclination_rad(self) -> float:
        return math.radians(self.inclination_deg)

    def __setattr__(self, key, value):
        # plane parameters are frozen once the dataclass __init__ has run
        if key in ("inclination_deg", "ascending_node_angle") and "_frozen" in self.__dict__:
            raise AttributeError(f"{self.name}: {key} is fixed after construction")
        object.__setattr__(self, key, value)

    def __post_init__(self):
        object.__setattr__(self, "_frozen", True)


@dataclass
class CentralBody:
    """The luminous body at the origin. Not part of the orbit hierarchy."""
    name:   str = "Sun"
    radius: float = 10.0
    color:  Tuple[int, int, int] = (255, 221, 0)
    glow_color: Tuple[int, int, int] = (255, 170, 0)
    glow_size:  float = 40.0
    texture: Optional[str] = None


# ---------------------------------------------------------------------------
# Default system
# ---------------------------------------------------------------------------

SUN_DATA = {
    "name": "Sun", "radius": 10.0, "color": (255, 221, 0),
    "texture": "textures/sun.png",
}

# speed → revolution_rate, rotationSpeed → spin_rate
# Inclinations are the real ecliptic values (J2000), rounded.
PLANETS_DATA = [
    {"name": "Mercury", "radius": 2.0, "distance": 20.0,  "revolution_rate": 0.02,
     "spin_rate": 0.004, "inclination_deg": 7.00, "color": (151, 151, 159),
     "texture": "textures/mercury.png"},
    {"name": "Venus",   "radius": 3.0, "distance": 30.0,  "revolution_rate": 0.015,
     "spin_rate": 0.002, "inclination_deg": 3.39, "color": (227, 187, 118),
     "texture": "textures/venus.png"},
    {"name": "Earth",   "radius": 3.2, "distance": 45.0,  "revolution_rate": 0.01,
     "spin_rate": 0.02,  "inclination_deg": 0.00, "color": (70, 120, 200),
     "texture": "textures/earth.png"},
    {"name": "Mars",    "radius": 2.5, "distance": 60.0,  "revolution_rate": 0.008,
     "spin_rate": 0.018, "inclination_deg": 1.85, "color": (193, 68, 14),
     "texture": "textures/mars.png"},
    {"name": "Jupiter", "radius": 8.0, "distance": 90.0,  "revolution_rate": 0.004,
     "spin_rate": 0.04,  "inclination_deg": 1.31, "color": (201, 144, 57),
     "texture": "textures/jupiter.png"},
    {"name": "Saturn",  "radius": 7.0, "distance": 130.0, "revolution_rate": 0.003,
     "spin_rate": 0.038, "inclination_deg": 2.49, "color": (226, 191, 125),
     "texture": "textures/saturn.png", "has_ring": True},
    {"name": "Uranus",  "radius": 5.0, "distance": 170.0, "revolution_rate": 0.002,
     "spin_rate": 0.03,  "inclination_deg": 0.77, "color": (0x7E, 0xD6, 0xDF)},
    {"name": "Neptune", "radius": 5.0, "distance": 210.0, "revolution_rate": 0.001,
     "spin_rate": 0.032, "inclination_deg": 1.77, "color": (0x48, 0x34, 0xD4)},
]

_REQUIRED = ("name", "radius", "distance")
_NUMERIC  = ("radius", "distance", "revolution_rate", "spin_rate", "inclination_deg",
             "ascending_node_angle")
_OPTIONAL = ("revolution_rate", "spin_rate", "inclination_deg", "ascending_node_angle",
             "color", "texture", "has_ring")


def _parse_color(value, where: str) -> Tuple[int, int, int]:
    # accepts (r, g, b), [r, g, b], 0xRRGGBB or "#rrggbb"
    try:
        if isinstance(value, str):
            value = int(value.lstrip("#"), 16)
        if isinstance(value, int):
            return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
        r, g, b = (int(c) for c in value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{where}: color must be RGB triple or hex") from e
    return (r, g, b)


def _check_entry(entry: dict, index: int) -> str:
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigError(f"body #{index}: missing or empty 'name'")
    for key in _REQUIRED:
        if key not in entry:
            raise ConfigError(f"{name}: missing required field '{key}'")
    unknown = set(entry) - set(_REQUIRED) - set(_OPTIONAL)
    if unknown:
        raise ConfigError(f"{name}: unknown field(s) {', '.join(sorted(unknown))}")
    for key in _NUMERIC:
        if key in entry:
            value = entry[key]
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not math.isfinite(value):
                raise ConfigError(f"{name}: {key} must be a finite number (got {value!r})")
    for key in ("radius", "distance"):
        if entry[key] <= 0:
            raise ConfigError(f"{name}: {key} must be > 0 (got {entry[key]})")
    return name


def build_bodies(table: Iterable[dict] = PLANETS_DATA,
                 seed: Optional[int] = None,
                 reference: str = REFERENCE_BODY) -> List[OrbitalBody]:
    """
    Validate the configuration table and create the bodies.

    Raises:
        ConfigError: duplicate name, non-positive radius/distance,
                     non-finite number, missing or unknown field
    """
    rng = random.Random(seed)
    seen = set()
    bodies = []

    for index, entry in enumerate(table):
        name = _check_entry(entry, index)
        if name in seen:
            raise ConfigError(f"{name}: duplicate body name")
        seen.add(name)

        if "ascending_node_angle" in entry:
            node = float(entry["ascending_node_angle"])
        elif name == reference:
            node = 0.0
        else:
            node = rng.uniform(0.0, 2.0 * math.pi)

        bodies.append(OrbitalBody(
            name=name,
            radius=float(entry["radius"]),
            distance=float(entry["distance"]),
            revolution_rate=float(entry.get("revolution_rate", 0.0)),
            spin_rate=float(entry.get("spin_rate", 0.0)),
            inclination_deg=float(entry.get("inclination_deg", 0.0)),
            ascending_node_angle=node,
            color=_parse_color(entry.get("color", (200, 200, 200)), name),
            texture=entry.get("texture"),
            has_ring=bool(entry.get("has_ring", False)),
        ))

    return bodies


def build_central_body(data: Optional[dict] = None) -> CentralBody:
    data = dict(SUN_DATA if data is None else data)
    radius = data.get("radius", 10.0)
    if isinstance(radius, bool) or not isinstance(radius, (int, float)) or radius <= 0:
        raise ConfigError(f"{data.get('name', 'central body')}: radius must be > 0 (got {radius!r})")
    return CentralBody(
        name=data.get("name", "Sun"),
        radius=float(radius),
        color=_parse_color(data.get("color", (255, 221, 0)), "central body"),
        texture=data.get("texture"),
    )


def load_bodies(path: Union[str, Path]) -> Tuple[Optional[dict], List[dict]]:
    """
    Read a body table from JSON:

        {"central": {...}, "bodies": [{...}, ...]}

    or a bare list of bodies. Returns (central_data, body_table); validation
    happens in build_bodies().
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read body table {path}: {e}") from e

    if isinstance(data, list):
        return None, data
    if isinstance(data, dict) and isinstance(data.get("bodies"), list):
        return data.get("central"), data["bodies"]
    raise ConfigError(f"{path}: expected a list of bodies or {{'bodies': [...]}}")
