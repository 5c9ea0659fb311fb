import os

import pytest

# pygame-backed tests run without a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from core.config import OrreryConfig  # noqa: E402
from universe import StarSystem, build_bodies  # noqa: E402


EARTH_ONLY = [
    {"name": "Earth", "radius": 3.2, "distance": 45.0,
     "revolution_rate": 0.01, "spin_rate": 0.02},
]

TWO_BODIES = [
    {"name": "Earth", "radius": 3.2, "distance": 45.0,
     "revolution_rate": 0.01, "spin_rate": 0.02},
    {"name": "Mars", "radius": 2.5, "distance": 60.0,
     "revolution_rate": 0.008, "spin_rate": 0.018, "inclination_deg": 1.85},
]


@pytest.fixture
def earth_system():
    return StarSystem(build_bodies(EARTH_ONLY, seed=1))


@pytest.fixture
def two_body_system():
    return StarSystem(build_bodies(TWO_BODIES, seed=1))


@pytest.fixture
def small_config():
    return OrreryConfig(width=800, height=600, seed=3, star_count=200)
