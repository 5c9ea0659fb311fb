import math

import numpy as np
import pytest

from core.coords import ang_diff_rad
from universe import (RateUpdate, StarSystem, UnknownBodyError, build_bodies,
                      build_star_system)

from conftest import EARTH_ONLY, TWO_BODIES


def test_scenario_hundred_ticks(earth_system):
    for _ in range(100):
        earth_system.tick(playing=True)
    earth = earth_system.get("Earth")
    assert earth.revolution_angle == pytest.approx(1.0, abs=1e-9)
    pos = earth_system.world_position("Earth")
    assert pos == pytest.approx([45 * math.cos(1.0), 0.0, -45 * math.sin(1.0)], abs=1e-9)


@pytest.mark.parametrize("ticks", [1, 7, 629, 1500])
def test_angles_accumulate_rate_per_tick(two_body_system, ticks):
    for _ in range(ticks):
        two_body_system.tick()
    for body in two_body_system:
        assert 0.0 <= body.revolution_angle < 2 * math.pi
        assert ang_diff_rad(body.revolution_angle, ticks * body.revolution_rate) \
            == pytest.approx(0.0, abs=1e-9)
        assert ang_diff_rad(body.spin_angle, ticks * body.spin_rate) \
            == pytest.approx(0.0, abs=1e-9)


def test_paused_tick_freezes_everything(two_body_system):
    for _ in range(10):
        two_body_system.tick()
    before = {b.name: (b.revolution_angle, b.spin_angle) for b in two_body_system}
    positions = two_body_system.world_positions()
    for _ in range(50):
        two_body_system.tick(playing=False)
    for body in two_body_system:
        assert (body.revolution_angle, body.spin_angle) == before[body.name]
        assert two_body_system.world_position(body.name) == pytest.approx(positions[body.name])


def test_distance_to_origin_is_orbit_radius(two_body_system):
    for _ in range(333):
        two_body_system.tick()
    for body in two_body_system:
        assert np.linalg.norm(two_body_system.world_position(body.name)) \
            == pytest.approx(body.distance)


def test_flat_orbit_stays_in_reference_plane(earth_system):
    for _ in range(400):
        earth_system.tick()
        assert earth_system.world_position("Earth")[1] == pytest.approx(0.0, abs=1e-12)


def test_inclined_orbit_leaves_reference_plane():
    table = [{"name": "Tilted", "radius": 1.0, "distance": 50.0,
              "revolution_rate": 0.05, "inclination_deg": 30.0,
              "ascending_node_angle": 0.0}]
    system = StarSystem(build_bodies(table))
    heights = []
    for _ in range(200):
        system.tick()
        heights.append(system.world_position("Tilted")[1])
    assert max(abs(h) for h in heights) == pytest.approx(50.0 * math.sin(math.radians(30.0)),
                                                         rel=1e-3)


def test_spin_does_not_move_body():
    a = StarSystem(build_bodies(TWO_BODIES, seed=5))
    b = StarSystem(build_bodies(TWO_BODIES, seed=5))
    b.send(RateUpdate("Mars", spin_rate=0.09))
    for _ in range(120):
        a.tick()
        b.tick()
    assert a.get("Mars").revolution_angle == b.get("Mars").revolution_angle
    assert a.get("Mars").spin_angle != pytest.approx(b.get("Mars").spin_angle)
    assert a.world_position("Mars") == pytest.approx(b.world_position("Mars"))


def test_spin_rotates_body_axes(earth_system):
    earth_system.tick()
    world = earth_system.world_matrix("Earth")
    earth = earth_system.get("Earth")
    # local +X after revolution and spin
    total = earth.revolution_angle + earth.spin_angle
    assert world[:3, 0] == pytest.approx([math.cos(total), 0.0, -math.sin(total)], abs=1e-12)


def test_rate_update_applies_on_next_tick(earth_system):
    earth_system.send(RateUpdate("Earth", revolution_rate=0.1))
    assert earth_system.pending_updates == 1
    assert earth_system.get("Earth").revolution_rate == 0.01
    earth_system.tick()
    assert earth_system.pending_updates == 0
    assert earth_system.get("Earth").revolution_angle == pytest.approx(0.1)


def test_rate_update_drained_while_paused(earth_system):
    earth_system.send(RateUpdate("Earth", spin_rate=0.05))
    earth_system.tick(playing=False)
    earth = earth_system.get("Earth")
    assert earth.spin_rate == 0.05
    assert earth.spin_angle == 0.0


def test_later_updates_win(earth_system):
    earth_system.send(RateUpdate("Earth", spin_rate=0.03))
    earth_system.send(RateUpdate("Earth", spin_rate=0.07))
    earth_system.tick()
    assert earth_system.get("Earth").spin_rate == 0.07


def test_negative_rate_is_retrograde(earth_system):
    earth_system.send(RateUpdate("Earth", revolution_rate=-0.01))
    for _ in range(10):
        earth_system.tick()
    assert earth_system.get("Earth").revolution_angle == pytest.approx(2 * math.pi - 0.1)


def test_unknown_body_rejected(earth_system):
    with pytest.raises(UnknownBodyError):
        earth_system.send(RateUpdate("Pluto", spin_rate=0.1))
    with pytest.raises(UnknownBodyError):
        earth_system.world_position("Pluto")
    with pytest.raises(KeyError):
        earth_system.get("Pluto")
    assert earth_system.pending_updates == 0


def test_plane_parameters_are_fixed(earth_system):
    earth = earth_system.get("Earth")
    with pytest.raises(AttributeError):
        earth.inclination_deg = 5.0
    with pytest.raises(AttributeError):
        earth.ascending_node_angle = 1.0


def test_duplicate_bodies_rejected():
    bodies = build_bodies(EARTH_ONLY) + build_bodies(EARTH_ONLY)
    with pytest.raises(ValueError):
        StarSystem(bodies)


def test_default_system(capsys):
    system = build_star_system(seed=11)
    assert [b.name for b in system] == ["Mercury", "Venus", "Earth", "Mars",
                                        "Jupiter", "Saturn", "Uranus", "Neptune"]
    assert len(system.arena) == 3 * len(system)
    assert system.central.name == "Sun"
    assert system.get("Saturn").has_ring
    assert "Building star system" in capsys.readouterr().out
