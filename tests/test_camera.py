import math

import numpy as np
import pytest

from core.config import CameraConfig
from rendering import OrbitControls, PerspectiveCamera


@pytest.fixture
def rig():
    camera = PerspectiveCamera.from_config(CameraConfig(), 800, 600)
    return camera, OrbitControls.from_config(camera, CameraConfig())


def test_from_config(rig):
    camera, controls = rig
    assert camera.aspect == pytest.approx(800 / 600)
    assert controls.distance == pytest.approx(math.hypot(100.0, 200.0))


def test_zero_size_keeps_aspect(rig):
    camera, _ = rig
    camera.set_aspect(0, 600)
    camera.set_aspect(800, 0)
    assert camera.aspect == pytest.approx(800 / 600)


def test_focal_length(rig):
    camera, _ = rig
    assert camera.focal_length_px(600) == pytest.approx(300.0 / math.tan(math.radians(30.0)))


def test_idle_update_keeps_camera(rig):
    camera, controls = rig
    before = camera.position.copy()
    controls.update()
    assert camera.position == pytest.approx(before)


def test_rotation_is_damped(rig):
    camera, controls = rig
    controls.rotate(1.0, 0.0)
    controls.update()
    x, _, z = camera.position
    assert math.atan2(x, z) == pytest.approx(0.05)
    for _ in range(1000):
        controls.update()
    x, _, z = camera.position
    assert math.atan2(x, z) == pytest.approx(1.0, abs=1e-6)
    assert controls.distance == pytest.approx(math.hypot(100.0, 200.0))


def test_zoom_in_clamps_to_min_distance(rig):
    _, controls = rig
    for _ in range(20):
        controls.wheel(5)
        for _ in range(100):
            controls.update()
    assert controls.distance == pytest.approx(20.0)


def test_zoom_out_clamps_to_max_distance(rig):
    _, controls = rig
    controls.wheel(-100)
    for _ in range(500):
        controls.update()
    assert controls.distance == pytest.approx(1000.0)


def test_polar_angle_stays_off_the_pole(rig):
    camera, controls = rig
    controls.rotate(0.0, -100.0)
    for _ in range(300):
        controls.update()
    offset = camera.position - camera.target
    assert offset[1] < controls.distance
    assert np.all(np.isfinite(camera.view_matrix()))


def test_drag_rotates_opposite_to_mouse(rig):
    camera, controls = rig
    controls.begin_drag((100, 100))
    assert controls.dragging
    controls.drag((110, 100))
    controls.end_drag()
    controls.drag((300, 100))          # ignored once released
    controls.update()
    x, _, z = camera.position
    assert math.atan2(x, z) == pytest.approx(-10 * 0.005 * 0.05)
