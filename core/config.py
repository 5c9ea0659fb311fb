"""
Configuration

Window constants plus dataclass settings for the orrery.
Everything has a default; an optional JSON file can override fields:

    {
        "seed": 7,
        "start_playing": false,
        "camera": {"fov_deg": 45.0, "max_distance": 1500.0}
    }
"""

from __future__ import annotations
import json
import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional, Tuple, Union


# Window settings
WIDTH, HEIGHT = 1280, 800
FPS = 60
TITLE = "Orrery - Star System Model"


class ConfigError(ValueError):
    """Invalid configuration; raised before the frame loop starts."""


@dataclass
class CameraConfig:
    """Perspective camera and orbit-control limits"""
    fov_deg: float = 60.0
    near: float = 0.1
    far: float = 2000.0
    position: Tuple[float, float, float] = (0.0, 100.0, 200.0)
    target: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    damping_factor: float = 0.05
    min_distance: float = 20.0
    max_distance: float = 1000.0
    rotate_speed: float = 0.005    # radians per dragged pixel
    zoom_step: float = 0.9         # dolly factor per wheel notch


@dataclass
class OrreryConfig:
    """Top-level settings"""
    width: int = WIDTH
    height: int = HEIGHT
    fps: int = FPS
    title: str = TITLE

    # Ascending-node randomisation (None = different every run)
    seed: Optional[int] = None
    start_playing: bool = True

    # Scenery
    star_count: int = 10000
    starfield_extent: float = 2000.0
    compass_distance: float = 300.0
    show_labels: bool = True

    # Spin-rate sliders
    slider_min: float = 0.0
    slider_max: float = 0.1
    slider_step: float = 0.001

    camera: CameraConfig = field(default_factory=CameraConfig)

    # Optional external body table (JSON); None = built-in table
    bodies_path: Optional[str] = None


def _validate(cfg: OrreryConfig) -> OrreryConfig:
    cam = cfg.camera
    if cfg.width < 0 or cfg.height < 0:
        raise ConfigError(f"window size must be >= 0 (got {cfg.width}x{cfg.height})")
    if cfg.fps <= 0:
        raise ConfigError(f"fps must be > 0 (got {cfg.fps})")
    if not 0.0 < cam.fov_deg < 180.0:
        raise ConfigError(f"camera.fov_deg must be in (0, 180) (got {cam.fov_deg})")
    if not 0.0 < cam.near < cam.far:
        raise ConfigError(f"camera requires 0 < near < far (got {cam.near}, {cam.far})")
    if not 0.0 < cam.min_distance <= cam.max_distance:
        raise ConfigError("camera requires 0 < min_distance <= max_distance "
                          f"(got {cam.min_distance}, {cam.max_distance})")
    if not 0.0 < cam.damping_factor <= 1.0:
        raise ConfigError(f"camera.damping_factor must be in (0, 1] (got {cam.damping_factor})")
    if cfg.slider_step <= 0 or cfg.slider_max <= cfg.slider_min:
        raise ConfigError("slider range is empty")
    if cfg.star_count < 0:
        raise ConfigError(f"star_count must be >= 0 (got {cfg.star_count})")
    return cfg


# fields whose default is None; everything else takes the type of its default
_OPTIONAL_TYPES = {"seed": int, "bodies_path": str}


def _is_number(value) -> bool:
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def _coerce(key: str, value, current, where: str):
    """Check an override against the field it replaces."""
    expected = _OPTIONAL_TYPES.get(key, type(current))
    if value is None and key in _OPTIONAL_TYPES:
        return None
    if expected is bool:
        ok = isinstance(value, bool)
    elif expected is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif expected is float:
        ok = _is_number(value)
    else:
        ok = isinstance(value, expected)
    if not ok:
        raise ConfigError(f"{where}.{key}: expected {expected.__name__} (got {value!r})")
    return float(value) if expected is float else value


def _apply(obj, data: dict, where: str):
    known = {f.name for f in fields(obj)}
    changes = {}
    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"{where}: unknown key '{key}'")
        if key == "camera":
            if not isinstance(value, dict):
                raise ConfigError(f"{where}: 'camera' must be an object")
            value = _apply(obj.camera, value, "camera")
        elif key in ("position", "target"):
            if not isinstance(value, (list, tuple)) or len(value) != 3 \
                    or not all(_is_number(v) for v in value):
                raise ConfigError(f"{where}.{key}: expected [x, y, z] (got {value!r})")
            value = tuple(float(v) for v in value)
        else:
            value = _coerce(key, value, getattr(obj, key), where)
        changes[key] = value
    return replace(obj, **changes)


def load_config(path: Optional[Union[str, Path]] = None) -> OrreryConfig:
    """
    Load settings, applying overrides from a JSON file if given.

    Raises:
        ConfigError: unreadable file, unknown keys or invalid values
    """
    cfg = OrreryConfig()
    if path is None:
        return _validate(cfg)

    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be an object")

    print(f"Loaded config overrides from {path.name}: {', '.join(sorted(data))}")
    return _validate(_apply(cfg, data, path.name))
