from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class Viewport:
    # overlay size in pixels; zero during some window-manager resizes
    width: int
    height: int

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def aspect(self) -> float:
        return self.width / self.height if self.height > 0 else 1.0


@dataclass(slots=True, frozen=True)
class LabelPlacement:
    name: str
    x: float
    y: float
    visible: bool
    # NDC depth; >= 1 means beyond the far plane or behind the camera
    depth: float = 0.0
