"""
SceneRenderer — draws the star system onto a pygame surface.

Layers (back → front):
  1. starfield        random points in a cube, batched numpy projection
  2. orbit paths      circles in each body's orbital plane
  3. compass          N/S/E/W letters + faint lines to the origin
  4. central body     additive glow sprite + disk
  5. bodies           depth-sorted disks, spin marker, optional ring

Labels are drawn separately by the overlay (see draw_labels) from the
LabelPlacement list produced by the label projector.

Apparent size of a sphere of radius r at clip depth w:
    r_px = r * focal_px / w
"""

from __future__ import annotations
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from core.transforms import position_of, transform_points
from core.types import LabelPlacement, Viewport
from .label_projector import label_anchor, project_points

ORBIT_SEGMENTS = 128
RING_SEGMENTS  = 64

_BG_COLOR     = (0, 0, 0)
_ORBIT_COLOR  = (40, 40, 40)
_STAR_COLOR   = (255, 255, 255)
_LABEL_COLOR  = (255, 255, 255)
_LABEL_BG     = (0, 0, 0, 150)

# pygame draw calls overflow on huge coordinates (points near the camera)
COORD_MIN = -32760
COORD_MAX = 32760

COMPASS = [
    ("N", (0.0, 0.0, -1.0), (255, 85, 85)),
    ("S", (0.0, 0.0,  1.0), (85, 85, 255)),
    ("E", (1.0, 0.0,  0.0), (85, 255, 85)),
    ("W", (-1.0, 0.0, 0.0), (255, 255, 85)),
]


def make_starfield(count: int, extent: float, seed: Optional[int] = None) -> np.ndarray:
    """(count, 3) points uniform in a cube of side `extent` centred on 0."""
    rng = np.random.default_rng(seed)
    return (rng.random((count, 3)) - 0.5) * extent


def make_glow_surface(size: int, color: Tuple[int, int, int]) -> pygame.Surface:
    """
    Radial gradient tinted by `color`, white at the centre, fading to black.
    Meant for additive blitting.
    """
    c = (size - 1) / 2.0
    yy, xx = np.mgrid[0:size, 0:size].astype(np.float32)
    r = np.sqrt((xx - c)**2 + (yy - c)**2) / max(c, 1.0)

    # colour stops: 0 → white, 0.2 → tint 50%, 0.5 → deep tint 10%, 1 → 0
    core = np.clip(1.0 - r / 0.2, 0.0, 1.0)
    halo = np.interp(r, [0.0, 0.2, 0.5, 1.0], [1.0, 0.5, 0.1, 0.0]).astype(np.float32)

    rgb = np.zeros((size, size, 3), dtype=np.float32)
    for ch in range(3):
        rgb[:, :, ch] = halo * color[ch] + core * (255 - color[ch]) * halo
    rgb = np.clip(rgb, 0, 255).astype(np.uint8)

    # surfarray expects (W, H, 3)
    return pygame.surfarray.make_surface(np.ascontiguousarray(rgb.transpose(1, 0, 2)))


def _circle_points(radius: float, segments: int) -> np.ndarray:
    t = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
    return np.stack([radius * np.cos(t), np.zeros_like(t), -radius * np.sin(t)], axis=1)


class SceneRenderer:

    def __init__(self, star_count: int = 10000, starfield_extent: float = 2000.0,
                 compass_distance: float = 300.0, seed: Optional[int] = None):
        self.stars = make_starfield(star_count, starfield_extent, seed)
        self.compass_distance = compass_distance
        self._glow_cache: dict = {}
        self._font_cache: dict = {}

    def _font(self, size: int, bold: bool = False) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._font_cache:
            self._font_cache[key] = pygame.font.SysFont('Arial', size, bold=bold)
        return self._font_cache[key]

    # -----------------------------------------------------------------------

    def render(self, surface: pygame.Surface, system, camera, viewport: Viewport):
        surface.fill(_BG_COLOR)
        if viewport.is_degenerate:
            return

        vp = camera.view_projection_matrix()
        focal = camera.focal_length_px(viewport.height)

        self._draw_starfield(surface, vp, viewport)
        self._draw_orbits(surface, system, vp, viewport)
        self._draw_compass(surface, vp, viewport)

        # Painter's algorithm on clip depth; central body included
        drawables = [(self._clip(vp, (0.0, 0.0, 0.0)), None)]
        for body in system:
            drawables.append((self._clip(vp, system.world_position(body.name)), body))
        drawables.sort(key=lambda item: -item[0][3])

        for clip, body in drawables:
            if clip[3] <= camera.near:
                continue            # behind or inside the near plane
            if body is None:
                self._draw_central(surface, system.central, clip, focal, viewport)
            else:
                self._draw_body(surface, system, body, vp, clip, focal, viewport)

    # -----------------------------------------------------------------------

    @staticmethod
    def _clip(vp: np.ndarray, pos: Sequence[float]) -> np.ndarray:
        x, y, z = pos
        return vp @ np.array([x, y, z, 1.0])

    @staticmethod
    def _to_pixel(clip: np.ndarray, viewport: Viewport) -> Tuple[int, int]:
        nx, ny = clip[0] / clip[3], clip[1] / clip[3]
        x = (nx * 0.5 + 0.5) * viewport.width
        y = (-(ny * 0.5) + 0.5) * viewport.height
        return (int(max(COORD_MIN, min(x, COORD_MAX))),
                int(max(COORD_MIN, min(y, COORD_MAX))))

    def _polyline(self, surface, points_world: np.ndarray, vp: np.ndarray,
                  viewport: Viewport, color, closed: bool = True, width: int = 1):
        """Project a world-space polyline; segments touching hidden points are skipped."""
        px, py, vis = project_points(points_world, vp, viewport)
        px = np.clip(px, COORD_MIN, COORD_MAX)
        py = np.clip(py, COORD_MIN, COORD_MAX)
        n = len(px)
        last = n if closed else n - 1
        for i in range(last):
            j = (i + 1) % n
            if vis[i] and vis[j]:
                pygame.draw.line(surface, color, (px[i], py[i]), (px[j], py[j]), width)

    # -----------------------------------------------------------------------
    # Layers
    # -----------------------------------------------------------------------

    def _draw_starfield(self, surface, vp, viewport):
        px, py, vis = project_points(self.stars, vp, viewport)
        on = vis & (px >= 0) & (px < viewport.width) & (py >= 0) & (py < viewport.height)
        xs = px[on].astype(np.int32)
        ys = py[on].astype(np.int32)
        pixels = pygame.surfarray.pixels3d(surface)
        pixels[xs, ys] = _STAR_COLOR
        del pixels      # unlock the surface

    def _draw_orbits(self, surface, system, vp, viewport):
        for body in system:
            circle = _circle_points(body.distance, ORBIT_SEGMENTS)
            world = transform_points(system.plane_matrix(body.name), circle)[:, :3]
            self._polyline(surface, world, vp, viewport, _ORBIT_COLOR)

    def _draw_compass(self, surface, vp, viewport):
        font = self._font(28, bold=True)
        d = self.compass_distance
        origin = np.zeros(3)
        for text, direction, color in COMPASS:
            end = np.array(direction) * d
            line_color = tuple(int(c * 0.3) for c in color)
            self._polyline(surface, np.stack([origin, end]), vp, viewport,
                           line_color, closed=False)
            clip = self._clip(vp, end)
            if clip[3] > 0 and clip[2] / clip[3] < 1.0:
                x, y = self._to_pixel(clip, viewport)
                txt = font.render(text, True, color)
                surface.blit(txt, (x - txt.get_width() // 2, y - txt.get_height() // 2))

    def _glow(self, color, size: int) -> pygame.Surface:
        base = self._glow_cache.get(color)
        if base is None:
            base = make_glow_surface(128, color)
            self._glow_cache[color] = base
        return pygame.transform.smoothscale(base, (size, size))

    def _draw_central(self, surface, central, clip, focal, viewport):
        x, y = self._to_pixel(clip, viewport)
        r_px = max(2, int(central.radius * focal / clip[3]))
        glow_px = int(central.glow_size * focal / clip[3])
        if 4 <= glow_px <= 4 * max(viewport.width, viewport.height):
            glow = self._glow(central.glow_color, glow_px)
            surface.blit(glow, (x - glow_px // 2, y - glow_px // 2),
                         special_flags=pygame.BLEND_RGB_ADD)
        pygame.draw.circle(surface, central.color, (x, y), r_px)

    def _draw_body(self, surface, system, body, vp, clip, focal, viewport):
        world = system.world_matrix(body.name)
        x, y = self._to_pixel(clip, viewport)
        r_px = max(1, int(body.radius * focal / clip[3]))

        if body.has_ring:
            self._draw_ring(surface, body, world, vp, viewport, behind=True, clip=clip)

        # simple lambert-ish shading: lit side faces the central body
        pygame.draw.circle(surface, body.color, (x, y), r_px)
        shade = tuple(int(c * 0.45) for c in body.color)
        centre = position_of(world)
        to_sun = -centre / max(np.linalg.norm(centre), 1e-9)
        dark_pt = self._clip(vp, centre - to_sun * body.radius * 0.6)
        if dark_pt[3] > 0:
            dx, dy = self._to_pixel(dark_pt, viewport)
            pygame.draw.circle(surface, shade, (dx, dy), max(1, int(r_px * 0.7)))

        # spin marker: a point on the body's local +X meridian
        marker = world @ np.array([body.radius, 0.0, 0.0, 1.0])
        marker_clip = vp @ marker
        if r_px >= 3 and marker_clip[3] > 0 and marker_clip[3] < clip[3]:
            mx, my = self._to_pixel(marker_clip, viewport)
            pygame.draw.circle(surface, (255, 255, 255), (mx, my), max(1, r_px // 5))

        if body.has_ring:
            self._draw_ring(surface, body, world, vp, viewport, behind=False, clip=clip)

    def _draw_ring(self, surface, body, world, vp, viewport, behind: bool, clip):
        """Ring in the body's local XZ plane, split at the body's depth."""
        color = tuple(min(255, int(c * 1.1)) for c in body.color)
        for radius in (body.radius + 2.0, body.radius + 4.0, body.radius + 6.0):
            pts = transform_points(world, _circle_points(radius, RING_SEGMENTS))
            hom = pts @ vp.T
            px, py, vis = project_points(pts[:, :3], vp, viewport)
            far = hom[:, 3] >= clip[3]
            sel = vis & (far if behind else ~far)
            n = len(px)
            for i in range(n):
                j = (i + 1) % n
                if sel[i] and sel[j]:
                    pygame.draw.line(surface, color, (px[i], py[i]), (px[j], py[j]), 2)

    # -----------------------------------------------------------------------
    # Overlay
    # -----------------------------------------------------------------------

    def draw_labels(self, surface, placements: List[LabelPlacement]):
        """Overlay consumer: one label per visible placement, hidden otherwise."""
        font = self._font(14)
        for p in placements:
            if not p.visible:
                continue
            txt = font.render(p.name, True, _LABEL_COLOR)
            w, h = txt.get_width() + 8, txt.get_height() + 4
            left, top = label_anchor(p, w, h)
            box = pygame.Surface((w, h), pygame.SRCALPHA)
            box.fill(_LABEL_BG)
            surface.blit(box, (left, top))
            surface.blit(txt, (left + 4, top + 2))
