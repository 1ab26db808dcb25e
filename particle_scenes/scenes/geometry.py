"""
Closed-form scenes: Galaxy, Hyperspace, Moire and Kaleidoscope.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from ..colors import CYAN, WHITE, hsl
from ..context import InputState, Viewport
from ..surface import Surface
from ..vec import Vec2, clamp
from .base import Scene

# ---------------------------------------------
# Galaxy
# ---------------------------------------------


class Star:
    __slots__ = ("base_radius", "angle", "speed", "size", "color", "x", "y")

    def __init__(self, base_radius: float, angle: float, speed: float, size: float, color) -> None:
        self.base_radius = base_radius
        self.angle = angle
        self.speed = speed
        self.size = size
        self.color = color
        self.x = 0.0
        self.y = 0.0


def spiral_radius(spiral_angle: float) -> float:
    """Arm radius at a given spiral angle."""
    return 5.0 + spiral_angle ** 1.5 * 15.0


class GalaxyScene(Scene):
    """Spiral galaxy with differential rotation; pointer Y tilts the disc."""

    display_name = "Galaxy"

    count: int = 800
    arms: int = 3
    turns: float = 3.0
    scatter: float = 0.4
    base_speed: float = 0.002
    default_tilt: float = 0.6
    min_tilt: float = 0.3
    tilt_range: float = 0.7

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.stars: List[Star] = []
        self.tilt = self.default_tilt

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.tilt = self.default_tilt
        self.stars = []
        for _ in range(self.count):
            spiral_angle = rng.random() * math.tau * self.turns
            arm_offset = int(rng.random() * self.arms) / self.arms * math.tau
            radius = spiral_radius(spiral_angle)
            offset = self._uniform(radius * self.scatter)
            self.stars.append(
                Star(
                    radius + offset,
                    spiral_angle + arm_offset,
                    self.base_speed / (radius * 0.01 + 1.0),
                    rng.random() * 2.0 + 0.5,
                    self.star_color(radius),
                )
            )
        cx, cy = viewport.center
        for s in self.stars:
            s.x, s.y = self.project(s, cx, cy)

    def star_color(self, radius: float):
        if radius < 50:
            return hsl(60.0, 100.0, 80.0)
        if radius < 150:
            return hsl(300.0 + self.rng.random() * 40.0, 80.0, 60.0)
        return hsl(200.0 + self.rng.random() * 60.0, 80.0, 60.0)

    def tilt_for(self, input_state: InputState, viewport: Viewport) -> float:
        pointer = input_state.pointer
        if pointer is None:
            return self.default_tilt
        return self.min_tilt + (pointer[1] / viewport.height) * self.tilt_range

    def project(self, s: Star, cx: float, cy: float) -> Vec2:
        return (
            cx + math.cos(s.angle) * s.base_radius,
            cy + math.sin(s.angle) * s.base_radius * self.tilt,
        )

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        cx, cy = viewport.center
        self.tilt = self.tilt_for(input_state, viewport)
        for s in self.stars:
            s.angle += s.speed
            s.x, s.y = self.project(s, cx, cy)

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for s in self.stars:
            surface.fill_circle(s.x, s.y, s.size, s.color)

    def positions(self) -> List[Vec2]:
        return [(s.x, s.y) for s in self.stars]


# ---------------------------------------------
# Hyperspace
# ---------------------------------------------


class WarpStar:
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float) -> None:
        self.x = x
        self.y = y
        self.z = z


class HyperspaceScene(Scene):
    """Star field flying toward the viewer; pointer distance from centre sets the speed."""

    display_name = "Hyperspace"

    count: int = 1000
    idle_speed: float = 5.0
    speed_scale: float = 0.1
    streak_depth: float = 20.0

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.stars: List[WarpStar] = []

    def _lateral(self, viewport: Viewport) -> Vec2:
        return (
            self.rng.random() * viewport.width - viewport.width / 2.0,
            self.rng.random() * viewport.height - viewport.height / 2.0,
        )

    def init(self, viewport: Viewport) -> None:
        self.stars = []
        for _ in range(self.count):
            x, y = self._lateral(viewport)
            # depth in (0, width] so the perspective divide is always defined
            self.stars.append(WarpStar(x, y, (1.0 - self.rng.random()) * viewport.width))

    def speed_for(self, input_state: InputState, viewport: Viewport) -> float:
        pointer = input_state.pointer
        if pointer is None:
            return self.idle_speed
        cx, cy = viewport.center
        dx = pointer[0] - cx
        dy = pointer[1] - cy
        return math.sqrt(dx * dx + dy * dy) * self.speed_scale

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        speed = self.speed_for(input_state, viewport)
        for s in self.stars:
            s.z -= speed
            if s.z <= 0:
                s.z = viewport.width
                s.x, s.y = self._lateral(viewport)

    def project(self, s: WarpStar, depth: float, viewport: Viewport) -> Vec2:
        cx, cy = viewport.center
        return s.x / depth * viewport.width + cx, s.y / depth * viewport.height + cy

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for s in self.stars:
            if s.z <= 0:
                continue
            nearness = 1.0 - s.z / viewport.width
            sx, sy = self.project(s, s.z, viewport)
            px, py = self.project(s, s.z + self.streak_depth, viewport)
            surface.line(px, py, sx, sy, WHITE, nearness, width=nearness * 3.0)

    def positions(self) -> List[Tuple[float, float, float]]:
        return [(s.x, s.y, s.z) for s in self.stars]


# ---------------------------------------------
# Moire
# ---------------------------------------------


class MoireScene(Scene):
    """Two concentric-circle gratings, one fixed at the centre and one following the pointer."""

    display_name = "Moire Patterns"

    spacing: float = 8.0
    stroke_width: float = 2.0

    def init(self, viewport: Viewport) -> None:
        pass

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        pass

    def radii(self, viewport: Viewport) -> List[float]:
        count = int(math.ceil(viewport.max_side / self.spacing))
        return [i * self.spacing for i in range(count)]

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        cx, cy = viewport.center
        radii = self.radii(viewport)
        for r in radii:
            surface.stroke_circle(cx, cy, r, WHITE, width=self.stroke_width)

        mx, my = input_state.pointer_or((cx, cy))
        for r in radii:
            surface.stroke_circle(mx, my, r, CYAN, width=self.stroke_width)


# ---------------------------------------------
# Kaleidoscope
# ---------------------------------------------


def symmetry_for_pointer(pointer_x: float, width: float, lo: int = 2, hi: int = 12) -> int:
    """Fold count for a pointer X position: ``lo`` at the left edge, ``hi`` at the right."""
    if width <= 0:
        return lo
    return int(clamp(math.floor(pointer_x / width * hi), lo, hi))


class Shard:
    __slots__ = ("x", "y", "vx", "vy", "size", "color")

    def __init__(self, x, y, vx, vy, size, color) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.size = size
        self.color = color


class KaleidoscopeScene(Scene):
    """Bouncing shards drawn with N-fold rotational and mirror symmetry."""

    display_name = "Kaleidoscope"

    count: int = 50
    initial_speed: float = 4.0
    default_symmetry: int = 6
    min_symmetry: int = 2
    max_symmetry: int = 12

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.particles: List[Shard] = []
        self.symmetry = self.default_symmetry

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.symmetry = self.default_symmetry
        self.particles = [
            Shard(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self._uniform(self.initial_speed),
                self._uniform(self.initial_speed),
                rng.random() * 5.0 + 2.0,
                hsl(rng.random() * 360.0, 100.0, 50.0),
            )
            for _ in range(self.count)
        ]

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        pointer = input_state.pointer
        if pointer is not None:
            self.symmetry = symmetry_for_pointer(
                pointer[0], viewport.width, self.min_symmetry, self.max_symmetry
            )

        w, h = viewport.width, viewport.height
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            if p.x < 0 or p.x > w:
                p.vx = -p.vx
            if p.y < 0 or p.y > h:
                p.vy = -p.vy

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        cx, cy = viewport.center
        step = math.tau / self.symmetry
        surface.save()
        surface.translate(cx, cy)
        for _ in range(self.symmetry):
            surface.rotate(step)
            for p in self.particles:
                rel_x = p.x - cx
                rel_y = p.y - cy
                surface.fill_circle(rel_x, rel_y, p.size, p.color)
                surface.fill_circle(rel_x, -rel_y, p.size, p.color)
        surface.restore()

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.particles]
