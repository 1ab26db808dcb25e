from __future__ import annotations

import math
from typing import List

from ..colors import hsl
from ..context import InputState, Viewport
from ..surface import Surface
from ..vec import EPSILON, Vec2, v_clamp_length, wrap_jump
from .base import Scene


class Boid:
    __slots__ = ("x", "y", "vx", "vy", "color")

    def __init__(self, x: float, y: float, vx: float, vy: float, color) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.color = color

    @property
    def heading(self) -> float:
        return math.atan2(self.vy, self.vx)

    @property
    def speed(self) -> float:
        return math.sqrt(self.vx * self.vx + self.vy * self.vy)


class BoidsScene(Scene):
    """
    Separation / alignment / cohesion flocking with the pointer as a predator.

    Boids are updated one after another in place, so later boids already see
    the new state of earlier ones within the same tick. Neighbours are found
    with a plain all-pairs scan.
    """

    display_name = "Boids (Flocking)"

    count: int = 150
    initial_speed: float = 4.0
    neighbour_radius: float = 50.0
    rule_weight: float = 0.05
    predator_radius: float = 150.0
    flee_weight: float = 0.05
    max_speed: float = 4.0

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.boids: List[Boid] = []

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.boids = [
            Boid(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self._uniform(self.initial_speed),
                self._uniform(self.initial_speed),
                hsl(rng.random() * 60.0 + 200.0, 70.0, 60.0),
            )
            for _ in range(self.count)
        ]

    def flocking_term(self, b: Boid) -> Vec2:
        """Velocity change from the three flocking rules; zero without neighbours."""
        sep_x = sep_y = 0.0
        align_x = align_y = 0.0
        coh_x = coh_y = 0.0
        n = 0
        radius = self.neighbour_radius

        for other in self.boids:
            if other is b:
                continue
            dx = other.x - b.x
            dy = other.y - b.y
            dist = math.sqrt(dx * dx + dy * dy)
            if dist >= radius:
                continue
            if dist > EPSILON:
                sep_x -= dx / dist
                sep_y -= dy / dist
            align_x += other.vx
            align_y += other.vy
            coh_x += other.x
            coh_y += other.y
            n += 1

        if n == 0:
            return 0.0, 0.0

        k = self.rule_weight
        align_x /= n
        align_y /= n
        coh_x = (coh_x / n - b.x) * k
        coh_y = (coh_y / n - b.y) * k
        return sep_x * k + align_x * k + coh_x, sep_y * k + align_y * k + coh_y

    def predator_term(self, b: Boid, input_state: InputState) -> Vec2:
        """Velocity change from fleeing the pointer; exactly zero without a pointer."""
        pointer = input_state.pointer
        if pointer is None:
            return 0.0, 0.0
        dx = pointer[0] - b.x
        dy = pointer[1] - b.y
        if math.sqrt(dx * dx + dy * dy) >= self.predator_radius:
            return 0.0, 0.0
        return -dx * self.flee_weight, -dy * self.flee_weight

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        w, h = viewport.width, viewport.height
        for b in self.boids:
            fx, fy = self.flocking_term(b)
            px, py = self.predator_term(b, input_state)
            b.vx, b.vy = v_clamp_length((b.vx + fx + px, b.vy + fy + py), self.max_speed)

            b.x = wrap_jump(b.x + b.vx, w)
            b.y = wrap_jump(b.y + b.vy, h)

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for b in self.boids:
            surface.save()
            surface.translate(b.x, b.y)
            surface.rotate(b.heading)
            surface.fill_polygon([(10.0, 0.0), (-5.0, 5.0), (-5.0, -5.0)], b.color)
            surface.restore()

    def positions(self) -> List[Vec2]:
        return [(b.x, b.y) for b in self.boids]
