"""
Force-field scenes: Antigravity, Gravity, Vortex, Flow Field, Quantum Field
and Sine Waves.

Every model advances by one fixed tick per ``update``. Pointer-dependent
terms are split into their own methods so they can be checked in isolation;
each returns exactly ``(0.0, 0.0)`` when the pointer is absent.
"""

from __future__ import annotations

import math
from collections import deque
from typing import Deque, List, Tuple

from ..colors import hsl
from ..context import InputState, Viewport
from ..surface import Surface
from ..vec import EPSILON, Vec2, v_length, v_mul, v_normalize, v_sub, wrap_jump
from .base import Scene

ZERO: Vec2 = (0.0, 0.0)


# ---------------------------------------------
# Antigravity
# ---------------------------------------------


class Mote:
    __slots__ = ("x", "y", "vx", "vy", "size", "density")

    def __init__(self, x: float, y: float, vx: float, vy: float, size: float, density: float) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.size = size
        self.density = density


class AntigravityScene(Scene):
    """Drifting motes that bounce off the edges and flee the pointer."""

    display_name = "Antigravity"

    area_per_particle: float = 9000.0
    initial_speed: float = 1.5
    pointer_radius: float = 200.0
    connection_distance: float = 150.0
    color = (255, 255, 255)

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.particles: List[Mote] = []

    def init(self, viewport: Viewport) -> None:
        count = int(math.ceil(viewport.area / self.area_per_particle))
        rng = self.rng
        self.particles = [
            Mote(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self._uniform(self.initial_speed),
                self._uniform(self.initial_speed),
                2.0,
                rng.random() * 30.0 + 1.0,
            )
            for _ in range(count)
        ]

    def pointer_push(self, p: Mote, input_state: InputState) -> Vec2:
        """Displacement the pointer applies to ``p`` this tick (subtracted from position)."""
        pointer = input_state.pointer
        if pointer is None:
            return ZERO
        offset = v_sub(pointer, (p.x, p.y))
        dist = v_length(offset)
        if dist >= self.pointer_radius or dist <= EPSILON:
            return ZERO
        force = (self.pointer_radius - dist) / self.pointer_radius
        return v_mul(v_normalize(offset), force * p.density)

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        w, h = viewport.width, viewport.height
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy

            if p.x < 0 or p.x > w:
                p.vx = -p.vx
            if p.y < 0 or p.y > h:
                p.vy = -p.vy

            push_x, push_y = self.pointer_push(p, input_state)
            p.x -= push_x
            p.y -= push_y

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        particles = self.particles
        max_dist = self.connection_distance
        for i, p in enumerate(particles):
            surface.fill_circle(p.x, p.y, p.size, self.color, 0.8)
            for p2 in particles[i + 1:]:
                dx = p.x - p2.x
                dy = p.y - p2.y
                dist = math.sqrt(dx * dx + dy * dy)
                if dist < max_dist:
                    opacity = 1.0 - dist / max_dist
                    surface.line(p.x, p.y, p2.x, p2.y, self.color, opacity * 0.5)

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.particles]


# ---------------------------------------------
# Gravity
# ---------------------------------------------


class Body:
    __slots__ = ("x", "y", "vx", "vy", "size")

    def __init__(self, x: float, y: float, vx: float, vy: float, size: float) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.size = size


class GravityScene(Scene):
    """Bodies pulled toward the pointer by a softened inverse-square law."""

    display_name = "Gravity"

    area_per_particle: float = 5000.0
    initial_speed: float = 2.0
    strength: float = 500.0
    softening: float = 100.0
    friction: float = 0.95
    tether_radius_sq: float = 40000.0
    color = (100, 200, 255)

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.particles: List[Body] = []

    def init(self, viewport: Viewport) -> None:
        count = int(math.ceil(viewport.area / self.area_per_particle))
        rng = self.rng
        self.particles = [
            Body(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self._uniform(self.initial_speed),
                self._uniform(self.initial_speed),
                rng.random() * 2.0 + 1.0,
            )
            for _ in range(count)
        ]

    def pointer_pull(self, p: Body, input_state: InputState) -> Vec2:
        """Velocity the pointer adds to ``p`` this tick."""
        pointer = input_state.pointer
        if pointer is None:
            return ZERO
        dx = pointer[0] - p.x
        dy = pointer[1] - p.y
        force = self.strength / (dx * dx + dy * dy + self.softening)
        angle = math.atan2(dy, dx)
        return math.cos(angle) * force, math.sin(angle) * force

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        w, h = viewport.width, viewport.height
        friction = self.friction
        for p in self.particles:
            ax, ay = self.pointer_pull(p, input_state)
            p.vx = (p.vx + ax) * friction
            p.vy = (p.vy + ay) * friction

            p.x = wrap_jump(p.x + p.vx, w)
            p.y = wrap_jump(p.y + p.vy, h)

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for p in self.particles:
            surface.fill_circle(p.x, p.y, p.size, self.color, 0.8)

        pointer = input_state.pointer
        if pointer is None:
            return
        mx, my = pointer
        for p in self.particles:
            dx = mx - p.x
            dy = my - p.y
            if dx * dx + dy * dy < self.tether_radius_sq:
                surface.line(mx, my, p.x, p.y, self.color, 0.1)

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.particles]


# ---------------------------------------------
# Vortex
# ---------------------------------------------


class Swirler:
    __slots__ = ("x", "y", "size", "color")

    def __init__(self, x: float, y: float, size: float, color) -> None:
        self.x = x
        self.y = y
        self.size = size
        self.color = color


class VortexScene(Scene):
    """Particles spiral into the pointer and respawn past the event horizon."""

    display_name = "Vortex"

    count: int = 500
    base_radial_speed: float = 1.0
    radial_pull: float = 200.0
    base_angular_speed: float = 0.02
    angular_pull: float = 5.0
    event_horizon: float = 5.0
    respawn_ring: float = 0.8

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.particles: List[Swirler] = []

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.particles = [
            Swirler(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                rng.random() * 2.0 + 0.5,
                hsl(rng.random() * 60.0 + 220.0, 80.0, 60.0),
            )
            for _ in range(self.count)
        ]

    def centre(self, input_state: InputState, viewport: Viewport) -> Vec2:
        return input_state.pointer_or(viewport.center)

    def step_polar(self, dist: float, angle: float) -> Tuple[float, float]:
        """Advance one particle in polar coordinates around the centre."""
        radial = self.base_radial_speed + self.radial_pull / (dist + 1.0)
        angular = self.base_angular_speed + self.angular_pull / (dist + 1.0)
        return dist - radial, angle + angular

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        cx, cy = self.centre(input_state, viewport)
        ring = viewport.max_side * self.respawn_ring
        for p in self.particles:
            dx = p.x - cx
            dy = p.y - cy
            dist, angle = self.step_polar(math.sqrt(dx * dx + dy * dy), math.atan2(dy, dx))

            if dist < self.event_horizon:
                spawn_angle = self.rng.random() * math.tau
                p.x = cx + math.cos(spawn_angle) * ring
                p.y = cy + math.sin(spawn_angle) * ring
            else:
                p.x = cx + math.cos(angle) * dist
                p.y = cy + math.sin(angle) * dist

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for p in self.particles:
            surface.fill_circle(p.x, p.y, p.size, p.color)

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.particles]


# ---------------------------------------------
# Flow field
# ---------------------------------------------


class Streamer:
    __slots__ = ("x", "y", "vx", "vy", "history", "base_hue", "hue")

    def __init__(self, x: float, y: float, max_length: int, base_hue: float) -> None:
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.history: Deque[Vec2] = deque(maxlen=max_length)
        self.base_hue = base_hue
        self.hue = base_hue


class FlowFieldScene(Scene):
    """Particles follow a sin/cos angle field and flow around the pointer like a rock in a stream."""

    display_name = "Flow Field"

    count: int = 1000
    noise_scale: float = 0.005
    base_speed: float = 0.5
    pointer_radius: float = 150.0
    pointer_boost: float = 2.0
    friction: float = 0.95
    min_trail: int = 10
    trail_spread: int = 20

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.particles: List[Streamer] = []

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.particles = [
            Streamer(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self.min_trail + int(rng.random() * self.trail_spread),
                rng.random() * 60.0 + 180.0,
            )
            for _ in range(self.count)
        ]

    def field_angle(self, x: float, y: float) -> float:
        return (math.sin(x * self.noise_scale) + math.cos(y * self.noise_scale)) * math.tau

    def pointer_steer(self, p: Streamer, input_state: InputState):
        """Angle override and speed boost near the pointer, or None."""
        pointer = input_state.pointer
        if pointer is None:
            return None
        dx = p.x - pointer[0]
        dy = p.y - pointer[1]
        if dx * dx + dy * dy >= self.pointer_radius * self.pointer_radius:
            return None
        return math.atan2(dy, dx) + math.pi / 2.0, self.pointer_boost

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        w, h = viewport.width, viewport.height
        for p in self.particles:
            angle = self.field_angle(p.x, p.y)
            boost = 0.0
            steer = self.pointer_steer(p, input_state)
            if steer is not None:
                angle, boost = steer
                p.hue = 0.0
            else:
                p.hue = p.base_hue

            speed = self.base_speed + boost
            p.vx = (p.vx + math.cos(angle) * speed) * self.friction
            p.vy = (p.vy + math.sin(angle) * speed) * self.friction
            p.x += p.vx
            p.y += p.vy

            p.history.append((p.x, p.y))

            if p.x < 0 or p.x > w or p.y < 0 or p.y > h:
                p.x = wrap_jump(p.x, w)
                p.y = wrap_jump(p.y, h)
                p.history.clear()

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for p in self.particles:
            if len(p.history) > 1:
                surface.polyline(list(p.history), hsl(p.hue, 80.0, 60.0), 0.5)

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.particles]


# ---------------------------------------------
# Quantum field
# ---------------------------------------------


class Quantum:
    __slots__ = ("x", "y", "base_x", "base_y", "vx", "vy", "color")

    def __init__(self, x, y, base_x, base_y, vx, vy, color) -> None:
        self.x = x
        self.y = y
        self.base_x = base_x
        self.base_y = base_y
        self.vx = vx
        self.vy = vy
        self.color = color


class QuantumFieldScene(Scene):
    """
    Jittering particles that collapse onto an anchor while observed.

    Each tick adds uniform jitter of up to ``jitter`` px per axis. With the
    pointer present, a particle within ``observer_radius`` eases toward its
    anchor; a distant particle instead lets its anchor drift (wrapping at the
    viewport edges). Without a pointer only the jitter applies.
    """

    display_name = "Quantum Field"

    count: int = 300
    jitter: float = 10.0
    observer_radius: float = 200.0
    collapse_rate: float = 0.1
    drift_speed: float = 10.0
    drift_scale: float = 0.1

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.particles: List[Quantum] = []

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        w, h = viewport.width, viewport.height
        self.particles = [
            Quantum(
                rng.random() * w,
                rng.random() * h,
                rng.random() * w,
                rng.random() * h,
                self._uniform(self.drift_speed),
                self._uniform(self.drift_speed),
                hsl(rng.random() * 60.0 + 180.0, 100.0, 70.0),
            )
            for _ in range(self.count)
        ]

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        w, h = viewport.width, viewport.height
        pointer = input_state.pointer
        spread = self.jitter * 2.0
        for p in self.particles:
            p.x += self._uniform(spread)
            p.y += self._uniform(spread)

            if pointer is None:
                continue

            dx = pointer[0] - p.x
            dy = pointer[1] - p.y
            if math.sqrt(dx * dx + dy * dy) < self.observer_radius:
                p.x += (p.base_x - p.x) * self.collapse_rate
                p.y += (p.base_y - p.y) * self.collapse_rate
            else:
                p.base_x = wrap_jump(p.base_x + p.vx * self.drift_scale, w)
                p.base_y = wrap_jump(p.base_y + p.vy * self.drift_scale, h)

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for p in self.particles:
            surface.fill_rect(p.x, p.y, 2, 2, p.color)

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.particles]


# ---------------------------------------------
# Sine waves
# ---------------------------------------------


class WavePoint:
    __slots__ = ("base_x", "base_y", "size", "lightness")

    def __init__(self, base_x: float, base_y: float) -> None:
        self.base_x = base_x
        self.base_y = base_y
        self.size = 1.0
        self.lightness = 20.0


class SineWavesScene(Scene):
    """Static lattice whose dot size and brightness follow a radial sine wave."""

    display_name = "Sine Waves"

    spacing: float = 40.0
    wave_number: float = 0.03
    phase_step: float = 0.05
    hue: float = 200.0

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.points: List[WavePoint] = []
        self.phase = 0.0

    def init(self, viewport: Viewport) -> None:
        cols = int(math.ceil(viewport.width / self.spacing))
        rows = int(math.ceil(viewport.height / self.spacing))
        self.phase = 0.0
        self.points = [
            WavePoint(x * self.spacing, y * self.spacing) for y in range(rows) for x in range(cols)
        ]

    def field_value(self, dist: float) -> float:
        return math.sin(dist * self.wave_number - self.phase)

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        self.phase += self.phase_step
        sx, sy = input_state.pointer_or(viewport.center)
        for p in self.points:
            dx = p.base_x - sx
            dy = p.base_y - sy
            z = self.field_value(math.sqrt(dx * dx + dy * dy))
            p.size = (z + 1.0) * 3.0 + 1.0
            p.lightness = (z + 1.0) * 40.0 + 20.0

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for p in self.points:
            surface.fill_circle(p.base_x, p.base_y, p.size, hsl(self.hue, 80.0, p.lightness))

    def positions(self) -> List[Vec2]:
        return [(p.base_x, p.base_y) for p in self.points]
