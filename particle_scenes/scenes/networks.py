"""
Node-and-edge scenes: Voronoi (nearest-seed network) and Neural Network.
"""

from __future__ import annotations

from typing import List

from ..colors import WHITE, hsl
from ..context import InputState, Viewport
from ..surface import Surface
from ..vec import Vec2, distance
from .base import Scene


class Node:
    __slots__ = ("x", "y", "vx", "vy", "color", "pulse")

    def __init__(self, x: float, y: float, vx: float, vy: float, color=WHITE) -> None:
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.color = color
        self.pulse = 0.0


def bounce(node: Node, width: float, height: float) -> None:
    """Integrate one tick and reflect velocity once a bound is crossed."""
    node.x += node.vx
    node.y += node.vy
    if node.x < 0 or node.x > width:
        node.vx = -node.vx
    if node.y < 0 or node.y > height:
        node.vy = -node.vy


class VoronoiScene(Scene):
    """
    Drifting seeds joined to every seed within ``link_distance``.

    This approximates the Delaunay dual of the Voronoi diagram with plain
    distance-limited edges. The pointer joins the network as an extra white
    seed while present.
    """

    display_name = "Voronoi"

    count: int = 20
    initial_speed: float = 2.0
    seed_radius: float = 4.0
    link_distance: float = 300.0

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.seeds: List[Node] = []
        self.pointer_seed = None

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.pointer_seed = None
        self.seeds = [
            Node(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self._uniform(self.initial_speed),
                self._uniform(self.initial_speed),
                hsl(rng.random() * 360.0, 70.0, 50.0),
            )
            for _ in range(self.count)
        ]

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        for s in self.seeds:
            bounce(s, viewport.width, viewport.height)

        pointer = input_state.pointer
        self.pointer_seed = None if pointer is None else Node(pointer[0], pointer[1], 0.0, 0.0, WHITE)

    def all_seeds(self) -> List[Node]:
        if self.pointer_seed is None:
            return list(self.seeds)
        return self.seeds + [self.pointer_seed]

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        seeds = self.all_seeds()
        for i, s1 in enumerate(seeds):
            surface.fill_circle(s1.x, s1.y, self.seed_radius, s1.color)
            for s2 in seeds[i + 1:]:
                if distance(s1.x, s1.y, s2.x, s2.y) < self.link_distance:
                    surface.line(s1.x, s1.y, s2.x, s2.y, WHITE, 0.2)

    def positions(self) -> List[Vec2]:
        return [(s.x, s.y) for s in self.seeds]


class NeuralScene(Scene):
    """Slow drifting nodes that light up near the pointer; pulses fade linearly."""

    display_name = "Neural Network"

    count: int = 60
    initial_speed: float = 0.5
    pulse_decay: float = 0.02
    trigger_radius: float = 100.0
    connection_radius: float = 150.0
    edge_color = (100, 200, 255)

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.nodes: List[Node] = []

    def init(self, viewport: Viewport) -> None:
        rng = self.rng
        self.nodes = [
            Node(
                rng.random() * viewport.width,
                rng.random() * viewport.height,
                self._uniform(self.initial_speed),
                self._uniform(self.initial_speed),
            )
            for _ in range(self.count)
        ]

    def triggered(self, n: Node, input_state: InputState) -> bool:
        pointer = input_state.pointer
        if pointer is None:
            return False
        return distance(pointer[0], pointer[1], n.x, n.y) < self.trigger_radius

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        for n in self.nodes:
            bounce(n, viewport.width, viewport.height)
            if n.pulse > 0:
                n.pulse = max(0.0, n.pulse - self.pulse_decay)

        for n in self.nodes:
            if self.triggered(n, input_state):
                n.pulse = 1.0

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        nodes = self.nodes
        for i, n1 in enumerate(nodes):
            surface.fill_circle(n1.x, n1.y, 3.0 + n1.pulse * 5.0, WHITE, min(1.0, 0.3 + n1.pulse))
            for n2 in nodes[i + 1:]:
                if distance(n1.x, n1.y, n2.x, n2.y) < self.connection_radius:
                    alpha = min(1.0, 0.1 + (n1.pulse + n2.pulse) * 0.5)
                    surface.line(n1.x, n1.y, n2.x, n2.y, self.edge_color, alpha)

    def positions(self) -> List[Vec2]:
        return [(n.x, n.y) for n in self.nodes]
