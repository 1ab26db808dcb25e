from __future__ import annotations

import math
from collections import deque
from typing import Deque, List

from ..context import InputState, Viewport
from ..surface import Surface
from ..vec import Vec2, v_add
from .base import Scene


class Root:
    __slots__ = ("history", "active")

    def __init__(self, x: float, y: float, max_length: int) -> None:
        self.history: Deque[Vec2] = deque([(x, y)], maxlen=max_length)
        self.active = True

    @property
    def head(self) -> Vec2:
        return self.history[-1]


class RootsScene(Scene):
    """
    Roots grow from the edges toward the pointer (or the centre).

    A root that reaches its target stops growing and stays on screen, and a
    replacement is scheduled ``respawn_delay`` ticks later. Pending respawns
    are plain deadline ticks checked in ``update``; ``init`` drops them, so a
    scene switch never lets an old schedule repopulate a fresh scene.
    """

    display_name = "Fractal Roots"

    initial_roots: int = 20
    step: float = 5.0
    wiggle: float = 1.0
    arrive_distance: float = 10.0
    max_length: int = 100
    # ~100 ms at 60 fps
    respawn_delay: int = 6
    max_roots: int = 200
    color = (255, 200, 100)

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.roots: List[Root] = []
        self.pending: List[int] = []
        self.tick = 0

    def init(self, viewport: Viewport) -> None:
        self.roots = []
        self.pending = []
        self.tick = 0
        for _ in range(self.initial_roots):
            self.spawn_root(viewport)

    def spawn_root(self, viewport: Viewport) -> Root:
        w, h = viewport.width, viewport.height
        side = int(self.rng.random() * 4)
        if side == 0:
            x, y = self.rng.random() * w, 0.0
        elif side == 1:
            x, y = w, self.rng.random() * h
        elif side == 2:
            x, y = self.rng.random() * w, h
        else:
            x, y = 0.0, self.rng.random() * h
        root = Root(x, y, self.max_length)
        self.roots.append(root)
        return root

    def _fire_pending(self, viewport: Viewport) -> None:
        due = [t for t in self.pending if t <= self.tick]
        if not due:
            return
        self.pending = [t for t in self.pending if t > self.tick]
        for _ in due:
            self.spawn_root(viewport)

    def _retire_oldest(self) -> None:
        while len(self.roots) > self.max_roots:
            for i, root in enumerate(self.roots):
                if not root.active:
                    del self.roots[i]
                    break
            else:
                return

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        self.tick += 1
        self._fire_pending(viewport)

        tx, ty = input_state.pointer_or(viewport.center)
        for root in self.roots:
            if not root.active:
                continue
            hx, hy = root.head
            dx = tx - hx
            dy = ty - hy
            if math.sqrt(dx * dx + dy * dy) < self.arrive_distance:
                root.active = False
                self.pending.append(self.tick + self.respawn_delay)
                continue

            angle = math.atan2(dy, dx) + self._uniform(self.wiggle)
            root.history.append(v_add(root.head, (math.cos(angle) * self.step, math.sin(angle) * self.step)))

        self._retire_oldest()

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for root in self.roots:
            if len(root.history) > 1:
                surface.polyline(list(root.history), self.color, 0.5, width=2)

    def positions(self) -> List[Vec2]:
        return [p for root in self.roots for p in root.history]
