"""
Lattice scenes: Ripple (eased breathing grid) and Game of Life.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

import numpy as np

from ..colors import CYAN
from ..context import InputState, Viewport
from ..surface import Surface
from ..vec import Vec2
from .base import Scene

# ---------------------------------------------
# Ripple
# ---------------------------------------------


class RipplePoint:
    __slots__ = ("base_x", "base_y", "x", "y")

    def __init__(self, base_x: float, base_y: float) -> None:
        self.base_x = base_x
        self.base_y = base_y
        self.x = base_x
        self.y = base_y


class RippleScene(Scene):
    """
    Breathing lattice pushed aside by the pointer.

    Each point computes a target (base position plus an idle wave on Y, minus
    a repulsive displacement near the pointer) and moves ``ease`` of the way
    there per tick. The easing is what produces the breathing motion; points
    are never snapped to their target.
    """

    display_name = "Ripple"

    spacing: float = 30.0
    phase_step: float = 0.05
    wave_scale: float = 0.02
    wave_amplitude: float = 5.0
    pointer_radius: float = 300.0
    max_displacement: float = 50.0
    ease: float = 0.1
    color = (0, 255, 150)

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.points: List[RipplePoint] = []
        self.phase = 0.0

    def init(self, viewport: Viewport) -> None:
        cols = int(math.ceil(viewport.width / self.spacing))
        rows = int(math.ceil(viewport.height / self.spacing))
        self.phase = 0.0
        self.points = [
            RipplePoint(x * self.spacing, y * self.spacing)
            for y in range(rows + 1)
            for x in range(cols + 1)
        ]

    def target(self, p: RipplePoint, input_state: InputState) -> Vec2:
        idle = (
            math.sin(p.base_x * self.wave_scale + self.phase) * self.wave_amplitude
            + math.cos(p.base_y * self.wave_scale + self.phase) * self.wave_amplitude
        )
        tx = p.base_x
        ty = p.base_y + idle

        pointer = input_state.pointer
        if pointer is not None:
            dx = pointer[0] - p.base_x
            dy = pointer[1] - p.base_y
            dist = math.sqrt(dx * dx + dy * dy)
            if dist < self.pointer_radius:
                angle = math.atan2(dy, dx)
                displacement = (self.pointer_radius - dist) / self.pointer_radius * self.max_displacement
                tx -= math.cos(angle) * displacement
                ty -= math.sin(angle) * displacement
        return tx, ty

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        self.phase += self.phase_step
        for p in self.points:
            tx, ty = self.target(p, input_state)
            p.x += (tx - p.x) * self.ease
            p.y += (ty - p.y) * self.ease

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        for p in self.points:
            surface.fill_circle(p.x, p.y, 2.0, self.color, 0.6)

    def positions(self) -> List[Vec2]:
        return [(p.x, p.y) for p in self.points]


# ---------------------------------------------
# Game of Life
# ---------------------------------------------

NEIGHBOUR_OFFSETS: List[Tuple[int, int]] = [
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
]


def count_neighbours(grid: np.ndarray) -> np.ndarray:
    """Live neighbour count of every cell on a torus."""
    counts = np.zeros(grid.shape, dtype=np.uint8)
    for dx, dy in NEIGHBOUR_OFFSETS:
        counts += np.roll(grid, (dx, dy), axis=(0, 1))
    return counts


class LifeScene(Scene):
    """
    Conway's Game of Life (B3/S23) on a torus, painted by the pointer.

    The grid is indexed ``[column, row]``. Each tick the 3x3 block around the
    pointer's cell is set alive first, then the next generation is computed
    from the current buffer into the spare one and the two are swapped.
    """

    display_name = "Game of Life"

    cell_size: int = 10
    initial_density: float = 0.15
    color = CYAN

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.cols = 0
        self.rows = 0
        self.grid = np.zeros((0, 0), dtype=np.uint8)
        self._next = np.zeros((0, 0), dtype=np.uint8)

    def init(self, viewport: Viewport) -> None:
        self.cols = max(1, int(math.ceil(viewport.width / self.cell_size)))
        self.rows = max(1, int(math.ceil(viewport.height / self.cell_size)))
        self.grid = self._empty()
        self._next = self._empty()
        self.randomize()

    def _empty(self) -> np.ndarray:
        return np.zeros((self.cols, self.rows), dtype=np.uint8)

    def randomize(self) -> None:
        draws = np.array([self.rng.random() for _ in range(self.cols * self.rows)])
        # column-major fill order, one draw per cell
        self.grid[:, :] = draws.reshape(self.cols, self.rows) > 1.0 - self.initial_density

    def set_cells(self, cells: Iterable[Tuple[int, int]], clear: bool = True) -> None:
        """Seed live cells directly, bypassing the random fill."""
        if clear:
            self.grid.fill(0)
        for col, row in cells:
            self.grid[col % self.cols, row % self.rows] = 1

    def live_cells(self) -> List[Tuple[int, int]]:
        return [(int(c), int(r)) for c, r in zip(*np.nonzero(self.grid))]

    def paint(self, x: float, y: float) -> None:
        mx = int(math.floor(x / self.cell_size))
        my = int(math.floor(y / self.cell_size))
        for i in (-1, 0, 1):
            for j in (-1, 0, 1):
                self.grid[(mx + i) % self.cols, (my + j) % self.rows] = 1

    def step(self) -> None:
        grid = self.grid
        neighbours = count_neighbours(grid)
        alive = grid == 1
        born = ~alive & (neighbours == 3)
        survives = alive & ((neighbours == 2) | (neighbours == 3))
        np.logical_or(born, survives, out=self._next, casting="unsafe")
        self.grid, self._next = self._next, grid

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        pointer = input_state.pointer
        if pointer is not None:
            self.paint(*pointer)
        self.step()

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        size = self.cell_size
        surface.fill_rect(0, 0, viewport.width, viewport.height, (0, 0, 0), 0.1)
        for col, row in zip(*np.nonzero(self.grid)):
            surface.fill_rect(int(col) * size, int(row) * size, size - 1, size - 1, self.color)

    def positions(self) -> List[Vec2]:
        return [(float(c * self.cell_size), float(r * self.cell_size)) for c, r in self.live_cells()]
