from __future__ import annotations

import math
import random
from typing import List

from ..colors import GREEN, WHITE
from ..context import InputState, Viewport
from ..surface import Surface
from .base import Scene

GLYPHS = "0123456789ABCDEF"


class MatrixScene(Scene):
    """
    Falling glyph columns.

    ``drops[i]`` is the row offset of column ``i``. A column whose glyph is
    within ``lift_radius`` of the pointer drifts up by ``lift`` rows and is
    drawn white; otherwise it falls one row per tick. Once below the bottom
    edge a column restarts at the top with probability ``reset_chance`` per
    tick.
    """

    display_name = "Matrix Rain"

    font_size: int = 14
    start_rows: float = 100.0
    reset_chance: float = 0.025
    lift_radius: float = 100.0
    lift: float = 0.5

    def __init__(self, rng=None) -> None:
        super().__init__(rng)
        self.drops: List[float] = []
        self._glyph_rng = random.Random(self.rng.getrandbits(32))

    def init(self, viewport: Viewport) -> None:
        columns = int(math.floor(viewport.width / self.font_size))
        self.drops = [self.rng.random() * -self.start_rows for _ in range(columns)]

    def glyph_position(self, column: int):
        return column * self.font_size, self.drops[column] * self.font_size

    def near_pointer(self, column: int, input_state: InputState) -> bool:
        pointer = input_state.pointer
        if pointer is None:
            return False
        gx, gy = self.glyph_position(column)
        dx = gx - pointer[0]
        dy = gy - pointer[1]
        return dx * dx + dy * dy < self.lift_radius * self.lift_radius

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        for i in range(len(self.drops)):
            near = self.near_pointer(i, input_state)
            if self.drops[i] * self.font_size > viewport.height and self.rng.random() < self.reset_chance:
                self.drops[i] = 0.0
            if near:
                self.drops[i] -= self.lift
            else:
                self.drops[i] += 1.0

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        surface.fill_rect(0, 0, viewport.width, viewport.height, (0, 0, 0), 0.05)
        for i in range(len(self.drops)):
            glyph = GLYPHS[int(self._glyph_rng.random() * len(GLYPHS))]
            color = WHITE if self.near_pointer(i, input_state) else GREEN
            x, y = self.glyph_position(i)
            surface.text(glyph, x, y, color, size=self.font_size)

    def positions(self):
        return [self.glyph_position(i) for i in range(len(self.drops))]
