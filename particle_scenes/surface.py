"""
Drawing surfaces the scenes render into.

``Surface`` owns the transform stack (save/translate/rotate/restore) and maps
every primitive into surface coordinates before handing it to a backend hook.
Two backends exist:

- ``PygameSurface`` rasterizes with ``pygame.draw`` onto a pygame surface in
  call order. Translucent primitives are drawn on an SRCALPHA scratch layer
  and blended onto the target one at a time.
- ``RecordingSurface`` keeps a list of the primitive calls. Tests and the
  headless runner use it so no window is ever needed.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

import pygame

from .colors import BLACK, RGB
from .vec import Vec2

# Affine matrix (a, b, c, d, e, f) with x' = a*x + c*y + e, y' = b*x + d*y + f
Matrix = Tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

# pygame converts coordinates to C ints
COORD_LIMIT = float(1 << 20)


class Surface:
    """Primitive draw calls plus a canvas-style transform stack."""

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self._matrix: Matrix = IDENTITY
        self._stack: List[Matrix] = []

    # ---------------
    # Transform stack
    # ---------------

    def save(self) -> None:
        self._stack.append(self._matrix)

    def restore(self) -> None:
        if self._stack:
            self._matrix = self._stack.pop()

    def reset_transform(self) -> None:
        self._matrix = IDENTITY
        self._stack.clear()

    def translate(self, tx: float, ty: float) -> None:
        a, b, c, d, e, f = self._matrix
        self._matrix = (a, b, c, d, e + a * tx + c * ty, f + b * tx + d * ty)

    def rotate(self, angle: float) -> None:
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        a, b, c, d, e, f = self._matrix
        self._matrix = (
            a * cos_a + c * sin_a,
            b * cos_a + d * sin_a,
            c * cos_a - a * sin_a,
            d * cos_a - b * sin_a,
            e,
            f,
        )

    def transform_point(self, x: float, y: float) -> Vec2:
        a, b, c, d, e, f = self._matrix
        return a * x + c * y + e, b * x + d * y + f

    def _length_scale(self) -> float:
        a, b, c, d, _, _ = self._matrix
        return math.sqrt(abs(a * d - b * c))

    def _is_axis_aligned(self) -> bool:
        a, b, c, d, _, _ = self._matrix
        return b == 0.0 and c == 0.0 and a > 0.0 and d > 0.0

    # ---------------
    # Primitives
    # ---------------

    def clear(self, color: RGB = BLACK) -> None:
        self._clear(color)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, alpha: float = 1.0) -> None:
        if self._is_axis_aligned():
            px, py = self.transform_point(x, y)
            self._fill_rect(px, py, w * self._matrix[0], h * self._matrix[3], color, alpha)
            return
        corners = [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
        self._fill_polygon([self.transform_point(cx, cy) for cx, cy in corners], color, alpha)

    def fill_circle(self, x: float, y: float, radius: float, color: RGB, alpha: float = 1.0) -> None:
        px, py = self.transform_point(x, y)
        self._fill_circle(px, py, radius * self._length_scale(), color, alpha)

    def stroke_circle(
        self, x: float, y: float, radius: float, color: RGB, alpha: float = 1.0, width: float = 1.0
    ) -> None:
        px, py = self.transform_point(x, y)
        self._stroke_circle(px, py, radius * self._length_scale(), color, alpha, width)

    def line(
        self, x0: float, y0: float, x1: float, y1: float, color: RGB, alpha: float = 1.0, width: float = 1.0
    ) -> None:
        p0 = self.transform_point(x0, y0)
        p1 = self.transform_point(x1, y1)
        self._polyline([p0, p1], color, alpha, width)

    def polyline(self, points: Sequence[Vec2], color: RGB, alpha: float = 1.0, width: float = 1.0) -> None:
        if len(points) < 2:
            return
        self._polyline([self.transform_point(x, y) for x, y in points], color, alpha, width)

    def fill_polygon(self, points: Sequence[Vec2], color: RGB, alpha: float = 1.0) -> None:
        if len(points) < 3:
            return
        self._fill_polygon([self.transform_point(x, y) for x, y in points], color, alpha)

    def text(self, value: str, x: float, y: float, color: RGB, size: int = 14, alpha: float = 1.0) -> None:
        px, py = self.transform_point(x, y)
        self._text(value, px, py, color, size, alpha)

    def present(self) -> None:
        """Finish the frame."""

    # ---------------
    # Backend hooks
    # ---------------

    def _clear(self, color: RGB) -> None:
        raise NotImplementedError

    def _fill_rect(self, x: float, y: float, w: float, h: float, color: RGB, alpha: float) -> None:
        raise NotImplementedError

    def _fill_circle(self, x: float, y: float, radius: float, color: RGB, alpha: float) -> None:
        raise NotImplementedError

    def _stroke_circle(self, x: float, y: float, radius: float, color: RGB, alpha: float, width: float) -> None:
        raise NotImplementedError

    def _polyline(self, points: List[Vec2], color: RGB, alpha: float, width: float) -> None:
        raise NotImplementedError

    def _fill_polygon(self, points: List[Vec2], color: RGB, alpha: float) -> None:
        raise NotImplementedError

    def _text(self, value: str, x: float, y: float, color: RGB, size: int, alpha: float) -> None:
        raise NotImplementedError


class DrawCall(NamedTuple):
    op: str
    args: tuple
    color: Optional[RGB]
    alpha: float


class RecordingSurface(Surface):
    """Surface that records every primitive in surface coordinates."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self.calls: List[DrawCall] = []

    def reset(self) -> None:
        self.calls.clear()
        self.reset_transform()

    def count(self, op: Optional[str] = None) -> int:
        if op is None:
            return len(self.calls)
        return sum(1 for call in self.calls if call.op == op)

    def ops(self) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for call in self.calls:
            out[call.op] = out.get(call.op, 0) + 1
        return out

    def _clear(self, color: RGB) -> None:
        self.calls.append(DrawCall("clear", (), color, 1.0))

    def _fill_rect(self, x, y, w, h, color, alpha) -> None:
        self.calls.append(DrawCall("fill_rect", (x, y, w, h), color, alpha))

    def _fill_circle(self, x, y, radius, color, alpha) -> None:
        self.calls.append(DrawCall("fill_circle", (x, y, radius), color, alpha))

    def _stroke_circle(self, x, y, radius, color, alpha, width) -> None:
        self.calls.append(DrawCall("stroke_circle", (x, y, radius, width), color, alpha))

    def _polyline(self, points, color, alpha, width) -> None:
        self.calls.append(DrawCall("polyline", (tuple(points), width), color, alpha))

    def _fill_polygon(self, points, color, alpha) -> None:
        self.calls.append(DrawCall("fill_polygon", (tuple(points),), color, alpha))

    def _text(self, value, x, y, color, size, alpha) -> None:
        self.calls.append(DrawCall("text", (value, x, y, size), color, alpha))


def _clip(v: float) -> float:
    if v != v:
        return 0.0
    return max(-COORD_LIMIT, min(v, COORD_LIMIT))


def _alpha8(alpha: float) -> int:
    return int(round(max(0.0, min(alpha, 1.0)) * 255))


class PygameSurface(Surface):
    """Rasterizes primitives with pygame.draw, in call order."""

    def __init__(self, target: pygame.Surface) -> None:
        w, h = target.get_size()
        super().__init__(w, h)
        self.target = target
        self.scratch = pygame.Surface((w, h), pygame.SRCALPHA)
        self._fonts: Dict[int, pygame.font.Font] = {}

    def retarget(self, target: pygame.Surface) -> None:
        """Switch to a new target surface, e.g. after the window was resized."""
        self.target = target
        self.width, self.height = target.get_size()
        self.scratch = pygame.Surface((self.width, self.height), pygame.SRCALPHA)

    def _paint(self, color: RGB, alpha: float, draw: Callable[[pygame.Surface, tuple], pygame.Rect]) -> None:
        """Run ``draw(layer, colour)`` so the result lands on the target immediately.

        Opaque primitives go straight to the target. Translucent ones are drawn
        onto the scratch layer and the touched rect is alpha-blended onto the
        target, then wiped from the scratch layer.
        """
        a = _alpha8(alpha)
        if a <= 0:
            return
        if a >= 255:
            draw(self.target, color)
            return
        rect = draw(self.scratch, (color[0], color[1], color[2], a))
        rect = rect.clip(self.scratch.get_rect())
        if rect.width <= 0 or rect.height <= 0:
            return
        self.target.blit(self.scratch, rect.topleft, rect)
        self.scratch.fill((0, 0, 0, 0), rect)

    def _clear(self, color: RGB) -> None:
        self.target.fill(color)

    def _fill_rect(self, x, y, w, h, color, alpha) -> None:
        rect = pygame.Rect(
            int(math.floor(_clip(x))), int(math.floor(_clip(y))), max(0, int(round(w))), max(0, int(round(h)))
        )
        self._paint(color, alpha, lambda layer, col: pygame.draw.rect(layer, col, rect))

    def _fill_circle(self, x, y, radius, color, alpha) -> None:
        if radius <= 0:
            return
        centre = (_clip(x), _clip(y))
        r = max(1.0, radius)
        self._paint(color, alpha, lambda layer, col: pygame.draw.circle(layer, col, centre, r))

    def _stroke_circle(self, x, y, radius, color, alpha, width) -> None:
        if radius < 1:
            return
        centre = (_clip(x), _clip(y))
        w = max(1, int(round(width)))
        self._paint(color, alpha, lambda layer, col: pygame.draw.circle(layer, col, centre, radius, w))

    def _polyline(self, points, color, alpha, width) -> None:
        pts = [(_clip(x), _clip(y)) for x, y in points]
        w = max(1, int(round(width)))
        self._paint(color, alpha, lambda layer, col: pygame.draw.lines(layer, col, False, pts, w))

    def _fill_polygon(self, points, color, alpha) -> None:
        pts = [(_clip(x), _clip(y)) for x, y in points]
        self._paint(color, alpha, lambda layer, col: pygame.draw.polygon(layer, col, pts))

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont("monospace", size)
            self._fonts[size] = font
        return font

    def _text(self, value, x, y, color, size, alpha) -> None:
        a = _alpha8(alpha)
        if a <= 0 or not value:
            return
        surf = self._font(size).render(value, True, color)
        if a < 255:
            surf.set_alpha(a)
        # Canvas text is anchored at the baseline
        self.target.blit(surf, (_clip(x), _clip(y) - size))
