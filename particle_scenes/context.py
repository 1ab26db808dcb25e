"""
Host-written state that every scene reads each tick.

Only the host (the pygame app, the headless runner or a test) mutates these
objects. Scenes receive them as arguments and never write to them.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .vec import Vec2


class InputState:
    """Pointer position, or absent when the pointer is off the surface."""

    def __init__(self, pointer_x: Optional[float] = None, pointer_y: Optional[float] = None) -> None:
        self.pointer_x: Optional[float] = pointer_x
        self.pointer_y: Optional[float] = pointer_y

    @property
    def present(self) -> bool:
        return self.pointer_x is not None and self.pointer_y is not None

    @property
    def pointer(self) -> Optional[Vec2]:
        if not self.present:
            return None
        return float(self.pointer_x), float(self.pointer_y)

    def move(self, x: float, y: float) -> None:
        self.pointer_x = float(x)
        self.pointer_y = float(y)

    def leave(self) -> None:
        self.pointer_x = None
        self.pointer_y = None

    def pointer_or(self, fallback: Vec2) -> Vec2:
        """Pointer position, or ``fallback`` when absent."""
        p = self.pointer
        return fallback if p is None else p

    def __repr__(self) -> str:
        return f"InputState(pointer_x={self.pointer_x!r}, pointer_y={self.pointer_y!r})"


class Viewport:
    """Drawable area in pixels."""

    def __init__(self, width: float, height: float) -> None:
        self.width: float = float(width)
        self.height: float = float(height)

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)

    @property
    def size(self) -> Tuple[int, int]:
        return int(self.width), int(self.height)

    @property
    def center(self) -> Vec2:
        return self.width * 0.5, self.height * 0.5

    @property
    def max_side(self) -> float:
        return max(self.width, self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    def __repr__(self) -> str:
        return f"Viewport(width={self.width!r}, height={self.height!r})"
