"""Headless frame driver.

Runs the scene engine without a window, drawing into a ``RecordingSurface``.
Used by ``--headless`` on the command line and by the smoke tests.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .context import InputState, Viewport
from .manager import SceneManager
from .scenes import build_scenes
from .surface import RecordingSurface
from .vec import Vec2

logger = logging.getLogger(__name__)

PointerPath = Callable[[int], Optional[Vec2]]


@dataclass
class HeadlessResult:
    scene: str
    frames: int
    draw_calls: int
    entities: int
    finite: bool


def circling_pointer(viewport: Viewport, radius: float = 150.0, period: int = 240) -> PointerPath:
    """Pointer path that circles the viewport centre."""
    cx, cy = viewport.center

    def path(frame: int) -> Optional[Vec2]:
        a = frame / period * math.tau
        return cx + math.cos(a) * radius, cy + math.sin(a) * radius

    return path


def _all_finite(values) -> bool:
    return all(math.isfinite(v) for point in values for v in point)


def run_headless(
    frames: int = 120,
    width: int = 800,
    height: int = 600,
    scene: Union[int, str] = 0,
    seed: Optional[int] = None,
    pointer_path: Optional[PointerPath] = None,
) -> HeadlessResult:
    viewport = Viewport(width, height)
    manager = SceneManager(build_scenes(seed), viewport)
    index = manager.index_of(scene) if isinstance(scene, str) else int(scene)
    manager.start(index)

    input_state = InputState()
    surface = RecordingSurface(width, height)
    draw_calls = 0
    for frame in range(int(frames)):
        pointer = pointer_path(frame) if pointer_path is not None else None
        if pointer is None:
            input_state.leave()
        else:
            input_state.move(*pointer)
        surface.reset()
        manager.tick(surface, input_state)
        draw_calls += surface.count()

    positions = manager.current.positions()
    result = HeadlessResult(
        scene=manager.display_name,
        frames=int(frames),
        draw_calls=draw_calls,
        entities=len(positions),
        finite=_all_finite(positions),
    )
    logger.info(
        "Headless %s: %d frames, %d draw calls, %d entities",
        result.scene,
        result.frames,
        result.draw_calls,
        result.entities,
    )
    return result
