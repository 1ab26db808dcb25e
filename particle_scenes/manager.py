"""
Ordered scene list with wrap-around switching.

Exactly one scene is live at a time. Switching or resizing rebuilds the live
scene from scratch with ``init``; the other scenes stay stale until they are
selected again.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, Sequence, Union

from .context import InputState, Viewport
from .scenes.base import Scene
from .surface import Surface

logger = logging.getLogger(__name__)

NameListener = Callable[[str], None]


class Direction(enum.Enum):
    NEXT = "next"
    PREVIOUS = "previous"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, Direction):
            return value
        key = str(value).strip().lower()
        if key == "prev":
            key = "previous"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown switch direction: {value!r}") from None


class SceneManager:
    def __init__(self, scenes: Sequence[Scene], viewport: Viewport) -> None:
        if not scenes:
            raise ValueError("SceneManager needs at least one scene")
        self.scenes: List[Scene] = list(scenes)
        self.viewport = viewport
        self.current_index = 0
        self._listeners: List[NameListener] = []

    # ---------------
    # Lifecycle
    # ---------------

    def start(self, index: int = 0) -> None:
        """Initialize the first live scene and publish its name."""
        self.current_index = index % len(self.scenes)
        self._activate()

    def switch(self, direction: Union[Direction, str]) -> Scene:
        step = 1 if Direction.parse(direction) is Direction.NEXT else -1
        self.current_index = (self.current_index + step) % len(self.scenes)
        return self._activate()

    def next(self) -> Scene:
        return self.switch(Direction.NEXT)

    def previous(self) -> Scene:
        return self.switch(Direction.PREVIOUS)

    def select(self, index: int) -> Scene:
        self.current_index = index % len(self.scenes)
        return self._activate()

    def on_resize(self, viewport: Optional[Viewport] = None) -> None:
        if viewport is not None:
            self.viewport = viewport
        logger.debug("Resized to %dx%d, rebuilding %s", *self.viewport.size, self.display_name)
        self.current.init(self.viewport)

    def _activate(self) -> Scene:
        scene = self.current
        scene.init(self.viewport)
        logger.info("Scene %d/%d: %s", self.current_index + 1, len(self.scenes), scene.display_name)
        self._publish(scene.display_name)
        return scene

    # ---------------
    # Display name publication
    # ---------------

    def add_listener(self, listener: NameListener) -> None:
        self._listeners.append(listener)

    def _publish(self, name: str) -> None:
        for listener in self._listeners:
            listener(name)

    # ---------------
    # Frame driver entry points
    # ---------------

    @property
    def current(self) -> Scene:
        return self.scenes[self.current_index]

    @property
    def display_name(self) -> str:
        return self.current.display_name

    def index_of(self, name: str) -> int:
        """Index of the scene with the given display name (case-insensitive)."""
        key = name.strip().lower()
        for i, scene in enumerate(self.scenes):
            if scene.display_name.lower() == key:
                return i
        raise ValueError(f"No scene named {name!r}")

    def update(self, input_state: InputState) -> None:
        self.current.update(input_state, self.viewport)

    def draw(self, surface: Surface, input_state: InputState) -> None:
        self.current.draw(surface, input_state, self.viewport)

    def tick(self, surface: Surface, input_state: InputState) -> None:
        """One frame: update then draw the live scene."""
        self.update(input_state)
        self.draw(surface, input_state)

    def __len__(self) -> int:
        return len(self.scenes)
