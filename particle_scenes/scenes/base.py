from __future__ import annotations

import random
from typing import Optional

from ..context import InputState, Viewport
from ..surface import Surface


class Scene:
    """
    One self-contained visualization.

    A scene owns its entity population exclusively. ``init`` rebuilds that
    population from scratch for the given viewport and may be called any
    number of times (start-up, scene switch, resize). ``update`` advances the
    population by one tick and ``draw`` renders it; neither mutates the input
    state or the viewport.
    """

    display_name: str = "Scene"

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng: random.Random = rng if rng is not None else random.Random()

    def init(self, viewport: Viewport) -> None:
        raise NotImplementedError

    def update(self, input_state: InputState, viewport: Viewport) -> None:
        raise NotImplementedError

    def draw(self, surface: Surface, input_state: InputState, viewport: Viewport) -> None:
        raise NotImplementedError

    def positions(self):
        """Positions of every entity, for finiteness checks and diagnostics."""
        return []

    def _uniform(self, spread: float) -> float:
        """Uniform value in ``[-spread/2, spread/2)``."""
        return (self.rng.random() - 0.5) * spread

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.display_name!r})"
