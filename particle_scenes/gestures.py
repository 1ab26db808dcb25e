from __future__ import annotations

from typing import Optional

from .config import AppConfig
from .manager import Direction


class SwipeTracker:
    """Turns a horizontal touch swipe into a scene switch direction.

    Swiping left (finger ends left of where it started) means next, swiping
    right means previous. Movements shorter than ``threshold`` are ignored.
    """

    def __init__(self, threshold: float = AppConfig.swipe_threshold) -> None:
        self.threshold = float(threshold)
        self.start_x: Optional[float] = None

    def begin(self, x: float) -> None:
        self.start_x = float(x)

    def end(self, x: float) -> Optional[Direction]:
        if self.start_x is None:
            return None
        start = self.start_x
        self.start_x = None
        if x < start - self.threshold:
            return Direction.NEXT
        if x > start + self.threshold:
            return Direction.PREVIOUS
        return None
