from __future__ import annotations

from typing import Tuple

import pygame

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)
CYAN: RGB = (0, 255, 255)
GREEN: RGB = (0, 255, 0)


def hsl(hue: float, saturation: float, lightness: float) -> RGB:
    """HSL (degrees, percent, percent) to an RGB tuple."""
    c = pygame.Color(0, 0, 0)
    c.hsla = (
        hue % 360.0,
        max(0.0, min(saturation, 100.0)),
        max(0.0, min(lightness, 100.0)),
        100.0,
    )
    return c.r, c.g, c.b
