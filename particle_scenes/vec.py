"""
Small tuple-based 2D vector helpers shared by the scene models.

Entities store plain floats; these helpers keep the per-tick math readable
without pulling in an array type for a handful of values.
"""

from __future__ import annotations

import math
from typing import Tuple

Vec2 = Tuple[float, float]

# Guard for inverse-distance terms
EPSILON = 1e-8


def v_add(a: Vec2, b: Vec2) -> Vec2:
    return a[0] + b[0], a[1] + b[1]


def v_sub(a: Vec2, b: Vec2) -> Vec2:
    return a[0] - b[0], a[1] - b[1]


def v_mul(a: Vec2, s: float) -> Vec2:
    return a[0] * s, a[1] * s


def v_length_sq(a: Vec2) -> float:
    return a[0] * a[0] + a[1] * a[1]


def v_length(a: Vec2) -> float:
    return math.sqrt(v_length_sq(a))


def v_normalize(a: Vec2) -> Vec2:
    length = v_length(a)
    if length <= EPSILON:
        return 0.0, 0.0
    inv = 1.0 / length
    return a[0] * inv, a[1] * inv


def v_clamp_length(a: Vec2, max_length: float) -> Vec2:
    """Scale ``a`` down to ``max_length`` if it is longer, keeping direction."""
    length = v_length(a)
    if length > max_length:
        return a[0] / length * max_length, a[1] / length * max_length
    return a


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    dx = ax - bx
    dy = ay - by
    return math.sqrt(dx * dx + dy * dy)


def wrap_jump(value: float, upper: float) -> float:
    """Toroidal wrap that jumps to the opposite bound once a bound is crossed."""
    if value < 0.0:
        return upper
    if value > upper:
        return 0.0
    return value


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(value, hi))
