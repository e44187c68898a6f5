"""
Utility functions for game mechanics
"""

from __future__ import annotations
import colorsys
import math
from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x2 - x1, y2 - y1)


def normalize(x: float, y: float) -> Tuple[float, float]:
    """Normalize a vector to unit length; the zero vector stays zero"""
    l = math.hypot(x, y)
    if l == 0.0:
        return 0.0, 0.0
    return x / l, y / l


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching edges do not count)"""
    dx = x1 - x2
    dy = y1 - y2
    rr = r1 + r2
    return (dx * dx + dy * dy) < (rr * rr)


def hue_to_rgb(hue: float) -> Tuple[int, int, int]:
    """Fully saturated, mid-lightness colour for a hue in degrees"""
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, 0.5, 1.0)
    return int(r * 255), int(g * 255), int(b * 255)

