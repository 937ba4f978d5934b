"""
Utility functions for arena mechanics
"""

from __future__ import annotations
import math
from typing import Tuple, Optional


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Optional[Tuple[float, float]]:
    """Normalize a vector to unit length, None when it is shorter than eps"""
    l = math.hypot(x, y)
    if l < eps:
        return None
    return x / l, y / l


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching does not count)"""
    return math.hypot(x1 - x2, y1 - y2) < r1 + r2
