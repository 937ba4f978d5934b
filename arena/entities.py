"""
Arena entity dataclasses (world-space state)
"""

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, ...]


@dataclass
class Player:
    """Player entity, the only one the camera follows"""
    x: float = 0.0
    y: float = 0.0
    display_x: float = 0.0  # x + camera offset, refreshed every tick and draw
    display_y: float = 0.0
    radius: float = 15.0
    speed: float = 5.0  # units per tick
    color: Color = (0, 255, 0)


@dataclass
class Enemy:
    """Enemy entity that pursues the player"""
    x: float
    y: float
    radius: float = 20.0
    speed: float = 2.0  # units per tick
    color: Color = (255, 0, 0)


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 5.0
    color: Color = (255, 255, 0)
