"""
Deadzone camera.

The camera owns a single offset that maps world space onto the viewport.
The player may move freely inside a rectangle (the deadzone) centered in
the viewport; once a proposed move would leave it, the offset is shifted
just enough to keep the player on the nearest deadzone edge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

from .coords import Point, to_screen, to_world

logger = logging.getLogger(__name__)


@dataclass
class Camera:
    """Camera offset plus a deadzone centered in the viewport"""
    viewport_width: float
    viewport_height: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    deadzone_width: float = 400.0
    deadzone_height: float = 300.0

    @property
    def offset(self) -> Point:
        return self.offset_x, self.offset_y

    @property
    def deadzone(self) -> Tuple[float, float, float, float]:
        """Deadzone as (left, top, right, bottom) in screen space"""
        left = (self.viewport_width - self.deadzone_width) / 2
        top = (self.viewport_height - self.deadzone_height) / 2
        return left, top, left + self.deadzone_width, top + self.deadzone_height

    def contains(self, screen: Point) -> bool:
        """True when a screen point lies inside the deadzone (edges included)"""
        left, top, right, bottom = self.deadzone
        return left <= screen[0] <= right and top <= screen[1] <= bottom

    def resize(self, width: float, height: float) -> None:
        # the deadzone is derived from the viewport, so it re-centers itself
        self.viewport_width = width
        self.viewport_height = height

    def to_screen(self, world: Point) -> Point:
        return to_screen(world, self)

    def to_world(self, screen: Point) -> Point:
        return to_world(screen, self)

    def follow(self, player_world: Point, proposed_delta: Point) -> Tuple[Point, Point]:
        """
        Shift the offset so a proposed player move stays inside the deadzone.

        Args:
            player_world: Player's current world position
            proposed_delta: Displacement the player wants to make this tick

        Returns:
            (allowed_delta, offset_delta). ``allowed_delta`` is either the
            proposed delta or (0, 0) when the move is rejected; the camera
            offset has already been shifted by ``offset_delta``.
        """
        proposed_x = player_world[0] + proposed_delta[0]
        proposed_y = player_world[1] + proposed_delta[1]

        # Screen position with the offset as it stood before this tick
        screen_x, screen_y = to_screen((proposed_x, proposed_y), self)
        left, top, right, bottom = self.deadzone

        shift_x = 0.0
        shift_y = 0.0
        if screen_x < left:
            shift_x = left - screen_x
        elif screen_x > right:
            shift_x = right - screen_x

        if screen_y < top:
            shift_y = top - screen_y
        elif screen_y > bottom:
            shift_y = bottom - screen_y

        camera_moved = shift_x != 0.0 or shift_y != 0.0
        self.offset_x += shift_x
        self.offset_y += shift_y

        # Gate: the whole move is dropped, not clamped to the edge
        if camera_moved or self.contains(to_screen((proposed_x, proposed_y), self)):
            allowed = (proposed_delta[0], proposed_delta[1])
        else:
            logger.debug("Rejected move %s at world %s", proposed_delta, player_world)
            allowed = (0.0, 0.0)

        return allowed, (shift_x, shift_y)
