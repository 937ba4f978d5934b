"""
World <-> screen transforms.

World space is unbounded; screen space is the viewport, y-down with the
origin at its top-left corner. The only thing relating the two is the
camera offset:

    screen = world + offset
    world  = screen - offset

Anything with ``offset_x`` / ``offset_y`` attributes (normally a
:class:`arena.camera.Camera`) can be passed as ``camera``.
"""

from typing import Tuple

Point = Tuple[float, float]


def to_screen(world: Point, camera) -> Point:
    """Project a world position into screen space"""
    return world[0] + camera.offset_x, world[1] + camera.offset_y


def to_world(screen: Point, camera) -> Point:
    """Lift a screen position back into world space"""
    return screen[0] - camera.offset_x, screen[1] - camera.offset_y
