"""
Frame composition.

Everything here works in screen space (y-down) and talks to a drawing
surface through four primitives: filled circle, line, rectangle outline
and text. The arcade window supplies the real surface; ``RecordingSurface``
keeps the commands in a list instead.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Protocol, Tuple

from .coords import Point, to_screen
from .simulation import ArenaState, refresh_display

Color = Tuple[int, ...]

GRID_SIZE = 40
GRID_C = (255, 255, 255, 51)
DEADZONE_C = (0, 255, 0, 128)
AIM_C = (255, 255, 0, 128)
TEXT_C = (255, 255, 255)
TEXT_SIZE = 20


class Surface(Protocol):
    def circle(self, center: Point, radius: float, color: Color) -> None: ...

    def line(self, start: Point, end: Point, color: Color, width: float = 1.0) -> None: ...

    def rect_outline(self, origin: Point, width: float, height: float,
                     color: Color, border: float = 1.0) -> None: ...

    def text(self, text: str, position: Point, color: Color = TEXT_C,
             size: int = TEXT_SIZE) -> None: ...


class RecordingSurface:
    """Surface that just records (kind, args) tuples"""

    def __init__(self):
        self.commands: List[Tuple[str, Tuple[Any, ...]]] = []

    def circle(self, center, radius, color):
        self.commands.append(("circle", (center, radius, color)))

    def line(self, start, end, color, width=1.0):
        self.commands.append(("line", (start, end, color, width)))

    def rect_outline(self, origin, width, height, color, border=1.0):
        self.commands.append(("rect", (origin, width, height, color, border)))

    def text(self, text, position, color=TEXT_C, size=TEXT_SIZE):
        self.commands.append(("text", (text, position, color, size)))

    def of_kind(self, kind: str) -> list:
        return [args for k, args in self.commands if k == kind]


# ----------------------------
# Background / overlays
# ----------------------------

def draw_grid(state: ArenaState, surface: Surface) -> None:
    """World-aligned grid covering the viewport"""
    cam = state.camera
    w, h = cam.viewport_width, cam.viewport_height

    start_x = math.floor(-cam.offset_x / GRID_SIZE) * GRID_SIZE
    start_y = math.floor(-cam.offset_y / GRID_SIZE) * GRID_SIZE

    x = start_x
    while x < start_x + w + GRID_SIZE:
        sx = x + cam.offset_x
        surface.line((sx, 0), (sx, h), GRID_C)
        x += GRID_SIZE

    y = start_y
    while y < start_y + h + GRID_SIZE:
        sy = y + cam.offset_y
        surface.line((0, sy), (w, sy), GRID_C)
        y += GRID_SIZE


def draw_deadzone(state: ArenaState, surface: Surface) -> None:
    left, top, _, _ = state.camera.deadzone
    surface.rect_outline(
        (left, top), state.camera.deadzone_width, state.camera.deadzone_height,
        DEADZONE_C, border=2,
    )


def draw_aim(state: ArenaState, surface: Surface, pointer: Point) -> None:
    """Aim line plus world/screen debug readout"""
    p = state.player
    surface.line((p.display_x, p.display_y), pointer, AIM_C)
    surface.text(f"World: ({p.x:.1f}, {p.y:.1f})", (20, 60))
    surface.text(f"Screen: ({p.display_x:.1f}, {p.display_y:.1f})", (20, 90))


# ----------------------------
# Entities / HUD
# ----------------------------

def draw_player(state: ArenaState, surface: Surface) -> None:
    refresh_display(state)
    p = state.player
    surface.circle((p.display_x, p.display_y), p.radius, p.color)


def draw_bullets(state: ArenaState, surface: Surface) -> None:
    for b in state.bullets:
        surface.circle(to_screen((b.x, b.y), state.camera), b.radius, b.color)


def draw_enemies(state: ArenaState, surface: Surface) -> None:
    for e in state.enemies:
        surface.circle(to_screen((e.x, e.y), state.camera), e.radius, e.color)


def draw_score(state: ArenaState, surface: Surface) -> None:
    surface.text(f"Score: {state.score}", (20, 30))


def draw_background(state: ArenaState, surface: Surface, pointer: Point) -> None:
    draw_grid(state, surface)
    draw_deadzone(state, surface)
    draw_aim(state, surface, pointer)


def draw_foreground(state: ArenaState, surface: Surface) -> None:
    draw_player(state, surface)
    draw_bullets(state, surface)
    draw_enemies(state, surface)
    draw_score(state, surface)


def draw_frame(state: ArenaState, surface: Surface, pointer: Optional[Point] = None) -> None:
    """Draw one full frame, back to front"""
    if pointer is None:
        pointer = (state.player.display_x, state.player.display_y)
    draw_background(state, surface, pointer)
    draw_foreground(state, surface)
