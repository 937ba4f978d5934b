"""
Arcade host for the arena.

``ArenaWindow`` plays three roles around the simulation: it collects input
(held keys and pointer), schedules ticks through ``on_update`` and draws
frames through ``ArcadeSurface``.

Arcade puts the origin at the bottom-left with y pointing up, while the
simulation's screen space is y-down, so both the surface and the pointer
handling flip the y axis.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

import arcade

from .configs.arena_config import KEY_BINDINGS, WINDOW_CONFIG
from .render import TEXT_C, TEXT_SIZE, draw_background, draw_foreground
from .simulation import ArenaState, InputState, fire, tick

logger = logging.getLogger(__name__)


def resolve_key_bindings(bindings: Dict[str, list]) -> Dict[int, str]:
    """Map arcade key codes onto abstract direction names"""
    keymap = {}
    for direction, names in bindings.items():
        for name in names:
            keymap[getattr(arcade.key, name)] = direction
    return keymap


class ArcadeSurface:
    """Drawing surface over arcade's immediate-mode draw calls"""

    def __init__(self, height: float):
        self.height = height

    def _y(self, y: float) -> float:
        return self.height - y

    def circle(self, center, radius, color):
        arcade.draw_circle_filled(center[0], self._y(center[1]), radius, color)

    def line(self, start, end, color, width=1.0):
        arcade.draw_line(start[0], self._y(start[1]), end[0], self._y(end[1]), color, width)

    def rect_outline(self, origin, width, height, color, border=1.0):
        left, top = origin
        arcade.draw_lrbt_rectangle_outline(
            left, left + width, self._y(top + height), self._y(top), color, border
        )

    def text(self, text, position, color=TEXT_C, size=TEXT_SIZE):
        arcade.draw_text(text, position[0], self._y(position[1]), color, size)


class ArenaWindow(arcade.Window):
    """Arcade window that drives and draws one ArenaState"""

    def __init__(self, state: ArenaState, live: bool = True, title: Optional[str] = None):
        cam = state.camera
        super().__init__(
            int(cam.viewport_width),
            int(cam.viewport_height),
            title or WINDOW_CONFIG["title"],
            resizable=WINDOW_CONFIG["resizable"],
            update_rate=WINDOW_CONFIG["update_rate"],
        )
        self.background_color = WINDOW_CONFIG["background"]
        self.state = state
        # live windows tick on their own; otherwise something else steps the state
        self.live = live

        self._keymap = resolve_key_bindings(KEY_BINDINGS)
        self._held: Set[str] = set()
        self.pointer = (cam.viewport_width / 2, cam.viewport_height / 2)

        logger.info("Arena window %dx%d (live=%s)", self.width, self.height, live)

    def snapshot(self) -> InputState:
        return InputState(keys_down=frozenset(self._held), pointer=self.pointer)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        direction = self._keymap.get(symbol)
        if direction is not None:
            self._held.add(direction)

    def on_key_release(self, symbol: int, modifiers: int):
        direction = self._keymap.get(symbol)
        if direction is not None:
            self._held.discard(direction)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.pointer = (x, self.height - y)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        self.pointer = (x, self.height - y)
        if self.live and button == arcade.MOUSE_BUTTON_LEFT:
            fire(self.state, self.pointer)

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        self.state.camera.resize(width, height)

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.live:
            tick(self.state, self.snapshot())

    def on_draw(self):
        self.clear()
        surface = ArcadeSurface(self.height)
        draw_background(self.state, surface, self.pointer)
        draw_foreground(self.state, surface)


def play(state: ArenaState) -> None:
    """Open a window on ``state`` and run until it is closed"""
    ArenaWindow(state)
    arcade.run()
