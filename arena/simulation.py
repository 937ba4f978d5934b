"""
Arena simulation - one discrete tick of the top-down arena
----------------------------------------------------------
- Player moves with held direction keys; the deadzone camera follows it
- Bullets fly in a straight line and are culled once off-screen
- Enemies spawn on a ring around the player and pursue it directly
- Bullet/enemy overlaps remove both and add to the score

All mutable state lives on an ``ArenaState``; nothing is module-global, so
any number of independent simulations can run side by side.

Motion is expressed in units per tick. There is no delta-time
compensation: the host decides how often ``tick`` runs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import AbstractSet, List, Optional, Tuple

import numpy as np

from .camera import Camera
from .coords import Point, to_screen
from .entities import Bullet, Enemy, Player
from .utils import circle_collide, normalize

logger = logging.getLogger(__name__)

# Abstract input identifiers; hosts map their own key codes onto these
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"


@dataclass
class ArenaConfig:
    """Simulation constants"""
    width: float = 800.0
    height: float = 600.0
    deadzone_width: float = 400.0
    deadzone_height: float = 300.0
    player_radius: float = 15.0
    player_speed: float = 5.0
    bullet_radius: float = 5.0
    bullet_speed: float = 10.0
    cull_margin: float = 50.0
    enemy_radius: float = 20.0
    enemy_speed: float = 2.0
    spawn_distance: float = 500.0
    spawn_chance: float = 0.02  # per tick
    max_enemies: Optional[int] = None  # None keeps the enemy count unbounded
    kill_score: int = 10
    aim_epsilon: float = 1e-6

    def __post_init__(self):
        positive = (
            "width", "height", "deadzone_width", "deadzone_height",
            "player_radius", "bullet_radius", "bullet_speed", "enemy_radius",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("player_speed", "enemy_speed", "cull_margin", "spawn_distance"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        if not 0.0 <= self.spawn_chance <= 1.0:
            raise ValueError(f"spawn_chance must be in [0, 1], got {self.spawn_chance}")
        if self.kill_score <= 0:
            raise ValueError(f"kill_score must be positive, got {self.kill_score}")
        if self.max_enemies is not None and self.max_enemies < 0:
            raise ValueError(f"max_enemies must not be negative, got {self.max_enemies}")


@dataclass
class InputState:
    """Snapshot of the input provider, taken at the start of a tick"""
    keys_down: AbstractSet[str] = frozenset()
    pointer: Point = (0.0, 0.0)


@dataclass
class ArenaState:
    """Everything one simulation owns"""
    config: ArenaConfig
    camera: Camera
    player: Player
    rng: np.random.Generator
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    score: int = 0
    tick_count: int = 0
    last_kills: int = 0  # enemies destroyed during the latest tick


def new_state(
    config: Optional[ArenaConfig] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> ArenaState:
    """
    Build a fresh simulation.

    The player starts at the world origin and the camera offset puts it in
    the middle of the viewport.
    """
    if config is None:
        config = ArenaConfig()
    if rng is None:
        rng = np.random.default_rng(seed)

    camera = Camera(
        viewport_width=config.width,
        viewport_height=config.height,
        offset_x=config.width / 2,
        offset_y=config.height / 2,
        deadzone_width=config.deadzone_width,
        deadzone_height=config.deadzone_height,
    )
    player = Player(radius=config.player_radius, speed=config.player_speed)
    player.display_x, player.display_y = to_screen((player.x, player.y), camera)

    return ArenaState(config=config, camera=camera, player=player, rng=rng)


# ----------------------------
# Player
# ----------------------------

def player_delta(keys_down: AbstractSet[str], speed: float) -> Tuple[float, float]:
    """Per-tick displacement for the held keys; opposite keys cancel out"""
    dx = 0.0
    dy = 0.0
    if UP in keys_down:
        dy -= speed
    if DOWN in keys_down:
        dy += speed
    if LEFT in keys_down:
        dx -= speed
    if RIGHT in keys_down:
        dx += speed
    # diagonal moves are not normalized (speed * sqrt(2))
    return dx, dy


def refresh_display(state: ArenaState) -> None:
    p = state.player
    p.display_x, p.display_y = to_screen((p.x, p.y), state.camera)


def move_player(state: ArenaState, keys_down: AbstractSet[str]) -> Point:
    """Apply held keys through the camera; returns the displacement applied"""
    p = state.player
    delta = player_delta(keys_down, p.speed)
    (dx, dy), _ = state.camera.follow((p.x, p.y), delta)
    p.x += dx
    p.y += dy
    refresh_display(state)
    return dx, dy


def fire(state: ArenaState, pointer: Point) -> Optional[Bullet]:
    """
    Fire a bullet from the player toward a pointer position.

    Both the pointer and the player's display position are in screen space,
    so their difference is a valid direction in world space too. Nothing is
    fired when the pointer sits on the player.
    """
    cfg = state.config
    p = state.player
    dx = pointer[0] - p.display_x
    dy = pointer[1] - p.display_y

    unit = normalize(dx, dy, eps=cfg.aim_epsilon)
    if unit is None:
        logger.debug("Aim vector too short, not firing")
        return None
    ux, uy = unit

    bullet = Bullet(
        x=p.x,
        y=p.y,
        vx=ux * cfg.bullet_speed,
        vy=uy * cfg.bullet_speed,
        radius=cfg.bullet_radius,
    )
    state.bullets.append(bullet)
    return bullet


# ----------------------------
# Bullets / enemies
# ----------------------------

def update_bullets(state: ArenaState) -> None:
    cam = state.camera
    margin = state.config.cull_margin
    max_x = cam.viewport_width + margin
    max_y = cam.viewport_height + margin

    for i in range(len(state.bullets) - 1, -1, -1):
        b = state.bullets[i]
        b.x += b.vx
        b.y += b.vy

        # Culling happens in screen space
        sx, sy = to_screen((b.x, b.y), cam)
        if sx < -margin or sx > max_x or sy < -margin or sy > max_y:
            del state.bullets[i]


def update_enemies(state: ArenaState) -> None:
    """
    Move every enemy straight at the player's current position.

    An enemy closer than its speed overshoots and then oscillates around
    the player.
    """
    px, py = state.player.x, state.player.y
    for e in state.enemies:
        angle = math.atan2(py - e.y, px - e.x)
        e.x += math.cos(angle) * e.speed
        e.y += math.sin(angle) * e.speed


def spawn_enemy(state: ArenaState, angle: Optional[float] = None) -> Enemy:
    """Spawn an enemy on the ring of radius ``spawn_distance`` around the player"""
    cfg = state.config
    if angle is None:
        angle = state.rng.uniform(0.0, 2 * math.pi)

    enemy = Enemy(
        x=state.player.x + math.cos(angle) * cfg.spawn_distance,
        y=state.player.y + math.sin(angle) * cfg.spawn_distance,
        radius=cfg.enemy_radius,
        speed=cfg.enemy_speed,
    )
    state.enemies.append(enemy)
    logger.debug("Spawned enemy at (%.1f, %.1f), %d alive", enemy.x, enemy.y, len(state.enemies))
    return enemy


def maybe_spawn_enemy(state: ArenaState) -> Optional[Enemy]:
    """One Bernoulli trial per tick"""
    cfg = state.config
    if state.rng.random() >= cfg.spawn_chance:
        return None
    if cfg.max_enemies is not None and len(state.enemies) >= cfg.max_enemies:
        return None
    return spawn_enemy(state)


def resolve_collisions(state: ArenaState) -> int:
    """
    Remove every overlapping bullet/enemy pair and score it.

    A bullet takes out at most one enemy per pass. Both lists are walked
    back to front so deleting by index never skips an element.

    Returns:
        Number of enemies destroyed
    """
    bullets = state.bullets
    enemies = state.enemies
    kills = 0

    for i in range(len(bullets) - 1, -1, -1):
        b = bullets[i]
        for j in range(len(enemies) - 1, -1, -1):
            e = enemies[j]
            if circle_collide(b.x, b.y, b.radius, e.x, e.y, e.radius):
                del bullets[i]
                del enemies[j]
                state.score += state.config.kill_score
                kills += 1
                break

    if kills:
        logger.debug("%d kill(s), score %d", kills, state.score)
    return kills


# ----------------------------
# Driver
# ----------------------------

def tick(state: ArenaState, inputs: InputState) -> ArenaState:
    """Advance the simulation by one tick"""
    move_player(state, inputs.keys_down)
    update_bullets(state)
    update_enemies(state)
    state.last_kills = resolve_collisions(state)
    maybe_spawn_enemy(state)
    state.tick_count += 1
    return state
