"""
ArenaEnv - Gymnasium wrapper around the arena simulation
--------------------------------------------------------
- One step = optional shot + one simulation tick
- MultiDiscrete action space: [up(2), down(2), left(2), right(2), fire(2), aim(8)]
- Vector observation: player display position + camera offset + top-K nearest enemies
- Reward: enemies destroyed this step
- No terminal state (the player cannot die); episodes truncate at max_steps

Aiming goes through the same screen-space path as the mouse: the aim
octant is turned into a pointer ``aim_distance`` units from the player's
display position.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.arena_config import ARENA_CONFIG, ENV_CONFIG
from .simulation import (
    DOWN, LEFT, RIGHT, UP,
    ArenaConfig, ArenaState, InputState, fire, new_state, tick,
)
from .utils import clamp

logger = logging.getLogger(__name__)

_DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


class ArenaEnv(gym.Env):
    """Top-down arena with a deadzone camera"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[ArenaConfig] = None,
        max_steps: int = ENV_CONFIG["max_steps"],
        k_enemies: int = ENV_CONFIG["k_enemies"],
        aim_distance: float = ENV_CONFIG["aim_distance"],
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode
        self.config = config if config is not None else ArenaConfig(**ARENA_CONFIG)

        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.aim_distance = aim_distance

        self.action_space = spaces.MultiDiscrete([2, 2, 2, 2, 2, 8])

        # Player display pos(2), camera offset(2), each enemy rel pos(2)
        obs_dim = 2 + 2 + self.k_enemies * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # 8-way aim directions, screen space
        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

        self.state: ArenaState = None  # type: ignore
        self._step_count = 0
        self._window = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self.state = new_state(self.config, rng=self.np_random)
        self._step_count = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        action = [int(a) for a in action]
        keys = frozenset(d for d, held in zip(_DIRECTIONS, action[:4]) if held)
        shoot, aim = action[4], action[5]

        pointer = self._aim_pointer(aim)
        if shoot:
            fire(self.state, pointer)

        tick(self.state, InputState(keys_down=keys, pointer=pointer))
        kills = self.state.last_kills

        self._step_count += 1
        terminated = False
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(kills), terminated, truncated, self._get_info()

    def _aim_pointer(self, aim: int):
        dx, dy = self._aim_dirs[aim % 8]
        p = self.state.player
        return (p.display_x + dx * self.aim_distance, p.display_y + dy * self.aim_distance)

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.state
        w, h = s.camera.viewport_width, s.camera.viewport_height
        p = s.player

        obs_parts = [
            clamp(p.display_x / w * 2 - 1, -1, 1),
            clamp(p.display_y / h * 2 - 1, -1, 1),
            # offset is unbounded, squash it
            math.tanh(s.camera.offset_x / w),
            math.tanh(s.camera.offset_y / h),
        ]

        enemies_sorted = sorted(
            s.enemies, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / w, -1, 1),
                    clamp((e.y - p.y) / h, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        s = self.state
        return {
            "score": s.score,
            "num_enemies": len(s.enemies),
            "num_bullets": len(s.bullets),
            "camera_offset": s.camera.offset,
            "player_world": (s.player.x, s.player.y),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import ArenaWindow
            self._window = ArenaWindow(self.state, live=False)
        self._window.state = self.state

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: Optional[int] = 42,
                       max_steps: int = ENV_CONFIG["max_steps"],
                       config: Optional[ArenaConfig] = None) -> Dict[str, Any]:
    """Run one episode with random actions; returns the final info dict"""
    env = ArenaEnv(render_mode="human" if render else None, config=config, max_steps=max_steps)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    try:
        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total += reward
    finally:
        env.close()

    logger.info("Random episode: %d steps, %.0f kills, score %d",
                info["step"], total, info["score"])
    return info
