"""Top-down arena with a deadzone-following camera"""

from .camera import Camera
from .simulation import ArenaConfig, ArenaState, InputState, fire, new_state, tick
from .arena_env import ArenaEnv, run_random_episode

__all__ = [
    'Camera', 'ArenaConfig', 'ArenaState', 'InputState',
    'fire', 'new_state', 'tick', 'ArenaEnv', 'run_random_episode',
]
