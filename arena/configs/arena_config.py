"""
Configuration for the arena game
Simulation constants, window settings and environment settings
"""

# Simulation parameters (ArenaConfig(**ARENA_CONFIG))
ARENA_CONFIG = {
    "width": 800,
    "height": 600,
    "deadzone_width": 400,
    "deadzone_height": 300,
    "player_radius": 15.0,
    "player_speed": 5.0,      # units per tick
    "bullet_radius": 5.0,
    "bullet_speed": 10.0,     # muzzle speed, units per tick
    "cull_margin": 50.0,      # bullets die this far outside the viewport
    "enemy_radius": 20.0,
    "enemy_speed": 2.0,
    "spawn_distance": 500.0,  # enemies appear on this ring around the player
    "spawn_chance": 0.02,     # Bernoulli trial per tick
    "max_enemies": None,      # None = unbounded
    "kill_score": 10,
}

# ==============================================================================
# WINDOW
# ==============================================================================

WINDOW_CONFIG = {
    "title": "Deadzone Arena",
    "update_rate": 1 / 60,   # one tick per frame
    "resizable": True,
    "background": (0, 0, 0),
}

# Abstract direction -> arcade.key names
KEY_BINDINGS = {
    "up": ["W", "UP"],
    "down": ["S", "DOWN"],
    "left": ["A", "LEFT"],
    "right": ["D", "RIGHT"],
}

# ==============================================================================
# GYM ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    "max_steps": 3600,   # one minute at 60 ticks/s
    "k_enemies": 5,
    "aim_distance": 100.0,
}
