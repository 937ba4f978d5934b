"""
Tests for movement, firing, bullets, enemy pursuit, spawning and the
per-tick ordering.
"""

import math

import pytest

from arena.entities import Bullet, Enemy
from arena.simulation import (
    DOWN, LEFT, RIGHT, UP,
    ArenaConfig, InputState, fire, maybe_spawn_enemy, new_state,
    player_delta, spawn_enemy, tick, update_bullets, update_enemies,
)
from tests.helpers import FixedRng


# =============================================================================
# Player
# =============================================================================

class TestPlayerDelta:

    def test_single_keys(self):
        assert player_delta({UP}, 5) == (0, -5)
        assert player_delta({DOWN}, 5) == (0, 5)
        assert player_delta({LEFT}, 5) == (-5, 0)
        assert player_delta({RIGHT}, 5) == (5, 0)

    def test_opposite_keys_cancel(self):
        assert player_delta({UP, DOWN}, 5) == (0, 0)
        assert player_delta({LEFT, RIGHT, UP}, 5) == (0, -5)

    def test_diagonal_not_normalized(self):
        dx, dy = player_delta({UP, RIGHT}, 5)
        assert (dx, dy) == (5, -5)
        assert math.hypot(dx, dy) == pytest.approx(5 * math.sqrt(2))

    def test_unknown_keys_ignored(self):
        assert player_delta({"jump"}, 5) == (0, 0)


def test_new_state_centers_player(state):
    assert (state.player.x, state.player.y) == (0, 0)
    assert (state.player.display_x, state.player.display_y) == (400, 300)
    assert state.score == 0
    assert state.bullets == [] and state.enemies == []


def test_states_are_independent(quiet_config):
    a = new_state(quiet_config)
    b = new_state(quiet_config)
    tick(a, InputState(keys_down={RIGHT}))
    fire(a, (0, 0))
    assert b.player.x == 0
    assert b.bullets == []


# =============================================================================
# Firing
# =============================================================================

class TestFire:

    def test_aim_left(self, state):
        bullet = fire(state, (100, 300))
        assert (bullet.vx, bullet.vy) == (-10, 0)
        assert (bullet.x, bullet.y) == (0, 0)
        assert state.bullets == [bullet]

    def test_aim_up_left_diagonal(self, state):
        bullet = fire(state, (100, 0))
        assert bullet.vx == pytest.approx(-10 / math.sqrt(2))
        assert bullet.vy == pytest.approx(-10 / math.sqrt(2))
        assert math.hypot(bullet.vx, bullet.vy) == pytest.approx(10)

    def test_spawns_at_world_not_display_position(self, state):
        state.player.x, state.player.y = 250, -40
        state.camera.offset_x, state.camera.offset_y = 300, 320
        state.player.display_x, state.player.display_y = 550, 280

        bullet = fire(state, (550, 380))
        assert (bullet.x, bullet.y) == (250, -40)
        assert (bullet.vx, bullet.vy) == (0, 10)

    def test_pointer_on_player_does_not_fire(self, state):
        assert fire(state, (400, 300)) is None
        assert state.bullets == []

    def test_tiny_aim_vector_does_not_fire(self, state):
        assert fire(state, (400 + 1e-9, 300)) is None
        assert state.bullets == []


# =============================================================================
# Bullets
# =============================================================================

class TestBullets:

    def test_advance_by_velocity(self, state):
        state.bullets.append(Bullet(x=0, y=0, vx=3, vy=-4))
        update_bullets(state)
        assert (state.bullets[0].x, state.bullets[0].y) == (3, -4)

    def test_culled_past_margin(self, state):
        # screen x = world x + 400; limit is 800 + 50
        state.bullets.append(Bullet(x=450, y=0, vx=10, vy=0))
        update_bullets(state)
        assert state.bullets == []

    def test_kept_on_margin(self, state):
        state.bullets.append(Bullet(x=445, y=0, vx=5, vy=0))
        update_bullets(state)
        assert len(state.bullets) == 1

    def test_cull_is_screen_space(self, state):
        state.bullets.append(Bullet(x=0, y=0, vx=0, vy=0))
        state.camera.offset_y = -400
        update_bullets(state)
        assert state.bullets == []

    def test_removal_keeps_neighbours(self, state):
        out_left = Bullet(x=-455, y=0, vx=-10, vy=0)
        keep = Bullet(x=0, y=0, vx=1, vy=0)
        out_down = Bullet(x=0, y=345, vx=0, vy=10)
        state.bullets.extend([out_left, keep, out_down])
        update_bullets(state)
        assert state.bullets == [keep]


# =============================================================================
# Enemies
# =============================================================================

class TestEnemies:

    def test_pursuit_strictly_closes_distance(self, state):
        enemy = Enemy(x=137.0, y=-61.0, speed=2.0)
        state.enemies.append(enemy)

        dist = math.hypot(enemy.x, enemy.y)
        steps = 0
        while dist >= enemy.speed:
            update_enemies(state)
            new_dist = math.hypot(enemy.x, enemy.y)
            assert new_dist < dist
            dist = new_dist
            steps += 1
        assert dist < enemy.speed
        assert steps == int(math.hypot(137, 61) // 2)

    def test_overshoot_when_closer_than_speed(self, state):
        enemy = Enemy(x=1.0, y=0.0, speed=2.0)
        state.enemies.append(enemy)
        update_enemies(state)
        assert enemy.x == pytest.approx(-1.0)
        update_enemies(state)
        assert enemy.x == pytest.approx(1.0)

    def test_tracks_current_player_position(self, state):
        enemy = Enemy(x=0.0, y=100.0, speed=2.0)
        state.enemies.append(enemy)
        state.player.x, state.player.y = 0.0, 200.0
        update_enemies(state)
        assert (enemy.x, enemy.y) == pytest.approx((0.0, 102.0))


class TestSpawning:

    def test_angle_zero(self, state):
        enemy = spawn_enemy(state, angle=0.0)
        assert (enemy.x, enemy.y) == (500, 0)
        assert state.enemies == [enemy]

    def test_relative_to_player(self, state):
        state.player.x, state.player.y = 10, 20
        enemy = spawn_enemy(state, angle=math.pi / 2)
        assert (enemy.x, enemy.y) == pytest.approx((10, 520))

    def test_random_angle_on_ring(self, state):
        for _ in range(20):
            enemy = spawn_enemy(state)
            assert math.hypot(enemy.x, enemy.y) == pytest.approx(500)

    def test_uses_config(self):
        state = new_state(ArenaConfig(enemy_radius=7, enemy_speed=3, spawn_distance=50))
        enemy = spawn_enemy(state, angle=math.pi)
        assert (enemy.radius, enemy.speed) == (7, 3)
        assert (enemy.x, enemy.y) == pytest.approx((-50, 0))

    def test_bernoulli_hit(self):
        state = new_state(ArenaConfig(), rng=FixedRng(draw=0.01, angle=0.0))
        enemy = maybe_spawn_enemy(state)
        assert (enemy.x, enemy.y) == (500, 0)

    def test_bernoulli_miss(self):
        state = new_state(ArenaConfig(), rng=FixedRng(draw=0.02))
        assert maybe_spawn_enemy(state) is None
        assert state.enemies == []

    def test_cap(self):
        state = new_state(ArenaConfig(max_enemies=2), rng=FixedRng(draw=0.0))
        for _ in range(5):
            maybe_spawn_enemy(state)
        assert len(state.enemies) == 2

    def test_uncapped_by_default(self):
        state = new_state(ArenaConfig(spawn_chance=1.0), seed=3)
        for _ in range(50):
            tick(state, InputState())
        assert len(state.enemies) == 50


# =============================================================================
# Tick
# =============================================================================

class TestTick:

    def test_counts_ticks(self, state):
        for _ in range(3):
            tick(state, InputState())
        assert state.tick_count == 3

    def test_collision_after_movement(self, state):
        # 30 apart before moving (no hit), 18 apart after
        state.bullets.append(Bullet(x=100, y=0, vx=10, vy=0))
        state.enemies.append(Enemy(x=130, y=0))
        tick(state, InputState())
        assert state.score == 10
        assert state.bullets == [] and state.enemies == []
        assert state.last_kills == 1

        tick(state, InputState())
        assert state.last_kills == 0

    def test_spawn_is_last(self):
        state = new_state(ArenaConfig(spawn_chance=1.0), rng=FixedRng(angle=0.0))
        tick(state, InputState())
        # spawned after the pursuit step, so it has not moved yet
        assert [(e.x, e.y) for e in state.enemies] == [(500, 0)]

    def test_enemies_chase_moved_player(self, state):
        enemy = Enemy(x=0, y=-300, speed=2)
        state.enemies.append(enemy)
        tick(state, InputState(keys_down={LEFT}))
        # player moved to (-5, 0) first
        angle = math.atan2(300, -5)
        assert (enemy.x, enemy.y) == pytest.approx((2 * math.cos(angle), -300 + 2 * math.sin(angle)))

    def test_returns_state(self, state):
        assert tick(state, InputState()) is state
