import pytest

from arena.simulation import ArenaConfig, new_state


@pytest.fixture
def quiet_config():
    """Default arena without random spawns"""
    return ArenaConfig(spawn_chance=0.0)


@pytest.fixture
def state(quiet_config):
    return new_state(quiet_config, seed=0)
