"""Tests for GameConfig validation and game setup."""

import pytest

from ladders_slides.config import GameConfig
from ladders_slides.errors import ConfigurationError
from ladders_slides.game import GameStatus


def test_defaults():
    config = GameConfig()
    assert config.num_tiles == 100
    assert config.num_players == 2
    assert config.shortcut_counts() == (5, 5)


def test_explicit_counts_override_defaults():
    config = GameConfig(num_tiles=100, num_ladders=2)
    assert config.shortcut_counts() == (2, 5)


@pytest.mark.parametrize("kwargs", [
    {"num_tiles": 0},
    {"num_players": 0},
    {"dice_sides": 0},
    {"dice_count": -1},
    {"max_turns": 0},
    {"num_tiles": 2, "num_ladders": 2, "num_slides": 0},
    {"num_tiles": 10, "num_ladders": -1},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        GameConfig(**kwargs)


def test_build_creates_fresh_game():
    engine = GameConfig(num_tiles=40, num_players=3, seed=5).build()
    assert engine.board.num_tiles == 40
    assert engine.player_positions() == [0, 0, 0]
    assert engine.status is GameStatus.IN_PROGRESS


def test_same_seed_same_game():
    config = GameConfig(num_tiles=60, seed=11)
    a = config.build().play(max_turns=500)
    b = config.build().play(max_turns=500)
    assert a.winner == b.winner
    assert a.turns == b.turns
    assert [r.roll for r in a.log] == [r.roll for r in b.log]
