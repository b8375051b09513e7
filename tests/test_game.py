"""Tests for ladders_slides.game (turn engine)."""

import random

import pytest

from ladders_slides.board import Board, Connection
from ladders_slides.dice import Dice
from ladders_slides.errors import ConfigurationError, InvalidDiceError
from ladders_slides.game import GameResult, GameStatus, ListObserver, TurnEngine


class FakeDice:
    """Deterministic dice for testing — returns a scripted sequence of totals."""

    def __init__(self, script: list[int]):
        self.script = list(script)
        self.calls: list[tuple[int, int]] = []

    def roll(self, sides: int, count: int) -> int:
        self.calls.append((sides, count))
        return self.script.pop(0)


# ── setup ────────────────────────────────────────────────────────────

def test_initial_state():
    engine = TurnEngine(Board(10), num_players=3, dice=FakeDice([]))
    assert engine.status is GameStatus.IN_PROGRESS
    assert engine.winner is None
    assert engine.turn == 0
    assert engine.player_positions() == [0, 0, 0]


def test_no_players_fails():
    with pytest.raises(ConfigurationError):
        TurnEngine(Board(10), num_players=0, dice=FakeDice([]))


# ── turns ────────────────────────────────────────────────────────────

def test_ladder_to_last_tile_wins():
    """4 tiles, ladder 1→3, roll 1: pawn climbs to the last tile and wins."""
    board = Board(4, [Connection.ladder(1, 3)])
    engine = TurnEngine(board, num_players=2, dice=FakeDice([1]))

    record = engine.take_turn()

    assert record.landing == 1
    assert record.end_position == 3
    assert record.shortcuts == [Connection.ladder(1, 3)]
    assert record.won
    assert engine.player_positions() == [3, 0]
    assert engine.status is GameStatus.WON
    assert engine.winner == 0


def test_plain_move_advances_turn_pointer():
    engine = TurnEngine(Board(20), num_players=2, dice=FakeDice([4, 5]))

    first = engine.take_turn()
    assert first.player == 0
    assert first.end_position == 4
    assert engine.turn == 1

    second = engine.take_turn()
    assert second.player == 1
    assert second.turn_number == 2
    assert engine.player_positions() == [4, 5]


def test_turns_wrap_around_players():
    engine = TurnEngine(Board(50), num_players=2, dice=FakeDice([1, 2, 3]))
    engine.take_turn()
    engine.take_turn()
    record = engine.take_turn()
    assert record.player == 0
    assert record.start_position == 1
    assert record.end_position == 4


def test_overshoot_is_clamped_and_wins():
    engine = TurnEngine(Board(5), num_players=1, dice=FakeDice([12]))
    record = engine.take_turn()
    assert record.landing == 4
    assert record.end_position == 4
    assert record.won


def test_slide_moves_back():
    board = Board(20, [Connection.slide(7, 2)])
    engine = TurnEngine(board, num_players=1, dice=FakeDice([6, 1]))
    engine.take_turn()
    record = engine.take_turn()
    assert record.landing == 7
    assert record.end_position == 2
    assert not record.won


def test_slide_on_last_tile_prevents_win():
    board = Board(6, [Connection.slide(5, 1)])
    engine = TurnEngine(board, num_players=1, dice=FakeDice([6]))
    record = engine.take_turn()
    assert record.landing == 5
    assert record.end_position == 1
    assert not record.won
    assert engine.status is GameStatus.IN_PROGRESS


def test_take_turn_after_win_is_noop():
    board = Board(4, [Connection.ladder(1, 3)])
    dice = FakeDice([1, 1])
    engine = TurnEngine(board, num_players=2, dice=dice)
    engine.take_turn()

    assert engine.take_turn() is None
    assert engine.player_positions() == [3, 0]
    assert len(dice.calls) == 1


def test_dice_configuration_is_passed_through():
    dice = FakeDice([7])
    engine = TurnEngine(Board(30), num_players=1, dice=dice, dice_sides=6, dice_count=2)
    engine.take_turn()
    assert dice.calls == [(6, 2)]


def test_invalid_dice_propagates():
    engine = TurnEngine(Board(30), num_players=1, dice=Dice(), dice_sides=0)
    with pytest.raises(InvalidDiceError):
        engine.take_turn()


def test_single_tile_board_wins_immediately():
    engine = TurnEngine(Board(1), num_players=1, dice=FakeDice([3]))
    record = engine.take_turn()
    assert record.end_position == 0
    assert record.won


# ── observer ─────────────────────────────────────────────────────────

def test_observer_receives_every_turn():
    observer = ListObserver()
    engine = TurnEngine(Board(30), num_players=2, dice=FakeDice([1, 2, 3]), observer=observer)
    for _ in range(3):
        engine.take_turn()
    assert [r.turn_number for r in observer.records] == [1, 2, 3]


def test_default_observer_is_list_observer():
    engine = TurnEngine(Board(30), num_players=1, dice=FakeDice([2]))
    engine.take_turn()
    assert isinstance(engine.observer, ListObserver)
    assert len(engine.observer.records) == 1


# ── play ─────────────────────────────────────────────────────────────

def test_play_until_win():
    board = Board(4, [Connection.ladder(1, 3)])
    engine = TurnEngine(board, num_players=2, dice=FakeDice([2, 2, 1]))
    result = engine.play()
    assert isinstance(result, GameResult)
    # p0: 0→2, p1: 0→2, p0: 2→3 wins
    assert result.winner == 0
    assert result.reason == "win"
    assert result.turns == 3
    assert [r.player for r in result.log] == [0, 1, 0]


def test_play_hits_turn_limit():
    board = Board(100, [Connection.slide(3, 0)])
    engine = TurnEngine(board, num_players=1, dice=FakeDice([3] * 10))
    result = engine.play(max_turns=5)
    assert result.winner is None
    assert result.reason == "max_turns"
    assert result.turns == 5


def test_random_games_finish():
    for seed in range(20):
        rng = random.Random(seed)
        board = Board.create(100, rng=rng)
        if board.connections.get(board.last_tile) is not None:
            continue  # a slide off the last tile makes the board unwinnable
        engine = TurnEngine(board, num_players=2, dice=Dice(rng))
        result = engine.play(max_turns=10_000)
        assert result.reason == "win"
        assert engine.player_positions()[result.winner] == 99
