"""Tests for SQLite persistence of simulated games."""

import json
import sqlite3
import tempfile
from pathlib import Path

from ladders_slides.board import Board, Connection
from ladders_slides.config import GameConfig
from ladders_slides.game import TurnEngine
from ladders_slides.persistence import ResultsDB, persist_game, persist_game_log


class FakeDice:
    def __init__(self, script: list[int]):
        self.script = list(script)

    def roll(self, sides: int, count: int) -> int:
        return self.script.pop(0)


def test_create_db():
    """Creating a DB initializes the schema."""
    with tempfile.TemporaryDirectory() as tmp:
        db_path = Path(tmp) / "test.db"
        db = ResultsDB(db_path)
        conn = sqlite3.connect(db_path)
        tables = {r[0] for r in conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ).fetchall()}
        conn.close()
        db.close()
        assert {"games", "connections", "turns"} <= tables


def test_record_and_list_outcomes():
    with tempfile.TemporaryDirectory() as tmp:
        db = ResultsDB(Path(tmp) / "test.db")
        db.record_game(num_tiles=100, num_players=2, winner=0, reason="win", turns=40)
        db.record_game(num_tiles=100, num_players=2, winner=None, reason="max_turns", turns=1000)
        outcomes = db.list_outcomes()
        db.close()
        assert len(outcomes) == 2
        assert outcomes[0].winner == 0
        assert outcomes[0].turns == 40
        assert outcomes[1].winner is None
        assert outcomes[1].reason == "max_turns"


def test_persist_game_log_writes_turns(tmp_path):
    db_path = tmp_path / "test.db"
    db = ResultsDB(db_path)
    board = Board(4, [Connection.ladder(1, 3)])
    engine = TurnEngine(board, num_players=2, dice=FakeDice([2, 2, 1]))
    result = engine.play()

    game_id = db.record_game(4, 2, result.winner, result.reason, result.turns)
    persist_game_log(db, game_id, result.log)
    db.close()

    conn = sqlite3.connect(db_path)
    rows = conn.execute(
        "SELECT turn_number, player_idx, roll, landing, end_position, shortcuts, won "
        "FROM turns WHERE game_id = ? ORDER BY turn_number",
        (game_id,),
    ).fetchall()
    conn.close()

    assert [r[0] for r in rows] == [1, 2, 3]
    assert [r[1] for r in rows] == [0, 1, 0]
    last = rows[-1]
    assert last[2:5] == (1, 3, 3)
    assert json.loads(last[5]) == []
    assert last[6] == 1


def test_persist_game_records_board(tmp_path):
    db_path = tmp_path / "test.db"
    db = ResultsDB(db_path)
    config = GameConfig(num_tiles=50, seed=3)
    engine = config.build()
    result = engine.play(max_turns=config.max_turns)

    game_id = persist_game(db, config, engine.board.connections, result)
    db.close()

    conn = sqlite3.connect(db_path)
    game = conn.execute(
        "SELECT num_tiles, seed, reason, turns FROM games WHERE id = ?", (game_id,)
    ).fetchone()
    shortcuts = conn.execute(
        "SELECT start, end_tile, kind FROM connections WHERE game_id = ?", (game_id,)
    ).fetchall()
    turn_count = conn.execute(
        "SELECT COUNT(*) FROM turns WHERE game_id = ?", (game_id,)
    ).fetchone()[0]
    conn.close()

    assert game == (50, 3, result.reason, result.turns)
    assert sorted(shortcuts) == sorted(
        (c.start, c.end, c.kind.value) for c in engine.board.connections
    )
    assert turn_count == result.turns
