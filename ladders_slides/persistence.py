"""SQLite persistence for simulated games.

Each game stores its configuration, the generated shortcuts, and one row
per turn, so any game can be replayed or exported later.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ladders_slides.stats import Outcome

if TYPE_CHECKING:
    from ladders_slides.board import ConnectionSet
    from ladders_slides.config import GameConfig
    from ladders_slides.game import GameResult, TurnRecord


class ResultsDB:
    """Thin wrapper around a SQLite database for game outcomes."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._create_tables()

    def _create_tables(self) -> None:
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS games (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                num_tiles   INTEGER NOT NULL,
                num_players INTEGER NOT NULL,
                dice_sides  INTEGER NOT NULL,
                dice_count  INTEGER NOT NULL,
                seed        INTEGER,
                winner      INTEGER,
                reason      TEXT NOT NULL,
                turns       INTEGER NOT NULL,
                created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE IF NOT EXISTS connections (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                game_id     INTEGER NOT NULL REFERENCES games(id),
                start       INTEGER NOT NULL,
                end_tile    INTEGER NOT NULL,
                kind        TEXT NOT NULL,
                UNIQUE(game_id, start)
            );
            CREATE TABLE IF NOT EXISTS turns (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                game_id         INTEGER NOT NULL REFERENCES games(id),
                turn_number     INTEGER NOT NULL,
                player_idx      INTEGER NOT NULL,
                start_position  INTEGER NOT NULL,
                roll            INTEGER NOT NULL,
                landing         INTEGER NOT NULL,
                end_position    INTEGER NOT NULL,
                shortcuts       TEXT NOT NULL,
                won             INTEGER NOT NULL DEFAULT 0,
                UNIQUE(game_id, turn_number)
            );
        """)
        self._conn.commit()

    def record_game(
        self,
        num_tiles: int,
        num_players: int,
        winner: int | None,
        reason: str,
        turns: int,
        dice_sides: int = 6,
        dice_count: int = 1,
        seed: int | None = None,
    ) -> int:
        """Record a completed game. Returns the game row id."""
        cur = self._conn.execute(
            "INSERT INTO games (num_tiles, num_players, dice_sides, dice_count, "
            "seed, winner, reason, turns) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (num_tiles, num_players, dice_sides, dice_count, seed, winner, reason, turns),
        )
        self._conn.commit()
        return cur.lastrowid  # type: ignore[return-value]

    def record_connections(self, game_id: int, connections: ConnectionSet) -> None:
        """Record the shortcuts a game was played on."""
        self._conn.executemany(
            "INSERT INTO connections (game_id, start, end_tile, kind) VALUES (?, ?, ?, ?)",
            [(game_id, c.start, c.end, c.kind.value) for c in connections],
        )
        self._conn.commit()

    def record_turn(
        self,
        game_id: int,
        turn_number: int,
        player_idx: int,
        start_position: int,
        roll: int,
        landing: int,
        end_position: int,
        shortcuts: list[dict],
        won: bool = False,
    ) -> int:
        """Record a single player-turn summary."""
        cur = self._conn.execute(
            "INSERT INTO turns (game_id, turn_number, player_idx, start_position, "
            "roll, landing, end_position, shortcuts, won) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (game_id, turn_number, player_idx, start_position, roll, landing,
             end_position, json.dumps(shortcuts), int(won)),
        )
        self._conn.commit()
        return cur.lastrowid  # type: ignore[return-value]

    def list_outcomes(self) -> list[Outcome]:
        """Return all recorded games as Outcome objects."""
        rows = self._conn.execute(
            "SELECT num_players, winner, reason, turns FROM games ORDER BY id"
        ).fetchall()
        return [Outcome(num_players=r[0], winner=r[1], reason=r[2], turns=r[3]) for r in rows]

    def close(self) -> None:
        self._conn.close()


# ── Game log persistence ─────────────────────────────────────────────

def persist_game_log(db: ResultsDB, game_id: int, records: list[TurnRecord]) -> None:
    """Write turn records to the turns table."""
    for record in records:
        db.record_turn(
            game_id=game_id,
            turn_number=record.turn_number,
            player_idx=record.player,
            start_position=record.start_position,
            roll=record.roll,
            landing=record.landing,
            end_position=record.end_position,
            shortcuts=[
                {"start": c.start, "end": c.end, "kind": c.kind.value}
                for c in record.shortcuts
            ],
            won=record.won,
        )


def persist_game(
    db: ResultsDB,
    config: GameConfig,
    connections: ConnectionSet,
    result: GameResult,
) -> int:
    """Record a finished game with its board and turn log. Returns the game id."""
    game_id = db.record_game(
        num_tiles=config.num_tiles,
        num_players=config.num_players,
        winner=result.winner,
        reason=result.reason,
        turns=result.turns,
        dice_sides=config.dice_sides,
        dice_count=config.dice_count,
        seed=config.seed,
    )
    db.record_connections(game_id, connections)
    persist_game_log(db, game_id, result.log)
    return game_id
