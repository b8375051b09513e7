"""Export recorded games to JSON."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

GAME_COLUMNS = (
    "id, num_tiles, num_players, dice_sides, dice_count, seed, "
    "winner, reason, turns, created_at"
)


def export_games_list(db_path: Path | str) -> list[dict]:
    """Read all games from the DB and return as a list of dicts."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    rows = conn.execute(f"SELECT {GAME_COLUMNS} FROM games ORDER BY id").fetchall()
    conn.close()
    return [dict(r) for r in rows]


def export_game_events(db_path: Path | str, game_id: int) -> dict | None:
    """Export the board and turn-by-turn events of one game.

    Returns ``None`` if the game does not exist.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row

    game_row = conn.execute(
        f"SELECT {GAME_COLUMNS} FROM games WHERE id = ?", (game_id,)
    ).fetchone()
    if game_row is None:
        conn.close()
        return None

    conn_rows = conn.execute(
        "SELECT start, end_tile, kind FROM connections WHERE game_id = ? ORDER BY id",
        (game_id,),
    ).fetchall()
    turn_rows = conn.execute(
        "SELECT turn_number, player_idx, start_position, roll, landing, "
        "end_position, shortcuts, won "
        "FROM turns WHERE game_id = ? ORDER BY turn_number",
        (game_id,),
    ).fetchall()
    conn.close()

    connections = [
        {"start": r["start"], "end": r["end_tile"], "kind": r["kind"]} for r in conn_rows
    ]

    turns: list[dict] = []
    for row in turn_rows:
        turn = dict(row)
        turn["shortcuts"] = json.loads(turn["shortcuts"])
        turn["won"] = bool(turn["won"])
        turns.append(turn)

    return {"game": dict(game_row), "connections": connections, "turns": turns}


def generate_all(db_path: Path | str, output_dir: Path) -> list[Path]:
    """Generate games.json and per-game event JSON files.

    Returns a list of all generated file paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    events_dir = output_dir / "events"
    events_dir.mkdir(exist_ok=True)

    generated: list[Path] = []

    games = export_games_list(db_path)
    games_path = output_dir / "games.json"
    games_path.write_text(json.dumps(games, indent=2))
    generated.append(games_path)

    for game in games:
        game_id = game["id"]
        data = export_game_events(db_path, game_id)
        if data is None:
            continue
        event_path = events_dir / f"{game_id}.json"
        event_path.write_text(json.dumps(data, indent=2))
        generated.append(event_path)

    return generated
