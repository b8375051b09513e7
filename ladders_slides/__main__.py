"""CLI entry point: python -m ladders_slides {play,simulate,stats,chart,export}."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import random
import sys
from pathlib import Path

from ladders_slides.chart import make_length_chart, make_win_chart
from ladders_slides.config import DB_PATH, RESULTS_DIR, GameConfig
from ladders_slides.errors import LaddersError
from ladders_slides.export import generate_all
from ladders_slides.game import ListObserver
from ladders_slides.narration import DEFAULT_LOG_PATH, FileLogger, NarratingObserver, describe_board
from ladders_slides.persistence import ResultsDB, persist_game
from ladders_slides.stats import Outcome, summarize


def _open_db() -> ResultsDB:
    RESULTS_DIR.mkdir(exist_ok=True)
    return ResultsDB(DB_PATH)


def _config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        num_tiles=args.tiles,
        num_players=args.players,
        num_ladders=args.ladders,
        num_slides=args.slides,
        dice_sides=args.sides,
        dice_count=args.dice,
        max_turns=args.max_turns,
        seed=args.seed,
    )


def _load_outcomes() -> list[Outcome]:
    if not DB_PATH.exists():
        print(f"No database found at {DB_PATH}. Simulate some games first.", file=sys.stderr)
        sys.exit(1)

    db = _open_db()
    outcomes = db.list_outcomes()
    db.close()

    if not outcomes:
        print("No recorded games yet.", file=sys.stderr)
        sys.exit(1)
    return outcomes


# ── play ─────────────────────────────────────────────────────────────

def cmd_play(args: argparse.Namespace) -> None:
    """Play one narrated game, writing the narration to a log file."""
    config = _config_from_args(args)

    with FileLogger(args.log) as logger:
        observer = NarratingObserver(logger=logger)
        engine = config.build(observer=observer)
        board_lines = describe_board(engine.board)
        observer.narrate(board_lines)
        for line in board_lines:
            print(line)

        result = engine.play(max_turns=config.max_turns)

    if result.winner is None:
        print(f"No winner after {result.turns} turns.")
    else:
        print(f"Player {result.winner} won after {result.turns} turns.")
    print(f"Positions: {engine.player_positions()}")
    print(f"Narration written to {args.log}")


# ── simulate ─────────────────────────────────────────────────────────

def cmd_simulate(args: argparse.Namespace) -> None:
    """Simulate many games and record each one."""
    base = _config_from_args(args)
    seeds = random.Random(base.seed)
    db = _open_db()

    for i in range(args.games):
        config = dataclasses.replace(base, seed=seeds.randrange(2**31))
        engine = config.build(observer=ListObserver())
        result = engine.play(max_turns=config.max_turns)
        persist_game(db, config, engine.board.connections, result)

        if args.progress:
            outcome = "no winner" if result.winner is None else f"player {result.winner}"
            print(f"[{i + 1}/{args.games}] {result.reason} → {outcome} in {result.turns} turns")

    db.close()
    print(f"Recorded {args.games} games in {DB_PATH}")


# ── stats ────────────────────────────────────────────────────────────

def cmd_stats(args: argparse.Namespace) -> None:
    """Print a summary of recorded games."""
    summary = summarize(_load_outcomes())

    print("\nGame Summary")
    print("=" * 40)
    print(f"  {'games':20s} {summary.games:7d}")
    print(f"  {'finished':20s} {summary.finished:7d}")
    print(f"  {'hit turn limit':20s} {summary.unfinished:7d}")
    if summary.mean_turns is not None:
        print(f"  {'mean turns':20s} {summary.mean_turns:7.1f}")
        print(f"  {'median turns':20s} {summary.median_turns:7.1f}")
        print(f"  {'shortest':20s} {summary.min_turns:7d}")
        print(f"  {'longest':20s} {summary.max_turns:7d}")
    for seat in sorted(summary.wins):
        label = f"player {seat} wins"
        print(f"  {label:20s} {summary.wins[seat]:7d}  ({summary.win_rate(seat):.1%})")


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Generate game-length and win charts from the database."""
    outcomes = _load_outcomes()
    summary = summarize(outcomes)
    lengths = [o.turns for o in outcomes if o.winner is not None]

    out_dir = Path(args.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = [
        make_length_chart(lengths, output_path=str(out_dir / "game_lengths.png")),
        make_win_chart(summary.wins, output_path=str(out_dir / "wins_by_seat.png")),
    ]
    for path in paths:
        print(f"Chart saved to {path}")


# ── export ───────────────────────────────────────────────────────────

def cmd_export(args: argparse.Namespace) -> None:
    """Export recorded games to JSON files."""
    if not DB_PATH.exists():
        print(f"No database found at {DB_PATH}. Simulate some games first.", file=sys.stderr)
        sys.exit(1)

    generated = generate_all(DB_PATH, Path(args.output_dir))
    print(f"Generated {len(generated)} JSON files in {args.output_dir}")


# ── main ─────────────────────────────────────────────────────────────

def _add_game_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--tiles", type=int, default=100, help="Tiles on the track (default 100)")
    parser.add_argument("--players", type=int, default=2, help="Number of players (default 2)")
    parser.add_argument("--ladders", type=int, help="Number of ladders (default: derived from tiles)")
    parser.add_argument("--slides", type=int, help="Number of slides (default: derived from tiles)")
    parser.add_argument("--sides", type=int, default=6, help="Sides per die (default 6)")
    parser.add_argument("--dice", type=int, default=1, help="Dice rolled per turn (default 1)")
    parser.add_argument("--max-turns", type=int, default=1000, help="Max turns per game")
    parser.add_argument("--seed", type=int, help="Random seed")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="ladders_slides",
        description="Ladders & Slides board game simulator",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    p_play = sub.add_parser("play", help="Play one narrated game")
    _add_game_options(p_play)
    p_play.add_argument("--log", default=str(DEFAULT_LOG_PATH), help="Narration log path")

    p_sim = sub.add_parser("simulate", help="Simulate and record many games")
    _add_game_options(p_sim)
    p_sim.add_argument("--games", type=int, default=100, help="Games to simulate (default 100)")
    p_sim.add_argument("--progress", action="store_true", help="Print one line per game")

    sub.add_parser("stats", help="Summarize recorded games")

    p_chart = sub.add_parser("chart", help="Generate charts")
    p_chart.add_argument("--output-dir", "-o", default=str(RESULTS_DIR), help="Output directory")

    p_export = sub.add_parser("export", help="Export recorded games to JSON")
    p_export.add_argument("--output-dir", "-o", default=str(RESULTS_DIR / "export"), help="Output directory")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "play": cmd_play,
        "simulate": cmd_simulate,
        "stats": cmd_stats,
        "chart": cmd_chart,
        "export": cmd_export,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return

    try:
        command(args)
    except LaddersError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
