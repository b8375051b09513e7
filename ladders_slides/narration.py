"""Plain-text game narration written line by line to a log sink."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TextIO

from ladders_slides.board import Board
from ladders_slides.game import ListObserver, TurnRecord

DEFAULT_LOG_PATH = Path("ladders_and_slides.log")


class LineLogger(Protocol):
    def log(self, line: str) -> None: ...


class FileLogger:
    """Writes each logged line to a file, truncating it on open."""

    def __init__(self, path: Path | str = DEFAULT_LOG_PATH):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO = self.path.open("w", encoding="utf-8")

    def log(self, line: str) -> None:
        self._file.write(line + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> FileLogger:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def describe_board(board: Board) -> list[str]:
    """Summary lines for a freshly created board."""
    lines = [
        f"Made a board with {board.num_tiles} tiles, "
        f"{len(board.connections.ladders)} ladders, and {len(board.connections.slides)} slides."
    ]
    lines.extend(f"  {conn}" for conn in board.connections)
    return lines


def describe_turn(record: TurnRecord) -> list[str]:
    """Narrate one turn: the roll, the move, each shortcut, and any win."""
    who = f"Player {record.player}"
    lines = [
        f"{who} rolled a {record.roll}.",
        f"{who} moved from tile {record.start_position} to tile {record.landing}.",
    ]
    for conn in record.shortcuts:
        lines.append(f"{who} took a {conn}.")
    if record.shortcuts:
        lines.append(f"{who} ended up at tile {record.end_position}.")
    if record.won:
        lines.append(f"{who} won on turn {record.turn_number}!")
    return lines


@dataclass
class NarratingObserver(ListObserver):
    """Collects turn records and narrates them to an optional logger."""

    logger: LineLogger | None = None

    def on_turn(self, record: TurnRecord) -> None:
        super().on_turn(record)
        self.narrate(describe_turn(record))

    def narrate(self, lines: list[str]) -> None:
        if self.logger is None:
            return
        for line in lines:
            self.logger.log(line)
