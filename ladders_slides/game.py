"""Turn engine — plays Ladders & Slides turns over a generated board."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Protocol

from ladders_slides.board import Board, Connection, resolve_path
from ladders_slides.dice import DiceRoller
from ladders_slides.errors import ConfigurationError

log = logging.getLogger(__name__)


# ── Structured types ────────────────────────────────────────────────

@dataclass
class Pawn:
    """A player's marker on the track."""

    player: int
    position: int = 0


@dataclass
class TurnRecord:
    """Everything that happened during one player's turn."""

    turn_number: int
    player: int
    start_position: int
    roll: int
    landing: int
    end_position: int
    shortcuts: list[Connection] = field(default_factory=list)
    won: bool = False


@dataclass
class GameResult:
    winner: int | None  # None when the turn limit ran out
    reason: str  # "win" | "max_turns"
    turns: int = 0
    log: list[TurnRecord] = field(default_factory=list)


class GameStatus(enum.Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"


# ── Observer ────────────────────────────────────────────────────────

class GameObserver(Protocol):
    """Receives a record after every completed turn."""

    def on_turn(self, record: TurnRecord) -> None: ...


@dataclass
class ListObserver:
    """Default observer — collects records into a list."""

    records: list[TurnRecord] = field(default_factory=list)

    def on_turn(self, record: TurnRecord) -> None:
        self.records.append(record)


# ── Engine ───────────────────────────────────────────────────────────

DEFAULT_MAX_TURNS = 1000


class TurnEngine:
    """Owns the pawns on one board and advances the game a turn at a time."""

    def __init__(
        self,
        board: Board,
        num_players: int,
        dice: DiceRoller,
        dice_sides: int = 6,
        dice_count: int = 1,
        observer: GameObserver | None = None,
    ):
        if num_players <= 0:
            raise ConfigurationError(f"A game needs at least one player, got {num_players}.")
        self.board = board
        self.dice = dice
        self.dice_sides = dice_sides
        self.dice_count = dice_count
        self.observer = observer if observer is not None else ListObserver()
        self.pawns = [Pawn(player=i) for i in range(num_players)]
        self.turn = 0
        self.status = GameStatus.IN_PROGRESS
        self.winner: int | None = None

    @property
    def is_over(self) -> bool:
        return self.status is GameStatus.WON

    @property
    def current_pawn(self) -> Pawn:
        return self.pawns[self.turn % len(self.pawns)]

    def player_positions(self) -> list[int]:
        return [pawn.position for pawn in self.pawns]

    def take_turn(self) -> TurnRecord | None:
        """Play the current player's turn. Returns ``None`` once the game is won."""
        if self.is_over:
            return None

        pawn = self.current_pawn
        last = self.board.last_tile
        start = pawn.position

        roll = self.dice.roll(self.dice_sides, self.dice_count)
        # The last tile absorbs overshoot.
        landing = min(start + roll, last)
        resolved, shortcuts = resolve_path(landing, self.board.connections)
        resolved = min(resolved, last)

        pawn.position = resolved
        won = resolved >= last

        record = TurnRecord(
            turn_number=self.turn + 1,
            player=pawn.player,
            start_position=start,
            roll=roll,
            landing=landing,
            end_position=resolved,
            shortcuts=shortcuts,
            won=won,
        )

        if won:
            self.status = GameStatus.WON
            self.winner = pawn.player
            log.info("Player %d won on turn %d", pawn.player, record.turn_number)
        else:
            self.turn += 1

        self.observer.on_turn(record)
        return record

    def play(self, max_turns: int = DEFAULT_MAX_TURNS) -> GameResult:
        """Take turns until someone wins or *max_turns* turns have been played."""
        records: list[TurnRecord] = []
        while not self.is_over and len(records) < max_turns:
            record = self.take_turn()
            if record is not None:
                records.append(record)

        if self.is_over:
            return GameResult(winner=self.winner, reason="win", turns=len(records), log=records)
        return GameResult(winner=None, reason="max_turns", turns=len(records), log=records)
