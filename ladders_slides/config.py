"""Game configuration and default paths."""

from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path

from ladders_slides.board import Board, check_shortcut_counts, default_shortcut_counts
from ladders_slides.dice import Dice
from ladders_slides.errors import ConfigurationError
from ladders_slides.game import DEFAULT_MAX_TURNS, GameObserver, TurnEngine

RESULTS_DIR = Path("results")
DB_PATH = RESULTS_DIR / "games.db"


@dataclass
class GameConfig:
    """Everything needed to set up and play one game.

    Leaving ``num_ladders`` / ``num_slides`` unset picks the default
    shortcut density for the board size.
    """

    num_tiles: int = 100
    num_players: int = 2
    num_ladders: int | None = None
    num_slides: int | None = None
    dice_sides: int = 6
    dice_count: int = 1
    max_turns: int = DEFAULT_MAX_TURNS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.num_players <= 0:
            raise ConfigurationError(f"A game needs at least one player, got {self.num_players}.")
        if self.dice_sides <= 0 or self.dice_count <= 0:
            raise ConfigurationError(
                f"Dice need positive sides and count (sides={self.dice_sides}, count={self.dice_count})."
            )
        if self.max_turns <= 0:
            raise ConfigurationError(f"max_turns must be positive, got {self.max_turns}.")
        check_shortcut_counts(self.num_tiles, *self.shortcut_counts())

    def shortcut_counts(self) -> tuple[int, int]:
        """Return ``(ladders, slides)``, filling in defaults for unset counts."""
        if self.num_tiles <= 0:
            raise ConfigurationError(f"A board needs at least one tile, got {self.num_tiles}.")
        ladders, slides = default_shortcut_counts(self.num_tiles)
        if self.num_ladders is not None:
            ladders = self.num_ladders
        if self.num_slides is not None:
            slides = self.num_slides
        return ladders, slides

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)

    def build(self, observer: GameObserver | None = None) -> TurnEngine:
        """Create the board and a fresh engine, sharing one RNG between board and dice."""
        rng = self.make_rng()
        ladders, slides = self.shortcut_counts()
        board = Board.create(self.num_tiles, ladders, slides, rng)
        return TurnEngine(
            board,
            self.num_players,
            Dice(rng),
            dice_sides=self.dice_sides,
            dice_count=self.dice_count,
            observer=observer,
        )
