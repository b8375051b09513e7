"""Dice used to move pawns."""

from __future__ import annotations

import random
from typing import Protocol

from ladders_slides.errors import InvalidDiceError


class DiceRoller(Protocol):
    """Anything that can sum a roll of ``count`` dice with ``sides`` faces."""

    def roll(self, sides: int, count: int) -> int: ...


class Dice:
    """Fair dice drawing from a single random generator.

    Pass the same ``random.Random`` used to build the board to make a whole
    game reproducible from one seed.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def rolls(self, sides: int, count: int) -> list[int]:
        """Roll *count* dice and return the individual faces."""
        if sides <= 0 or count <= 0:
            raise InvalidDiceError(sides, count)
        return [self.rng.randint(1, sides) for _ in range(count)]

    def roll(self, sides: int, count: int) -> int:
        """Roll *count* dice of *sides* faces and return the total."""
        return sum(self.rolls(sides, count))
