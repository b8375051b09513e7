"""Exception types raised while building boards and playing games."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ladders_slides.board import Connection


class LaddersError(Exception):
    """Base class for every error this package raises."""


class ConfigurationError(LaddersError, ValueError):
    """Invalid construction parameters (tile count, player count, shortcut counts)."""


class InvalidTileError(LaddersError, ValueError):
    """A tile was given a negative position."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Tile position must be non-negative, got {position}.")


class InvalidConnectionError(LaddersError, ValueError):
    """A connection, or a set of connections, breaks a board invariant."""


class GenerationTimeoutError(LaddersError, RuntimeError):
    """
    Rejection sampling ran out of attempts before placing every shortcut.

    Attributes:
        `attempts` -- number of random draws consumed
        `placed` -- number of shortcuts placed before giving up
        `requested` -- number of shortcuts asked for
    """

    def __init__(self, attempts: int, placed: int, requested: int):
        self.attempts = attempts
        self.placed = placed
        self.requested = requested
        super().__init__(
            f"Gave up placing shortcuts after {attempts} attempts "
            f"({placed} of {requested} placed)."
        )


class CycleDetectedError(LaddersError, RuntimeError):
    """
    Following shortcuts revisited a tile, so the walk would never end.

    Attributes:
        `position` -- the revisited start position
        `path` -- connections taken before the revisit, in order
    """

    def __init__(self, position: int, path: list[Connection]):
        self.position = position
        self.path = list(path)
        route = " -> ".join(str(c.start) for c in self.path)
        super().__init__(
            f"Shortcut cycle detected at tile {position} (route {route} -> {position})."
        )


class InvalidDiceError(LaddersError, ValueError):
    """Dice were asked for a non-positive number of sides or rolls."""

    def __init__(self, sides: int, count: int):
        self.sides = sides
        self.count = count
        super().__init__(
            f'Parameters "sides" and "count" must be positive. sides: ({sides}) count: ({count})'
        )
