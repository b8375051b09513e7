"""Board topology for Ladders & Slides: tiles, shortcuts, generation and resolution."""

from __future__ import annotations

import enum
import logging
import math
import random
from collections.abc import Container, Iterable, Iterator
from dataclasses import dataclass, field

from ladders_slides.errors import (
    ConfigurationError,
    CycleDetectedError,
    GenerationTimeoutError,
    InvalidConnectionError,
    InvalidTileError,
)

log = logging.getLogger(__name__)

# Draws allowed per requested shortcut before generation gives up.
DEFAULT_MAX_ATTEMPTS = 10_000


# ── Tiles and connections ────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class Tile:
    """A single track position. Equal tiles share a position."""

    position: int

    def __post_init__(self) -> None:
        if self.position < 0:
            raise InvalidTileError(self.position)

    def __str__(self) -> str:
        return f"tile {self.position}"


class ConnectionKind(enum.Enum):
    LADDER = "ladder"
    SLIDE = "slide"

    def __str__(self) -> str:
        return self.value

    def allows(self, start: int, end: int) -> bool:
        """True if a shortcut of this kind may run from *start* to *end*."""
        if self is ConnectionKind.LADDER:
            return end > start
        return end < start


@dataclass(frozen=True)
class Connection:
    """A directed shortcut between two tile positions."""

    start: int
    end: int
    kind: ConnectionKind

    def __post_init__(self) -> None:
        # Validate both ends as tiles; positions are stored as plain ints.
        Tile(self.start)
        Tile(self.end)
        if self.start == self.end:
            raise InvalidConnectionError(
                f"A {self.kind} cannot start and end on tile {self.start}."
            )
        if not self.kind.allows(self.start, self.end):
            direction = "up" if self.kind is ConnectionKind.LADDER else "down"
            raise InvalidConnectionError(
                f"A {self.kind} must go {direction}, got tile {self.start} to tile {self.end}."
            )

    @classmethod
    def ladder(cls, start: int, end: int) -> Connection:
        return cls(start, end, ConnectionKind.LADDER)

    @classmethod
    def slide(cls, start: int, end: int) -> Connection:
        return cls(start, end, ConnectionKind.SLIDE)

    def mirrors(self, other: Connection) -> bool:
        return self.start == other.end and self.end == other.start

    def __str__(self) -> str:
        return f"{self.kind} from tile {self.start} to tile {self.end}"


class ConnectionSet:
    """Immutable collection of shortcuts over one track.

    No two connections share a start, no two share an end, and none is the
    mirror of another. Together these make the shortcuts a partial injective
    function without 2-cycles; longer cycles are caught by :func:`resolve`.
    """

    def __init__(self, connections: Iterable[Connection] = ()):
        self._connections = tuple(connections)
        self._by_start: dict[int, Connection] = {}
        self._by_end: dict[int, Connection] = {}

        for conn in self._connections:
            if conn.start in self._by_start:
                raise InvalidConnectionError(
                    f"Two shortcuts start on tile {conn.start}: "
                    f"{self._by_start[conn.start]} and {conn}."
                )
            if conn.end in self._by_end:
                raise InvalidConnectionError(
                    f"Two shortcuts end on tile {conn.end}: "
                    f"{self._by_end[conn.end]} and {conn}."
                )
            reverse = self._by_start.get(conn.end)
            if reverse is not None and reverse.mirrors(conn):
                raise InvalidConnectionError(f"{conn} mirrors {reverse}.")
            self._by_start[conn.start] = conn
            self._by_end[conn.end] = conn

    def __iter__(self) -> Iterator[Connection]:
        return iter(self._connections)

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, item: object) -> bool:
        return item in self._connections

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectionSet):
            return NotImplemented
        return set(self._connections) == set(other._connections)

    def __hash__(self) -> int:
        return hash(frozenset(self._connections))

    def __repr__(self) -> str:
        inner = ", ".join(f"{c.start}->{c.end}" for c in self._connections)
        return f"ConnectionSet({inner})"

    def get(self, start: int) -> Connection | None:
        """Return the shortcut beginning at *start*, if any."""
        return self._by_start.get(start)

    @property
    def starts(self) -> frozenset[int]:
        return frozenset(self._by_start)

    @property
    def ends(self) -> frozenset[int]:
        return frozenset(self._by_end)

    @property
    def ladders(self) -> list[Connection]:
        return [c for c in self._connections if c.kind is ConnectionKind.LADDER]

    @property
    def slides(self) -> list[Connection]:
        return [c for c in self._connections if c.kind is ConnectionKind.SLIDE]


# ── Resolution ───────────────────────────────────────────────────────

def resolve_path(
    start: int,
    connections: ConnectionSet | Iterable[Connection],
) -> tuple[int, list[Connection]]:
    """Follow shortcuts from *start* until none applies.

    Returns the resting position and the shortcuts taken, in order.
    Raises :class:`CycleDetectedError` if a start position comes up twice.
    """
    if isinstance(connections, ConnectionSet):
        lookup = connections.get
    else:
        index: dict[int, Connection] = {}
        for conn in connections:
            index.setdefault(conn.start, conn)
        lookup = index.get

    current = start
    visited: set[int] = set()
    path: list[Connection] = []

    while (conn := lookup(current)) is not None:
        if current in visited:
            raise CycleDetectedError(current, path)
        visited.add(current)
        path.append(conn)
        current = conn.end

    return current, path


def resolve(start: int, connections: ConnectionSet | Iterable[Connection]) -> int:
    """Return the tile a pawn landing on *start* finally rests on."""
    position, _ = resolve_path(start, connections)
    return position


# ── Generation ───────────────────────────────────────────────────────

def max_shortcuts(num_tiles: int) -> int:
    """Upper bound on shortcuts: each needs its own start and end slot."""
    return num_tiles // 2


def default_shortcut_counts(num_tiles: int) -> tuple[int, int]:
    """Return ``(ladders, slides)`` for a board of *num_tiles*.

    One shortcut per five tile pairs, ladders taking the odd one out.
    """
    total = max_shortcuts(num_tiles) // 5
    return math.ceil(total / 2), total // 2


def check_shortcut_counts(num_tiles: int, num_ladders: int, num_slides: int) -> None:
    if num_tiles <= 0:
        raise ConfigurationError(f"A board needs at least one tile, got {num_tiles}.")
    if num_ladders < 0 or num_slides < 0:
        raise ConfigurationError(
            f"Shortcut counts cannot be negative (ladders={num_ladders}, slides={num_slides})."
        )
    limit = max_shortcuts(num_tiles)
    if num_ladders + num_slides > limit:
        raise ConfigurationError(
            f"{num_ladders} ladders and {num_slides} slides do not fit on "
            f"{num_tiles} tiles (at most {limit} shortcuts)."
        )


class _Placer:
    """Rejection sampler that places shortcuts one at a time."""

    def __init__(self, num_tiles: int, rng: random.Random, budget: int, requested: int):
        self.num_tiles = num_tiles
        self.rng = rng
        self.budget = budget
        self.requested = requested
        self.attempts = 0
        self.placed: list[Connection] = []
        self._by_start: dict[int, Connection] = {}
        self._ends: set[int] = set()

    def place(self, kind: ConnectionKind) -> Connection:
        while True:
            start = self._draw(self._by_start)
            end = self._draw(self._ends)
            if self._acceptable(kind, start, end):
                break

        conn = Connection(start, end, kind)
        self.placed.append(conn)
        self._by_start[start] = conn
        self._ends.add(end)
        log.debug("Placed %s after %d attempts", conn, self.attempts)
        return conn

    def _draw(self, taken: Container[int]) -> int:
        while True:
            self._spend()
            position = self.rng.randrange(self.num_tiles)
            if position not in taken:
                return position

    def _spend(self) -> None:
        self.attempts += 1
        if self.attempts > self.budget:
            log.warning(
                "Shortcut generation exhausted %d attempts on %d tiles (%d/%d placed)",
                self.budget, self.num_tiles, len(self.placed), self.requested,
            )
            raise GenerationTimeoutError(self.budget, len(self.placed), self.requested)

    def _acceptable(self, kind: ConnectionKind, start: int, end: int) -> bool:
        if start == end or not kind.allows(start, end):
            return False

        reverse = self._by_start.get(end)
        if reverse is not None and reverse.end == start:
            return False

        # Placed shortcuts are acyclic, so this walk ends within len(placed) steps.
        current = end
        while (conn := self._by_start.get(current)) is not None:
            if conn.end == start:
                return False
            current = conn.end
        return True


def generate_connections(
    num_tiles: int,
    num_ladders: int,
    num_slides: int,
    rng: random.Random | None = None,
    max_attempts: int | None = None,
) -> ConnectionSet:
    """Randomly place *num_ladders* ladders then *num_slides* slides.

    Every random draw counts against *max_attempts* (by default
    ``DEFAULT_MAX_ATTEMPTS`` per shortcut); running out raises
    :class:`GenerationTimeoutError` instead of looping forever.
    """
    check_shortcut_counts(num_tiles, num_ladders, num_slides)
    requested = num_ladders + num_slides
    if max_attempts is None:
        max_attempts = DEFAULT_MAX_ATTEMPTS * max(requested, 1)

    placer = _Placer(num_tiles, rng or random.Random(), max_attempts, requested)
    for kind, count in ((ConnectionKind.LADDER, num_ladders), (ConnectionKind.SLIDE, num_slides)):
        for _ in range(count):
            placer.place(kind)

    log.debug(
        "Generated %d ladders and %d slides on %d tiles in %d attempts",
        num_ladders, num_slides, num_tiles, placer.attempts,
    )
    return ConnectionSet(placer.placed)


# ── Board ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Board:
    """A track of ``num_tiles`` tiles and the shortcuts laid over it."""

    num_tiles: int
    connections: ConnectionSet = field(default_factory=ConnectionSet)
    tiles: tuple[Tile, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.num_tiles <= 0:
            raise ConfigurationError(f"A board needs at least one tile, got {self.num_tiles}.")
        if not isinstance(self.connections, ConnectionSet):
            object.__setattr__(self, "connections", ConnectionSet(self.connections))
        for conn in self.connections:
            if conn.start >= self.num_tiles or conn.end >= self.num_tiles:
                raise InvalidConnectionError(
                    f"{conn} leaves a board of {self.num_tiles} tiles."
                )
        object.__setattr__(self, "tiles", tuple(Tile(i) for i in range(self.num_tiles)))

    @classmethod
    def create(
        cls,
        num_tiles: int,
        num_ladders: int | None = None,
        num_slides: int | None = None,
        rng: random.Random | None = None,
    ) -> Board:
        """Build a board with randomly generated shortcuts.

        Missing counts fall back to :func:`default_shortcut_counts`.
        """
        if num_tiles <= 0:
            raise ConfigurationError(f"A board needs at least one tile, got {num_tiles}.")
        default_ladders, default_slides = default_shortcut_counts(num_tiles)
        connections = generate_connections(
            num_tiles,
            default_ladders if num_ladders is None else num_ladders,
            default_slides if num_slides is None else num_slides,
            rng,
        )
        return cls(num_tiles, connections)

    @property
    def last_tile(self) -> int:
        return self.num_tiles - 1
