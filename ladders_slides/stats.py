"""Aggregate statistics over recorded game outcomes."""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field


@dataclass
class Outcome:
    """Result of a single game."""

    num_players: int
    winner: int | None  # None = turn limit reached
    reason: str
    turns: int


@dataclass
class Summary:
    games: int = 0
    finished: int = 0
    unfinished: int = 0
    mean_turns: float | None = None
    median_turns: float | None = None
    min_turns: int | None = None
    max_turns: int | None = None
    wins: dict[int, int] = field(default_factory=dict)

    def win_rate(self, player: int) -> float:
        """Share of finished games won by *player*."""
        if not self.finished:
            return 0.0
        return self.wins.get(player, 0) / self.finished


def summarize(outcomes: list[Outcome]) -> Summary:
    """Summarize game lengths (finished games only) and wins per seat."""
    summary = Summary(games=len(outcomes))
    lengths: list[int] = []

    for outcome in outcomes:
        if outcome.winner is None:
            summary.unfinished += 1
            continue
        summary.finished += 1
        lengths.append(outcome.turns)
        summary.wins[outcome.winner] = summary.wins.get(outcome.winner, 0) + 1

    if lengths:
        summary.mean_turns = statistics.fmean(lengths)
        summary.median_turns = statistics.median(lengths)
        summary.min_turns = min(lengths)
        summary.max_turns = max(lengths)

    return summary
