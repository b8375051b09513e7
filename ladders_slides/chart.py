"""Charts of simulated game lengths and wins per seat."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt


def make_length_chart(
    turn_counts: list[int],
    output_path: str = "game_lengths.png",
    title: str = "Ladders & Slides Game Lengths",
) -> str:
    """Create a histogram of game lengths in turns.

    Returns the path to the saved PNG.
    """
    fig, ax = plt.subplots(figsize=(10, 5))
    bins = max(1, min(50, len(set(turn_counts))))
    ax.hist(turn_counts, bins=bins, color="#4A90D9", edgecolor="white")

    ax.set_xlabel("Turns")
    ax.set_ylabel("Games")
    ax.set_title(title, fontsize=14, fontweight="bold")

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path


def make_win_chart(
    wins: dict[int, int],
    output_path: str = "wins_by_seat.png",
    title: str = "Wins by Seat",
) -> str:
    """Create a horizontal bar chart of wins per player seat.

    Returns the path to the saved PNG.
    """
    seats = sorted(wins)
    names = [f"Player {seat}" for seat in seats]
    counts = [wins[seat] for seat in seats]

    fig, ax = plt.subplots(figsize=(10, max(3, len(names) * 0.7)))
    bars = ax.barh(names, counts, color="#4A90D9", edgecolor="white")

    for bar, count in zip(bars, counts):
        ax.text(
            bar.get_width() + 0.5, bar.get_y() + bar.get_height() / 2,
            f"{count}",
            va="center", fontsize=11, fontweight="bold",
        )

    ax.set_xlabel("Wins")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.invert_yaxis()  # seat 0 on top
    ax.set_xlim(left=0, right=max(counts, default=0) * 1.15 + 1)

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
