"""Visualization utilities for finished runs.

Overview
--------
PNG and GIF outputs built from what a run leaves behind: the list of
solutions, the numpy frames captured by ``FrameRecorder`` and per-N effort
records collected by ``nqviz.frontend.reporting.collect_search_effort``.

Chart map (filenames -> content)
--------------------------------
- solutions_N{N}.png — grid of chessboards, one per solution (capped).
- heatmap_N{N}.png — per-square frequency of queens across all solutions.
    - What: symmetry of the solution set; each row and column sums to the
      number of solutions.
- search_N{N}.gif — step-by-step animation of the recorded frames.
- effort_vs_N.png — trials and backtracks per N (log scale) with the number
    of solutions on a secondary axis.

Notes
-----
- The module uses the non-interactive ``Agg`` backend; every function writes
    to disk and returns the written path.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402
from matplotlib import animation  # noqa: E402
from matplotlib.colors import ListedColormap  # noqa: E402

from .frames import QUEEN, TRIAL  # noqa: E402
from .reporting import build_suffix  # noqa: E402

_LIGHT = "#f0d9b5"
_DARK = "#b58863"
_QUEEN_COLOR = "#1b1b1b"
_TRIAL_COLOR = "#e07a5f"


def occupancy_matrix(solutions: Sequence[Sequence[int]], size: int) -> np.ndarray:
    """Count, for every square, how many solutions put a queen there."""
    counts = np.zeros((size, size), dtype=int)
    for solution in solutions:
        counts[np.arange(size), np.asarray(solution, dtype=int)] += 1
    return counts


def _draw_squares(ax, size: int) -> None:
    pattern = (np.add.outer(np.arange(size), np.arange(size)) % 2).astype(int)
    ax.imshow(pattern, cmap=ListedColormap([_LIGHT, _DARK]), vmin=0, vmax=1)
    ax.set_xticks([])
    ax.set_yticks([])


def plot_board(placement: Sequence[int], size: Optional[int] = None, ax=None, title: str = ""):
    """Draw a chessboard with queens at ``placement[row] = col``.

    Parameters
    ----------
    placement : Sequence[int]
        Columns per row; may be shorter than ``size`` for partial boards.
    size : int | None
        Board dimension, ``len(placement)`` when omitted.
    ax : matplotlib Axes | None
        Target axes; a new figure is created when omitted.
    title : str
        Optional axes title.

    Returns
    -------
    Axes
        The axes drawn on.
    """
    n = len(placement) if size is None else size
    if ax is None:
        _, ax = plt.subplots(figsize=(max(3, n * 0.5), max(3, n * 0.5)))
    _draw_squares(ax, n)
    fontsize = max(6, 120 // max(n, 1))
    for row, col in enumerate(placement):
        ax.text(col, row, "♛", ha="center", va="center", fontsize=fontsize, color=_QUEEN_COLOR)
    if title:
        ax.set_title(title, fontsize=9)
    return ax


def save_solutions_grid(
    solutions: Sequence[Sequence[int]],
    size: int,
    out_dir: str,
    max_boards: int = 24,
    columns: int = 6,
) -> Optional[str]:
    """Save up to ``max_boards`` solutions as a grid of small boards.

    Returns the PNG path, or None when there is nothing to draw.
    """
    if not solutions:
        print("No solutions to draw.")
        return None
    os.makedirs(out_dir, exist_ok=True)
    shown = list(solutions)[:max_boards]
    cols = min(columns, len(shown))
    rows = (len(shown) + cols - 1) // cols

    fig, axes = plt.subplots(rows, cols, figsize=(cols * 2.2, rows * 2.4), squeeze=False)
    for index, ax in enumerate(axes.flat):
        if index < len(shown):
            plot_board(shown[index], size, ax=ax, title=f"#{index + 1} {list(shown[index])}")
        else:
            ax.axis("off")
    total = len(solutions)
    suptitle = f"N={size}: {total} solution{'s' if total != 1 else ''}"
    if total > len(shown):
        suptitle += f" (first {len(shown)} shown)"
    fig.suptitle(suptitle, fontsize=12)

    fname = os.path.join(out_dir, f"solutions_N{size}{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved solutions chart: {fname}")
    return fname


def plot_solution_heatmap(solutions: Sequence[Sequence[int]], size: int, out_dir: str) -> Optional[str]:
    """Save a seaborn heatmap of queen frequency per square.

    Returns the PNG path, or None when there are no solutions.
    """
    if not solutions:
        print("No solutions to summarize.")
        return None
    os.makedirs(out_dir, exist_ok=True)
    counts = occupancy_matrix(solutions, size)

    plt.figure(figsize=(max(5, size * 0.7), max(4, size * 0.6)))
    sns.heatmap(counts, annot=size <= 12, fmt="d", cmap="rocket_r", square=True, cbar_kws={"label": "solutions"})
    plt.xlabel("Column", fontsize=11)
    plt.ylabel("Row", fontsize=11)
    plt.title(f"Queen frequency across {len(solutions)} solutions (N={size})", fontsize=12)

    fname = os.path.join(out_dir, f"heatmap_N{size}{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved heatmap: {fname}")
    return fname


def save_search_animation(frames: np.ndarray, path: str, fps: int = 8) -> Optional[str]:
    """Write recorded frames (``(frames, N, N)`` int array) as an animated GIF.

    Queens are drawn as glyphs and trial marks as coloured squares. Returns
    ``path``, or None when there are no frames.
    """
    frames = np.asarray(frames)
    if frames.size == 0 or frames.ndim != 3:
        print("No frames recorded; animation skipped.")
        return None
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    size = frames.shape[1]

    fig, ax = plt.subplots(figsize=(max(3, size * 0.5), max(3, size * 0.5)))
    _draw_squares(ax, size)
    fontsize = max(6, 120 // max(size, 1))
    trial_layer = ax.imshow(
        np.ma.masked_all((size, size)), cmap=ListedColormap([_TRIAL_COLOR]), vmin=0, vmax=1, alpha=0.7
    )
    glyphs = [
        [ax.text(c, r, "", ha="center", va="center", fontsize=fontsize, color=_QUEEN_COLOR) for c in range(size)]
        for r in range(size)
    ]
    counter = ax.set_title("")

    def _update(index: int):
        grid = frames[index]
        trial_layer.set_data(np.ma.masked_where(grid != TRIAL, np.ones_like(grid)))
        for r in range(size):
            for c in range(size):
                glyphs[r][c].set_text("♛" if grid[r, c] == QUEEN else "")
        counter.set_text(f"step {index + 1}/{len(frames)}")
        return [trial_layer, counter]

    anim = animation.FuncAnimation(fig, _update, frames=len(frames), interval=1000 / fps, blit=False)
    anim.save(path, writer=animation.PillowWriter(fps=fps))
    plt.close(fig)
    print(f"Saved search animation: {path}")
    return path


def plot_search_effort(records: List[Dict[str, Any]], out_dir: str) -> Optional[str]:
    """Plot trials/backtracks (log scale) and solution counts against N.

    ``records`` are dicts with keys ``n``, ``trials``, ``backtracks`` and
    ``solutions`` as produced by ``collect_search_effort``.
    """
    if not records:
        print("No effort records to plot.")
        return None
    os.makedirs(out_dir, exist_ok=True)
    n_values = [r["n"] for r in records]
    trials = [max(r["trials"], 1) for r in records]
    backtracks = [max(r["backtracks"], 1) for r in records]
    solutions = [r["solutions"] for r in records]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.semilogy(n_values, trials, marker="o", linewidth=2, markersize=7, label="Trials")
    ax.semilogy(n_values, backtracks, marker="s", linewidth=2, markersize=7, label="Backtracks")
    ax.set_xlabel("N (board size)", fontsize=12)
    ax.set_ylabel("Count (log scale)", fontsize=12)
    ax.grid(True, alpha=0.7)
    ax.set_xticks(n_values)

    ax2 = ax.twinx()
    ax2.bar(n_values, solutions, alpha=0.25, color="green", label="Solutions")
    ax2.set_ylabel("Solutions", fontsize=12)

    handles, labels = ax.get_legend_handles_labels()
    handles2, labels2 = ax2.get_legend_handles_labels()
    ax.legend(handles + handles2, labels + labels2, fontsize=11, loc="upper left")
    ax.set_title("Find-all search effort vs problem size", fontsize=14)

    fname = os.path.join(out_dir, f"effort_vs_N{build_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved search-effort chart: {fname}")
    return fname
