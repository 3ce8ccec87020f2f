"""Render sink that records the board as numpy frames for later animation."""
from __future__ import annotations

from typing import List, Optional

import numpy as np

EMPTY = 0
QUEEN = 1
TRIAL = 2


class FrameRecorder:
    """Keep an ``int8`` N×N grid and append a copy after every visual change.

    Cell codes: ``EMPTY`` (0), ``QUEEN`` (1), ``TRIAL`` (2); a queen wins over
    a trial mark on the same square. Recording stops silently once
    ``max_frames`` snapshots exist, and pauses while ``control`` (if given)
    has its skip flag set. ``dropped`` counts updates that were not recorded.
    """

    def __init__(self, size: int, max_frames: Optional[int] = 2000, control=None):
        self.size = size
        self.max_frames = max_frames
        self.control = control
        self.queens = np.zeros((size, size), dtype=bool)
        self.trials = np.zeros((size, size), dtype=bool)
        self.frames: List[np.ndarray] = []
        self.dropped = 0

    def grid(self) -> np.ndarray:
        grid = np.full((self.size, self.size), EMPTY, dtype=np.int8)
        grid[self.trials] = TRIAL
        grid[self.queens] = QUEEN
        return grid

    def _snapshot(self) -> None:
        if self.control is not None and self.control.skip_animation:
            self.dropped += 1
            return
        if self.max_frames is not None and len(self.frames) >= self.max_frames:
            self.dropped += 1
            return
        self.frames.append(self.grid())

    def set_queen(self, row: int, col: int, present: bool) -> None:
        self.queens[row, col] = present
        self._snapshot()

    def mark_trial(self, row: int, col: int, active: bool) -> None:
        self.trials[row, col] = active
        self._snapshot()

    def capture(self) -> None:
        """Append the current board unconditionally (e.g. the final state)."""
        self.frames.append(self.grid())

    def stack(self) -> np.ndarray:
        """Return all frames as a ``(frames, N, N)`` array."""
        if not self.frames:
            return np.zeros((0, self.size, self.size), dtype=np.int8)
        return np.stack(self.frames)
