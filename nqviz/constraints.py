"""Constant-time constraint tracking for row-wise N-Queens search.

Queens are placed one per row, so only columns and the two diagonal families
can conflict. Three boolean arrays record which of them are occupied:

- ``columns[c]``: a queen sits in column ``c``.
- ``diag1[row + col]``: a queen sits on that major diagonal.
- ``diag2[row - col + (N - 1)]``: a queen sits on that anti-diagonal; the
  ``N - 1`` offset maps ``[-N+1, N-1]`` to ``[0, 2N-2]``.

Each array always reflects exactly the set of currently placed queens as long
as ``remove`` is only called for positions previously passed to ``place``.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple


class Conflict(Enum):
    """Constraint family that rejects a candidate square."""

    COLUMN = "column"
    MAJOR_DIAGONAL = "major diagonal"
    ANTI_DIAGONAL = "anti-diagonal"


TrackerSnapshot = Tuple[Tuple[bool, ...], Tuple[bool, ...], Tuple[bool, ...]]


class ConstraintTracker:
    """Occupancy of columns and both diagonal families for an N×N board."""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError("Board size must be at least 1.")
        self.size = size
        self.columns: List[bool] = [False] * size
        self.diag1: List[bool] = [False] * (2 * size - 1)
        self.diag2: List[bool] = [False] * (2 * size - 1)

    def _indices(self, row: int, col: int) -> Tuple[int, int]:
        return row + col, row - col + (self.size - 1)

    def is_safe(self, row: int, col: int) -> bool:
        """Return True if no placed queen attacks (row, col)."""
        d1, d2 = self._indices(row, col)
        return not (self.columns[col] or self.diag1[d1] or self.diag2[d2])

    def conflict(self, row: int, col: int) -> Optional[Conflict]:
        """Return the first violated constraint for (row, col), or None.

        Families are checked in the order column, major diagonal,
        anti-diagonal; only the first match is reported.
        """
        d1, d2 = self._indices(row, col)
        if self.columns[col]:
            return Conflict.COLUMN
        if self.diag1[d1]:
            return Conflict.MAJOR_DIAGONAL
        if self.diag2[d2]:
            return Conflict.ANTI_DIAGONAL
        return None

    def place(self, row: int, col: int) -> None:
        """Mark the column and both diagonals of (row, col) as occupied."""
        d1, d2 = self._indices(row, col)
        self.columns[col] = True
        self.diag1[d1] = True
        self.diag2[d2] = True

    def remove(self, row: int, col: int) -> None:
        """Release the column and both diagonals of a previously placed queen."""
        d1, d2 = self._indices(row, col)
        self.columns[col] = False
        self.diag1[d1] = False
        self.diag2[d2] = False

    def reset(self) -> None:
        """Clear every constraint."""
        self.columns = [False] * self.size
        self.diag1 = [False] * (2 * self.size - 1)
        self.diag2 = [False] * (2 * self.size - 1)

    def snapshot(self) -> TrackerSnapshot:
        """Return an immutable copy of the three occupancy arrays."""
        return tuple(self.columns), tuple(self.diag1), tuple(self.diag2)

    def __repr__(self) -> str:
        placed = sum(self.columns)
        return f"ConstraintTracker(size={self.size}, placed={placed})"
