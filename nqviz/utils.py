"""Utility helpers for the N-Queens visualizer.

Representation
--------------
Placements are encoded as a 1D sequence where ``placement[row] = col``.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional, Sequence, Tuple

# Number of distinct solutions for small boards (OEIS A000170).
KNOWN_SOLUTION_COUNTS: Dict[int, int] = {
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
}


def conflicts(placement: Sequence[int]) -> int:
    """Count attacking queen pairs in O(N).

    Rows are distinct by construction, so only columns and the two diagonal
    families are counted.
    """
    columns: Counter[int] = Counter()
    major: Counter[int] = Counter()
    anti: Counter[int] = Counter()

    for row, col in enumerate(placement):
        columns[col] += 1
        major[row + col] += 1
        anti[row - col] += 1

    def _pairs(counter: Counter[int]) -> int:
        return sum(count * (count - 1) // 2 for count in counter.values() if count > 1)

    return _pairs(columns) + _pairs(major) + _pairs(anti)


def is_valid_solution(placement: Sequence[int], size: Optional[int] = None) -> bool:
    """Return True if ``placement`` is a complete, conflict-free board.

    Contract
    - Input: sequence of length N where placement[row] = col (0-based)
    - Valid if: length matches ``size`` (when given), all 0 <= col < N and
      no pair of queens attacks each other
    """
    n = len(placement)
    if n == 0 or (size is not None and n != size):
        return False
    for col in placement:
        if isinstance(col, bool) or not isinstance(col, int):
            return False
        if col < 0 or col >= n:
            return False
    return conflicts(placement) == 0


def render_board_text(
    placement: Sequence[int],
    size: Optional[int] = None,
    trial: Optional[Tuple[int, int]] = None,
) -> str:
    """Render a placement as text, one line per row.

    ``size`` defaults to ``len(placement)`` so partial placements can be drawn
    on the full board; ``trial`` optionally highlights a ``(row, col)`` square
    with ``?``.
    """
    n = len(placement) if size is None else size
    lines = []
    for row in range(n):
        queen_col = placement[row] if row < len(placement) else None
        cells = []
        for col in range(n):
            if queen_col == col:
                cells.append("Q")
            elif trial is not None and trial == (row, col):
                cells.append("?")
            else:
                cells.append(".")
        lines.append(" ".join(cells))
    return "\n".join(lines)
