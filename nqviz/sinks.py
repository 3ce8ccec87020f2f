"""Presentation contracts consumed by the search engine.

The engine never owns a display. It pushes visual updates, log records and
solutions into the narrow protocols below, and the driver asks a
``ConfirmationPrompt`` before expensive runs. This module also ships the
no-op sinks used as defaults and plain in-memory implementations that are
handy for tests and for exporting a finished run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Sequence, Tuple


class LogCategory(Enum):
    INFO = "info"
    PLACE = "place"
    REMOVE = "remove"
    CONFLICT = "conflict"
    SOLUTION = "solution"


Solution = Tuple[int, ...]


class RenderSink(Protocol):
    def set_queen(self, row: int, col: int, present: bool) -> None:
        ...

    def mark_trial(self, row: int, col: int, active: bool) -> None:
        ...


class LogSink(Protocol):
    def record(self, message: str, category: LogCategory) -> None:
        ...


class SolutionSink(Protocol):
    def record(self, solution: Solution) -> None:
        ...


class ConfirmationPrompt(Protocol):
    def ask(self, message: str) -> bool:
        ...


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class NullRenderSink:
    def set_queen(self, row: int, col: int, present: bool) -> None:
        pass

    def mark_trial(self, row: int, col: int, active: bool) -> None:
        pass


class NullLogSink:
    def record(self, message: str, category: LogCategory) -> None:
        pass


class NullSolutionSink:
    def record(self, solution: Solution) -> None:
        pass


class AutoConfirm:
    """Prompt that always returns the same answer (``--yes`` / tests)."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.asked: List[str] = []

    def ask(self, message: str) -> bool:
        self.asked.append(message)
        return self.answer


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LogEntry:
    message: str
    category: LogCategory


class EventLog:
    """Append-only list of log records."""

    def __init__(self) -> None:
        self.entries: List[LogEntry] = []

    def record(self, message: str, category: LogCategory) -> None:
        self.entries.append(LogEntry(message, category))

    def messages(self, category: Optional[LogCategory] = None) -> List[str]:
        return [e.message for e in self.entries if category is None or e.category is category]

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)


class SolutionLog:
    """Append-only list of solutions in discovery order."""

    def __init__(self) -> None:
        self.solutions: List[Solution] = []

    def record(self, solution: Solution) -> None:
        self.solutions.append(tuple(solution))

    def clear(self) -> None:
        self.solutions.clear()

    def __len__(self) -> int:
        return len(self.solutions)


@dataclass
class Cell:
    queen: bool = False
    trial: bool = False


class BoardView:
    """Directly addressable N×N grid of cells, indexed by ``(row, col)``.

    Visual state only: updates are idempotent and never feed back into the
    search.
    """

    def __init__(self, size: int):
        self.resize(size)

    def resize(self, size: int) -> None:
        self.size = size
        self.cells: List[List[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def set_queen(self, row: int, col: int, present: bool) -> None:
        self.cells[row][col].queen = present

    def mark_trial(self, row: int, col: int, active: bool) -> None:
        self.cells[row][col].trial = active

    def queens(self) -> List[Tuple[int, int]]:
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.cells[r][c].queen
        ]

    def clear(self) -> None:
        for row in self.cells:
            for cell in row:
                cell.queen = False
                cell.trial = False

    def show(self, placement: Sequence[int]) -> None:
        """Replace the displayed queens with ``placement`` (row -> column)."""
        self.clear()
        for row, col in enumerate(placement):
            self.cells[row][col].queen = True


class RenderFanOut:
    """Forward every visual update to several render sinks in order."""

    def __init__(self, *sinks: RenderSink):
        self.sinks = list(sinks)

    def set_queen(self, row: int, col: int, present: bool) -> None:
        for sink in self.sinks:
            sink.set_queen(row, col, present)

    def mark_trial(self, row: int, col: int, active: bool) -> None:
        for sink in self.sinks:
            sink.mark_trial(row, col, active)
