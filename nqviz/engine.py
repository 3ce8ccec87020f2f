"""Steppable, cancellable backtracking search for the N-Queens problem.

The engine places one queen per row, top to bottom, trying columns left to
right. Every visited state is reported to the presentation sinks in the exact
order the search visits it, which makes the event stream deterministic and
testable.

Implementation overview
-----------------------
- State representation: ``SearchContext.board`` is a list of column indices,
    one per processed row (``board[row] = col``); its length is the current
    recursion depth.
- Constraint tracking: a ``ConstraintTracker`` gives O(1) safety checks via
    three boolean arrays (columns, ``row+col`` and ``row-col+N-1``).
- Search strategy: recursive depth-first search, one call per row. The
    recursion depth is bounded by ``settings.MAX_BOARD_SIZE``.
- Pacing: after a trial, a placement and a removal the engine suspends for
    ``delay`` seconds through an injected ``sleep`` callable; after a find-all
    solution it suspends for ``solution_pause``. Nothing suspends while the
    skip flag is set. Suspension never happens inside a constraint check.
- Cancellation: cooperative. ``ControlState.stop_requested`` is polled when
    ``search`` is entered, before every column trial and after every recursive
    call, so a stop takes effect within one column trial.

Contract (public API)
---------------------
- ``SearchEngine.begin(size)``: validate N, enter ``RUNNING`` and build a fresh
    ``SearchContext``.
- ``SearchEngine.run(mode) -> bool``: ``search(0, mode)``. Returns True only
    in ``FIND_FIRST`` mode when a solution was found; the board then holds it.
- Solutions are pushed to the ``SolutionSink`` as tuples of N columns.

Event order per row
-------------------
``Searching in Row r...`` then for each column: trial mark + ``Trying`` log,
then either a conflict log or (placement, recursion, backtrack). Once the
columns are exhausted, ``No safe spot found`` closes the row.
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from . import settings
from .constraints import Conflict, ConstraintTracker
from .control import ControlState
from .sinks import (
    LogCategory,
    LogSink,
    NullLogSink,
    NullRenderSink,
    NullSolutionSink,
    RenderSink,
    SolutionSink,
)


class SearchMode(Enum):
    FIND_FIRST = "first"
    FIND_ALL = "all"


# Marks an argument left to its settings default.
_FROM_SETTINGS = object()

_CONFLICT_REASONS = {
    Conflict.COLUMN: "column {col} is occupied.",
    Conflict.MAJOR_DIAGONAL: "diagonal (row+col) is occupied.",
    Conflict.ANTI_DIAGONAL: "anti-diagonal (row-col) is occupied.",
}


@dataclass
class SearchStats:
    """Counters for one run.

    ``trials`` counts every (row, col) candidate examined, rejected or not,
    matching the usual "nodes explored" proxy for search effort.
    """

    trials: int = 0
    placements: int = 0
    backtracks: int = 0
    dead_ends: int = 0
    solutions: int = 0

    def to_dict(self):
        return {
            "trials": self.trials,
            "placements": self.placements,
            "backtracks": self.backtracks,
            "dead_ends": self.dead_ends,
            "solutions": self.solutions,
        }


@dataclass
class SearchContext:
    """Board, constraints and counters owned by one in-flight search."""

    size: int
    tracker: ConstraintTracker
    board: List[int] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)

    @classmethod
    def fresh(cls, size: int) -> "SearchContext":
        return cls(size=size, tracker=ConstraintTracker(size))


class SearchEngine:
    """Recursive backtracking over board rows with observable steps.

    Parameters
    ----------
    control : ControlState | None
        Shared run state; a new one is created when omitted.
    render, log, solutions : sinks
        Presentation collaborators; no-op sinks are used when omitted.
    delay : float | None
        Pause after each trial, placement and removal (seconds). Defaults to
        ``settings.STEP_DELAY``.
    solution_pause : float | None
        Pause after each solution in find-all mode. Defaults to
        ``settings.SOLUTION_PAUSE``.
    auto_skip_threshold : int | None
        In find-all mode, skip animation after the first solution when
        ``N >= auto_skip_threshold``. Defaults to
        ``settings.AUTO_SKIP_THRESHOLD`` when omitted; pass ``0`` to always skip
        after the first solution and ``None`` to disable the heuristic.
    verbose_while_skipping : bool | None
        Keep per-step log records and trial marks while skipping.
    sleep : callable
        Suspension primitive, ``time.sleep`` by default.
    """

    def __init__(
        self,
        control: Optional[ControlState] = None,
        render: Optional[RenderSink] = None,
        log: Optional[LogSink] = None,
        solutions: Optional[SolutionSink] = None,
        delay: Optional[float] = None,
        solution_pause: Optional[float] = None,
        auto_skip_threshold=_FROM_SETTINGS,
        verbose_while_skipping: Optional[bool] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.control = control if control is not None else ControlState()
        self.render = render if render is not None else NullRenderSink()
        self.log = log if log is not None else NullLogSink()
        self.solutions = solutions if solutions is not None else NullSolutionSink()
        self.delay = settings.STEP_DELAY if delay is None else delay
        self.solution_pause = settings.SOLUTION_PAUSE if solution_pause is None else solution_pause
        self.auto_skip_threshold = (
            settings.AUTO_SKIP_THRESHOLD if auto_skip_threshold is _FROM_SETTINGS else auto_skip_threshold
        )
        self.verbose_while_skipping = (
            settings.VERBOSE_WHILE_SKIPPING if verbose_while_skipping is None else verbose_while_skipping
        )
        self._sleep = sleep
        self.context: Optional[SearchContext] = None

    # ------------------------------------------------------------------ setup

    def begin(self, size) -> SearchContext:
        """Enter ``RUNNING`` for an N×N board and reset board and constraints."""
        size = self.control.start(size)
        self.context = SearchContext.fresh(size)
        return self.context

    def run(self, mode: SearchMode) -> bool:
        """Search from row 0; see ``search`` for the return value."""
        if self.context is None:
            raise RuntimeError("Call begin(size) before run(mode).")
        # One frame per row plus the caller's frames.
        needed = self.context.size + 100
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)
        return self.search(0, mode)

    # ---------------------------------------------------------------- helpers

    @property
    def board(self) -> List[int]:
        return self.context.board if self.context is not None else []

    def _stopped(self) -> bool:
        return self.control.stop_requested

    def _verbose(self) -> bool:
        return self.verbose_while_skipping or not self.control.skip_animation

    def _emit(self, message: str, category: LogCategory) -> None:
        if self._verbose():
            self.log.record(message, category)

    def _suspend(self, seconds: float) -> None:
        if self.control.skip_animation or seconds <= 0:
            return
        self._sleep(seconds)

    def _place(self, row: int, col: int) -> None:
        ctx = self.context
        ctx.board.append(col)
        ctx.tracker.place(row, col)
        ctx.stats.placements += 1
        self.render.set_queen(row, col, True)

    def _remove(self, row: int, col: int) -> None:
        ctx = self.context
        ctx.board.pop()
        ctx.tracker.remove(row, col)
        ctx.stats.backtracks += 1
        self.render.set_queen(row, col, False)

    def _record_solution(self, mode: SearchMode) -> None:
        ctx = self.context
        count = self.control.record_solution()
        ctx.stats.solutions = count
        self.solutions.record(tuple(ctx.board))
        self.log.record(f"Solution {count} Found!", LogCategory.SOLUTION)

        if mode is SearchMode.FIND_ALL:
            threshold = self.auto_skip_threshold
            if threshold is not None and ctx.size >= threshold and not self.control.skip_animation:
                self.control.request_skip()
                self.log.record("--- Animation skipped ---", LogCategory.INFO)
            self._suspend(self.solution_pause)

    # ----------------------------------------------------------------- search

    def search(self, row: int, mode: SearchMode) -> bool:
        """Backtrack from ``row`` downwards.

        Returns True when a find-first solution was reached (the board is left
        holding it). Returns False when the subtree is exhausted, in find-all
        mode after each solution, and whenever a stop was requested; on stop
        the current placements are left in place.
        """
        if self._stopped():
            return False

        ctx = self.context
        size = ctx.size

        if row == size:
            self._record_solution(mode)
            return mode is SearchMode.FIND_FIRST

        self._emit(f"Searching in Row {row}...", LogCategory.INFO)

        for col in range(size):
            if self._stopped():
                return False

            ctx.stats.trials += 1
            verbose = self._verbose()
            self._emit(f"Trying Queen at ({row}, {col})", LogCategory.INFO)
            if verbose:
                self.render.mark_trial(row, col, True)
                self._suspend(self.delay)

            conflict = ctx.tracker.conflict(row, col)
            if conflict is not None:
                reason = _CONFLICT_REASONS[conflict].format(col=col)
                self._emit(f"Conflict at ({row}, {col}): {reason}", LogCategory.CONFLICT)
                if verbose:
                    self.render.mark_trial(row, col, False)
                continue

            self._emit(f"Safe. Placing Queen at ({row}, {col}).", LogCategory.PLACE)
            self._place(row, col)
            if verbose:
                self.render.mark_trial(row, col, False)
            self._suspend(self.delay)

            if self.search(row + 1, mode):
                return True
            if self._stopped():
                return False

            self._emit(f"Backtracking. Removing Queen from ({row}, {col}).", LogCategory.REMOVE)
            self._remove(row, col)
            self._suspend(self.delay)

        ctx.stats.dead_ends += 1
        self._emit(f"No safe spot found in Row {row}. Backtracking.", LogCategory.REMOVE)
        return False
