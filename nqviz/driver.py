"""User-facing driver around the search engine.

The driver owns the run lifecycle seen by a front end: it validates the
requested board size, asks for confirmation before expensive find-all runs,
starts the engine, finalizes ``ControlState`` once the engine returns and
summarizes the outcome in a ``RunResult``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import List, Optional, Tuple

from . import settings
from .control import RunState, validate_board_size
from .engine import SearchEngine, SearchMode, SearchStats
from .sinks import ConfirmationPrompt, LogCategory


@dataclass
class RunResult:
    """Outcome of one ``SolverDriver.solve`` call.

    ``board`` is the placement left by the engine: the solution for a
    successful find-first run, a possibly partial placement after a stop.
    """

    size: int
    mode: SearchMode
    state: RunState
    found: bool = False
    solutions: List[Tuple[int, ...]] = field(default_factory=list)
    board: Tuple[int, ...] = ()
    stats: SearchStats = field(default_factory=SearchStats)
    elapsed: float = 0.0
    status: str = ""
    aborted: bool = False

    @property
    def solution_count(self) -> int:
        return len(self.solutions)

    @property
    def stopped(self) -> bool:
        return self.state is RunState.STOPPED


class _Collector:
    """Solution sink tee: keeps a copy and forwards to the user sink."""

    def __init__(self, downstream):
        self.downstream = downstream
        self.solutions: List[Tuple[int, ...]] = []

    def record(self, solution) -> None:
        self.solutions.append(tuple(solution))
        self.downstream.record(solution)


class SolverDriver:
    """Run find-first / find-all searches through a ``SearchEngine``.

    Parameters
    ----------
    engine : SearchEngine
        Engine wired to the presentation sinks.
    prompt : ConfirmationPrompt | None
        Asked once before a find-all run when ``N > confirm_threshold``. With
        no prompt the run proceeds.
    confirm_threshold : int | None
        Defaults to ``settings.CONFIRM_THRESHOLD``.
    """

    def __init__(
        self,
        engine: SearchEngine,
        prompt: Optional[ConfirmationPrompt] = None,
        confirm_threshold: Optional[int] = None,
    ):
        self.engine = engine
        self.prompt = prompt
        self.confirm_threshold = (
            settings.CONFIRM_THRESHOLD if confirm_threshold is None else confirm_threshold
        )
        self.status = "Idle"

    @property
    def control(self):
        return self.engine.control

    def _log(self, message: str, category: LogCategory) -> None:
        self.engine.log.record(message, category)

    def confirm(self, size: int, mode: SearchMode) -> bool:
        """Return False when the user declines an expensive find-all run."""
        if mode is not SearchMode.FIND_ALL or size <= self.confirm_threshold:
            return True
        if self.prompt is None:
            return True
        return self.prompt.ask(
            f"Finding all solutions for N={size} can take a significant amount of time "
            "(it grows exponentially).\n\nAre you sure you want to continue?"
        )

    def solve(self, size, mode: SearchMode = SearchMode.FIND_FIRST, skip_animation: bool = False) -> RunResult:
        """Validate, confirm, run and finalize one search.

        With ``skip_animation`` the run starts with the skip flag already set.

        Raises ``ConfigurationError`` for an invalid size before any state is
        touched. A declined confirmation returns an ``aborted`` result with
        the control state unchanged. If a sink raises mid-run the run is reset
        to ``IDLE`` before the exception propagates.
        """
        size = validate_board_size(size, self.control.max_size)
        if not self.confirm(size, mode):
            return RunResult(
                size=size,
                mode=mode,
                state=self.control.state,
                status="Cancelled.",
                aborted=True,
            )

        user_sink = self.engine.solutions
        collector = _Collector(user_sink)
        self.engine.solutions = collector
        started = False
        try:
            context = self.engine.begin(size)
            started = True
            self._log("Search started.", LogCategory.INFO)
            if skip_animation:
                self.request_skip()
            self.status = "Finding all solutions..." if mode is SearchMode.FIND_ALL else "Finding one solution..."

            start = perf_counter()
            found = self.engine.run(mode)
            elapsed = perf_counter() - start
        except BaseException:
            if started and self.control.running:
                self.control.reset()
                self.status = "Idle"
            raise
        finally:
            self.engine.solutions = user_sink

        stop_requested = self.control.stop_requested
        state = self.control.finish()
        count = len(collector.solutions)

        if stop_requested:
            self._log("Search stopped by user.", LogCategory.INFO)
            self.status = "Stopped."
        elif mode is SearchMode.FIND_ALL:
            self.status = f"Found {count} solutions."
            self._log(f"Search complete. Found {count} total solutions.", LogCategory.SOLUTION)
        elif found:
            self.status = "Solution found!"
        else:
            self.status = "No solution found."
            self._log(f"No solution exists for N={size}.", LogCategory.CONFLICT)

        return RunResult(
            size=size,
            mode=mode,
            state=state,
            found=found,
            solutions=collector.solutions,
            board=tuple(context.board),
            stats=context.stats,
            elapsed=elapsed,
            status=self.status,
        )

    def request_stop(self) -> bool:
        return self.control.request_stop()

    def request_skip(self) -> bool:
        """Skip the remaining animation; logged once per run."""
        if not self.control.running or self.control.skip_animation:
            return False
        self.control.request_skip()
        self._log("--- Animation skipped ---", LogCategory.INFO)
        return True

    def reset(self) -> None:
        self.control.reset()
        self.status = "Idle"
