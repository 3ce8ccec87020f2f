"""Step-by-step N-Queens backtracking with observable, cancellable runs."""

from .constraints import Conflict, ConstraintTracker
from .control import ControlState, RunState, validate_board_size
from .driver import RunResult, SolverDriver
from .engine import SearchContext, SearchEngine, SearchMode, SearchStats
from .errors import ConfigurationError, ControlStateError
from .sinks import (
    AutoConfirm,
    BoardView,
    EventLog,
    LogCategory,
    LogEntry,
    RenderFanOut,
    SolutionLog,
)
from .utils import KNOWN_SOLUTION_COUNTS, conflicts, is_valid_solution, render_board_text

__all__ = [
    "Conflict",
    "ConstraintTracker",
    "ControlState",
    "RunState",
    "validate_board_size",
    "RunResult",
    "SolverDriver",
    "SearchContext",
    "SearchEngine",
    "SearchMode",
    "SearchStats",
    "ConfigurationError",
    "ControlStateError",
    "AutoConfirm",
    "BoardView",
    "EventLog",
    "LogCategory",
    "LogEntry",
    "RenderFanOut",
    "SolutionLog",
    "KNOWN_SOLUTION_COUNTS",
    "conflicts",
    "is_valid_solution",
    "render_board_text",
]
