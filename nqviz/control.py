"""Run lifecycle shared by the search engine and the driver.

States
------
``IDLE -> RUNNING -> {STOPPED, COMPLETED}``; ``STOPPED``/``COMPLETED`` go back
to ``IDLE`` on ``reset()``.

The engine only reads the stop/skip flags and increments the solution
counter. Stop and skip requests come from the user side (sink callbacks or
signal handlers); the final ``STOPPED``/``COMPLETED`` transition is made by
the driver once the engine has unwound.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from . import settings
from .errors import ConfigurationError, ControlStateError


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    COMPLETED = "completed"


def validate_board_size(value, max_size: Optional[int] = None) -> int:
    """Return ``value`` as a board size or raise ``ConfigurationError``.

    Accepts ints and decimal strings (as read from a text input). Booleans,
    floats, non-positive values and values above ``max_size`` (default
    ``settings.MAX_BOARD_SIZE``) are rejected.
    """
    limit = settings.MAX_BOARD_SIZE if max_size is None else max_size
    if isinstance(value, bool):
        raise ConfigurationError(f"Board size must be a positive integer, got {value!r}.")
    if isinstance(value, str):
        text = value.strip()
        if not text.isdecimal():
            raise ConfigurationError(f"Board size must be a positive integer, got {value!r}.")
        value = int(text)
    if not isinstance(value, int):
        raise ConfigurationError(f"Board size must be a positive integer, got {value!r}.")
    if value < 1:
        raise ConfigurationError(f"Board size must be at least 1, got {value}.")
    if value > limit:
        raise ConfigurationError(f"Board size {value} exceeds the maximum of {limit}.")
    return value


class ControlState:
    """Run/stop/skip flags, solution counter and board size for one session.

    Parameters
    ----------
    max_size : int | None
        Ceiling for the board size accepted by ``start``; defaults to
        ``settings.MAX_BOARD_SIZE`` at call time.
    """

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size
        self.state = RunState.IDLE
        self.stop_requested = False
        self.skip_animation = False
        self.solution_count = 0
        self.size: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.state is RunState.RUNNING

    def start(self, size) -> int:
        """Validate ``size`` and enter ``RUNNING`` with cleared flags."""
        if self.state is RunState.RUNNING:
            raise ControlStateError("A search is already running; stop or reset it first.")
        size = validate_board_size(size, self.max_size)
        self.size = size
        self.solution_count = 0
        self.skip_animation = False
        self.stop_requested = False
        self.state = RunState.RUNNING
        return size

    def request_stop(self) -> bool:
        """Ask the running search to unwind; returns False when not running."""
        if self.state is not RunState.RUNNING:
            return False
        self.stop_requested = True
        return True

    def request_skip(self) -> bool:
        """Turn animation off for the rest of the run; returns False when not running."""
        if self.state is not RunState.RUNNING:
            return False
        self.skip_animation = True
        return True

    def record_solution(self) -> int:
        self.solution_count += 1
        return self.solution_count

    def complete(self) -> None:
        """Mark a run that returned without a stop request as ``COMPLETED``."""
        if self.state is not RunState.RUNNING:
            raise ControlStateError(f"Cannot complete from state {self.state.value}.")
        if self.stop_requested:
            raise ControlStateError("Cannot complete a run that was asked to stop.")
        self.state = RunState.COMPLETED

    def mark_stopped(self) -> None:
        """Mark a cancelled run as ``STOPPED`` once the engine has returned."""
        if self.state is not RunState.RUNNING:
            raise ControlStateError(f"Cannot stop from state {self.state.value}.")
        if not self.stop_requested:
            raise ControlStateError("No stop was requested for this run.")
        self.state = RunState.STOPPED

    def finish(self) -> RunState:
        """Finalize the run after the engine returned at the top level.

        A reset issued while the engine was still unwinding leaves the state
        at ``IDLE``.
        """
        if self.state is RunState.RUNNING:
            if self.stop_requested:
                self.mark_stopped()
            else:
                self.complete()
        return self.state

    def reset(self) -> None:
        """Return to ``IDLE`` from any state, stopping a running search first."""
        if self.state is RunState.RUNNING:
            self.request_stop()
        self.state = RunState.IDLE
        self.solution_count = 0
        self.skip_animation = False

    def __repr__(self) -> str:
        return (
            f"ControlState(state={self.state.value}, size={self.size}, "
            f"solutions={self.solution_count}, stop={self.stop_requested}, "
            f"skip={self.skip_animation})"
        )
