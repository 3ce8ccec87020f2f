"""Global defaults for the N-Queens visualizer.

This module centralizes tunable constants used by the search engine, the
driver and the command-line front end. Values can be overridden at runtime
via the configuration loader in `nqviz.frontend.cli.apply_configuration` or
directly through the ``set_*`` helpers below.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from .errors import ConfigurationError

# Board size used when none is given on the command line
DEFAULT_BOARD_SIZE: int = 8

# Implementation ceiling for N (the recursion depth equals N)
MAX_BOARD_SIZE: int = 20

# Pause after each trial/placement/removal, in seconds
STEP_DELAY: float = 0.25

# Pause after a solution is recorded in find-all mode, in seconds
SOLUTION_PAUSE: float = 1.0

# In find-all mode, force animation skipping after the first solution when
# N is at least this value (None disables the heuristic)
AUTO_SKIP_THRESHOLD: Optional[int] = 8

# Ask for confirmation before a find-all run when N exceeds this value
CONFIRM_THRESHOLD: int = 10

# Keep per-step log records while the animation is skipped
VERBOSE_WHILE_SKIPPING: bool = False

# Output directory for CSV exports and charts
OUT_DIR: str = "results_nqviz"

# Output naming policy --------------------------------------------------------

# When True, exported files include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to exported filenames
RUN_TAG: Optional[str] = None


def set_animation(
        step_delay: float = 0.25,
        solution_pause: float = 1.0,
        auto_skip_threshold: Optional[int] = 8,
        verbose_while_skipping: bool = False,
) -> None:
        """Configure animation pacing for subsequent runs.

        Parameters
        - step_delay: pause after each trial, placement and removal (seconds).
        - solution_pause: pause after each solution in find-all mode (seconds).
        - auto_skip_threshold: minimum N for the find-all auto-skip heuristic
            (None disables it).
        - verbose_while_skipping: keep per-step log records while skipping.

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active pacing explicit at run start.
        """
        global STEP_DELAY, SOLUTION_PAUSE, AUTO_SKIP_THRESHOLD, VERBOSE_WHILE_SKIPPING
        if step_delay < 0 or solution_pause < 0:
                raise ConfigurationError("Animation delays must be non-negative.")
        STEP_DELAY = float(step_delay)
        SOLUTION_PAUSE = float(solution_pause)
        AUTO_SKIP_THRESHOLD = auto_skip_threshold
        VERBOSE_WHILE_SKIPPING = bool(verbose_while_skipping)

        print("Animation settings configured:")
        print(f"   - Step delay: {STEP_DELAY}s")
        print(f"   - Solution pause: {SOLUTION_PAUSE}s")
        print(
                f"   - Auto-skip from N={AUTO_SKIP_THRESHOLD}"
                if AUTO_SKIP_THRESHOLD is not None
                else "   - Auto-skip: disabled"
        )
