"""Command-line interface for the step-by-step N-Queens visualizer.

This module wires together configuration loading, the terminal presentation
sinks, the search driver and the optional exports (CSV, charts, GIF). It
isolates I/O, argument parsing and signal handling from the core modules so
that the engine and the driver remain easy to test programmatically.
"""
from __future__ import annotations

import argparse
import tempfile
from pathlib import Path
from typing import List, Optional

from config_manager import ConfigManager

from .. import settings
from ..control import ControlState, validate_board_size
from ..driver import RunResult, SolverDriver
from ..engine import SearchEngine, SearchMode
from ..errors import ConfigurationError
from ..sinks import AutoConfirm, BoardView, EventLog, LogCategory, RenderFanOut, SolutionLog
from ..utils import KNOWN_SOLUTION_COUNTS, is_valid_solution, render_board_text
from .console import ConsoleLog, ConsolePrompt, ConsoleSolutions, TerminalBoard, install_signal_handlers
from .frames import FrameRecorder
from .reporting import (
    collect_search_effort,
    save_effort_to_csv,
    save_event_log_to_csv,
    save_solutions_to_csv,
    summarize_events,
)


# ------------- Utils --------------------------------------------------------

_MODE_ALIASES = {
    "first": SearchMode.FIND_FIRST,
    "one": SearchMode.FIND_FIRST,
    "all": SearchMode.FIND_ALL,
}


def parse_mode(value: str) -> SearchMode:
    """Map ``first``/``one``/``all`` (case-insensitive) to a ``SearchMode``."""
    try:
        return _MODE_ALIASES[value.strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown mode '{value}'. Allowed: first, all") from None


def parse_log_categories(entries: Optional[List[str]]):
    """Normalize ``--log`` filters into a set of ``LogCategory``.

    Accepts repeated flags and comma-separated lists. Returns None when no
    filter is provided (meaning every category is printed).
    """
    if not entries:
        return None
    valid = {c.value: c for c in LogCategory}
    selected = set()
    for entry in entries:
        for token in entry.split(","):
            token = token.strip().lower()
            if not token:
                continue
            if token not in valid:
                raise ConfigurationError(
                    f"Unknown log category '{token}'. Allowed: {', '.join(valid)}"
                )
            selected.add(valid[token])
    return selected or None


def parse_auto_skip(value: Optional[str]) -> Optional[int]:
    """Parse ``--auto-skip``: a non-negative integer or ``off``."""
    if value is None or str(value).strip().lower() in {"off", "none", "never"}:
        return None
    try:
        threshold = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Auto-skip threshold must be an integer or 'off', got {value!r}.") from None
    if threshold < 0:
        raise ConfigurationError("Auto-skip threshold must be non-negative.")
    return threshold


def _non_negative(value, label: str) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{label} must be a number, got {value!r}.") from None
    if seconds < 0:
        raise ConfigurationError(f"{label} must be non-negative, got {seconds}.")
    return seconds


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and copy its values onto ``nqviz.settings``.

    Raises ``FileNotFoundError`` when the file is missing and
    ``ConfigurationError`` for values of the wrong type or range.
    """
    config_mgr = ConfigManager(config_path)

    board_settings = config_mgr.get_board_settings()
    if board_settings:
        try:
            settings.MAX_BOARD_SIZE = int(board_settings.get("max_size", settings.MAX_BOARD_SIZE))
            settings.CONFIRM_THRESHOLD = int(board_settings.get("confirm_threshold", settings.CONFIRM_THRESHOLD))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid board_settings: {exc}") from exc
        if settings.MAX_BOARD_SIZE < 1:
            raise ConfigurationError("board_settings.max_size must be at least 1.")
        settings.DEFAULT_BOARD_SIZE = validate_board_size(
            board_settings.get("default_size", settings.DEFAULT_BOARD_SIZE)
        )

    animation_settings = config_mgr.get_animation_settings()
    if animation_settings:
        settings.set_animation(
            step_delay=_non_negative(animation_settings.get("step_delay", settings.STEP_DELAY), "step_delay"),
            solution_pause=_non_negative(
                animation_settings.get("solution_pause", settings.SOLUTION_PAUSE), "solution_pause"
            ),
            auto_skip_threshold=parse_auto_skip(
                animation_settings.get("auto_skip_threshold", settings.AUTO_SKIP_THRESHOLD)
            ),
            verbose_while_skipping=bool(
                animation_settings.get("verbose_while_skipping", settings.VERBOSE_WHILE_SKIPPING)
            ),
        )

    output_settings = config_mgr.get_output_settings()
    if output_settings:
        settings.OUT_DIR = output_settings.get("output_dir", settings.OUT_DIR)
        settings.RUN_TAG = output_settings.get("run_tag", settings.RUN_TAG)
        settings.DATE_IN_FILENAMES = bool(output_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES))

    return config_mgr


# ------------- Visualization run -------------------------------------------

def run_visualization(args: argparse.Namespace) -> RunResult:
    """Build the sinks described by ``args``, run one search and export results."""
    size = validate_board_size(args.size if args.size is not None else settings.DEFAULT_BOARD_SIZE)
    mode = parse_mode(args.mode)
    delay = settings.STEP_DELAY if args.delay is None else _non_negative(args.delay, "delay")
    pause = settings.SOLUTION_PAUSE if args.solution_pause is None else _non_negative(args.solution_pause, "solution pause")
    auto_skip = settings.AUTO_SKIP_THRESHOLD if args.auto_skip is None else parse_auto_skip(args.auto_skip)
    categories = parse_log_categories(args.log)
    if args.gif and args.fps < 1:
        raise ConfigurationError(f"--fps must be at least 1, got {args.fps}.")

    control = ControlState()
    if args.quiet:
        board = BoardView(size)
        log = EventLog()
        solutions = SolutionLog()
    else:
        board = TerminalBoard(size, clear_screen=args.clear, control=control)
        log = ConsoleLog(categories=categories)
        solutions = ConsoleSolutions(every=args.print_every)

    frames = FrameRecorder(size, max_frames=args.max_frames, control=control) if args.gif else None
    render = RenderFanOut(board, frames) if frames is not None else board

    engine = SearchEngine(
        control=control,
        render=render,
        log=log,
        solutions=solutions,
        delay=delay,
        solution_pause=pause,
        auto_skip_threshold=auto_skip,
    )
    prompt = AutoConfirm(True) if args.yes else ConsolePrompt()
    driver = SolverDriver(engine, prompt=prompt)

    print(f"N={size}, mode={mode.value}. Ctrl-C stops the search, Ctrl-\\ skips the animation.")
    with install_signal_handlers(driver):
        result = driver.solve(size, mode, skip_animation=args.skip)

    if result.aborted:
        print("Run cancelled before start.")
        return result

    print()
    print(render_board_text(result.board, size))
    print()
    print(f"Status: {result.status}")
    print(
        f"State: {result.state.value} | solutions: {result.solution_count} | "
        f"trials: {result.stats.trials} | backtracks: {result.stats.backtracks} | "
        f"time: {result.elapsed:.3f}s"
    )
    summary = summarize_events(log.entries)
    if summary:
        print("Log records: " + ", ".join(f"{k}={v}" for k, v in sorted(summary.items())))

    out_dir = args.out or settings.OUT_DIR
    if args.csv:
        save_solutions_to_csv(result.solutions, size, out_dir)
        save_event_log_to_csv(log.entries, size, out_dir)
    if args.plots:
        from .plots import plot_solution_heatmap, save_solutions_grid

        save_solutions_grid(result.solutions, size, out_dir)
        plot_solution_heatmap(result.solutions, size, out_dir)
    if frames is not None:
        from .plots import save_search_animation

        frames.capture()
        save_search_animation(frames.stack(), args.gif, fps=args.fps)
    return result


def run_effort_analysis(max_n: int, out_dir: str) -> None:
    """Run unanimated find-all searches for N=1..max_n and chart the effort."""
    from .plots import plot_search_effort

    max_n = validate_board_size(max_n)
    records = collect_search_effort(range(1, max_n + 1))
    save_effort_to_csv(records, out_dir)
    plot_search_effort(records, out_dir)


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test of the engine and exports.

    Verifies that:
    - Find-all yields the known solution counts for N=1..8.
    - Find-first returns a valid board for every solvable N up to 10.
    - A stop request leaves the run in ``STOPPED``.
    - The solution CSV is produced in a temporary folder.
    """
    print("Running quick regression tests (N=1..10)...")

    for n in range(1, 9):
        solutions = SolutionLog()
        driver = SolverDriver(SearchEngine(solutions=solutions, delay=0.0, solution_pause=0.0))
        result = driver.solve(n, SearchMode.FIND_ALL)
        if result.solution_count != KNOWN_SOLUTION_COUNTS[n]:
            raise AssertionError(
                f"N={n}: expected {KNOWN_SOLUTION_COUNTS[n]} solutions, found {result.solution_count}."
            )
        if len(set(result.solutions)) != result.solution_count:
            raise AssertionError(f"N={n}: duplicate solutions reported.")
        if not all(is_valid_solution(s, n) for s in result.solutions):
            raise AssertionError(f"N={n}: invalid solution reported.")
        print(f"  [all] N={n}: {result.solution_count} solutions, trials={result.stats.trials}")

    for n in range(1, 11):
        driver = SolverDriver(SearchEngine(delay=0.0, solution_pause=0.0))
        result = driver.solve(n, SearchMode.FIND_FIRST)
        if n in (2, 3):
            if result.found:
                raise AssertionError(f"N={n}: a solution was reported where none exists.")
            continue
        if not result.found or not is_valid_solution(result.board, n):
            raise AssertionError(f"N={n}: find-first returned an invalid board {result.board}.")
        print(f"  [first] N={n}: {list(result.board)}")

    class _StopAfter(EventLog):
        def __init__(self, control, limit):
            super().__init__()
            self.control = control
            self.limit = limit

        def record(self, message, category):
            super().record(message, category)
            if len(self.entries) == self.limit:
                self.control.request_stop()

    control = ControlState()
    engine = SearchEngine(control=control, log=_StopAfter(control, 25), delay=0.0, solution_pause=0.0)
    result = SolverDriver(engine).solve(8, SearchMode.FIND_ALL)
    if not result.stopped:
        raise AssertionError(f"Stop request did not stop the run (state={result.state.value}).")
    print(f"  [stop] N=8 stopped with partial board {list(result.board)}")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_solutions_to_csv([(1, 3, 0, 2), (2, 0, 3, 1)], 4, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Solutions CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Animate a backtracking search for the N-Queens problem.")
    parser.add_argument("--size", "-n", type=int, default=None, help="Board size N (default from settings/config).")
    parser.add_argument(
        "--mode",
        "-m",
        choices=["first", "one", "all"],
        default="first",
        help="Find the first solution (default) or enumerate all solutions.",
    )
    parser.add_argument("--delay", "-d", type=float, default=None, help="Pause after each step in seconds.")
    parser.add_argument("--solution-pause", type=float, default=None, help="Pause after each solution in find-all mode.")
    parser.add_argument(
        "--auto-skip",
        default=None,
        help="In find-all mode, skip the animation after the first solution when N is at least this value ('off' disables).",
    )
    parser.add_argument("--skip", action="store_true", help="Start with the animation skipped.")
    parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation before large find-all runs.")
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the board, log or solutions while running.")
    parser.add_argument("--clear", action="store_true", help="Clear the terminal before each board redraw.")
    parser.add_argument(
        "--log",
        action="append",
        help="Only print these log categories: info, place, remove, conflict, solution (comma-separated or repeated).",
    )
    parser.add_argument("--print-every", type=int, default=1, help="Print every k-th solution (default: 1).")
    parser.add_argument("--csv", action="store_true", help="Export solutions and the event log as CSV.")
    parser.add_argument("--plots", action="store_true", help="Save a solutions grid and a queen-frequency heatmap.")
    parser.add_argument("--gif", default=None, help="Save the animated search to this GIF path.")
    parser.add_argument("--fps", type=int, default=8, help="Frames per second for --gif (default: 8).")
    parser.add_argument("--max-frames", type=int, default=2000, help="Frame cap for --gif (default: 2000).")
    parser.add_argument("--out", default=None, help="Output directory for exports (default from settings/config).")
    parser.add_argument("--effort", type=int, default=None, metavar="MAX_N", help="Chart find-all effort for N=1..MAX_N and exit.")
    parser.add_argument("--config", default=None, help="Path to a configuration file (e.g. config.json).")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        if args.config:
            apply_configuration(args.config)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        if args.effort is not None:
            run_effort_analysis(args.effort, args.out or settings.OUT_DIR)
            return
        result = run_visualization(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        raise SystemExit(130) from None
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    if result.stopped:
        raise SystemExit(130)


if __name__ == "__main__":
    main()
