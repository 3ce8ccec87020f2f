"""Terminal implementations of the presentation sinks.

Everything here reports through ``print`` so that a run can be followed from
a plain terminal: the board is redrawn on every visual change, log records are
echoed with their category, and solutions are listed as they are found.
Stop and skip requests are wired to POSIX signals (Ctrl-C stops, Ctrl-\\
skips the animation) for the duration of a run.
"""
from __future__ import annotations

import signal
import sys
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator, Optional, TextIO

from ..sinks import BoardView, EventLog, LogCategory, SolutionLog

_CLEAR = "\033[H\033[J"


class TerminalBoard(BoardView):
    """Board view that prints itself after every visual change.

    Parameters
    ----------
    size : int
        Board dimension N.
    stream : TextIO | None
        Output stream, ``sys.stdout`` when omitted.
    clear_screen : bool
        Emit an ANSI clear sequence before each redraw so the board animates
        in place instead of scrolling.
    control : ControlState | None
        When given, redraws are suppressed while its skip flag is set; call
        ``refresh`` to show the final board.
    queen, trial, empty : str
        Cell symbols.
    """

    def __init__(
        self,
        size: int,
        stream: Optional[TextIO] = None,
        clear_screen: bool = False,
        control=None,
        queen: str = "Q",
        trial: str = "?",
        empty: str = ".",
    ):
        super().__init__(size)
        self.stream = stream
        self.clear_screen = clear_screen
        self.control = control
        self.symbols = {"queen": queen, "trial": trial, "empty": empty}
        self.redraws = 0

    def text(self) -> str:
        lines = []
        for row in self.cells:
            symbols = []
            for cell in row:
                if cell.queen:
                    symbols.append(self.symbols["queen"])
                elif cell.trial:
                    symbols.append(self.symbols["trial"])
                else:
                    symbols.append(self.symbols["empty"])
            lines.append(" ".join(symbols))
        return "\n".join(lines)

    def refresh(self) -> None:
        out = self.stream or sys.stdout
        if self.clear_screen:
            out.write(_CLEAR)
        print(self.text(), file=out)
        print(file=out)
        self.redraws += 1

    def _muted(self) -> bool:
        return self.control is not None and self.control.skip_animation

    def set_queen(self, row: int, col: int, present: bool) -> None:
        changed = self.cells[row][col].queen != present
        super().set_queen(row, col, present)
        if changed and not self._muted():
            self.refresh()

    def mark_trial(self, row: int, col: int, active: bool) -> None:
        super().mark_trial(row, col, active)
        # Clearing a mark is folded into the next redraw.
        if active and not self._muted():
            self.refresh()


class ConsoleLog(EventLog):
    """Event log that also echoes records as ``[category] message``.

    ``categories`` restricts what is printed; everything is still recorded.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        categories: Optional[Iterable[LogCategory]] = None,
    ):
        super().__init__()
        self.stream = stream
        self.categories = set(categories) if categories is not None else None

    def record(self, message: str, category: LogCategory) -> None:
        super().record(message, category)
        if self.categories is None or category in self.categories:
            print(f"[{category.value}] {message}", file=self.stream or sys.stdout)


class ConsoleSolutions(SolutionLog):
    """Solution log that prints ``Solution k: [c0, c1, ...]`` per solution.

    With ``every > 1`` only every ``every``-th solution is printed, which
    keeps large find-all runs readable.
    """

    def __init__(self, stream: Optional[TextIO] = None, every: int = 1):
        super().__init__()
        self.stream = stream
        self.every = max(1, every)

    def record(self, solution) -> None:
        super().record(solution)
        index = len(self.solutions)
        if index % self.every == 0:
            columns = ", ".join(str(c) for c in solution)
            print(f"Solution {index}: [{columns}]", file=self.stream or sys.stdout)


class ConsolePrompt:
    """Yes/no question on the terminal; anything but y/yes counts as no."""

    def __init__(self, reader: Callable[[str], str] = input):
        self.reader = reader

    def ask(self, message: str) -> bool:
        try:
            answer = self.reader(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}


@contextmanager
def install_signal_handlers(driver) -> Iterator[None]:
    """Route Ctrl-C to ``driver.request_stop`` and Ctrl-\\ to ``request_skip``.

    Previous handlers are restored on exit. ``SIGQUIT`` is only wired on
    platforms that define it. While no run is active Ctrl-C still raises
    ``KeyboardInterrupt``.
    """
    previous = {}

    def _on_stop(signum, frame):
        if not driver.control.running:
            raise KeyboardInterrupt
        driver.request_stop()

    def _on_skip(signum, frame):
        driver.request_skip()

    wiring = [(signal.SIGINT, _on_stop)]
    sigquit = getattr(signal, "SIGQUIT", None)
    if sigquit is not None:
        wiring.append((sigquit, _on_skip))

    for signum, handler in wiring:
        previous[signum] = signal.signal(signum, handler)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
