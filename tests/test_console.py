"""Tests for the terminal sinks, the yes/no prompt and signal wiring."""

from io import StringIO
from pathlib import Path
import signal
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqviz.control import ControlState
from nqviz.engine import SearchEngine, SearchMode
from nqviz.frontend.console import (
    ConsoleLog,
    ConsolePrompt,
    ConsoleSolutions,
    TerminalBoard,
    install_signal_handlers,
)
from nqviz.sinks import LogCategory


class TerminalBoardTests(unittest.TestCase):
    """Redraw policy of the printed board."""

    def test_text_rendering(self):
        board = TerminalBoard(3, stream=StringIO())
        board.set_queen(0, 1, True)
        board.mark_trial(1, 2, True)
        self.assertEqual(board.text(), ". Q .\n. . ?\n. . .")

    def test_redraws_on_changes_only(self):
        out = StringIO()
        board = TerminalBoard(4, stream=out)
        board.set_queen(0, 0, True)
        board.set_queen(0, 0, True)  # no change
        board.mark_trial(1, 2, True)
        board.mark_trial(1, 2, False)  # folded into the next redraw
        self.assertEqual(board.redraws, 2)
        self.assertIn("Q . . .", out.getvalue())

    def test_clear_screen_sequence(self):
        out = StringIO()
        board = TerminalBoard(2, stream=out, clear_screen=True)
        board.refresh()
        self.assertTrue(out.getvalue().startswith("\033[H\033[J"))

    def test_muted_while_skipping(self):
        control = ControlState()
        control.start(4)
        control.request_skip()
        out = StringIO()
        board = TerminalBoard(4, stream=out, control=control)
        board.set_queen(1, 1, True)
        board.mark_trial(2, 2, True)
        self.assertEqual(board.redraws, 0)
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(board.queens(), [(1, 1)])

    def test_animates_a_small_search(self):
        out = StringIO()
        board = TerminalBoard(4, stream=out)
        engine = SearchEngine(render=board, delay=0.0, solution_pause=0.0, sleep=lambda s: None)
        engine.begin(4)
        engine.run(SearchMode.FIND_FIRST)
        self.assertGreater(board.redraws, 4)
        self.assertEqual(board.text().splitlines()[0], ". Q . .")


class ConsoleLogTests(unittest.TestCase):
    """Echoed log records."""

    def test_prints_with_category(self):
        out = StringIO()
        log = ConsoleLog(stream=out)
        log.record("Search started.", LogCategory.INFO)
        log.record("Solution 1 Found!", LogCategory.SOLUTION)
        self.assertEqual(out.getvalue().splitlines(), ["[info] Search started.", "[solution] Solution 1 Found!"])

    def test_filter_prints_subset_but_records_all(self):
        out = StringIO()
        log = ConsoleLog(stream=out, categories=[LogCategory.SOLUTION])
        log.record("Trying Queen at (0, 0)", LogCategory.INFO)
        log.record("Solution 1 Found!", LogCategory.SOLUTION)
        self.assertEqual(out.getvalue().splitlines(), ["[solution] Solution 1 Found!"])
        self.assertEqual(len(log), 2)


class ConsoleSolutionsTests(unittest.TestCase):
    """Solution listing."""

    def test_every_kth_solution(self):
        out = StringIO()
        solutions = ConsoleSolutions(stream=out, every=2)
        for solution in [(1, 3, 0, 2), (2, 0, 3, 1), (0,), (0,)]:
            solutions.record(solution)
        self.assertEqual(out.getvalue().splitlines(), ["Solution 2: [2, 0, 3, 1]", "Solution 4: [0]"])
        self.assertEqual(len(solutions), 4)

    def test_every_is_at_least_one(self):
        self.assertEqual(ConsoleSolutions(stream=StringIO(), every=0).every, 1)


class ConsolePromptTests(unittest.TestCase):
    """Yes/no parsing."""

    def test_answers(self):
        for answer, expected in (("y", True), ("YES", True), (" yes ", True), ("n", False), ("", False), ("maybe", False)):
            with self.subTest(answer=answer):
                prompt = ConsolePrompt(reader=lambda message, a=answer: a)
                self.assertIs(prompt.ask("Continue?"), expected)

    def test_question_suffix(self):
        seen = []
        prompt = ConsolePrompt(reader=lambda message: seen.append(message) or "y")
        prompt.ask("Continue?")
        self.assertEqual(seen, ["Continue? [y/N] "])

    def test_eof_counts_as_no(self):
        def reader(message):
            raise EOFError

        self.assertFalse(ConsolePrompt(reader=reader).ask("Continue?"))


class SignalWiringTests(unittest.TestCase):
    """Ctrl-C and Ctrl-\\ routing for the duration of a run."""

    class _Driver:
        def __init__(self, running=True):
            self.calls = []
            self.control = ControlState()
            if running:
                self.control.start(4)

        def request_stop(self):
            self.calls.append("stop")

        def request_skip(self):
            self.calls.append("skip")

    def test_handlers_installed_and_restored(self):
        driver = self._Driver()
        before = signal.getsignal(signal.SIGINT)
        with install_signal_handlers(driver):
            handler = signal.getsignal(signal.SIGINT)
            self.assertIsNot(handler, before)
            handler(signal.SIGINT, None)
            if hasattr(signal, "SIGQUIT"):
                signal.getsignal(signal.SIGQUIT)(signal.SIGQUIT, None)
        self.assertIs(signal.getsignal(signal.SIGINT), before)
        expected = ["stop", "skip"] if hasattr(signal, "SIGQUIT") else ["stop"]
        self.assertEqual(driver.calls, expected)

    def test_ctrl_c_interrupts_when_no_run_is_active(self):
        driver = self._Driver(running=False)
        with install_signal_handlers(driver):
            handler = signal.getsignal(signal.SIGINT)
            with self.assertRaises(KeyboardInterrupt):
                handler(signal.SIGINT, None)
        self.assertEqual(driver.calls, [])


if __name__ == "__main__":
    unittest.main()
