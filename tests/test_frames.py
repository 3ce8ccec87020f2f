"""Tests for the numpy frame recorder."""

from pathlib import Path
import sys
import unittest

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqviz.control import ControlState
from nqviz.engine import SearchEngine, SearchMode
from nqviz.frontend.frames import EMPTY, QUEEN, TRIAL, FrameRecorder
from nqviz.sinks import RenderFanOut, BoardView


class FrameRecorderTests(unittest.TestCase):
    """Snapshots of visual state."""

    def test_grid_codes(self):
        recorder = FrameRecorder(3)
        recorder.mark_trial(0, 1, True)
        recorder.set_queen(0, 1, True)
        recorder.mark_trial(2, 2, True)
        grid = recorder.grid()
        self.assertEqual(grid[0, 1], QUEEN)
        self.assertEqual(grid[2, 2], TRIAL)
        self.assertEqual(grid[1, 1], EMPTY)
        self.assertEqual(grid.dtype, np.int8)

    def test_one_frame_per_update(self):
        recorder = FrameRecorder(2)
        recorder.set_queen(0, 0, True)
        recorder.set_queen(0, 0, False)
        stack = recorder.stack()
        self.assertEqual(stack.shape, (2, 2, 2))
        self.assertEqual(stack[0, 0, 0], QUEEN)
        self.assertEqual(stack[1, 0, 0], EMPTY)

    def test_frames_are_copies(self):
        recorder = FrameRecorder(2)
        recorder.set_queen(1, 1, True)
        recorder.set_queen(1, 1, False)
        self.assertEqual(recorder.frames[0][1, 1], QUEEN)

    def test_frame_cap(self):
        recorder = FrameRecorder(2, max_frames=3)
        for _ in range(5):
            recorder.mark_trial(0, 0, True)
        self.assertEqual(len(recorder.frames), 3)
        self.assertEqual(recorder.dropped, 2)

    def test_paused_while_skipping(self):
        control = ControlState()
        control.start(4)
        recorder = FrameRecorder(4, control=control)
        recorder.set_queen(0, 0, True)
        control.request_skip()
        recorder.set_queen(1, 2, True)
        self.assertEqual(len(recorder.frames), 1)
        self.assertEqual(recorder.dropped, 1)
        recorder.capture()
        self.assertEqual(recorder.frames[-1][1, 2], QUEEN)

    def test_empty_stack(self):
        self.assertEqual(FrameRecorder(5).stack().shape, (0, 5, 5))

    def test_fan_out_with_board_view(self):
        board = BoardView(4)
        recorder = FrameRecorder(4)
        engine = SearchEngine(
            render=RenderFanOut(board, recorder), delay=0.0, solution_pause=0.0, sleep=lambda s: None
        )
        engine.begin(4)
        engine.run(SearchMode.FIND_FIRST)
        final = recorder.stack()[-1]
        self.assertEqual(sorted(zip(*np.nonzero(final == QUEEN))), [(0, 1), (1, 3), (2, 0), (3, 2)])
        self.assertEqual(sorted(board.queens()), [(0, 1), (1, 3), (2, 0), (3, 2)])


if __name__ == "__main__":
    unittest.main()
