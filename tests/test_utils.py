"""Tests for placement validation and the text board renderer."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqviz.utils import conflicts, is_valid_solution, render_board_text


class ConflictTests(unittest.TestCase):
    """Attacking pair counting."""

    def test_solutions_have_no_conflicts(self):
        self.assertEqual(conflicts([1, 3, 0, 2]), 0)
        self.assertEqual(conflicts([0, 4, 7, 5, 2, 6, 1, 3]), 0)

    def test_pairs_are_counted_per_family(self):
        self.assertEqual(conflicts([0, 0, 0]), 3)  # one column, three pairs
        self.assertEqual(conflicts([0, 1, 2, 3]), 6)  # one anti-diagonal
        self.assertEqual(conflicts([3, 2, 1, 0]), 6)  # one major diagonal


class ValidSolutionTests(unittest.TestCase):
    """Complete, in-range, conflict-free placements."""

    def test_valid(self):
        self.assertTrue(is_valid_solution((0,)))
        self.assertTrue(is_valid_solution((2, 0, 3, 1), 4))

    def test_invalid(self):
        self.assertFalse(is_valid_solution(()))
        self.assertFalse(is_valid_solution((1, 3, 0), 4))  # partial
        self.assertFalse(is_valid_solution((1, 3, 0, 4)))  # out of range
        self.assertFalse(is_valid_solution((0, 2, 1, 3)))  # attacks
        self.assertFalse(is_valid_solution((True,)))


class RenderBoardTextTests(unittest.TestCase):
    """Plain-text board."""

    def test_full_board(self):
        self.assertEqual(render_board_text([1, 3, 0, 2]), ". Q . .\n. . . Q\nQ . . .\n. . Q .")

    def test_partial_board_with_trial(self):
        self.assertEqual(render_board_text([0], size=3, trial=(1, 2)), "Q . .\n. . ?\n. . .")


if __name__ == "__main__":
    unittest.main()
