import unittest

from nonogram.core.constants import UNKNOWN, Axis, ClassificationKind
from nonogram.core.exceptions import InfeasibleClueError, MalformedGridError
from nonogram.engine.clues import compute_clues
from nonogram.engine.propagator import ConstraintPropagator, propagate

HEART = [
    [0, 1, 0, 1, 0],
    [1, 1, 1, 1, 1],
    [1, 1, 1, 1, 1],
    [0, 1, 1, 1, 0],
    [0, 0, 1, 0, 0],
]


class PropagationTests(unittest.TestCase):
    def test_passes_only_narrow_the_grid(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        propagator = ConstraintPropagator(row_clues, col_clues, 5)
        snapshots = list(propagator.iter_passes())

        self.assertEqual([s.unknown_count for s in snapshots], [6, 0, 0])
        self.assertEqual([s.progress for s in snapshots], [True, True, False])
        for earlier, later in zip(snapshots, snapshots[1:]):
            self.assertLessEqual(later.unknown_count, earlier.unknown_count)
            for r in range(5):
                for c in range(5):
                    if earlier.grid[r][c] != UNKNOWN:
                        self.assertEqual(later.grid[r][c], earlier.grid[r][c])

    def test_snapshots_are_copies(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        propagator = ConstraintPropagator(row_clues, col_clues, 5)
        first = next(propagator.iter_passes())
        first.grid[0][0] = 99
        self.assertNotEqual(propagator.grid[0][0], 99)

    def test_heart_is_solved(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        result = propagate(row_clues, col_clues, 5)
        self.assertEqual(result.kind, ClassificationKind.SOLVED)
        self.assertEqual(result.grid, HEART)
        self.assertEqual(result.iterations, 3)
        self.assertEqual(result.unknown_count, 0)

    def test_first_pass_deductions(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        propagator = ConstraintPropagator(row_clues, col_clues, 5)
        propagator.run_pass()
        U = UNKNOWN
        self.assertEqual(
            propagator.grid,
            [
                [0, U, U, U, 0],
                [1, 1, 1, 1, 1],
                [1, 1, 1, 1, 1],
                [0, 1, 1, 1, 0],
                [0, U, U, U, 0],
            ],
        )

    def test_pass_cap_stops_propagation(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        with self.assertLogs("nonogram.engine.propagator", level="WARNING"):
            result = propagate(row_clues, col_clues, 5, max_passes=1)
        self.assertEqual(result.kind, ClassificationKind.AMBIGUOUS)
        self.assertEqual(result.unknown_count, 6)
        self.assertEqual(result.iterations, 1)

    def test_contradiction_reports_line_and_partial_grid(self) -> None:
        result = propagate([[2], [2]], [[0], [0]], 2)
        self.assertEqual(result.kind, ClassificationKind.CONTRADICTION)
        self.assertEqual(result.axis, Axis.COLUMN)
        self.assertEqual(result.failing_line, 0)
        self.assertEqual(result.grid, [[1, 1], [1, 1]])
        self.assertEqual(result.iterations, 1)

    def test_contradiction_in_row(self) -> None:
        propagator = ConstraintPropagator([[0], [0]], [[1], [0]], 2)
        propagator.grid[0][0] = 1
        result = propagator.solve()
        self.assertTrue(result.is_contradiction)
        self.assertEqual((result.axis, result.failing_line), (Axis.ROW, 0))


class PropagatorPreconditionTests(unittest.TestCase):
    def test_non_positive_size(self) -> None:
        with self.assertRaises(MalformedGridError):
            ConstraintPropagator([], [], 0)

    def test_clue_count_must_match_size(self) -> None:
        with self.assertRaises(MalformedGridError):
            ConstraintPropagator([[1], [1]], [[1], [1], [0]], 3)

    def test_infeasible_clue_carries_its_line(self) -> None:
        with self.assertRaises(InfeasibleClueError) as ctx:
            ConstraintPropagator([[10], [0], [0], [0], [0]], [[0]] * 5, 5)
        self.assertEqual(ctx.exception.axis, "ROW")
        self.assertEqual(ctx.exception.index, 0)


if __name__ == "__main__":
    unittest.main()
