import unittest

import nonogram
from nonogram.core.constants import ClassificationKind
from nonogram.core.exceptions import InfeasibleClueError, MalformedGridError, NonogramError
from nonogram.engine.classifier import (
    SolvabilityClassifier,
    SolverConfig,
    classify,
    classify_grid,
    is_uniquely_solvable,
    verify_matches,
)
from nonogram.engine.clues import compute_clues

HEART = [
    [0, 1, 0, 1, 0],
    [1, 1, 1, 1, 1],
    [1, 1, 1, 1, 1],
    [0, 1, 1, 1, 0],
    [0, 0, 1, 0, 0],
]

BLOCKS = [
    [1, 1, 0, 0],
    [1, 1, 0, 0],
    [0, 0, 1, 1],
    [0, 0, 1, 1],
]


class ClassifyTests(unittest.TestCase):
    def test_heart_is_uniquely_solvable(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        result = classify(row_clues, col_clues, 5)
        self.assertTrue(result.is_solved)
        self.assertTrue(verify_matches(result, HEART))

    def test_symmetric_blocks_are_ambiguous(self) -> None:
        row_clues, col_clues = compute_clues(BLOCKS)
        self.assertEqual(row_clues, [[2], [2], [2], [2]])
        result = classify(row_clues, col_clues, 4)
        self.assertEqual(result.kind, ClassificationKind.AMBIGUOUS)
        self.assertEqual(result.unknown_count, 16)
        self.assertEqual(result.iterations, 1)
        self.assertFalse(verify_matches(result, BLOCKS))

    def test_single_centre_cell(self) -> None:
        clues = [[0], [0], [1], [0], [0]]
        result = classify(clues, clues, 5)
        expected = [[0] * 5 for _ in range(5)]
        expected[2][2] = 1
        self.assertTrue(result.is_solved)
        self.assertEqual(result.grid, expected)
        self.assertTrue(verify_matches(result, expected))

    def test_infeasible_clue_is_not_a_contradiction(self) -> None:
        with self.assertRaises(InfeasibleClueError):
            classify([[10], [0], [0], [0], [0]], [[0]] * 5, 5)
        self.assertTrue(issubclass(InfeasibleClueError, NonogramError))

    def test_contradiction_is_a_result(self) -> None:
        result = classify([[2], [2]], [[0], [0]], 2)
        self.assertTrue(result.is_contradiction)
        self.assertIn("contradiction in column 0", result.describe())

    def test_wrong_clue_count(self) -> None:
        with self.assertRaises(MalformedGridError):
            classify([[1]], [[1], [0]], 2)

    def test_config_pass_cap_is_honoured(self) -> None:
        row_clues, col_clues = compute_clues(HEART)
        with self.assertLogs("nonogram.engine.propagator", level="WARNING"):
            result = classify(row_clues, col_clues, 5, config=SolverConfig(max_passes=1))
        self.assertTrue(result.is_ambiguous)


class GridClassificationTests(unittest.TestCase):
    def test_colour_indices_are_ignored(self) -> None:
        picture = [[2, 2], [0, 3]]
        result = classify_grid(picture)
        self.assertEqual(result.grid, [[1, 1], [0, 1]])
        self.assertTrue(verify_matches(result, picture))

    def test_is_uniquely_solvable(self) -> None:
        self.assertTrue(is_uniquely_solvable(HEART))
        self.assertFalse(is_uniquely_solvable(BLOCKS))

    def test_non_square_grid_is_rejected(self) -> None:
        with self.assertRaises(MalformedGridError):
            classify_grid([[1, 0, 1]])

    def test_input_grid_is_not_mutated(self) -> None:
        grid = [row[:] for row in HEART]
        result = classify_grid(grid)
        result.grid[0][0] = 7
        self.assertEqual(grid, HEART)


class SolvabilityClassifierTests(unittest.TestCase):
    def test_cache_is_shared_between_calls(self) -> None:
        classifier = SolvabilityClassifier()
        classifier.classify_grid(HEART)
        misses = classifier.cache.misses
        classifier.classify_grid(HEART)
        self.assertEqual(classifier.calls, 2)
        self.assertEqual(classifier.cache.misses, misses)
        self.assertGreater(classifier.cache.hits, 0)
        classifier.close()

    def test_is_uniquely_solvable(self) -> None:
        classifier = SolvabilityClassifier()
        self.assertTrue(classifier.is_uniquely_solvable(HEART))
        self.assertFalse(classifier.is_uniquely_solvable(BLOCKS))


class PublicApiTests(unittest.TestCase):
    def test_package_exports(self) -> None:
        row_clues, col_clues = nonogram.compute_clues(HEART)
        result = nonogram.classify(row_clues, col_clues, 5)
        self.assertEqual(result.kind, nonogram.ClassificationKind.SOLVED)
        self.assertEqual(nonogram.__version__, "0.1.0")


if __name__ == "__main__":
    unittest.main()
