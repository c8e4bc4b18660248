import unittest
from datetime import date
from unittest.mock import patch

import nonogram
from nonogram.core.exceptions import MalformedGridError
from nonogram.engine.classifier import is_uniquely_solvable
from nonogram.engine.clues import compute_clues
from nonogram.engine.generator import (
    DeterministicGenerator,
    GeneratorConfig,
    Mulberry32,
    daily_puzzle,
    recent_dates,
    seed_from_string,
    today_str,
)
from nonogram.engine.grid import count_filled


class SeedHashTests(unittest.TestCase):
    def test_rolling_hash(self) -> None:
        self.assertEqual(seed_from_string(""), 0)
        self.assertEqual(seed_from_string("a"), 97)
        self.assertEqual(seed_from_string("ab"), 97 * 31 + 98)

    def test_hash_is_a_positive_32_bit_value(self) -> None:
        for text in ("2025-01-01", "2025-12-31", "a fairly long seed string for wrapping"):
            value = seed_from_string(text)
            self.assertGreaterEqual(value, 0)
            self.assertLessEqual(value, 2 ** 31)
            self.assertEqual(value, seed_from_string(text))


class Mulberry32Tests(unittest.TestCase):
    def test_same_seed_same_stream(self) -> None:
        first = Mulberry32(12345)
        second = Mulberry32(12345)
        self.assertEqual(
            [first.next_float() for _ in range(20)],
            [second.next_float() for _ in range(20)],
        )

    def test_values_are_in_unit_interval(self) -> None:
        rng = Mulberry32(42)
        for _ in range(500):
            value = rng.next_float()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_next_index_stays_in_range(self) -> None:
        rng = Mulberry32(7)
        self.assertTrue(all(0 <= rng.next_index(10) < 10 for _ in range(200)))

    def test_different_seeds_diverge(self) -> None:
        a = Mulberry32(1)
        b = Mulberry32(2)
        self.assertNotEqual([a.next_float() for _ in range(5)], [b.next_float() for _ in range(5)])


class DeterministicGeneratorTests(unittest.TestCase):
    def test_generation_is_deterministic(self) -> None:
        generator = DeterministicGenerator(GeneratorConfig(size=10))
        first = generator.generate("2025-01-01")
        second = DeterministicGenerator(GeneratorConfig(size=10)).generate("2025-01-01")
        self.assertEqual(first.grid, second.grid)
        self.assertEqual(first.seed, second.seed)
        self.assertEqual(first.attempts, second.attempts)

    def test_consecutive_days_give_distinct_solvable_grids(self) -> None:
        generator = DeterministicGenerator(GeneratorConfig(size=10))
        first = generator.generate("2025-01-01")
        second = generator.generate("2025-01-02")
        for result in (first, second):
            self.assertFalse(result.exhausted)
            self.assertTrue(is_uniquely_solvable(result.grid))
            self.assertEqual((result.row_clues, result.col_clues), compute_clues(result.grid))
        self.assertNotEqual(first.grid, second.grid)

    def test_no_row_or_column_is_empty(self) -> None:
        generator = DeterministicGenerator(GeneratorConfig(size=10))
        for seed in (0, 1, 99, 123456):
            grid = generator.grid_from_seed(seed)
            self.assertTrue(all(any(row) for row in grid))
            self.assertTrue(all(any(row[c] for row in grid) for c in range(10)))

    def test_grid_from_seed_is_pure(self) -> None:
        generator = DeterministicGenerator(GeneratorConfig(size=6))
        self.assertEqual(generator.grid_from_seed(31), generator.grid_from_seed(31))

    def test_size_one(self) -> None:
        result = DeterministicGenerator(GeneratorConfig(size=1)).generate("x")
        self.assertEqual(result.grid, [[1]])
        self.assertEqual(result.attempts, 1)
        self.assertFalse(result.exhausted)

    def test_reseeds_with_offset(self) -> None:
        config = GeneratorConfig(size=5)
        generator = DeterministicGenerator(config)
        with patch("nonogram.engine.generator.verify_matches", side_effect=[False, False, True]):
            result = generator.generate("seed")
        base = seed_from_string("seed")
        self.assertEqual(result.base_seed, base)
        self.assertEqual(result.attempts, 3)
        self.assertEqual(result.seed, base + 2 * config.reseed_offset)
        self.assertEqual(result.grid, generator.grid_from_seed(result.seed))

    def test_exhaustion_returns_last_grid(self) -> None:
        config = GeneratorConfig(size=5, max_attempts=3)
        generator = DeterministicGenerator(config)
        with patch("nonogram.engine.generator.verify_matches", return_value=False):
            with self.assertLogs("nonogram.engine.generator", level="WARNING"):
                result = generator.generate("seed")
        self.assertTrue(result.exhausted)
        self.assertEqual(result.attempts, 3)
        self.assertEqual(result.seed, seed_from_string("seed") + 2 * 7919)
        self.assertEqual(result.grid, generator.grid_from_seed(result.seed))

    def test_invalid_size(self) -> None:
        with self.assertRaises(MalformedGridError):
            DeterministicGenerator(GeneratorConfig(size=0))

    def test_api_generate_warns_on_exhaustion(self) -> None:
        with patch("nonogram.engine.generator.verify_matches", return_value=False):
            with self.assertLogs("nonogram.api", level="WARNING"):
                grid = nonogram.generate("seed", 4)
        self.assertEqual(len(grid), 4)


class KnownDailyValuesTests(unittest.TestCase):
    """Values published by the web client for past dates; they must never drift."""

    JAN_1 = [
        [1, 0, 0, 1, 1, 1, 0, 1, 0, 1],
        [1, 1, 0, 1, 1, 1, 1, 1, 0, 0],
        [1, 1, 1, 1, 0, 1, 1, 0, 0, 0],
        [1, 0, 0, 0, 0, 1, 0, 0, 1, 0],
        [1, 0, 1, 0, 1, 1, 0, 0, 1, 0],
        [1, 1, 1, 0, 1, 1, 1, 0, 0, 1],
        [1, 0, 1, 1, 0, 1, 1, 0, 1, 1],
        [1, 0, 1, 1, 1, 0, 0, 0, 0, 0],
        [0, 1, 0, 0, 1, 1, 0, 1, 0, 1],
        [1, 0, 0, 0, 0, 0, 1, 1, 1, 0],
    ]

    JAN_2 = [
        [0, 1, 1, 0, 0, 1, 0, 1, 0, 0],
        [1, 1, 0, 0, 0, 1, 1, 1, 1, 0],
        [1, 1, 0, 0, 0, 1, 0, 0, 1, 1],
        [0, 1, 1, 1, 0, 1, 0, 0, 1, 1],
        [0, 1, 0, 1, 0, 1, 0, 1, 0, 0],
        [0, 1, 0, 1, 1, 0, 1, 0, 0, 0],
        [0, 0, 1, 1, 1, 0, 0, 1, 0, 1],
        [1, 0, 0, 0, 0, 0, 1, 1, 1, 0],
        [0, 0, 0, 0, 1, 1, 0, 1, 0, 0],
        [1, 1, 1, 1, 1, 1, 0, 1, 1, 0],
    ]

    def test_seed_hash(self) -> None:
        self.assertEqual(seed_from_string("2025-01-01"), 274162049)
        self.assertEqual(seed_from_string("2025-01-02"), 274162050)

    def test_first_floats(self) -> None:
        rng = Mulberry32(274162049)
        self.assertEqual(
            [rng.next_float() for _ in range(3)],
            [0.25822336599230766, 0.7223856067284942, 0.3025911832228303],
        )

    def test_daily_grids(self) -> None:
        self.assertEqual(nonogram.generate("2025-01-01", 10), self.JAN_1)
        self.assertEqual(nonogram.generate("2025-01-02", 10), self.JAN_2)
        self.assertEqual(daily_puzzle("2025-01-01").total_filled, 54)


class DailyPuzzleTests(unittest.TestCase):
    def test_daily_puzzle_fields(self) -> None:
        puzzle = daily_puzzle("2025-03-01", 5)
        self.assertEqual(puzzle.size, 5)
        self.assertEqual(puzzle.date_str, "2025-03-01")
        self.assertEqual(puzzle.total_filled, count_filled(puzzle.solution))
        self.assertEqual((puzzle.row_clues, puzzle.col_clues), compute_clues(puzzle.solution))
        self.assertEqual(puzzle.solution, daily_puzzle("2025-03-01", 5).solution)

    def test_date_helpers(self) -> None:
        self.assertEqual(today_str(date(2025, 1, 2)), "2025-01-02")
        self.assertEqual(
            recent_dates(3, today=date(2025, 3, 1)),
            ["2025-02-27", "2025-02-28", "2025-03-01"],
        )
        self.assertEqual(len(recent_dates()), 7)


if __name__ == "__main__":
    unittest.main()
