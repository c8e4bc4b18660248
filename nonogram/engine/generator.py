"""Deterministic seeded puzzle generation.

Grids are drawn from a Mulberry32 stream seeded by a hash of a seed string
(typically a calendar date) and reseeded until line logic alone reproduces
them. The same seed string and size always give the same grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from ..core.constants import (
    DAILY_PUZZLE_SIZE,
    EMPTY,
    FILL_RATE_MIN,
    FILL_RATE_SPAN,
    FILLED,
    MAX_GENERATION_ATTEMPTS,
    RESEED_OFFSET,
)
from ..core.models import Clue, GenerationResult, Grid
from ..utils.logger import get_logger
from .classifier import SolvabilityClassifier, SolverConfig, verify_matches
from .clues import compute_clues
from .grid import clone_grid, count_filled, validate_size


LOGGER = get_logger(__name__)

_MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, low word only."""

    return (a * b) & _MASK32


def seed_from_string(text: str) -> int:
    """Rolling ``h * 31 + code`` hash wrapped to signed 32 bits, made positive."""

    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & _MASK32
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


class Mulberry32:
    """Small deterministic PRNG with a single 32-bit state."""

    def __init__(self, seed: int) -> None:
        self.state = seed & _MASK32

    def next_float(self) -> float:
        """Return the next value in ``[0, 1)``."""

        self.state = (self.state + 0x6D2B79F5) & _MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    def next_index(self, upper: int) -> int:
        return math.floor(self.next_float() * upper)


@dataclass
class GeneratorConfig:
    size: int = DAILY_PUZZLE_SIZE
    max_attempts: int = MAX_GENERATION_ATTEMPTS
    reseed_offset: int = RESEED_OFFSET
    fill_rate_min: float = FILL_RATE_MIN
    fill_rate_span: float = FILL_RATE_SPAN
    solver: SolverConfig = field(default_factory=SolverConfig)


class DeterministicGenerator:
    """Seeded grid synthesis with reseeding until the grid is line-solvable."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        validate_size(self.config.size)

    def grid_from_seed(self, seed: int) -> Grid:
        """Draw one candidate grid; no line or column is left empty."""

        size = self.config.size
        rng = Mulberry32(seed)
        fill_rate = self.config.fill_rate_min + rng.next_float() * self.config.fill_rate_span
        grid = [
            [FILLED if rng.next_float() < fill_rate else EMPTY for _ in range(size)]
            for _ in range(size)
        ]
        for i in range(size):
            if not any(grid[i]):
                grid[i][rng.next_index(size)] = FILLED
            if not any(row[i] for row in grid):
                grid[rng.next_index(size)][i] = FILLED
        return grid

    def generate(self, seed_text: str) -> GenerationResult:
        base_seed = seed_from_string(seed_text)
        classifier = SolvabilityClassifier(self.config.solver)
        grid: Grid = []
        seed = base_seed
        for attempt in range(self.config.max_attempts):
            seed = base_seed + attempt * self.config.reseed_offset
            grid = self.grid_from_seed(seed)
            if verify_matches(classifier.classify_grid(grid), grid):
                LOGGER.info(
                    "Generated %dx%d puzzle for '%s' on attempt %d",
                    self.config.size,
                    self.config.size,
                    seed_text,
                    attempt + 1,
                )
                classifier.close()
                return self._result(grid, seed_text, base_seed, seed, attempt + 1)
            LOGGER.debug("Seed %d not line-solvable, reseeding", seed)

        classifier.close()
        LOGGER.warning(
            "No line-solvable puzzle for '%s' after %d attempts; returning last grid unverified",
            seed_text,
            self.config.max_attempts,
        )
        return self._result(
            grid, seed_text, base_seed, seed, self.config.max_attempts, exhausted=True
        )

    @staticmethod
    def _result(
        grid: Grid,
        seed_text: str,
        base_seed: int,
        seed: int,
        attempts: int,
        exhausted: bool = False,
    ) -> GenerationResult:
        row_clues, col_clues = compute_clues(grid)
        return GenerationResult(
            grid=clone_grid(grid),
            seed_text=seed_text,
            base_seed=base_seed,
            seed=seed,
            attempts=attempts,
            exhausted=exhausted,
            row_clues=row_clues,
            col_clues=col_clues,
        )


# ----------------------------------------------------------------------
# Daily challenge
# ----------------------------------------------------------------------
@dataclass
class DailyPuzzle:
    size: int
    solution: Grid
    row_clues: List[Clue]
    col_clues: List[Clue]
    total_filled: int
    date_str: str
    name: str = "Daily puzzle"
    verified: bool = True

    @classmethod
    def from_result(cls, result: GenerationResult) -> "DailyPuzzle":
        return cls(
            size=len(result.grid),
            solution=result.grid,
            row_clues=result.row_clues,
            col_clues=result.col_clues,
            total_filled=count_filled(result.grid),
            date_str=result.seed_text,
            verified=not result.exhausted,
        )


def daily_puzzle(date_str: str, size: int = DAILY_PUZZLE_SIZE) -> DailyPuzzle:
    """Build the puzzle of the day for ``date_str`` (``YYYY-MM-DD``)."""

    result = DeterministicGenerator(GeneratorConfig(size=size)).generate(date_str)
    return DailyPuzzle.from_result(result)


def today_str(today: Optional[date] = None) -> str:
    return (today or date.today()).isoformat()


def recent_dates(days: int = 7, today: Optional[date] = None) -> List[str]:
    """Dates of the last ``days`` days, oldest first, ending today."""

    anchor = today or date.today()
    return [(anchor - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]
