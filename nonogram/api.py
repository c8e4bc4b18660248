"""Public entry points of the engine.

Callers (puzzle player, authoring scripts, daily challenge) only need these
functions; each is a pure function of its arguments and returns fresh grids.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .core.constants import DAILY_PUZZLE_SIZE, FILLED
from .core.models import Classification, Clue, GenerationResult, Grid
from .engine import clues as _clues
from .engine.classifier import classify as _classify
from .engine.generator import DeterministicGenerator, GeneratorConfig
from .engine.repair import repair_grid
from .engine.tiles import augment_picture
from .utils.logger import get_logger


LOGGER = get_logger(__name__)


def compute_clues(grid: Sequence[Sequence[int]]) -> Tuple[List[Clue], List[Clue]]:
    return _clues.compute_clues(grid)


def classify(row_clues: Sequence[Clue], col_clues: Sequence[Clue], size: int) -> Classification:
    return _classify(row_clues, col_clues, size)


def repair(grid: Sequence[Sequence[int]]) -> Optional[Grid]:
    """Smallest 1- or 2-flip variant of ``grid`` that line logic solves, else ``None``."""

    return repair_grid(grid)


def generate_puzzle(seed: str, size: int = DAILY_PUZZLE_SIZE) -> GenerationResult:
    return DeterministicGenerator(GeneratorConfig(size=size)).generate(seed)


def generate(seed: str, size: int = DAILY_PUZZLE_SIZE) -> Grid:
    """Always returns a grid; check :func:`generate_puzzle` for the exhausted flag."""

    result = generate_puzzle(seed, size)
    if result.exhausted:
        LOGGER.warning("Returning unverified grid for seed '%s'", seed)
    return result.grid


def augment_tiles(
    picture: Sequence[Sequence[int]],
    tile_rows: int,
    tile_cols: int,
    tile_size: int,
    fill_color: int = FILLED,
) -> Grid:
    return augment_picture(picture, tile_rows, tile_cols, tile_size, fill_color).picture
