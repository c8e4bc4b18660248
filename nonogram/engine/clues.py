"""Run-length clue codec."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..core.models import Clue
from .grid import column, validate_grid


def line_clue(line: Sequence[int]) -> Clue:
    """Return the block lengths of ``line``; ``[0]`` when nothing is filled."""

    clue: Clue = []
    run = 0
    for value in line:
        if value > 0:
            run += 1
        elif run > 0:
            clue.append(run)
            run = 0
    if run > 0:
        clue.append(run)
    return clue or [0]


def compute_clues(grid: Sequence[Sequence[int]]) -> Tuple[List[Clue], List[Clue]]:
    """Derive ``(row_clues, col_clues)`` from a grid.

    Colour indices are ignored, so multicolour pictures reuse the monochrome
    solver. Rectangular grids are accepted.
    """

    bounds = validate_grid(grid, square=False)
    row_clues = [line_clue(row) for row in grid]
    col_clues = [line_clue(column(grid, c)) for c in range(bounds.cols)]
    return row_clues, col_clues


def normalize_clue(clue: Sequence[int]) -> Tuple[int, ...]:
    blocks = tuple(int(block) for block in clue)
    return blocks or (0,)


def is_empty_clue(clue: Sequence[int]) -> bool:
    return normalize_clue(clue) == (0,)


def min_span(clue: Sequence[int]) -> int:
    """Smallest line length that can hold ``clue``."""

    blocks = normalize_clue(clue)
    if blocks == (0,):
        return 0
    return sum(blocks) + len(blocks) - 1


def is_feasible(clue: Sequence[int], length: int) -> bool:
    blocks = normalize_clue(clue)
    if blocks == (0,):
        return length >= 0
    if any(block <= 0 for block in blocks):
        return False
    return min_span(blocks) <= length
