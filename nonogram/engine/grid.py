"""Grid validation and value-semantics helpers.

Grids are plain ``List[List[int]]``. Nothing in the engine mutates a grid it
received from a caller: every stage clones first and returns the clone.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..core.constants import EMPTY, FILLED, UNKNOWN, Bounds
from ..core.exceptions import MalformedGridError
from ..core.models import Grid


def validate_grid(grid: Sequence[Sequence[int]], *, square: bool = True) -> Bounds:
    """Check the grid shape and return its bounds.

    Raises :class:`MalformedGridError` for empty, ragged or (when ``square``)
    non-square grids and for negative cell values.
    """

    if not grid or not grid[0]:
        raise MalformedGridError("Grid must have at least one row and one column")
    width = len(grid[0])
    for r, row in enumerate(grid):
        if len(row) != width:
            raise MalformedGridError(f"Row {r} has {len(row)} cells, expected {width}")
        for c, value in enumerate(row):
            if value < 0:
                raise MalformedGridError(f"Negative cell value {value} at ({r},{c})")
    if square and len(grid) != width:
        raise MalformedGridError(f"Grid must be square, got {len(grid)}x{width}")
    return Bounds(rows=len(grid), cols=width)


def validate_size(size: int) -> None:
    if size <= 0:
        raise MalformedGridError(f"Grid size must be positive, got {size}")


def clone_grid(grid: Sequence[Sequence[int]]) -> Grid:
    return [list(row) for row in grid]


def empty_grid(rows: int, cols: int, value: int = EMPTY) -> Grid:
    return [[value] * cols for _ in range(rows)]


def to_mono(grid: Sequence[Sequence[int]]) -> Grid:
    """Collapse colour indices: any positive value becomes ``FILLED``."""

    return [[FILLED if value > 0 else EMPTY for value in row] for row in grid]


def column(grid: Sequence[Sequence[int]], index: int) -> List[int]:
    return [row[index] for row in grid]


def count_filled(grid: Iterable[Iterable[int]]) -> int:
    return sum(1 for row in grid for value in row if value > 0)


def count_unknown(grid: Iterable[Iterable[int]]) -> int:
    return sum(1 for row in grid for value in row if value == UNKNOWN)


def mono_equal(left: Sequence[Sequence[int]], right: Sequence[Sequence[int]]) -> bool:
    """Compare two grids cell by cell on their filled/empty view."""

    if len(left) != len(right):
        return False
    for row_a, row_b in zip(left, right):
        if len(row_a) != len(row_b):
            return False
        for a, b in zip(row_a, row_b):
            if (a > 0) != (b > 0) or a == UNKNOWN or b == UNKNOWN:
                return False
    return True


def diff_cells(left: Sequence[Sequence[int]], right: Sequence[Sequence[int]]) -> List[tuple]:
    """Return the ``(row, col)`` cells whose filled/empty state differs."""

    return [
        (r, c)
        for r, (row_a, row_b) in enumerate(zip(left, right))
        for c, (a, b) in enumerate(zip(row_a, row_b))
        if (a > 0) != (b > 0)
    ]
