"""Custom exception hierarchy for the nonogram engine."""

from __future__ import annotations

from typing import Optional, Sequence


class NonogramError(Exception):
    """Base exception for engine failures."""


class MalformedGridError(NonogramError, ValueError):
    """Raised when a grid, clue list or tile geometry is structurally invalid."""


class InfeasibleClueError(NonogramError):
    """Raised when a clue cannot fit in its line, before any enumeration."""

    def __init__(
        self,
        clue: Sequence[int],
        length: int,
        axis: Optional[str] = None,
        index: Optional[int] = None,
    ) -> None:
        self.clue = list(clue)
        self.length = length
        self.axis = axis
        self.index = index
        where = f" ({axis} {index})" if axis is not None else ""
        super().__init__(f"Clue {self.clue} cannot fit in a line of length {length}{where}")


class PuzzleFileError(NonogramError):
    """Raised when a puzzle, library or fixes file cannot be parsed."""
