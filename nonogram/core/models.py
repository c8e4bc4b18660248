"""Data models shared by the nonogram engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import Axis, ClassificationKind, TileStatus, VerdictStatus

Grid = List[List[int]]
Clue = List[int]
Arrangement = Tuple[int, ...]
Cell = Tuple[int, int]


@dataclass
class Classification:
    """Outcome of running line-logic propagation over a clue set.

    ``grid`` holds the solved grid, the partial grid left at the fixpoint for
    ambiguous puzzles, or the partial grid at the moment a contradiction was
    found. ``failing_line`` and ``axis`` are only set for contradictions.
    """

    kind: ClassificationKind
    grid: Grid
    unknown_count: int = 0
    failing_line: Optional[int] = None
    axis: Optional[Axis] = None
    iterations: int = 0

    @property
    def is_solved(self) -> bool:
        return self.kind == ClassificationKind.SOLVED

    @property
    def is_contradiction(self) -> bool:
        return self.kind == ClassificationKind.CONTRADICTION

    @property
    def is_ambiguous(self) -> bool:
        return self.kind == ClassificationKind.AMBIGUOUS

    def describe(self) -> str:
        if self.is_solved:
            return f"solved in {self.iterations} passes"
        if self.is_contradiction:
            axis = self.axis.value.lower() if self.axis else "line"
            return f"contradiction in {axis} {self.failing_line}"
        return f"ambiguous ({self.unknown_count} undetermined cells after {self.iterations} passes)"


@dataclass
class PassSnapshot:
    """State of the propagator after one full rows-then-columns pass."""

    index: int
    grid: Grid
    progress: bool
    unknown_count: int


@dataclass
class GenerationResult:
    grid: Grid
    seed_text: str
    base_seed: int
    seed: int
    attempts: int
    exhausted: bool = False
    row_clues: List[Clue] = field(default_factory=list)
    col_clues: List[Clue] = field(default_factory=list)


@dataclass
class RepairResult:
    grid: Grid
    original: Grid
    flips: List[Cell] = field(default_factory=list)


@dataclass
class TileAugmentation:
    tile_row: int
    tile_col: int
    strategy: str
    cells: List[Cell] = field(default_factory=list)


@dataclass
class AugmentationResult:
    picture: Grid
    augmented: List[TileAugmentation] = field(default_factory=list)
    unresolved: List[Cell] = field(default_factory=list)


@dataclass
class TileReport:
    number: int
    tile_row: int
    tile_col: int
    status: TileStatus
    filled: int = 0
    fill_rate: float = 0.0
    unknowns: int = 0
    iterations: int = 0


@dataclass
class PuzzleEntry:
    """A named puzzle solution inside a library."""

    name: str
    solution: Grid
    size_key: str = ""

    @property
    def size(self) -> int:
        return len(self.solution)


@dataclass
class PuzzleVerdict:
    size_key: str
    index: int
    name: str
    status: VerdictStatus
    unknowns: int = 0
    iterations: int = 0
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == VerdictStatus.UNIQUE
