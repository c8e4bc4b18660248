"""Shared constants and enumerations for the nonogram engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Cell states while solving. Finished grids use 0 for empty and any positive
# value (a colour index) for filled.
UNKNOWN = -1
EMPTY = 0
FILLED = 1

# Propagation safety valve; not expected to bind for grids up to ~30x30.
MAX_PASSES = 200

# Deterministic generation.
MAX_GENERATION_ATTEMPTS = 100
RESEED_OFFSET = 7919
FILL_RATE_MIN = 0.35
FILL_RATE_SPAN = 0.15
DAILY_PUZZLE_SIZE = 10

SYMBOLS = {
    UNKNOWN: "?",
    EMPTY: ".",
    FILLED: "#",
}


class Axis(str, Enum):
    """Line orientation within a grid."""

    ROW = "ROW"
    COLUMN = "COLUMN"


class ClassificationKind(str, Enum):
    """Possible outcomes of classifying a clue set."""

    SOLVED = "SOLVED"
    CONTRADICTION = "CONTRADICTION"
    AMBIGUOUS = "AMBIGUOUS"


class TileStatus(str, Enum):
    """Verification status of a single picture tile."""

    EMPTY = "empty"
    SOLVED = "solved"
    FAILED = "failed"


class VerdictStatus(str, Enum):
    """Verification status of a library puzzle."""

    UNIQUE = "unique"
    MISMATCH = "mismatch"
    CONTRADICTION = "contradiction"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
