"""Solvability classification on top of the propagator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import MAX_PASSES
from ..core.models import Classification, Clue
from ..utils.logger import get_logger
from .arrangements import ArrangementCache
from .clues import compute_clues
from .grid import mono_equal, validate_grid
from .propagator import ConstraintPropagator


LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    """Configuration values driving line-logic propagation."""

    max_passes: int = MAX_PASSES


def classify(
    row_clues: Sequence[Clue],
    col_clues: Sequence[Clue],
    size: int,
    cache: Optional[ArrangementCache] = None,
    config: Optional[SolverConfig] = None,
) -> Classification:
    """Label a clue set as solved, contradictory or ambiguous.

    Raises :class:`MalformedGridError` for bad sizes or clue counts and
    :class:`InfeasibleClueError` for a clue that cannot fit its line; both are
    preconditions checked before any propagation.
    """

    config = config or SolverConfig()
    propagator = ConstraintPropagator(
        row_clues, col_clues, size, cache=cache, max_passes=config.max_passes
    )
    result = propagator.solve()
    LOGGER.debug("Classified %dx%d clues: %s", size, size, result.describe())
    return result


def verify_matches(classification: Classification, reference: Sequence[Sequence[int]]) -> bool:
    """True when the classification is solved and equals ``reference``.

    Colour indices in the reference are ignored. A mismatch on a solved
    classification means the reference was not the unique solution of its
    own clues.
    """

    if not classification.is_solved:
        return False
    return mono_equal(classification.grid, reference)


def classify_grid(
    grid: Sequence[Sequence[int]],
    cache: Optional[ArrangementCache] = None,
    config: Optional[SolverConfig] = None,
) -> Classification:
    """Classify the clues induced by a square solution grid."""

    bounds = validate_grid(grid)
    row_clues, col_clues = compute_clues(grid)
    return classify(row_clues, col_clues, bounds.rows, cache=cache, config=config)


def is_uniquely_solvable(
    grid: Sequence[Sequence[int]],
    cache: Optional[ArrangementCache] = None,
    config: Optional[SolverConfig] = None,
) -> bool:
    """True when line logic alone reproduces ``grid`` from its own clues."""

    return verify_matches(classify_grid(grid, cache=cache, config=config), grid)


class SolvabilityClassifier:
    """Bundles a solver config with an arrangement cache for batch callers.

    The cache lives as long as the classifier instance; callers create one
    per batch (a repair, an augmentation, a library verification).
    """

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or SolverConfig()
        self.cache = ArrangementCache()
        self.calls = 0

    def classify(
        self, row_clues: Sequence[Clue], col_clues: Sequence[Clue], size: int
    ) -> Classification:
        self.calls += 1
        return classify(row_clues, col_clues, size, cache=self.cache, config=self.config)

    def classify_grid(self, grid: Sequence[Sequence[int]]) -> Classification:
        self.calls += 1
        return classify_grid(grid, cache=self.cache, config=self.config)

    def is_uniquely_solvable(self, grid: Sequence[Sequence[int]]) -> bool:
        return verify_matches(self.classify_grid(grid), grid)

    def close(self) -> None:
        self.cache.log_stats(f"{self.calls} classifications")
