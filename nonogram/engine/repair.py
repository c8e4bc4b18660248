"""Minimal-flip repair of puzzles that line logic cannot solve uniquely."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import EMPTY, FILLED
from ..core.models import Cell, Grid, PuzzleEntry, RepairResult
from ..utils.logger import get_logger
from .classifier import SolvabilityClassifier, SolverConfig
from .grid import clone_grid, validate_grid


LOGGER = get_logger(__name__)

Fixes = Dict[str, Dict[int, Dict[str, object]]]


@dataclass
class RepairConfig:
    max_flips: int = 2
    fill_value: int = FILLED
    solver: SolverConfig = field(default_factory=SolverConfig)


class PuzzleRepairer:
    """Searches 1-cell, then 2-cell flips for a line-solvable variant.

    Flips are tried in row-major order and pairs in row-major lexicographic
    order, so the first hit is deterministic. The search never goes beyond
    ``max_flips`` (at most 2) cells.
    """

    def __init__(self, config: Optional[RepairConfig] = None) -> None:
        self.config = config or RepairConfig()

    def repair(self, grid: Sequence[Sequence[int]], name: str = "puzzle") -> Optional[RepairResult]:
        bounds = validate_grid(grid)
        original = clone_grid(grid)
        classifier = SolvabilityClassifier(self.config.solver)
        try:
            if classifier.is_uniquely_solvable(original):
                LOGGER.info("'%s' is already line-solvable; nothing to repair", name)
                return RepairResult(grid=clone_grid(original), original=original)

            cells = [(r, c) for r in range(bounds.rows) for c in range(bounds.cols)]
            for flip_count in range(1, min(self.config.max_flips, 2) + 1):
                if flip_count == 2:
                    LOGGER.info("Trying 2-cell flips for '%s'", name)
                for flips in combinations(cells, flip_count):
                    candidate = self._flipped(original, flips)
                    if classifier.is_uniquely_solvable(candidate):
                        LOGGER.info(
                            "Repaired '%s' by flipping %s",
                            name,
                            ", ".join(f"[{r},{c}]" for r, c in flips),
                        )
                        return RepairResult(grid=candidate, original=original, flips=list(flips))
        finally:
            classifier.close()

        LOGGER.warning(
            "Could not repair '%s' with 1-%d flips; needs manual correction",
            name,
            self.config.max_flips,
        )
        return None

    def _flipped(self, grid: Grid, flips: Iterable[Cell]) -> Grid:
        candidate = clone_grid(grid)
        for r, c in flips:
            candidate[r][c] = EMPTY if candidate[r][c] > 0 else self.config.fill_value
        return candidate


def repair_grid(grid: Sequence[Sequence[int]], config: Optional[RepairConfig] = None) -> Optional[Grid]:
    result = PuzzleRepairer(config).repair(grid)
    return result.grid if result is not None else None


def iter_library_failures(
    library: Dict[str, List[PuzzleEntry]],
    size_keys: Optional[Sequence[str]] = None,
    config: Optional[SolverConfig] = None,
) -> Iterator[Tuple[str, int, PuzzleEntry]]:
    """Yield ``(size_key, index, entry)`` for puzzles line logic cannot reproduce."""

    classifier = SolvabilityClassifier(config)
    for size_key in size_keys or list(library):
        for index, entry in enumerate(library.get(size_key, [])):
            if not classifier.is_uniquely_solvable(entry.solution):
                yield size_key, index, entry
    classifier.close()


def repair_library(
    library: Dict[str, List[PuzzleEntry]],
    size_keys: Optional[Sequence[str]] = None,
    config: Optional[RepairConfig] = None,
) -> Fixes:
    """Repair every failing puzzle of ``library`` and collect the fixes.

    The result maps size key to puzzle index to ``{"name", "solution"}``.
    Puzzles that cannot be repaired are logged and left out.
    """

    config = config or RepairConfig()
    repairer = PuzzleRepairer(config)
    fixes: Fixes = {}
    failures = list(iter_library_failures(library, size_keys, config.solver))
    for size_key, index, entry in failures:
        LOGGER.info("Ambiguous: %s #%d %s", size_key, index + 1, entry.name)
        result = repairer.repair(entry.solution, name=entry.name)
        if result is None:
            continue
        fixes.setdefault(size_key, {})[index] = {"name": entry.name, "solution": result.grid}
    LOGGER.info(
        "Total fixes: %d of %d failing puzzles",
        sum(len(group) for group in fixes.values()),
        len(failures),
    )
    return fixes
