"""Line-logic fixpoint solver."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import MAX_PASSES, UNKNOWN, Axis, ClassificationKind
from ..core.exceptions import InfeasibleClueError, MalformedGridError
from ..core.models import Classification, Clue, Grid, PassSnapshot
from ..utils.logger import get_logger
from .arrangements import ArrangementCache, filter_candidates, intersect_candidates
from .clues import is_feasible, normalize_clue
from .grid import clone_grid, count_unknown, empty_grid, validate_size


LOGGER = get_logger(__name__)


class ConstraintPropagator:
    """Narrows per-line candidate sets until nothing more can be deduced.

    Each pass handles every row, then every column. A cell is assigned when
    all surviving candidates of its line agree on it; once assigned it is
    never changed. The run ends at a fixpoint, on a contradiction (a line with
    no surviving candidate), or after ``max_passes`` passes.
    """

    def __init__(
        self,
        row_clues: Sequence[Sequence[int]],
        col_clues: Sequence[Sequence[int]],
        size: int,
        cache: Optional[ArrangementCache] = None,
        max_passes: int = MAX_PASSES,
    ) -> None:
        validate_size(size)
        if len(row_clues) != size or len(col_clues) != size:
            raise MalformedGridError(
                f"Expected {size} row and column clues, got {len(row_clues)} and {len(col_clues)}"
            )
        self.size = size
        self.row_clues: List[Tuple[int, ...]] = [normalize_clue(c) for c in row_clues]
        self.col_clues: List[Tuple[int, ...]] = [normalize_clue(c) for c in col_clues]
        for axis, clues in ((Axis.ROW, self.row_clues), (Axis.COLUMN, self.col_clues)):
            for index, clue in enumerate(clues):
                if not is_feasible(clue, size):
                    raise InfeasibleClueError(clue, size, axis=axis.value, index=index)
        self.cache = cache if cache is not None else ArrangementCache()
        self.max_passes = max_passes
        self.grid: Grid = empty_grid(size, size, UNKNOWN)
        self.iterations = 0
        self.contradiction: Optional[Tuple[Axis, int]] = None

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------
    def _solve_line(self, clue: Tuple[int, ...], line: List[int]) -> Optional[List[int]]:
        candidates = filter_candidates(self.cache.get(clue, self.size), line)
        if not candidates:
            return None
        return intersect_candidates(candidates)

    def run_pass(self) -> bool:
        """Run one rows-then-columns pass and report whether it made progress."""

        progress = False
        self.iterations += 1
        for r in range(self.size):
            line = self.grid[r]
            deduced = self._solve_line(self.row_clues[r], line)
            if deduced is None:
                self.contradiction = (Axis.ROW, r)
                return progress
            for c in range(self.size):
                if line[c] == UNKNOWN and deduced[c] != UNKNOWN:
                    line[c] = deduced[c]
                    progress = True

        for c in range(self.size):
            line = [self.grid[r][c] for r in range(self.size)]
            deduced = self._solve_line(self.col_clues[c], line)
            if deduced is None:
                self.contradiction = (Axis.COLUMN, c)
                return progress
            for r in range(self.size):
                if line[r] == UNKNOWN and deduced[r] != UNKNOWN:
                    self.grid[r][c] = deduced[r]
                    progress = True
        return progress

    def iter_passes(self) -> Iterator[PassSnapshot]:
        """Run passes lazily, yielding a snapshot after each one."""

        while self.iterations < self.max_passes and self.contradiction is None:
            progress = self.run_pass()
            unknowns = count_unknown(self.grid)
            yield PassSnapshot(
                index=self.iterations,
                grid=clone_grid(self.grid),
                progress=progress,
                unknown_count=unknowns,
            )
            if not progress:
                break

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------
    def solve(self) -> Classification:
        for snapshot in self.iter_passes():
            LOGGER.debug(
                "Pass %d: %d unknown cells (progress=%s)",
                snapshot.index,
                snapshot.unknown_count,
                snapshot.progress,
            )
        return self.classification()

    def classification(self) -> Classification:
        grid = clone_grid(self.grid)
        unknowns = count_unknown(grid)
        if self.contradiction is not None:
            axis, index = self.contradiction
            return Classification(
                kind=ClassificationKind.CONTRADICTION,
                grid=grid,
                unknown_count=unknowns,
                failing_line=index,
                axis=axis,
                iterations=self.iterations,
            )
        if unknowns == 0:
            return Classification(
                kind=ClassificationKind.SOLVED, grid=grid, iterations=self.iterations
            )
        if self.iterations >= self.max_passes:
            LOGGER.warning("Propagation stopped at the %d pass cap", self.max_passes)
        return Classification(
            kind=ClassificationKind.AMBIGUOUS,
            grid=grid,
            unknown_count=unknowns,
            iterations=self.iterations,
        )


def propagate(
    row_clues: Sequence[Clue],
    col_clues: Sequence[Clue],
    size: int,
    cache: Optional[ArrangementCache] = None,
    max_passes: int = MAX_PASSES,
) -> Classification:
    return ConstraintPropagator(row_clues, col_clues, size, cache, max_passes).solve()
