"""Per-tile verification and structural augmentation of composite pictures.

A composite picture is cut into ``tile_rows x tile_cols`` square tiles of
``tile_size`` cells, each played as an independent puzzle. Tiles that line
logic cannot solve are rescued by filling a bar, a cross, or a bar pair.
Augmentation only turns empty cells into ``fill_color``; it never clears or
recolours a cell that was already filled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import EMPTY, FILLED, Bounds, TileStatus
from ..core.exceptions import MalformedGridError
from ..core.models import AugmentationResult, Cell, Grid, TileAugmentation, TileReport
from ..utils.logger import get_logger
from .classifier import SolvabilityClassifier, SolverConfig, verify_matches
from .grid import clone_grid, count_filled, count_unknown, to_mono, validate_grid


LOGGER = get_logger(__name__)


@dataclass
class AugmentConfig:
    tile_rows: int
    tile_cols: int
    tile_size: int
    fill_color: int = FILLED
    try_bar_pairs: bool = True
    solver: SolverConfig = field(default_factory=SolverConfig)

    def validate(self) -> None:
        if self.tile_rows <= 0 or self.tile_cols <= 0 or self.tile_size <= 0:
            raise MalformedGridError(
                f"Tile geometry must be positive, got {self.tile_rows}x{self.tile_cols} "
                f"tiles of {self.tile_size}"
            )
        if self.fill_color <= 0:
            raise MalformedGridError(f"Fill colour must be positive, got {self.fill_color}")


def extract_tile(
    picture: Sequence[Sequence[int]], tile_row: int, tile_col: int, tile_size: int
) -> Grid:
    """Copy one tile out of ``picture``; cells past the picture edge read as empty."""

    bounds = Bounds(rows=len(picture), cols=len(picture[0]) if picture else 0)
    start_r = tile_row * tile_size
    start_c = tile_col * tile_size
    return [
        [
            picture[start_r + r][start_c + c] if bounds.contains(start_r + r, start_c + c) else EMPTY
            for c in range(tile_size)
        ]
        for r in range(tile_size)
    ]


def iter_tiles(tile_rows: int, tile_cols: int) -> Iterator[Tuple[int, int]]:
    for tile_row in range(tile_rows):
        for tile_col in range(tile_cols):
            yield tile_row, tile_col


# ----------------------------------------------------------------------
# Verification
# ----------------------------------------------------------------------
def verify_tiles(
    picture: Sequence[Sequence[int]],
    tile_rows: int,
    tile_cols: int,
    tile_size: int,
    config: Optional[SolverConfig] = None,
) -> List[TileReport]:
    """Classify every tile and report its status, fill rate and unknowns."""

    validate_grid(picture, square=False)
    classifier = SolvabilityClassifier(config)
    reports: List[TileReport] = []
    for tile_row, tile_col in iter_tiles(tile_rows, tile_cols):
        number = tile_row * tile_cols + tile_col + 1
        mono = to_mono(extract_tile(picture, tile_row, tile_col, tile_size))
        filled = count_filled(mono)
        if filled == 0:
            reports.append(TileReport(number, tile_row, tile_col, TileStatus.EMPTY))
            continue
        classification = classifier.classify_grid(mono)
        solved = verify_matches(classification, mono)
        reports.append(
            TileReport(
                number=number,
                tile_row=tile_row,
                tile_col=tile_col,
                status=TileStatus.SOLVED if solved else TileStatus.FAILED,
                filled=filled,
                fill_rate=filled / (tile_size * tile_size),
                unknowns=count_unknown(classification.grid),
                iterations=classification.iterations,
            )
        )
    classifier.close()
    return reports


def summarize_tiles(reports: Sequence[TileReport]) -> Dict[str, int]:
    summary = {status.value: 0 for status in TileStatus}
    for report in reports:
        summary[report.status.value] += 1
    return summary


# ----------------------------------------------------------------------
# Augmentation
# ----------------------------------------------------------------------
class TileAugmenter:
    """Adds bars or crosses to unsolvable tiles until each classifies solved."""

    def __init__(self, config: AugmentConfig) -> None:
        config.validate()
        self.config = config

    def _strategies(self) -> Iterator[Tuple[str, List[Cell]]]:
        """Yield ``(name, cells)`` fill patterns in the order they are tried."""

        size = self.config.tile_size
        for r in range(size):
            yield f"row {r}", [(r, c) for c in range(size)]
        for c in range(size):
            yield f"column {c}", [(r, c) for r in range(size)]
        mid = size // 2
        cross = [(mid, c) for c in range(size)] + [(r, mid) for r in range(size) if r != mid]
        yield "cross", cross
        if self.config.try_bar_pairs:
            for r in range(size):
                for c in range(size):
                    pair = [(r, i) for i in range(size)] + [(i, c) for i in range(size) if i != r]
                    yield f"row {r} + column {c}", pair

    def _rescue(
        self, classifier: SolvabilityClassifier, mono: Grid
    ) -> Optional[Tuple[str, List[Cell]]]:
        for strategy, cells in self._strategies():
            added = [(r, c) for r, c in cells if mono[r][c] == EMPTY]
            if not added:
                continue
            candidate = clone_grid(mono)
            for r, c in added:
                candidate[r][c] = FILLED
            if verify_matches(classifier.classify_grid(candidate), candidate):
                return strategy, added
        return None

    def augment(self, picture: Sequence[Sequence[int]]) -> AugmentationResult:
        bounds = validate_grid(picture, square=False)
        size = self.config.tile_size
        result = AugmentationResult(picture=clone_grid(picture))
        classifier = SolvabilityClassifier(self.config.solver)

        for tile_row, tile_col in iter_tiles(self.config.tile_rows, self.config.tile_cols):
            mono = to_mono(extract_tile(picture, tile_row, tile_col, size))
            if count_filled(mono) == 0:
                continue
            if verify_matches(classifier.classify_grid(mono), mono):
                continue

            rescue = self._rescue(classifier, mono)
            if rescue is None:
                LOGGER.warning("Tile [%d,%d] could not be made solvable", tile_row, tile_col)
                result.unresolved.append((tile_row, tile_col))
                continue

            strategy, added = rescue
            committed: List[Cell] = []
            for r, c in added:
                pr, pc = tile_row * size + r, tile_col * size + c
                if bounds.contains(pr, pc) and result.picture[pr][pc] == EMPTY:
                    result.picture[pr][pc] = self.config.fill_color
                    committed.append((pr, pc))
            LOGGER.info(
                "Tile [%d,%d] made solvable with %s (%d cells)",
                tile_row,
                tile_col,
                strategy,
                len(committed),
            )
            result.augmented.append(TileAugmentation(tile_row, tile_col, strategy, committed))

        classifier.close()
        return result


def augment_picture(
    picture: Sequence[Sequence[int]],
    tile_rows: int,
    tile_cols: int,
    tile_size: int,
    fill_color: int = FILLED,
) -> AugmentationResult:
    config = AugmentConfig(
        tile_rows=tile_rows, tile_cols=tile_cols, tile_size=tile_size, fill_color=fill_color
    )
    return TileAugmenter(config).augment(picture)
