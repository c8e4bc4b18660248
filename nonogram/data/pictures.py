"""Sample composite pictures played as grids of 5x5 tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from ..core.models import Grid


@dataclass(frozen=True)
class CompositePicture:
    name: str
    tile_rows: int
    tile_cols: int
    tile_size: int
    palette: Dict[int, str]
    rows: tuple

    def grid(self) -> Grid:
        return [list(row) for row in self.rows]


MUSIC_NOTE = CompositePicture(
    name="music note",
    tile_rows=3,
    tile_cols=3,
    tile_size=5,
    palette={1: "black", 2: "purple"},
    rows=(
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 1, 1),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 1, 1),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 1, 1),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0),
        (0, 0, 2, 2, 2, 2, 0, 0, 1, 0, 2, 2, 2, 2, 0),
        (0, 2, 2, 2, 2, 2, 2, 0, 1, 0, 2, 2, 2, 2, 2),
        (0, 2, 2, 2, 2, 2, 2, 1, 1, 0, 2, 2, 2, 2, 2),
        (0, 2, 2, 2, 2, 2, 2, 0, 0, 0, 2, 2, 2, 2, 2),
        (0, 0, 2, 2, 2, 2, 0, 0, 0, 0, 0, 2, 2, 2, 0),
    ),
)

WAVE = CompositePicture(
    name="wave",
    tile_rows=3,
    tile_cols=4,
    tile_size=5,
    palette={1: "blue", 2: "white", 3: "yellow"},
    rows=(
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3, 3, 0, 0, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3, 3, 3, 3, 0, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3, 3, 3, 3, 0, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 3, 3, 0, 0, 0),
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
        (0, 0, 1, 1, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0, 0, 0),
        (0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0),
        (1, 1, 2, 2, 1, 1, 0, 0, 0, 1, 1, 2, 2, 1, 1, 0, 0, 0, 0, 0),
        (1, 2, 2, 2, 2, 1, 1, 0, 1, 1, 2, 2, 2, 2, 1, 1, 0, 0, 0, 1),
        (1, 2, 2, 2, 1, 1, 1, 1, 1, 1, 2, 2, 2, 1, 1, 1, 1, 1, 1, 1),
        (1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1),
        (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
        (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
        (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
        (1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    ),
)

SAMPLE_PICTURES: List[CompositePicture] = [MUSIC_NOTE, WAVE]
