import unittest
from unittest.mock import patch

import nonogram
from nonogram.core.constants import TileStatus
from nonogram.core.exceptions import MalformedGridError
from nonogram.data.pictures import MUSIC_NOTE, SAMPLE_PICTURES
from nonogram.engine.tiles import (
    AugmentConfig,
    TileAugmenter,
    augment_picture,
    extract_tile,
    summarize_tiles,
    verify_tiles,
)

BLOCKS = [
    [2, 2, 0, 0],
    [2, 2, 0, 0],
    [0, 0, 3, 3],
    [0, 0, 3, 3],
]


def _compose(tiles, tile_size):
    """Stitch a 2D list of equally sized tiles into one picture."""

    picture = []
    for tile_row in tiles:
        for r in range(tile_size):
            picture.append([value for tile in tile_row for value in tile[r]])
    return picture


class ExtractTileTests(unittest.TestCase):
    def test_cells_past_the_edge_read_as_empty(self) -> None:
        picture = [[1, 1, 1], [1, 1, 1], [1, 1, 1]]
        self.assertEqual(extract_tile(picture, 1, 1, 2), [[1, 0], [0, 0]])

    def test_interior_tile(self) -> None:
        picture = _compose([[BLOCKS, [[0] * 4] * 4]], 4)
        self.assertEqual(extract_tile(picture, 0, 0, 4), BLOCKS)
        self.assertEqual(extract_tile(picture, 0, 1, 4), [[0] * 4] * 4)


class VerifyTilesTests(unittest.TestCase):
    def test_statuses(self) -> None:
        empty = [[0] * 4 for _ in range(4)]
        full = [[1] * 4 for _ in range(4)]
        dot = [[0] * 4 for _ in range(4)]
        dot[1][1] = 1
        picture = _compose([[BLOCKS, empty], [full, dot]], 4)

        reports = verify_tiles(picture, 2, 2, 4)
        self.assertEqual([r.number for r in reports], [1, 2, 3, 4])
        self.assertEqual(
            [r.status for r in reports],
            [TileStatus.FAILED, TileStatus.EMPTY, TileStatus.SOLVED, TileStatus.SOLVED],
        )
        self.assertEqual(reports[0].unknowns, 16)
        self.assertEqual(reports[0].filled, 8)
        self.assertAlmostEqual(reports[2].fill_rate, 1.0)
        self.assertEqual(summarize_tiles(reports), {"empty": 1, "solved": 2, "failed": 1})

    def test_sample_pictures_have_expected_shape(self) -> None:
        for sample in SAMPLE_PICTURES:
            grid = sample.grid()
            self.assertEqual(len(grid), sample.tile_rows * sample.tile_size)
            self.assertEqual(len(grid[0]), sample.tile_cols * sample.tile_size)
            reports = verify_tiles(grid, sample.tile_rows, sample.tile_cols, sample.tile_size)
            self.assertEqual(len(reports), sample.tile_rows * sample.tile_cols)


class TileAugmenterTests(unittest.TestCase):
    def test_row_bar_rescues_ambiguous_tile(self) -> None:
        result = augment_picture(BLOCKS, 1, 1, 4, fill_color=5)
        self.assertEqual(result.picture[0], [2, 2, 5, 5])
        self.assertEqual(result.picture[1:], BLOCKS[1:])
        self.assertEqual(len(result.augmented), 1)
        self.assertEqual(result.augmented[0].strategy, "row 0")
        self.assertEqual(result.augmented[0].cells, [(0, 2), (0, 3)])
        self.assertEqual(result.unresolved, [])

    def test_augmentation_is_strictly_additive(self) -> None:
        picture = MUSIC_NOTE.grid()
        result = augment_picture(picture, MUSIC_NOTE.tile_rows, MUSIC_NOTE.tile_cols, MUSIC_NOTE.tile_size, 4)
        for r, row in enumerate(picture):
            for c, value in enumerate(row):
                if value > 0:
                    self.assertEqual(result.picture[r][c], value)
                elif result.picture[r][c] != 0:
                    self.assertEqual(result.picture[r][c], 4)
        self.assertEqual(picture, MUSIC_NOTE.grid())

    def test_augmented_tiles_verify_as_solved(self) -> None:
        result = augment_picture(BLOCKS, 1, 1, 4)
        reports = verify_tiles(result.picture, 1, 1, 4)
        self.assertEqual(reports[0].status, TileStatus.SOLVED)

    def test_empty_and_solved_tiles_are_left_alone(self) -> None:
        empty = [[0] * 4 for _ in range(4)]
        full = [[1] * 4 for _ in range(4)]
        picture = _compose([[empty, full]], 4)
        result = augment_picture(picture, 1, 2, 4)
        self.assertEqual(result.picture, picture)
        self.assertEqual(result.augmented, [])

    def test_unresolved_tiles_are_reported(self) -> None:
        with patch("nonogram.engine.tiles.verify_matches", return_value=False):
            with self.assertLogs("nonogram.engine.tiles", level="WARNING"):
                result = augment_picture(BLOCKS, 1, 1, 4)
        self.assertEqual(result.unresolved, [(0, 0)])
        self.assertEqual(result.picture, BLOCKS)

    def test_invalid_geometry(self) -> None:
        with self.assertRaises(MalformedGridError):
            TileAugmenter(AugmentConfig(tile_rows=1, tile_cols=1, tile_size=0))
        with self.assertRaises(MalformedGridError):
            TileAugmenter(AugmentConfig(tile_rows=1, tile_cols=1, tile_size=4, fill_color=0))

    def test_api_augment_tiles(self) -> None:
        grid = nonogram.augment_tiles(BLOCKS, 1, 1, 4, fill_color=5)
        self.assertEqual(grid[0], [2, 2, 5, 5])


if __name__ == "__main__":
    unittest.main()
