"""Pretty-print helpers for nonogram grids and reports."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

from ..core.constants import SYMBOLS

if TYPE_CHECKING:
    from ..core.models import Classification, TileReport
    from ..engine.validator import LibraryReport


def cell_symbol(value: int) -> str:
    if value > 1:
        return str(value)
    return SYMBOLS.get(value, "?")


def format_grid(grid: Sequence[Sequence[int]]) -> str:
    width = len(grid[0]) if grid else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(grid):
        row_render = " ".join(f"{cell_symbol(value):>2}" for value in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_clue(clue: Sequence[int]) -> str:
    return " ".join(str(block) for block in clue)


def format_clues(row_clues: Sequence[Sequence[int]], col_clues: Sequence[Sequence[int]]) -> str:
    lines = ["Rows:"]
    lines.extend(f"  {index:>2}: {format_clue(clue)}" for index, clue in enumerate(row_clues))
    lines.append("Columns:")
    lines.extend(f"  {index:>2}: {format_clue(clue)}" for index, clue in enumerate(col_clues))
    return "\n".join(lines)


def pretty_print_grid(grid: Sequence[Sequence[int]], *, label: str | None = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_classification(classification: Classification, *, matches: bool | None = None, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_grid(classification.grid), file=stream)
    print(file=stream)
    print(f"Result:   {classification.kind.value}", file=stream)
    print(f"Detail:   {classification.describe()}", file=stream)
    if matches is not None:
        print(f"Matches:  {'yes' if matches else 'NO'}", file=stream)


def print_library_report(report: LibraryReport, *, stream=None) -> None:
    stream = stream or sys.stdout
    size_keys = list(dict.fromkeys(verdict.size_key for verdict in report.verdicts))
    for size_key in size_keys:
        counts = report.counts(size_key)
        print(f"=== {size_key} ===", file=stream)
        for verdict in report.verdicts:
            if verdict.size_key != size_key or verdict.ok:
                continue
            print(f"  FAIL #{verdict.index + 1} {verdict.name}: {verdict.reason}", file=stream)
        print(f"  {counts['passed']}/{counts['total']} uniquely solvable", file=stream)

    totals = report.counts()
    print(file=stream)
    print(f"TOTAL: {totals['passed']}/{totals['total']} pass", file=stream)
    if totals["failed"]:
        print(f"{totals['failed']} puzzles need fixing", file=stream)


def print_tile_reports(reports: Sequence[TileReport], *, stream=None) -> None:
    stream = stream or sys.stdout
    print(f"{'Tile':>4}  {'Pos':<7} {'Status':<7} {'Filled':>6} {'Rate':>5} {'Unknown':>7}", file=stream)
    for report in reports:
        position = f"[{report.tile_row},{report.tile_col}]"
        print(
            f"{report.number:>4}  {position:<7} {report.status.value:<7} "
            f"{report.filled:>6} {report.fill_rate * 100:>4.0f}% {report.unknowns:>7}",
            file=stream,
        )
