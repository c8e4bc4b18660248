"""CLI entrypoint for the nonogram solvability engine."""

from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from nonogram.core.exceptions import NonogramError
from nonogram.data.library import apply_fixes
from nonogram.data.presets import preset_library
from nonogram.engine.classifier import SolverConfig, classify_grid, verify_matches
from nonogram.engine.clues import compute_clues
from nonogram.engine.generator import DailyPuzzle, DeterministicGenerator, GeneratorConfig, today_str
from nonogram.engine.puzzle_store import PuzzleStore
from nonogram.engine.repair import PuzzleRepairer, RepairConfig, repair_library
from nonogram.engine.tiles import AugmentConfig, TileAugmenter, summarize_tiles, verify_tiles
from nonogram.engine.validator import LibraryValidator
from nonogram.io.grid_files import read_fixes, read_grid, read_library, write_fixes, write_grid, write_library
from nonogram.utils.logger import configure_logging, get_logger
from nonogram.utils.pretty import (
    format_clues,
    pretty_print_grid,
    print_classification,
    print_library_report,
    print_tile_reports,
)

LOGGER = get_logger("nonogram.cli")

REPORT_FIELDS = ["size_key", "index", "name", "status", "unknowns", "iterations", "reason"]


def _add_tile_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("picture", type=Path, help="Picture JSON file (list of rows or {'picture': ...})")
    parser.add_argument("--tile-rows", type=int, required=True, help="Number of tile rows")
    parser.add_argument("--tile-cols", type=int, required=True, help="Number of tile columns")
    parser.add_argument("--tile-size", type=int, default=5, help="Tile edge length in cells (default 5)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify, repair, generate and augment nonogram puzzles",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--engine-log-level",
        type=str,
        default=None,
        help="Separate level for the nonogram engine loggers, e.g. DEBUG for pass traces",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Persist results as JSON documents in this directory (e.g. local_db/puzzles)",
    )
    parser.add_argument(
        "--max-passes",
        type=int,
        default=SolverConfig.max_passes,
        help="Propagation pass cap (default 200)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    clues = subparsers.add_parser("clues", help="Print the row and column clues of a grid")
    clues.add_argument("grid", type=Path, help="Grid JSON file")

    classify = subparsers.add_parser("classify", help="Classify a grid's own clues")
    classify.add_argument("grid", type=Path, help="Grid JSON file")

    verify = subparsers.add_parser("verify", help="Check every puzzle of a library")
    verify.add_argument(
        "library",
        type=Path,
        nargs="?",
        help="Library JSON file (the built-in presets when omitted)",
    )
    verify.add_argument("--sizes", nargs="+", metavar="SIZE", help="Size keys to check, e.g. 5x5 10x10")
    verify.add_argument("--report", type=Path, help="Write a TSV report of every verdict")

    repair = subparsers.add_parser("repair", help="Find a 1- or 2-flip line-solvable variant")
    repair.add_argument("grid", type=Path, nargs="?", help="Grid JSON file")
    repair.add_argument("--library", type=Path, help="Repair every failing puzzle of a library")
    repair.add_argument("--sizes", nargs="+", metavar="SIZE", help="Size keys to repair (library mode)")
    repair.add_argument("--fixes", type=Path, help="Apply an existing fixes file instead of searching")
    repair.add_argument("--fixes-out", type=Path, help="Write the fixes mapping to this file")
    repair.add_argument("--apply", action="store_true", help="Rewrite the library file with the fixes")
    repair.add_argument("--fill-value", type=int, default=1, help="Value for cells flipped to filled")
    repair.add_argument("--output", type=Path, help="Write the repaired grid here (grid mode)")

    daily = subparsers.add_parser("daily", help="Generate the seeded daily puzzle")
    daily.add_argument("--date", type=str, default=None, help="Seed date YYYY-MM-DD (default today)")
    daily.add_argument("--size", type=int, default=10, help="Grid size (default 10)")
    daily.add_argument("--output", type=Path, help="Optional path to JSON output")

    tiles = subparsers.add_parser("tiles", help="Verify each tile of a composite picture")
    _add_tile_arguments(tiles)

    augment = subparsers.add_parser("augment", help="Make every tile of a picture line-solvable")
    _add_tile_arguments(augment)
    augment.add_argument("--fill-color", type=int, default=1, help="Colour for added cells")
    augment.add_argument("--no-bar-pairs", action="store_true", help="Only try single bars and the cross")
    augment.add_argument("--output", type=Path, help="Write the augmented picture here")
    return parser


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------
def cmd_clues(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    grid = read_grid(args.grid)
    row_clues, col_clues = compute_clues(grid)
    print(format_clues(row_clues, col_clues))
    return 0


def cmd_classify(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    grid = read_grid(args.grid)
    classification = classify_grid(grid, config=solver)
    matches = verify_matches(classification, grid)
    print_classification(classification, matches=matches)
    return 0 if matches else 1


def _write_report(path: Path, report) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, delimiter="\t", fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for verdict in report.verdicts:
            writer.writerow(
                {
                    "size_key": verdict.size_key,
                    "index": verdict.index + 1,
                    "name": verdict.name,
                    "status": verdict.status.value,
                    "unknowns": verdict.unknowns,
                    "iterations": verdict.iterations,
                    "reason": verdict.reason,
                }
            )
    LOGGER.info("Report written to %s", path)


def cmd_verify(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    library = read_library(args.library) if args.library else preset_library()
    report = LibraryValidator(solver).verify(library, args.sizes)
    print_library_report(report)
    if args.report:
        _write_report(args.report, report)
    return 0 if report.ok else 1


def _repair_library(args: argparse.Namespace, config: RepairConfig) -> int:
    library = read_library(args.library)
    if args.fixes:
        fixes = read_fixes(args.fixes)
    else:
        fixes = repair_library(library, args.sizes, config)
    if args.fixes_out:
        write_fixes(args.fixes_out, fixes)
        LOGGER.info("Fixes written to %s", args.fixes_out)
    if args.apply:
        write_library(args.library, apply_fixes(library, fixes))
        LOGGER.info("Library %s updated", args.library)
    print(json.dumps({key: {str(i): fix for i, fix in group.items()} for key, group in fixes.items()},
                     ensure_ascii=False))
    return 0


def cmd_repair(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    config = RepairConfig(fill_value=args.fill_value, solver=solver)
    if args.library:
        return _repair_library(args, config)

    grid = read_grid(args.grid)
    name = args.grid.stem
    result = PuzzleRepairer(config).repair(grid, name=name)
    if store is not None:
        store.save_repair(name, grid, result)
    if result is None:
        print(f"No 1- or 2-flip repair found for '{name}'")
        return 1
    pretty_print_grid(result.grid, label=f"Flips: {result.flips or 'none'}")
    if args.output:
        write_grid(args.output, result.grid)
    return 0


def cmd_daily(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    date_str = args.date or today_str()
    result = DeterministicGenerator(GeneratorConfig(size=args.size, solver=solver)).generate(date_str)
    puzzle = DailyPuzzle.from_result(result)
    payload: Dict[str, Any] = {
        "date": puzzle.date_str,
        "name": puzzle.name,
        "size": puzzle.size,
        "solution": puzzle.solution,
        "row_clues": puzzle.row_clues,
        "col_clues": puzzle.col_clues,
        "total_filled": puzzle.total_filled,
        "verified": puzzle.verified,
    }
    if store is not None:
        store.save_generation(result)
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        pretty_print_grid(puzzle.solution, label=f"Daily puzzle {date_str}")
        print(output_text)
    return 0


def cmd_tiles(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    picture = read_grid(args.picture)
    reports = verify_tiles(picture, args.tile_rows, args.tile_cols, args.tile_size, config=solver)
    print_tile_reports(reports)
    summary = summarize_tiles(reports)
    print()
    print(", ".join(f"{status}: {count}" for status, count in summary.items()))
    return 0 if summary["failed"] == 0 else 1


def cmd_augment(args: argparse.Namespace, solver: SolverConfig, store: Optional[PuzzleStore]) -> int:
    picture = read_grid(args.picture)
    config = AugmentConfig(
        tile_rows=args.tile_rows,
        tile_cols=args.tile_cols,
        tile_size=args.tile_size,
        fill_color=args.fill_color,
        try_bar_pairs=not args.no_bar_pairs,
        solver=solver,
    )
    result = TileAugmenter(config).augment(picture)
    if store is not None:
        store.save_augmentation(args.picture.stem, result)
    pretty_print_grid(result.picture)
    for aug in result.augmented:
        print(f"Tile [{aug.tile_row},{aug.tile_col}]: {aug.strategy} ({len(aug.cells)} cells)")
    for tile_row, tile_col in result.unresolved:
        print(f"Tile [{tile_row},{tile_col}]: unresolved")
    if args.output:
        write_grid(args.output, result.picture)
    return 0 if not result.unresolved else 1


COMMANDS = {
    "clues": cmd_clues,
    "classify": cmd_classify,
    "verify": cmd_verify,
    "repair": cmd_repair,
    "daily": cmd_daily,
    "tiles": cmd_tiles,
    "augment": cmd_augment,
}


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    engine_level = (
        getattr(logging, args.engine_log_level.upper(), None) if args.engine_log_level else None
    )
    configure_logging(level, engine_level=engine_level)

    if args.command == "repair":
        if (args.grid is None) == (args.library is None):
            parser.error("repair needs exactly one of GRID or --library")
        if args.grid and (args.fixes or args.apply or args.fixes_out):
            parser.error("--fixes, --fixes-out and --apply require --library")

    solver = SolverConfig(max_passes=args.max_passes)
    store = PuzzleStore(args.store) if args.store else None
    try:
        return COMMANDS[args.command](args, solver, store)
    except NonogramError as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
