"""JSON readers and writers for grids, puzzle libraries and fix sets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ..core.exceptions import PuzzleFileError
from ..core.models import Grid, PuzzleEntry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

GRID_KEYS = ("solution", "grid", "picture")


def _read_json(path: Path | str) -> Any:
    source = Path(path)
    if not source.exists():
        raise PuzzleFileError(f"Missing puzzle file: {source}")
    try:
        return json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PuzzleFileError(f"Invalid JSON in {source}: {exc}") from exc


def _write_json(path: Path | str, payload: Any) -> Path:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return destination


def parse_grid(payload: Any, label: str = "grid") -> Grid:
    """Accept a list of rows or an object holding one under a known key."""

    if isinstance(payload, dict):
        for key in GRID_KEYS:
            if key in payload:
                payload = payload[key]
                break
        else:
            raise PuzzleFileError(f"{label}: expected one of {', '.join(GRID_KEYS)}")
    if not isinstance(payload, list) or not all(isinstance(row, list) for row in payload):
        raise PuzzleFileError(f"{label}: grid must be a list of rows")
    try:
        return [[int(value) for value in row] for row in payload]
    except (TypeError, ValueError) as exc:
        raise PuzzleFileError(f"{label}: non-integer cell value ({exc})") from exc


def read_grid(path: Path | str) -> Grid:
    return parse_grid(_read_json(path), label=str(path))


def write_grid(path: Path | str, grid: Grid) -> Path:
    return _write_json(path, grid)


def read_library(path: Path | str) -> Dict[str, List[PuzzleEntry]]:
    """Load ``{"5x5": [{"name": ..., "solution": [...]}, ...], ...}``."""

    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise PuzzleFileError(f"{path}: library must map size keys to puzzle lists")
    library: Dict[str, List[PuzzleEntry]] = {}
    for size_key, puzzles in payload.items():
        if not isinstance(puzzles, list):
            raise PuzzleFileError(f"{path}: section '{size_key}' must be a list")
        entries = []
        for index, puzzle in enumerate(puzzles):
            label = f"{path}:{size_key}#{index + 1}"
            name = puzzle.get("name", f"{size_key} #{index + 1}") if isinstance(puzzle, dict) else f"{size_key} #{index + 1}"
            entries.append(PuzzleEntry(name=name, solution=parse_grid(puzzle, label), size_key=size_key))
        library[size_key] = entries
    LOGGER.info(
        "Loaded %d puzzles in %d sections from %s",
        sum(len(entries) for entries in library.values()),
        len(library),
        path,
    )
    return library


def library_to_jsonable(library: Dict[str, List[PuzzleEntry]]) -> Dict[str, List[Dict[str, Any]]]:
    return {
        size_key: [{"name": entry.name, "solution": entry.solution} for entry in entries]
        for size_key, entries in library.items()
    }


def write_library(path: Path | str, library: Dict[str, List[PuzzleEntry]]) -> Path:
    return _write_json(path, library_to_jsonable(library))


def read_fixes(path: Path | str) -> Dict[str, Dict[int, Dict[str, Any]]]:
    """Load a fixes file; JSON object keys are converted back to indices."""

    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise PuzzleFileError(f"{path}: fixes must map size keys to index maps")
    try:
        return {
            size_key: {
                int(index): {"name": fix["name"], "solution": parse_grid(fix, f"{path}:{size_key}#{index}")}
                for index, fix in group.items()
            }
            for size_key, group in payload.items()
        }
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise PuzzleFileError(f"{path}: malformed fix entry ({exc})") from exc


def write_fixes(path: Path | str, fixes: Dict[str, Dict[int, Dict[str, Any]]]) -> Path:
    payload = {
        size_key: {str(index): fix for index, fix in sorted(group.items())}
        for size_key, group in fixes.items()
    }
    return _write_json(path, payload)
