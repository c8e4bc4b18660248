"""Puzzle library helpers: copying, merging presets and applying fixes."""

from __future__ import annotations

from typing import Any, Dict, List

from ..core.models import PuzzleEntry
from ..engine.grid import clone_grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def copy_library(library: Dict[str, List[PuzzleEntry]]) -> Dict[str, List[PuzzleEntry]]:
    return {
        size_key: [
            PuzzleEntry(name=entry.name, solution=clone_grid(entry.solution), size_key=size_key)
            for entry in entries
        ]
        for size_key, entries in library.items()
    }


def apply_fixes(
    library: Dict[str, List[PuzzleEntry]],
    fixes: Dict[str, Dict[int, Dict[str, Any]]],
) -> Dict[str, List[PuzzleEntry]]:
    """Return a copy of ``library`` with repaired solutions patched in.

    A fix is skipped, with a warning, when its index is out of range or its
    name no longer matches the entry at that index.
    """

    patched = copy_library(library)
    applied = 0
    for size_key, group in fixes.items():
        entries = patched.get(size_key, [])
        for index, fix in sorted(group.items()):
            if index >= len(entries):
                LOGGER.warning("Could not find %s #%d '%s'", size_key, index + 1, fix["name"])
                continue
            entry = entries[index]
            if entry.name != fix["name"]:
                LOGGER.warning(
                    "Skipping %s #%d: expected '%s', found '%s'",
                    size_key,
                    index + 1,
                    fix["name"],
                    entry.name,
                )
                continue
            entry.solution = clone_grid(fix["solution"])
            applied += 1
            LOGGER.info("Patched %s #%d '%s'", size_key, index + 1, entry.name)
    LOGGER.info("Total patched: %d", applied)
    return patched
