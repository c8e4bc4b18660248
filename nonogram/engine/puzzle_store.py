"""Persistent puzzle document store.

Every generation, repair or augmentation the CLI runs can be saved as a JSON
document under ``local_db/puzzles/``. Documents hold the grid, its clues and
a few stats so a puzzle database can be rebuilt from them.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.models import AugmentationResult, GenerationResult, Grid, RepairResult
from ..utils.logger import get_logger
from .clues import compute_clues
from .grid import count_filled


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/puzzles")


class PuzzleStore:
    """Save engine results as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    def save_generation(self, result: GenerationResult) -> str:
        doc = self._base_doc("degraded" if result.exhausted else "success", "generation")
        doc.update(
            {
                "seed_text": result.seed_text,
                "base_seed": result.base_seed,
                "seed": result.seed,
                "attempts": result.attempts,
                "exhausted": result.exhausted,
                **self._grid_section(result.grid),
            }
        )
        return self._write(doc)

    def save_repair(self, name: str, original: Grid, result: Optional[RepairResult]) -> str:
        doc = self._base_doc("success" if result is not None else "failed", "repair")
        doc["name"] = name
        doc["original"] = original
        if result is not None:
            doc["flips"] = [list(cell) for cell in result.flips]
            doc.update(self._grid_section(result.grid))
        return self._write(doc)

    def save_augmentation(self, name: str, result: AugmentationResult) -> str:
        status = "success" if not result.unresolved else "partial"
        doc = self._base_doc(status, "augmentation")
        doc["name"] = name
        doc["augmented_tiles"] = [
            {
                "tile": [aug.tile_row, aug.tile_col],
                "strategy": aug.strategy,
                "cells": [list(cell) for cell in aug.cells],
            }
            for aug in result.augmented
        ]
        doc["unresolved_tiles"] = [list(tile) for tile in result.unresolved]
        doc["grid"] = result.picture
        return self._write(doc)

    def load(self, doc_id: str) -> Dict[str, Any]:
        path = self.store_dir / f"{doc_id}.json"
        return json.loads(path.read_text(encoding="utf-8"))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    def _base_doc(self, status: str, kind: str) -> Dict[str, Any]:
        return {
            "id": self._new_id(),
            "created_at": datetime.now(timezone.utc).isoformat(),
            "kind": kind,
            "status": status,
        }

    @staticmethod
    def _grid_section(grid: Grid) -> Dict[str, Any]:
        row_clues, col_clues = compute_clues(grid)
        total = len(grid) * len(grid[0])
        filled = count_filled(grid)
        return {
            "grid": grid,
            "row_clues": row_clues,
            "col_clues": col_clues,
            "stats": {
                "rows": len(grid),
                "cols": len(grid[0]),
                "filled_cells": filled,
                "fill_rate": round(filled / total, 3) if total else 0.0,
            },
        }

    def _write(self, doc: Dict[str, Any]) -> str:
        path = self.store_dir / f"{doc['id']}.json"
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Puzzle %s saved: %s (%s)", doc["kind"], doc["id"], doc["status"])
        return doc["id"]

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"
