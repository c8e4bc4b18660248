"""Built-in hand-authored 5x5 puzzles."""

from __future__ import annotations

from typing import Dict, List

from ..core.models import PuzzleEntry

PRESET_PUZZLES: List[Dict[str, object]] = [
    {
        "name": "heart",
        "solution": [
            [0, 1, 0, 1, 0],
            [1, 1, 1, 1, 1],
            [1, 1, 1, 1, 1],
            [0, 1, 1, 1, 0],
            [0, 0, 1, 0, 0],
        ],
    },
    {
        "name": "star",
        "solution": [
            [0, 0, 1, 0, 0],
            [0, 1, 1, 1, 0],
            [1, 1, 1, 1, 1],
            [0, 1, 1, 1, 0],
            [0, 1, 0, 1, 0],
        ],
    },
    {
        "name": "smile",
        "solution": [
            [0, 1, 0, 1, 0],
            [0, 1, 0, 1, 0],
            [0, 1, 0, 0, 0],
            [1, 0, 0, 0, 1],
            [0, 1, 1, 1, 0],
        ],
    },
    {
        "name": "house",
        "solution": [
            [0, 0, 1, 0, 0],
            [0, 1, 1, 1, 0],
            [1, 1, 1, 1, 1],
            [1, 1, 0, 1, 1],
            [1, 1, 0, 1, 1],
        ],
    },
    {
        "name": "cat",
        "solution": [
            [1, 0, 0, 0, 1],
            [1, 1, 1, 1, 1],
            [1, 0, 1, 0, 1],
            [1, 1, 1, 1, 1],
            [0, 1, 0, 1, 0],
        ],
    },
]


def preset_library() -> Dict[str, List[PuzzleEntry]]:
    """Return the presets as a fresh library keyed by ``"5x5"``."""

    return {
        "5x5": [
            PuzzleEntry(name=str(p["name"]), solution=[list(row) for row in p["solution"]], size_key="5x5")
            for p in PRESET_PUZZLES
        ]
    }
