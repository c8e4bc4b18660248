"""Nonogram solvability engine.

This package exposes the public API surface via:

- ``nonogram.api``: clue computation, classification, repair, seeded
  generation and tile augmentation as plain functions.
- ``nonogram.engine.classifier.SolvabilityClassifier``: batch classification
  with a shared arrangement cache.
- ``nonogram.engine.validator.LibraryValidator``: puzzle library checks.
"""

from .api import augment_tiles, classify, compute_clues, generate, generate_puzzle, repair
from .core.constants import ClassificationKind
from .core.exceptions import InfeasibleClueError, MalformedGridError, NonogramError
from .core.models import Classification

__all__ = [
    "augment_tiles",
    "classify",
    "compute_clues",
    "generate",
    "generate_puzzle",
    "repair",
    "Classification",
    "ClassificationKind",
    "NonogramError",
    "MalformedGridError",
    "InfeasibleClueError",
]

__version__ = "0.1.0"
