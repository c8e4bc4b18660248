"""Batch verification of puzzle libraries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..core.constants import VerdictStatus
from ..core.models import PuzzleEntry, PuzzleVerdict
from ..utils.logger import get_logger
from .classifier import SolvabilityClassifier, SolverConfig
from .grid import mono_equal


LOGGER = get_logger(__name__)


@dataclass
class LibraryReport:
    verdicts: List[PuzzleVerdict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(verdict.ok for verdict in self.verdicts)

    @property
    def failures(self) -> List[PuzzleVerdict]:
        return [verdict for verdict in self.verdicts if not verdict.ok]

    def counts(self, size_key: Optional[str] = None) -> Dict[str, int]:
        selected = [v for v in self.verdicts if size_key is None or v.size_key == size_key]
        passed = sum(1 for v in selected if v.ok)
        return {"total": len(selected), "passed": passed, "failed": len(selected) - passed}


class LibraryValidator:
    """Checks that every puzzle is reproduced by line logic from its own clues."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config

    def verify_entry(
        self, classifier: SolvabilityClassifier, entry: PuzzleEntry, index: int
    ) -> PuzzleVerdict:
        verdict = PuzzleVerdict(size_key=entry.size_key, index=index, name=entry.name,
                                status=VerdictStatus.UNIQUE)
        classification = classifier.classify_grid(entry.solution)
        verdict.iterations = classification.iterations
        verdict.unknowns = classification.unknown_count
        if classification.is_solved:
            if not mono_equal(classification.grid, entry.solution):
                verdict.status = VerdictStatus.MISMATCH
                verdict.reason = "solution mismatch"
        elif classification.is_contradiction:
            verdict.status = VerdictStatus.CONTRADICTION
            verdict.reason = classification.describe()
        else:
            verdict.status = VerdictStatus.AMBIGUOUS
            verdict.reason = f"ambiguous ({classification.unknown_count} unknowns)"
        return verdict

    def verify(
        self,
        library: Dict[str, List[PuzzleEntry]],
        size_keys: Optional[Sequence[str]] = None,
    ) -> LibraryReport:
        report = LibraryReport()
        classifier = SolvabilityClassifier(self.config)
        for size_key in size_keys or list(library):
            entries = library.get(size_key)
            if entries is None:
                LOGGER.warning("Library has no '%s' section", size_key)
                continue
            for index, entry in enumerate(entries):
                verdict = self.verify_entry(classifier, entry, index)
                report.verdicts.append(verdict)
                if verdict.ok:
                    LOGGER.debug("%s #%d %s: unique (%d passes)", size_key, index + 1,
                                 entry.name, verdict.iterations)
                else:
                    LOGGER.warning("%s #%d %s: %s", size_key, index + 1, entry.name, verdict.reason)
            counts = report.counts(size_key)
            LOGGER.info("%s: %d/%d uniquely solvable by line solving", size_key,
                        counts["passed"], counts["total"])
        classifier.close()
        return report
