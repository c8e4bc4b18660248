"""Convenience entrypoint with predefined settings for debugging the solver.

Usage in a Python console (Jupyter-style)::

    import debug_main
    state = debug_main.prepare_state(puzzle="heart")
    debug_main.step_pass(state)
    debug_main.step_pass(state)
    debug_main.step_classify(state)
    debug_main.step_repair(state)

Call :func:`run_debug` for a one-liner, or execute the functions above one by
one to watch the grid narrow pass by pass.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from nonogram.core.models import Grid, PassSnapshot
from nonogram.data.presets import PRESET_PUZZLES, preset_library
from nonogram.engine.arrangements import ArrangementCache
from nonogram.engine.classifier import SolverConfig, classify_grid, verify_matches
from nonogram.engine.clues import compute_clues
from nonogram.engine.propagator import ConstraintPropagator
from nonogram.engine.repair import PuzzleRepairer, RepairConfig
from nonogram.engine.validator import LibraryValidator
from nonogram.utils.logger import configure_logging
from nonogram.utils.pretty import format_clues, pretty_print_grid, print_classification

DEFAULT_DEBUG_ARGS: Dict[str, Any] = {
    "puzzle": "heart",      # preset name, ignored when "grid" is given
    "grid": None,           # explicit solution grid
    "max_passes": 200,
    "log_level": logging.DEBUG,
}

LOGGER = logging.getLogger(__name__)


def _preset_grid(name: str) -> Grid:
    for preset in PRESET_PUZZLES:
        if preset["name"] == name:
            return [list(row) for row in preset["solution"]]
    raise KeyError(f"Unknown preset puzzle '{name}'")


def prepare_state(**overrides: Any) -> Dict[str, Any]:
    """Return a mutable state dictionary used by the step helpers."""

    args = {**DEFAULT_DEBUG_ARGS, **overrides}
    configure_logging(logging.INFO, engine_level=args["log_level"])
    grid = args["grid"] if args["grid"] is not None else _preset_grid(args["puzzle"])
    row_clues, col_clues = compute_clues(grid)
    cache = ArrangementCache()
    propagator = ConstraintPropagator(
        row_clues, col_clues, len(grid), cache=cache, max_passes=args["max_passes"]
    )
    LOGGER.info("Prepared %dx%d puzzle '%s'", len(grid), len(grid), args["puzzle"])
    print(format_clues(row_clues, col_clues))
    return {
        "args": args,
        "grid": grid,
        "row_clues": row_clues,
        "col_clues": col_clues,
        "cache": cache,
        "propagator": propagator,
        "passes": iter(propagator.iter_passes()),
        "snapshots": [],
        "classification": None,
        "repair": None,
    }


def step_pass(state: Dict[str, Any]) -> Optional[PassSnapshot]:
    """Run one rows-then-columns pass and print the partial grid."""

    snapshot = next(state["passes"], None)
    if snapshot is None:
        LOGGER.info("Propagation finished after %d passes", len(state["snapshots"]))
        return None
    state["snapshots"].append(snapshot)
    pretty_print_grid(
        snapshot.grid,
        label=f"Pass {snapshot.index}: {snapshot.unknown_count} unknown, progress={snapshot.progress}",
    )
    return snapshot


def step_classify(state: Dict[str, Any]):
    solver = SolverConfig(max_passes=state["args"]["max_passes"])
    classification = classify_grid(state["grid"], cache=state["cache"], config=solver)
    state["classification"] = classification
    print_classification(classification, matches=verify_matches(classification, state["grid"]))
    return classification


def step_repair(state: Dict[str, Any]):
    solver = SolverConfig(max_passes=state["args"]["max_passes"])
    result = PuzzleRepairer(RepairConfig(solver=solver)).repair(state["grid"], name=state["args"]["puzzle"])
    state["repair"] = result
    if result is not None:
        pretty_print_grid(result.grid, label=f"Repaired with flips {result.flips or 'none'}")
    return result


def load_verdict_dataframe(library: Optional[Dict[str, List[Any]]] = None, *, limit: int | None = 10):
    """Return library verdicts as a pandas DataFrame.

    ``limit`` controls how many rows are printed (``None`` disables the preview).
    """

    try:
        import pandas as pd
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "Viewing verdicts requires pandas. Install it via 'pip install nonogram-engine[debug]' or 'pip install pandas'."
        ) from exc

    report = LibraryValidator().verify(library or preset_library())
    df = pd.DataFrame(
        [
            {
                "size_key": verdict.size_key,
                "index": verdict.index + 1,
                "name": verdict.name,
                "status": verdict.status.value,
                "unknowns": verdict.unknowns,
                "iterations": verdict.iterations,
            }
            for verdict in report.verdicts
        ]
    )
    if limit is not None:
        print(df.head(limit))
    return df


def run_debug(**overrides: Any):
    """Step a puzzle to its fixpoint, classify it and repair it if needed."""

    state = prepare_state(**overrides)
    while step_pass(state) is not None:
        pass
    classification = step_classify(state)
    if not verify_matches(classification, state["grid"]):
        step_repair(state)
    return state


def main() -> None:  # pragma: no cover - manual helper
    for preset in PRESET_PUZZLES:
        state = run_debug(puzzle=preset["name"], log_level=logging.INFO)
        print(f"{preset['name']}: {state['classification'].describe()}")


if __name__ == "__main__":
    main()
