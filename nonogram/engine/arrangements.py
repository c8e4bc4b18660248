"""Enumeration of line arrangements satisfying a clue."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import EMPTY, FILLED, UNKNOWN
from ..core.exceptions import InfeasibleClueError
from ..core.models import Arrangement
from ..utils.logger import get_logger
from .clues import is_feasible, normalize_clue


LOGGER = get_logger(__name__)


def iter_arrangements(clue: Sequence[int], length: int) -> Iterator[Arrangement]:
    """Yield every 0/1 arrangement of ``clue`` in a line of ``length`` cells.

    Blocks are placed left to right with a mandatory single gap between them.
    An explicit stack replaces recursion; leftmost placements come first.
    """

    blocks = normalize_clue(clue)
    if not is_feasible(blocks, length):
        raise InfeasibleClueError(blocks, length)
    if blocks == (0,):
        yield (EMPTY,) * length
        return

    count = len(blocks)
    # min_after[i]: cells needed by the blocks after block i, gaps included.
    min_after = [0] * count
    for i in range(count - 2, -1, -1):
        min_after[i] = min_after[i + 1] + blocks[i + 1] + 1
    max_start = [length - blocks[i] - min_after[i] for i in range(count)]

    stack: List[Tuple[int, int, Arrangement]] = [(0, 0, ())]
    while stack:
        index, cursor, prefix = stack.pop()
        if index == count:
            yield prefix + (EMPTY,) * (length - cursor)
            continue
        block = blocks[index]
        last = index == count - 1
        for start in range(max_start[index], cursor - 1, -1):
            segment = prefix + (EMPTY,) * (start - cursor) + (FILLED,) * block
            if last:
                stack.append((index + 1, start + block, segment))
            else:
                stack.append((index + 1, start + block + 1, segment + (EMPTY,)))


def arrangements(clue: Sequence[int], length: int) -> Tuple[Arrangement, ...]:
    return tuple(iter_arrangements(clue, length))


def filter_candidates(
    candidates: Sequence[Arrangement], line: Sequence[int]
) -> List[Arrangement]:
    """Keep the candidates agreeing with every known cell of ``line``."""

    known = [(i, value) for i, value in enumerate(line) if value != UNKNOWN]
    if not known:
        return list(candidates)
    return [cand for cand in candidates if all(cand[i] == value for i, value in known)]


def intersect_candidates(candidates: Sequence[Arrangement]) -> List[int]:
    """Per position: the shared value of all candidates, or ``UNKNOWN``."""

    if not candidates:
        return []
    first = candidates[0]
    result = list(first)
    for i in range(len(first)):
        value = first[i]
        for cand in candidates[1:]:
            if cand[i] != value:
                result[i] = UNKNOWN
                break
    return result


class ArrangementCache:
    """Memo table of arrangements keyed by ``(clue, length)``.

    Create one per top-level call (classify, repair, generate, augment) and
    let it go out of scope afterwards.
    """

    def __init__(self) -> None:
        self._table: Dict[Tuple[Tuple[int, ...], int], Tuple[Arrangement, ...]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, clue: Sequence[int], length: int) -> Tuple[Arrangement, ...]:
        key = (normalize_clue(clue), length)
        cached = self._table.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        result = arrangements(key[0], length)
        self._table[key] = result
        return result

    def __len__(self) -> int:
        return len(self._table)

    def log_stats(self, label: Optional[str] = None) -> None:
        LOGGER.debug(
            "Arrangement cache%s: %d entries, %d hits, %d misses",
            f" ({label})" if label else "",
            len(self._table),
            self.hits,
            self.misses,
        )
