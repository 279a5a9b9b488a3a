"""Top-level solve call: clues in, a completed grid or a failure status out."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .grid import GridState, InconsistentStateError, Rows
from .propagation import propagate
from .search import BacktrackingSearch, SearchOutcome, SearchStats, Trace
from .validation import is_valid_solution

log = logging.getLogger(__name__)

SOLVED = "solved"
NO_SOLUTION = "no-solution"
ABORTED = "aborted"


@dataclass
class SolverConfig:
    propagate: bool = True
    validate: bool = True
    max_steps: Optional[int] = None


@dataclass
class SolveResult:
    status: str
    solution: Optional[Rows]
    clues: int
    propagated: int = 0
    stats: SearchStats = field(default_factory=SearchStats)
    duration_ms: int = 0
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.status == SOLVED


def solve(
    clues: Iterable[Tuple[int, int, int]],
    config: Optional[SolverConfig] = None,
    trace: Optional[Trace] = None,
) -> SolveResult:
    """Solve the puzzle described by ``clues``.

    Raises ``InvalidPuzzleError`` for malformed or conflicting clues. An
    unsatisfiable puzzle is reported through ``status``, not an exception.
    """
    config = config or SolverConfig()
    start = time.perf_counter()
    grid = GridState.from_clues(clues)
    given = grid.filled_count()
    log.info("solving puzzle with %d clues", given)

    propagated = propagate(grid) if config.propagate else 0
    search = BacktrackingSearch(
        grid, max_steps=config.max_steps, validate=config.validate, trace=trace
    )
    outcome = search.run()
    duration_ms = int((time.perf_counter() - start) * 1000)

    if outcome is SearchOutcome.ABORTED:
        log.info("gave up after %d assignments", search.stats.assignments)
        return SolveResult(
            status=ABORTED,
            solution=None,
            clues=given,
            propagated=propagated,
            stats=search.stats,
            duration_ms=duration_ms,
            message=f"Step limit of {config.max_steps} reached.",
        )
    if outcome is SearchOutcome.EXHAUSTED:
        log.info("no solution after %d assignments", search.stats.assignments)
        return SolveResult(
            status=NO_SOLUTION,
            solution=None,
            clues=given,
            propagated=propagated,
            stats=search.stats,
            duration_ms=duration_ms,
            message="No solution exists for these clues.",
        )

    solution = grid.to_rows()
    if config.validate and not is_valid_solution(solution):
        raise InconsistentStateError("solved grid fails validation")
    log.info(
        "solved in %d ms (%d propagated, %d assignments)",
        duration_ms,
        propagated,
        search.stats.assignments,
    )
    return SolveResult(
        status=SOLVED,
        solution=solution,
        clues=given,
        propagated=propagated,
        stats=search.stats,
        duration_ms=duration_ms,
        message="Solved successfully.",
    )
