"""Depth-first search with chronological backtracking.

Cells are visited in row-major order and candidates are tried in ascending
digit order, so the first solution found is always the same one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional

from .grid import Cell, GridState, InconsistentStateError, mask_digits
from .validation import is_valid_solution

log = logging.getLogger(__name__)

# Called as trace(event, row, col, digit) with event "assign" or "unassign".
Trace = Callable[[str, int, int, int], None]


class SearchOutcome(str, Enum):
    FOUND = "found"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"


@dataclass
class SearchStats:
    assignments: int = 0
    backtracks: int = 0
    max_depth: int = 0


@dataclass
class _Frame:
    index: int
    row: int
    col: int
    candidates: Iterator[int]
    digit: int = 0


class BacktrackingSearch:
    """Fill the remaining cells of ``grid`` in place.

    The traversal keeps an explicit stack of frames, one per tentatively
    filled cell, instead of recursing. ``max_steps`` caps the number of
    assignments; when it runs out every tentative assignment is rolled back
    and the outcome is ``ABORTED``.
    """

    def __init__(
        self,
        grid: GridState,
        max_steps: Optional[int] = None,
        validate: bool = True,
        trace: Optional[Trace] = None,
    ) -> None:
        self.grid = grid
        self.max_steps = max_steps
        self.validate = validate
        self.trace = trace
        self.stats = SearchStats()

    def run(self) -> SearchOutcome:
        grid = self.grid
        first = grid.next_empty()
        if first is None:
            return self._accept()
        dead = dead_cell(grid)
        if dead is not None:
            log.debug("r%dc%d has no candidates; nothing to search", *dead)
            return SearchOutcome.EXHAUSTED
        stack: List[_Frame] = [self._frame(*first)]
        while stack:
            self.stats.max_depth = max(self.stats.max_depth, len(stack))
            frame = stack[-1]
            if frame.digit:
                self._unassign(frame)
            digit = next(frame.candidates, 0)
            if not digit:
                stack.pop()
                self.stats.backtracks += 1
                continue
            if self.max_steps is not None and self.stats.assignments >= self.max_steps:
                self._rollback(stack)
                log.debug("search aborted after %d assignments", self.stats.assignments)
                return SearchOutcome.ABORTED
            self._assign(frame, digit)
            following = grid.next_empty(frame.index + 1)
            if following is None:
                return self._accept()
            stack.append(self._frame(*following))
        log.debug(
            "search exhausted after %d assignments, %d backtracks",
            self.stats.assignments,
            self.stats.backtracks,
        )
        return SearchOutcome.EXHAUSTED

    def _frame(self, index: int, cell: Cell) -> _Frame:
        row, col = cell
        digits = mask_digits(self.grid.allowed(row, col))
        return _Frame(index, row, col, iter(digits))

    def _assign(self, frame: _Frame, digit: int) -> None:
        self.grid.assign(frame.row, frame.col, digit)
        frame.digit = digit
        self.stats.assignments += 1
        if self.trace:
            self.trace("assign", frame.row, frame.col, digit)

    def _unassign(self, frame: _Frame) -> None:
        digit = self.grid.unassign(frame.row, frame.col)
        frame.digit = 0
        if self.trace:
            self.trace("unassign", frame.row, frame.col, digit)

    def _rollback(self, stack: List[_Frame]) -> None:
        while stack:
            frame = stack.pop()
            if frame.digit:
                self._unassign(frame)

    def _accept(self) -> SearchOutcome:
        if self.validate and not is_valid_solution(self.grid.to_rows()):
            raise InconsistentStateError("search produced a grid that fails validation")
        log.debug(
            "search found a solution after %d assignments, %d backtracks",
            self.stats.assignments,
            self.stats.backtracks,
        )
        return SearchOutcome.FOUND


def dead_cell(grid: GridState) -> Optional[Cell]:
    """First unfilled cell with no digit left to try, if any."""
    for row, col in grid.empty_cells():
        if not grid.allowed(row, col):
            return row, col
    return None


def search_recursive(grid: GridState, trace: Optional[Trace] = None) -> bool:
    """Recursive form of the same traversal; emits the same trace as ``BacktrackingSearch``."""
    if dead_cell(grid) is not None:
        return False
    return _descend(grid, trace, 0)


def _descend(grid: GridState, trace: Optional[Trace], start: int) -> bool:
    found = grid.next_empty(start)
    if found is None:
        return True
    index, (row, col) = found
    for digit in mask_digits(grid.allowed(row, col)):
        grid.assign(row, col, digit)
        if trace:
            trace("assign", row, col, digit)
        if _descend(grid, trace, index + 1):
            return True
        grid.unassign(row, col)
        if trace:
            trace("unassign", row, col, digit)
    return False
