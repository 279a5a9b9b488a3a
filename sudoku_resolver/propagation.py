"""Naked-single elimination run to a fixed point."""

from __future__ import annotations

import logging
from typing import List

from .grid import CELLS, PEERS, GridState, single_digit

log = logging.getLogger(__name__)


class ConstraintPropagator:
    """Removes each fixed digit from its peers' candidates.

    Every fixed cell is processed once. A peer left with a single candidate
    is fixed on the spot, which queues it for processing on a later pass.
    Deductions made here are never undone by the search.
    """

    def __init__(self, grid: GridState) -> None:
        self.grid = grid
        self._processed: List[bool] = [False] * 81
        self.fixed = 0
        self.passes = 0

    def run(self) -> int:
        """Propagate until a pass changes nothing; return cells newly fixed."""
        grid = self.grid
        changed = True
        while changed:
            changed = False
            self.passes += 1
            for i, (row, col) in enumerate(CELLS):
                if self._processed[i] or not grid.is_fixed(row, col):
                    continue
                self._processed[i] = True
                changed = True
                self._clear_peers(row, col, grid.value(row, col))
        log.debug("propagation fixed %d cells in %d passes", self.fixed, self.passes)
        return self.fixed

    def _clear_peers(self, row: int, col: int, digit: int) -> None:
        grid = self.grid
        for pr, pc in PEERS[(row, col)]:
            if not grid.eliminate(pr, pc, digit):
                continue
            forced = single_digit(grid.candidates(pr, pc))
            # A forced digit already present in a region means the puzzle is
            # contradictory; leave the cell for the search to reject.
            if forced and grid.can_place(pr, pc, forced):
                grid.assign(pr, pc, forced)
                self.fixed += 1


def propagate(grid: GridState) -> int:
    return ConstraintPropagator(grid).run()
