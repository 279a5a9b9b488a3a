"""Grid state: cell values, candidate masks and row/column/box digit sets.

Digits are tracked as 9-bit masks, bit ``d - 1`` standing for digit ``d``.
Coordinates are 1-based throughout, matching the compact clue encoding.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

Cell = Tuple[int, int]
Rows = List[List[int]]

DIGITS: Tuple[int, ...] = tuple(range(1, 10))
ALL_DIGITS = 0x1FF
CELLS: Tuple[Cell, ...] = tuple((r, c) for r in DIGITS for c in DIGITS)


class SudokuError(Exception):
    """Base class for solver errors."""


class InvalidPuzzleError(SudokuError, ValueError):
    """Clues are out of range or contradict each other."""


class InconsistentStateError(SudokuError):
    """Grid bookkeeping disagrees with itself."""


class Clue(NamedTuple):
    row: int
    col: int
    digit: int

    def __str__(self) -> str:
        return f"r{self.row}c{self.col}={self.digit}"


def digit_mask(digit: int) -> int:
    return 1 << (digit - 1)


def mask_digits(mask: int) -> List[int]:
    """Digits present in ``mask``, ascending."""
    return [d for d in DIGITS if mask & (1 << (d - 1))]


def single_digit(mask: int) -> int:
    """Return the digit if exactly one bit is set, else 0."""
    if mask and not mask & (mask - 1):
        return mask.bit_length()
    return 0


def box_index(row: int, col: int) -> Tuple[int, int]:
    return (row - 1) // 3, (col - 1) // 3


def box_number(row: int, col: int) -> int:
    """Boxes numbered 1-9 left to right, top to bottom."""
    br, bc = box_index(row, col)
    return 3 * br + bc + 1


def box_cells(number: int) -> List[Cell]:
    br, bc = divmod(number - 1, 3)
    return [(3 * br + i + 1, 3 * bc + j + 1) for i in range(3) for j in range(3)]


def in_range(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 9


def _compute_peers() -> Dict[Cell, Tuple[Cell, ...]]:
    table: Dict[Cell, Tuple[Cell, ...]] = {}
    for row, col in CELLS:
        ps = {(row, j) for j in DIGITS}
        ps.update((i, col) for i in DIGITS)
        ps.update(box_cells(box_number(row, col)))
        ps.discard((row, col))
        table[(row, col)] = tuple(sorted(ps))
    return table


PEERS: Dict[Cell, Tuple[Cell, ...]] = _compute_peers()


def _idx(row: int, col: int) -> int:
    return (row - 1) * 9 + (col - 1)


class GridState:
    """The 81 cells of a puzzle plus the digit sets of its 27 regions.

    A cell is either fixed (``value`` is non-zero) or unfilled, in which case
    ``candidates`` gives the digits not yet ruled out. Every change to a fixed
    value goes through ``assign``/``unassign`` so the region sets stay in
    lockstep with the cells.
    """

    def __init__(self) -> None:
        self._values: List[int] = [0] * 81
        # For a fixed cell this holds the mask it had before assignment,
        # restored by unassign.
        self._masks: List[int] = [ALL_DIGITS] * 81
        self._rows: List[int] = [0] * 9
        self._cols: List[int] = [0] * 9
        self._boxes: List[int] = [0] * 9

    @classmethod
    def from_clues(cls, clues: Iterable[Tuple[int, int, int]]) -> "GridState":
        """Build a grid, rejecting clues that are out of range or conflict."""
        grid = cls()
        for raw in clues:
            try:
                clue = Clue(*raw)
            except TypeError as exc:
                raise InvalidPuzzleError(f"Clue {raw!r} is not a (row, col, digit) triple") from exc
            if not all(in_range(v) for v in clue):
                raise InvalidPuzzleError(f"Clue {tuple(clue)} is out of range 1-9")
            existing = grid.value(clue.row, clue.col)
            if existing == clue.digit:
                continue
            if existing:
                raise InvalidPuzzleError(
                    f"Conflicting clues for r{clue.row}c{clue.col}: {existing} and {clue.digit}"
                )
            region = grid.conflicting_region(*clue)
            if region:
                raise InvalidPuzzleError(
                    f"Clue {clue} repeats digit {clue.digit} already in {region}"
                )
            grid.assign(*clue)
        return grid

    @classmethod
    def from_rows(cls, rows: Rows) -> "GridState":
        if len(rows) != 9 or any(len(row) != 9 for row in rows):
            raise InvalidPuzzleError("Grid must be 9 rows of 9 cells")
        return cls.from_clues(
            Clue(r, c, rows[r - 1][c - 1]) for r, c in CELLS if rows[r - 1][c - 1]
        )

    def value(self, row: int, col: int) -> int:
        return self._values[_idx(row, col)]

    def is_fixed(self, row: int, col: int) -> bool:
        return self._values[_idx(row, col)] != 0

    def candidates(self, row: int, col: int) -> int:
        """Candidate mask of an unfilled cell; 0 for a fixed cell."""
        i = _idx(row, col)
        return 0 if self._values[i] else self._masks[i]

    def used(self, row: int, col: int) -> int:
        """Digits already placed in the cell's row, column or box."""
        br, bc = box_index(row, col)
        return self._rows[row - 1] | self._cols[col - 1] | self._boxes[3 * br + bc]

    def allowed(self, row: int, col: int) -> int:
        return self.candidates(row, col) & ~self.used(row, col)

    def can_place(self, row: int, col: int, digit: int) -> bool:
        return not self.used(row, col) & digit_mask(digit)

    def conflicting_region(self, row: int, col: int, digit: int) -> Optional[str]:
        bit = digit_mask(digit)
        if self._rows[row - 1] & bit:
            return f"row {row}"
        if self._cols[col - 1] & bit:
            return f"column {col}"
        br, bc = box_index(row, col)
        if self._boxes[3 * br + bc] & bit:
            return f"box {box_number(row, col)}"
        return None

    def assign(self, row: int, col: int, digit: int) -> None:
        """Fix an unfilled cell; the caller checks ``can_place`` first."""
        i = _idx(row, col)
        if self._values[i]:
            raise InconsistentStateError(f"r{row}c{col} is already {self._values[i]}")
        bit = digit_mask(digit)
        br, bc = box_index(row, col)
        self._rows[row - 1] |= bit
        self._cols[col - 1] |= bit
        self._boxes[3 * br + bc] |= bit
        self._values[i] = digit

    def unassign(self, row: int, col: int) -> int:
        """Undo ``assign`` and return the digit that was removed."""
        i = _idx(row, col)
        digit = self._values[i]
        if not digit:
            raise InconsistentStateError(f"r{row}c{col} is not filled")
        bit = ~digit_mask(digit)
        br, bc = box_index(row, col)
        self._rows[row - 1] &= bit
        self._cols[col - 1] &= bit
        self._boxes[3 * br + bc] &= bit
        self._values[i] = 0
        return digit

    def eliminate(self, row: int, col: int, digit: int) -> bool:
        """Drop ``digit`` from an unfilled cell's candidates. True if it changed."""
        i = _idx(row, col)
        bit = digit_mask(digit)
        if self._values[i] or not self._masks[i] & bit:
            return False
        self._masks[i] &= ~bit
        return True

    def is_complete(self) -> bool:
        return all(self._values)

    def filled_count(self) -> int:
        return sum(1 for v in self._values if v)

    def empty_cells(self) -> Iterator[Cell]:
        for row, col in CELLS:
            if not self._values[_idx(row, col)]:
                yield row, col

    def next_empty(self, start: int = 0) -> Optional[Tuple[int, Cell]]:
        """First unfilled cell in row-major order at or after flat index ``start``."""
        for i in range(start, 81):
            if not self._values[i]:
                return i, CELLS[i]
        return None

    def to_rows(self) -> Rows:
        return [self._values[r * 9 : r * 9 + 9] for r in range(9)]

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Full internal state, for equality checks."""
        return (
            tuple(self._values),
            tuple(self.candidates(r, c) for r, c in CELLS),
            tuple(self._rows),
            tuple(self._cols),
            tuple(self._boxes),
        )

    def copy(self) -> "GridState":
        other = GridState()
        other._values = self._values[:]
        other._masks = self._masks[:]
        other._rows = self._rows[:]
        other._cols = self._cols[:]
        other._boxes = self._boxes[:]
        return other
