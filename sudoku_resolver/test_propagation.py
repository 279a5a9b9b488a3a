"""Tests for naked-single elimination."""

from . import clues, propagation
from .grid import CELLS, Clue, GridState, digit_mask

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def _solution_value(row, col):
    return int(SOLUTION[(row - 1) * 9 + (col - 1)])


def test_deductions_agree_with_known_solution():
    state = GridState.from_clues(clues.parse_puzzle(PUZZLE))
    given = state.filled_count()
    fixed = propagation.propagate(state)
    assert fixed > 0
    assert state.filled_count() == given + fixed
    for row, col in CELLS:
        if state.is_fixed(row, col):
            assert state.value(row, col) == _solution_value(row, col)
        else:
            assert state.candidates(row, col) & digit_mask(_solution_value(row, col))


def test_running_twice_changes_nothing():
    state = GridState.from_clues(clues.parse_puzzle(PUZZLE))
    propagation.propagate(state)
    once = state.snapshot()
    assert propagation.propagate(state) == 0
    assert state.snapshot() == once


def test_peers_lose_fixed_digit():
    state = GridState.from_clues([Clue(5, 5, 3)])
    propagation.propagate(state)
    assert not state.candidates(5, 1) & digit_mask(3)
    assert not state.candidates(9, 5) & digit_mask(3)
    assert not state.candidates(6, 6) & digit_mask(3)
    assert state.candidates(1, 1) & digit_mask(3)


def test_row_missing_one_digit_is_filled():
    row = [Clue(1, c, d) for c, d in zip(range(1, 9), [1, 2, 3, 4, 5, 6, 7, 8])]
    state = GridState.from_clues(row)
    assert propagation.propagate(state) >= 1
    assert state.value(1, 9) == 9


def test_contradiction_leaves_cell_without_candidates():
    givens = [Clue(1, c, c) for c in range(1, 9)] + [Clue(5, 9, 9)]
    state = GridState.from_clues(givens)
    propagation.propagate(state)
    assert not state.is_fixed(1, 9)
    assert state.candidates(1, 9) == 0
