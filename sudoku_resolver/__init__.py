"""Constraint propagation and backtracking solver for 9x9 Sudoku."""

from .clues import decode_clue, encode_clue, parse_any, parse_clue_text, parse_puzzle
from .grid import (
    Clue,
    GridState,
    InconsistentStateError,
    InvalidPuzzleError,
    SudokuError,
)
from .propagation import ConstraintPropagator, propagate
from .search import BacktrackingSearch, SearchOutcome, SearchStats
from .solver import SolveResult, SolverConfig, solve
from .validation import find_issues, is_valid_solution

__all__ = [
    "BacktrackingSearch",
    "Clue",
    "ConstraintPropagator",
    "GridState",
    "InconsistentStateError",
    "InvalidPuzzleError",
    "SearchOutcome",
    "SearchStats",
    "SolveResult",
    "SolverConfig",
    "SudokuError",
    "decode_clue",
    "encode_clue",
    "find_issues",
    "is_valid_solution",
    "parse_any",
    "parse_clue_text",
    "parse_puzzle",
    "propagate",
    "solve",
]
