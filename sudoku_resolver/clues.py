"""Read clues from compact integers, puzzle strings or free text."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Union

from .grid import CELLS, Clue, InvalidPuzzleError, Rows, in_range

BLANKS = {".", "_", "-"}

SAMPLE_CLUES = (
    156, 182,
    237, 245, 263, 276,
    331, 347, 354, 393,
    423, 459, 472,
    512, 568,
    628, 653, 695,
    721, 735, 748, 773,
    818, 832, 894,
    926, 933, 985,
)

_SEPARATORS = re.compile(r"[\s,;]+")


def decode_clue(value: int) -> Clue:
    """Split ``row*100 + col*10 + digit`` into a clue, e.g. 156 -> r1c5=6."""
    if isinstance(value, bool) or not isinstance(value, int) or not 111 <= value <= 999:
        raise InvalidPuzzleError(f"{value!r} is not a three-digit clue")
    clue = Clue(value // 100, value // 10 % 10, value % 10)
    if not all(in_range(v) for v in clue):
        raise InvalidPuzzleError(f"{value} has a zero in row, column or digit")
    return clue


def encode_clue(clue: Clue) -> int:
    row, col, digit = clue
    return row * 100 + col * 10 + digit


def normalize_token(raw: str) -> Optional[int]:
    """Turn one token into a compact clue integer; None for blanks."""
    candidate = raw.strip()
    if not candidate:
        return None
    if not candidate.isdigit():
        raise InvalidPuzzleError(f"{candidate!r} is not a clue")
    return int(candidate)


def _strip_comments(lines: Iterable[str]) -> List[str]:
    return [line.split("#", 1)[0] for line in lines]


def _lines(text: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(text, str):
        return text.splitlines()
    return list(text)


def parse_clue_text(text: Union[str, Iterable[str]]) -> List[Clue]:
    """Parse compact clues separated by whitespace, commas or semicolons.

    Anything after ``#`` on a line is ignored. Duplicates are kept so that
    grid construction can reject conflicting ones.
    """
    clues: List[Clue] = []
    for line in _strip_comments(_lines(text)):
        for token in _SEPARATORS.split(line):
            value = normalize_token(token)
            if value is not None:
                clues.append(decode_clue(value))
    return clues


def puzzle_to_rows(puzzle: Sequence[str]) -> Rows:
    """Convert 81 cell characters into a 9x9 board; other characters are skipped."""
    digits = []
    for ch in puzzle:
        if ch.isdigit():
            digits.append(int(ch))
        elif ch in BLANKS:
            digits.append(0)
    if len(digits) != 81:
        raise InvalidPuzzleError(f"Sudoku puzzle must yield 81 cells, got {len(digits)}")
    return [digits[i : i + 9] for i in range(0, 81, 9)]


def rows_to_clues(rows: Rows) -> List[Clue]:
    return [Clue(r, c, rows[r - 1][c - 1]) for r, c in CELLS if rows[r - 1][c - 1]]


def clues_to_rows(clues: Iterable[Clue]) -> Rows:
    """Lay clues out on a board; later clues win, no conflict checking."""
    rows = [[0] * 9 for _ in range(9)]
    for row, col, digit in clues:
        rows[row - 1][col - 1] = digit
    return rows


def parse_puzzle(puzzle: Sequence[str]) -> List[Clue]:
    return rows_to_clues(puzzle_to_rows(puzzle))


def looks_like_clue_list(text: Union[str, Iterable[str]]) -> bool:
    tokens = [
        token
        for line in _strip_comments(_lines(text))
        for token in _SEPARATORS.split(line)
        if token
    ]
    # Clue digits are never 0, so zero-bearing groups belong to a puzzle string.
    return all(len(token) == 3 and token.isdigit() and "0" not in token for token in tokens)


def parse_any(text: Union[str, Iterable[str]]) -> List[Clue]:
    """Accept either a compact clue list or an 81-cell puzzle.

    Every token of a clue list is exactly three digits; any other layout is
    read as a puzzle string.
    """
    lines = _lines(text)
    if looks_like_clue_list(lines):
        return parse_clue_text(lines)
    return parse_puzzle("".join(_strip_comments(lines)))
