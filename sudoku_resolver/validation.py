"""Independent checks on a grid, decoupled from the solver's bookkeeping."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Set, Tuple

from .grid import DIGITS, Rows, box_cells

Issue = Dict[str, object]


def regions(rows: Rows) -> Iterator[Tuple[str, List[Tuple[int, int]], List[int]]]:
    """Yield ``(label, cells, values)`` for every row, column and box."""
    for r in DIGITS:
        cells = [(r, c) for c in DIGITS]
        yield f"r{r}", cells, [rows[r - 1][c - 1] for _, c in cells]
    for c in DIGITS:
        cells = [(r, c) for r in DIGITS]
        yield f"c{c}", cells, [rows[r - 1][c - 1] for r, _ in cells]
    for b in DIGITS:
        cells = box_cells(b)
        yield f"b{b}", cells, [rows[r - 1][c - 1] for r, c in cells]


def _well_shaped(rows: Rows) -> bool:
    return len(rows) == 9 and all(len(row) == 9 for row in rows)


def is_valid_solution(rows: Rows) -> bool:
    """True if every region holds nine distinct digits and no blank."""
    if not _well_shaped(rows):
        return False
    for _, _, values in regions(rows):
        distinct = set(values)
        if len(distinct) != 9 or not distinct <= set(DIGITS):
            return False
    return True


def _duplicates(values: List[int]) -> Set[int]:
    seen: Set[int] = set()
    dups: Set[int] = set()
    for v in values:
        if v == 0:
            continue
        if v in seen:
            dups.add(v)
        seen.add(v)
    return dups


def find_issues(current: Rows, original: Optional[Rows] = None) -> Dict[str, object]:
    """Report repeated digits per region and clues changed since ``original``.

    Blank cells are ignored, so a partially filled grid reports ``ok`` as long
    as nothing placed so far clashes.
    """
    if not _well_shaped(current):
        return {"ok": False, "issues": [{"type": "shape", "detail": "grid must be 9x9"}]}
    issues: List[Issue] = []
    if original is not None:
        for r in DIGITS:
            for c in DIGITS:
                given = original[r - 1][c - 1]
                found = current[r - 1][c - 1]
                if given and found not in (0, given):
                    issues.append(
                        {"type": "given_overwritten", "cell": f"r{r}c{c}", "given": given, "found": found}
                    )
    for label, cells, values in regions(current):
        dups = _duplicates(values)
        if dups:
            bad = [f"r{r}c{c}" for (r, c), v in zip(cells, values) if v in dups]
            issues.append({"type": "duplicate", "unit": label, "digits": sorted(dups), "cells": bad})
    for r in DIGITS:
        for c in DIGITS:
            if current[r - 1][c - 1] not in range(10):
                issues.append(
                    {"type": "out_of_range", "cell": f"r{r}c{c}", "found": current[r - 1][c - 1]}
                )
    return {"ok": not issues, "issues": issues}
