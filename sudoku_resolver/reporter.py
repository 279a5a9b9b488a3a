"""Format grids and solve results for the command line."""

from __future__ import annotations

from typing import Dict, List

import typer

from .grid import Rows
from .solver import SolveResult

BAND_RULE = "------+-------+------"


def serialize(rows: Rows) -> str:
    """Return board as a single string for easy comparison."""
    return "".join(str(cell) for row in rows for cell in row)


def render_plain(rows: Rows) -> str:
    """Rows of space-separated digits, blanks as 0."""
    return "\n".join(" ".join(str(cell) for cell in row) for row in rows)


def _band_line(row: List[int]) -> str:
    cells = [str(value) if value else "." for value in row]
    return " | ".join(" ".join(cells[i : i + 3]) for i in (0, 3, 6))


def render_pretty(rows: Rows) -> str:
    """Boxed layout with blanks shown as dots."""
    bands = ["\n".join(_band_line(row) for row in rows[i : i + 3]) for i in (0, 3, 6)]
    return f"\n{BAND_RULE}\n".join(bands)


def print_result(result: SolveResult, pretty: bool = False) -> None:
    if result.solution is None:
        typer.echo(result.message, err=True)
        return
    render = render_pretty if pretty else render_plain
    typer.echo(render(result.solution))


def print_stats(result: SolveResult) -> None:
    stats = result.stats
    typer.echo(
        f"clues={result.clues} propagated={result.propagated} "
        f"assignments={stats.assignments} backtracks={stats.backtracks} "
        f"depth={stats.max_depth} time={result.duration_ms}ms",
        err=True,
    )


def print_issues(report: Dict[str, object]) -> None:
    issues: List[Dict[str, object]] = report.get("issues", [])  # type: ignore[assignment]
    if report.get("ok"):
        typer.echo("Grid is consistent.")
        return
    for issue in issues:
        kind = issue.get("type")
        if kind == "duplicate":
            digits = ", ".join(str(d) for d in issue["digits"])
            typer.echo(f"  {issue['unit']}: repeated {digits} at {' '.join(issue['cells'])}")
        elif kind == "given_overwritten":
            typer.echo(f"  {issue['cell']}: clue {issue['given']} changed to {issue['found']}")
        else:
            typer.echo(f"  {issue.get('cell', 'grid')}: {issue.get('detail') or issue.get('found')}")
