"""Command line entry point: solve, validate and serve."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from aiohttp import web as aiohttp_web

from .clues import SAMPLE_CLUES, decode_clue, normalize_token, parse_any, puzzle_to_rows
from .grid import Clue, InvalidPuzzleError
from .reporter import print_issues, print_result, print_stats
from .solver import SolverConfig, solve as solve_clues
from .validation import find_issues
from .web import create_app

app = typer.Typer(help="Solve 9x9 Sudoku puzzles by propagation and backtracking.")

SERVE_MAX_STEPS = 2_000_000


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _collect_clues(clues: List[str], file: Optional[Path], puzzle: Optional[str]) -> List[Clue]:
    collected: List[Clue] = []
    for token in clues:
        value = normalize_token(token)
        if value is not None:
            collected.append(decode_clue(value))
    if file is not None:
        collected.extend(parse_any(file.read_text(encoding="utf-8")))
    if puzzle is not None:
        collected.extend(parse_any(puzzle))
    return collected


@app.command()
def solve(
    clues: Optional[List[str]] = typer.Argument(
        None, help="Compact clues, row*100 + column*10 + digit (156 = r1c5 is 6)."
    ),
    file: Optional[Path] = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="File with clues or a puzzle string."
    ),
    puzzle: Optional[str] = typer.Option(None, "--puzzle", "-p", help="81-cell puzzle string."),
    sample: bool = typer.Option(False, "--sample", help="Solve the built-in sample puzzle."),
    pretty: bool = typer.Option(False, "--pretty", help="Draw box separators."),
    stats: bool = typer.Option(False, "--stats", help="Print search statistics to stderr."),
    max_steps: Optional[int] = typer.Option(
        None, "--max-steps", min=1, envvar="SUDOKU_MAX_STEPS", help="Give up after this many guesses."
    ),
    no_propagate: bool = typer.Option(
        False, "--no-propagate", envvar="SUDOKU_NO_PROPAGATE", help="Skip naked-single elimination."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)
    try:
        collected = _collect_clues(clues or [], file, puzzle)
        if sample:
            collected.extend(decode_clue(value) for value in SAMPLE_CLUES)
        config = SolverConfig(propagate=not no_propagate, max_steps=max_steps)
        result = solve_clues(collected, config)
    except InvalidPuzzleError as exc:
        typer.echo(f"Invalid puzzle: {exc}", err=True)
        raise typer.Exit(code=2)

    print_result(result, pretty=pretty)
    if stats:
        print_stats(result)
    if not result.solved:
        raise typer.Exit(code=1)


@app.command()
def validate(
    grid: str = typer.Argument(..., help="81-cell grid to check (blanks allowed)."),
    original: Optional[str] = typer.Option(
        None, "--original", "-o", help="Puzzle the grid started from, to catch changed clues."
    ),
) -> None:
    try:
        current = puzzle_to_rows(grid)
        before = puzzle_to_rows(original) if original is not None else None
    except InvalidPuzzleError as exc:
        typer.echo(f"Invalid grid: {exc}", err=True)
        raise typer.Exit(code=2)

    report = find_issues(current, before)
    print_issues(report)
    if not report["ok"]:
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Host interface for the UI."),
    port: int = typer.Option(8080, "--port", "-p", help="Port for the UI."),
    max_steps: int = typer.Option(
        SERVE_MAX_STEPS, "--max-steps", min=1, envvar="SUDOKU_MAX_STEPS", help="Per-request guess limit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)
    web_app = create_app(SolverConfig(max_steps=max_steps))
    typer.echo(f"Open http://{host}:{port} in a browser to use the UI.")
    aiohttp_web.run_app(web_app, host=host, port=port)
