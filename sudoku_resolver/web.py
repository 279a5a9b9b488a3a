"""Small browser UI: paste clues, get the solved grid back."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .clues import SAMPLE_CLUES, clues_to_rows, encode_clue, parse_any
from .grid import InvalidPuzzleError, Rows
from .solver import SolverConfig, solve

BASE_DIR = Path(__file__).resolve().parent
TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(str(BASE_DIR)),
    autoescape=select_autoescape(),
)

DEFAULT_TEXT = " ".join(str(value) for value in SAMPLE_CLUES)


def create_app(config: Optional[SolverConfig] = None) -> web.Application:
    template = TEMPLATE_ENV.get_template("ui_template.html")
    config = config or SolverConfig()

    def render_page(
        clues_text: str,
        message: Optional[str] = None,
        error: Optional[str] = None,
        givens: Optional[Rows] = None,
        solution: Optional[Rows] = None,
    ) -> web.Response:
        return web.Response(
            text=template.render(
                clues_text=clues_text,
                message=message,
                error=error,
                givens=givens,
                solution=solution,
            ),
            content_type="text/html",
        )

    async def handle_index(_: web.Request) -> web.Response:
        return render_page(DEFAULT_TEXT)

    async def handle_solve(request: web.Request) -> web.Response:
        reader = await request.post()
        raw = str(reader.get("clues", ""))
        try:
            clues = parse_any(raw)
            # CPU-bound; runs in the default executor.
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(None, solve, clues, config)
        except InvalidPuzzleError as exc:
            return render_page(raw, error=str(exc))

        givens = clues_to_rows(clues)
        if not result.solved:
            return render_page(raw, error=result.message, givens=givens)
        compact = " ".join(str(encode_clue(c)) for c in clues)
        message = (
            f"{result.message} {result.clues} clues, {result.propagated} deduced, "
            f"{result.stats.assignments} guesses in {result.duration_ms} ms."
        )
        return render_page(compact or raw, message=message, givens=givens, solution=result.solution)

    web_app = web.Application()
    web_app.router.add_get("/", handle_index)
    web_app.router.add_post("/solve", handle_solve)
    return web_app
