"""Tests for the browser UI handlers."""

import asyncio

from aiohttp import test_utils

from . import web
from .solver import SolverConfig

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"


def _request(method, path, data=None, config=None):
    async def scenario():
        async with test_utils.TestClient(test_utils.TestServer(web.create_app(config))) as client:
            resp = await client.request(method, path, data=data)
            return resp.status, await resp.text()

    return asyncio.run(scenario())


def test_index_prefills_sample_clues():
    status, text = _request("GET", "/")
    assert status == 200
    assert "156 182 237" in text
    assert "<form" in text


def test_solve_renders_grid():
    status, text = _request("POST", "/solve", data={"clues": PUZZLE})
    assert status == 200
    assert "Solved successfully." in text
    assert text.count("<td") == 81


def test_invalid_clues_render_error():
    status, text = _request("POST", "/solve", data={"clues": "156 196"})
    assert status == 200
    assert 'class="error"' in text
    assert "row 1" in text


def test_step_limit_applies_to_requests():
    status, text = _request("POST", "/solve", data={"clues": ""}, config=SolverConfig(max_steps=1))
    assert status == 200
    assert "Step limit of 1" in text


def test_event_loop_keeps_serving_during_long_solve():
    # Row 9 can never be completed, but the search only finds out after filling rows 1-8.
    dead_end = "944 955 966 977 988 999 122 423 233 532"
    config = SolverConfig(propagate=False, max_steps=100_000)

    async def scenario():
        loop = asyncio.get_running_loop()
        stop = asyncio.Event()
        gaps = []

        async def ticker():
            last = loop.time()
            while not stop.is_set():
                await asyncio.sleep(0.02)
                now = loop.time()
                gaps.append(now - last)
                last = now

        async with test_utils.TestClient(test_utils.TestServer(web.create_app(config))) as client:
            ticking = asyncio.ensure_future(ticker())
            resp = await client.post("/solve", data={"clues": dead_end})
            text = await resp.text()
            stop.set()
            await ticking
        return text, gaps

    text, gaps = asyncio.run(scenario())
    assert "Step limit of 100000" in text
    assert gaps
    assert max(gaps) < 0.5
