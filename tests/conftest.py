# File: tests/conftest.py
import asyncio
from collections import Counter
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Dict, List, Optional

import pytest
from aiohttp import web

from webmail_harvester.config import BreadthFirstMode, DepthBoundedMode, HarvestConfig


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@asynccontextmanager
async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free port, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    try:
        port = runner.addresses[0][1]
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def hits() -> Counter:
    """Request counter per path, shared with the test site."""
    return Counter()


@pytest.fixture()
def user_agents() -> List[str]:
    """User-Agent header of every request the test site receives."""
    return []


@pytest.fixture()
def serve_pages(hits, user_agents) -> Callable:
    """
    Return a factory that serves ``{path: html}`` as a local site.

    ``{port}`` inside a page body is replaced by the server port, so pages
    can link to ``http://localhost:{port}/...`` (same server, other hostname).
    """

    def _serve(
        pages: Dict[str, str],
        *,
        content_types: Optional[Dict[str, str]] = None,
        status: Optional[Dict[str, int]] = None,
        delays: Optional[Dict[str, float]] = None,
        redirects: Optional[Dict[str, str]] = None,
    ):
        content_types = content_types or {}
        status = status or {}
        delays = delays or {}
        redirects = redirects or {}
        app = web.Application()

        async def handler(request: web.Request) -> web.Response:
            path = request.path
            hits[path] += 1
            user_agents.append(request.headers.get("User-Agent", ""))
            if path in delays:
                await asyncio.sleep(delays[path])
            if path in redirects:
                raise web.HTTPFound(redirects[path])
            if path in status:
                return web.Response(status=status[path], text="error")
            if path not in pages:
                raise web.HTTPNotFound()
            body = pages[path].replace("{port}", str(request.url.port))
            return web.Response(text=body, content_type=content_types.get(path, "text/html"))

        app.router.add_get("/{tail:.*}", handler)
        return serve_app(app)

    return _serve


@pytest.fixture()
def depth_config() -> HarvestConfig:
    """Depth-bounded config with a short timeout for local servers."""
    return HarvestConfig(mode=DepthBoundedMode(depth=1, timeout=2.0))


@pytest.fixture()
def bfs_config() -> HarvestConfig:
    """Breadth-first config without pacing delay."""
    return HarvestConfig(mode=BreadthFirstMode(max_pages=50, delay=0.0, timeout=2.0))
