# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Awaitable, Callable, Dict, Union

import pytest
import pytest_asyncio
from aiohttp import web

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.fetcher import DocumentFetcher
from sitemap_scout.logger import init_logging

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
AGENT = "TestAgent/1.0"

Body = Union[str, bytes, int]


@pytest.fixture(autouse=True)
def fresh_logging():
    """CliRunner and capsys swap stderr; rebind the logger once they are gone."""
    yield
    init_logging()


def _urlset(*locs: str) -> str:
    entries = "".join(f"<url><loc>{loc}</loc></url>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<urlset xmlns="{SITEMAP_NS}">{entries}</urlset>'


def _sitemapindex(*locs: str) -> str:
    entries = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<sitemapindex xmlns="{SITEMAP_NS}">{entries}</sitemapindex>'


@pytest.fixture()
def urlset() -> Callable[..., str]:
    """Build a <urlset> document from the given locations."""
    return _urlset


@pytest.fixture()
def sitemapindex() -> Callable[..., str]:
    """Build a <sitemapindex> document from the given child locations."""
    return _sitemapindex


@pytest.fixture()
def hits() -> Dict[str, int]:
    """Request counter per path, shared by every app built in a test."""
    return {}


@pytest.fixture()
def make_app(hits: Dict[str, int]) -> Callable[[Dict[str, Body]], web.Application]:
    """
    Build an aiohttp app from ``{path: body}``.

    ``str`` bodies are served as XML text with ``{base}`` replaced by the
    server origin, ``bytes`` as application/gzip,
    an ``int`` is served as an empty response with that status.
    """

    def _build(routes: Dict[str, Body]) -> web.Application:
        app = web.Application()

        def handler_for(path: str, body: Body):
            async def handle(request: web.Request) -> web.Response:
                hits[path] = hits.get(path, 0) + 1
                if isinstance(body, int):
                    return web.Response(status=body)
                if isinstance(body, bytes):
                    return web.Response(body=body, content_type="application/gzip")
                content_type = "text/plain" if path.endswith(".txt") else "application/xml"
                text = body.replace("{base}", str(request.url.origin()))
                return web.Response(text=text, content_type=content_type)

            return handle

        for path, body in routes.items():
            app.router.add_get(path, handler_for(path, body))
        return app

    return _build


@pytest_asyncio.fixture
async def serve() -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start apps on free localhost ports, yield their base URL, clean up afterwards."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        port = runner.addresses[0][1]
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest_asyncio.fixture
async def fetcher() -> AsyncIterator[DocumentFetcher]:
    async with DocumentFetcher(AGENT, timeout=5.0) as f:
        yield f


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """Return a basic valid CrawlerConfig for tests."""
    return CrawlerConfig(
        user_agent=AGENT,
        max_concurrency=2,
        max_urls_per_run=40,
        preview_limit=2,
        request_timeout=5.0,
    )
