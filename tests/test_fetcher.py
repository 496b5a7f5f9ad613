# File: tests/test_fetcher.py
from __future__ import annotations

import gzip

import pytest
from aiohttp import web

from sitemap_scout.crawler.fetcher import DocumentFetcher, FetchError
from sitemap_scout.utils import is_gzip_url


@pytest.mark.asyncio()
async def test_fetch_text_plain(fetcher, serve, make_app, urlset):
    xml = urlset("https://a.test/1")
    base = await serve(make_app({"/sitemap.xml": xml}))
    assert await fetcher.fetch_text(f"{base}/sitemap.xml") == xml


@pytest.mark.asyncio()
@pytest.mark.parametrize("path", ["/sitemap.xml.gz", "/SITEMAP.XML.GZ"])
async def test_fetch_text_gunzips_gz_paths(fetcher, serve, make_app, urlset, path):
    xml = urlset("https://a.test/1", "https://a.test/2")
    base = await serve(make_app({path: gzip.compress(xml.encode("utf-8"))}))
    assert await fetcher.fetch_text(f"{base}{path}") == xml


@pytest.mark.asyncio()
async def test_gz_with_empty_body_is_empty_text(fetcher, serve, make_app):
    base = await serve(make_app({"/empty.xml.gz": b""}))
    assert await fetcher.fetch_text(f"{base}/empty.xml.gz") == ""


@pytest.mark.asyncio()
async def test_non_gz_path_is_not_decompressed(fetcher, serve, make_app):
    raw = "plain text that merely mentions .gz"
    base = await serve(make_app({"/notes.txt": raw}))
    assert await fetcher.fetch_text(f"{base}/notes.txt") == raw


@pytest.mark.asyncio()
async def test_non_2xx_raises_fetch_error(fetcher, serve, make_app):
    base = await serve(make_app({"/gone.xml": 404}))
    with pytest.raises(FetchError) as info:
        await fetcher.fetch_text(f"{base}/gone.xml")
    assert info.value.status == 404
    assert info.value.url == f"{base}/gone.xml"


@pytest.mark.asyncio()
async def test_identifying_headers_are_sent(serve):
    seen = {}

    async def handle(request: web.Request) -> web.Response:
        seen.update(request.headers)
        return web.Response(text="ok")

    app = web.Application()
    app.router.add_get("/doc", handle)
    base = await serve(app)
    async with DocumentFetcher("HeaderBot/2.0") as fetcher:
        await fetcher.fetch_text(f"{base}/doc")
    assert seen["User-Agent"] == "HeaderBot/2.0"
    assert seen["Accept-Encoding"] == "gzip,deflate"


@pytest.mark.asyncio()
async def test_fetch_status_does_not_raise(fetcher, serve, make_app):
    base = await serve(make_app({"/missing": 404, "/ok": "hi"}))
    assert await fetcher.fetch_status(f"{base}/missing") == 404
    assert await fetcher.fetch_status(f"{base}/ok") == 200


@pytest.mark.asyncio()
async def test_session_required():
    with pytest.raises(RuntimeError):
        await DocumentFetcher("Agent").fetch_text("http://127.0.0.1/")


def test_is_gzip_url_checks_path_only():
    assert is_gzip_url("https://a.test/sitemap.xml.GZ")
    assert not is_gzip_url("https://a.test/sitemap.xml?format=.gz")
