# sitemap_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET with the identifying headers and transparent
decompression of ``.gz`` documents.
"""
from __future__ import annotations

import gzip
from types import TracebackType
from typing import Optional, Type

from aiohttp import ClientSession, ClientTimeout

from sitemap_scout.logger import logger
from sitemap_scout.utils import is_gzip_url

ACCEPT_ENCODING = "gzip,deflate"
_GZIP_MAGIC = b"\x1f\x8b"


class FetchError(Exception):
    """Raised when a document request returns a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(f"Failed to fetch {url} ({status})")
        self.url = url
        self.status = status


class DocumentFetcher:
    """
    Retrieves documents over HTTP. Knows nothing about sitemaps.

    Owns an aiohttp session when used as an async context manager;
    an existing session may be passed in instead.
    """

    def __init__(
        self,
        user_agent: str,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> DocumentFetcher:
        if self._session is None:
            self._session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers=self.headers,
                raise_for_status=False,
            )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept-Encoding": ACCEPT_ENCODING}

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("Session not initialized")
        return self._session

    async def fetch_text(self, url: str, user_agent: Optional[str] = None) -> str:
        """
        GET *url* and return the body as text.

        Raises FetchError on a non-2xx status. Bodies of ``.gz`` URLs are
        gunzipped before decoding; an empty body yields ``""``.
        """
        headers = dict(self.headers)
        if user_agent:
            headers["User-Agent"] = user_agent
        async with self.session.get(url, headers=headers) as resp:
            if not 200 <= resp.status < 300:
                raise FetchError(url, resp.status)
            if is_gzip_url(url):
                data = await resp.read()
                if not data:
                    return ""
                # aiohttp already inflated it when the server set Content-Encoding
                if data.startswith(_GZIP_MAGIC):
                    data = gzip.decompress(data)
                logger.debug("Decompressed %s (%d bytes)", url, len(data))
                return data.decode(resp.charset or "utf-8", errors="replace")
            return await resp.text(errors="replace")

    async def fetch_status(self, url: str, user_agent: Optional[str] = None) -> int:
        """GET *url*, discard the body and return the HTTP status."""
        headers = {"User-Agent": user_agent or self.user_agent}
        async with self.session.get(url, headers=headers) as resp:
            await resp.read()
            return resp.status
