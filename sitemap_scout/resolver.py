# File: sitemap_scout/resolver.py
"""sitemap_scout.resolver: Разворачивает sitemap (в том числе вложенные index) в плоский список URL."""

from __future__ import annotations

from typing import List, Set

from sitemap_scout.crawler.fetcher import DocumentFetcher
from sitemap_scout.logger import logger
from sitemap_scout.parser.sitemap_parser import SitemapDocument, SitemapKind

__all__ = ["SitemapResolver", "DEFAULT_MAX_DEPTH"]

DEFAULT_MAX_DEPTH = 10


class SitemapResolver:
    """
    Рекурсивно обходит sitemap index в глубину, сохраняя порядок документов.

    Повторно встреченный в рамках одного вызова sitemap и всё, что глубже
    max_depth, дают пустую ветку. Ошибка загрузки любого sitemap прерывает
    весь вызов (FetchError / ошибки aiohttp пробрасываются).
    """

    def __init__(self, fetcher: DocumentFetcher, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.fetcher = fetcher
        self.max_depth = max_depth

    async def resolve(self, url: str) -> List[str]:
        urls = await self._resolve(url, depth=0, visited=set())
        logger.info("Sitemap %s: найдено %d URL", url, len(urls))
        return urls

    async def _resolve(self, url: str, depth: int, visited: Set[str]) -> List[str]:
        if url in visited:
            logger.warning("Sitemap %s already visited, skipping branch", url)
            return []
        if depth > self.max_depth:
            logger.warning("Sitemap %s exceeds max depth %d, skipping branch", url, self.max_depth)
            return []
        visited.add(url)

        text = await self.fetcher.fetch_text(url)
        document = SitemapDocument.from_text(text)
        logger.debug("Fetched %s sitemap %s (depth %d)", document.kind.value, url, depth)
        if document.kind is SitemapKind.URLSET:
            return document.locations()

        urls: List[str] = []
        for child in document.locations():
            urls.extend(await self._resolve(child, depth + 1, visited))
        return urls
