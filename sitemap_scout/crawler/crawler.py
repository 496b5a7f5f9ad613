# === FILE: sitemap_scout/crawler/crawler.py ===
from __future__ import annotations

import time
from typing import List, Sequence

from sitemap_scout.crawler.fetcher import DocumentFetcher
from sitemap_scout.crawler.limiter import run_bounded
from sitemap_scout.crawler.models import CrawlResult
from sitemap_scout.crawler.robots import RobotsChecker
from sitemap_scout.logger import logger

__all__ = ("CrawlDispatcher",)


class CrawlDispatcher:
    """Обходит пачку URL с ограничением параллельности и проверкой robots.txt."""

    def __init__(self, fetcher: DocumentFetcher, robots: RobotsChecker | None = None) -> None:
        self.fetcher = fetcher
        self.robots = robots or RobotsChecker(fetcher)

    async def crawl(self, urls: Sequence[str], agent: str, concurrency: int) -> List[CrawlResult]:
        """Exactly one CrawlResult per input URL, in completion order."""
        results: List[CrawlResult] = []
        start = time.monotonic()

        async def _visit(url: str) -> None:
            results.append(await self._crawl_one(url, agent))

        await run_bounded(urls, max(1, concurrency), _visit)

        duration = time.monotonic() - start
        ok = sum(1 for r in results if r.ok)
        logger.info("Обход завершён: %d URL (ok=%d) за %.2f с", len(results), ok, duration)
        return results

    async def _crawl_one(self, url: str, agent: str) -> CrawlResult:
        try:
            if not await self.robots.is_allowed(url, agent):
                logger.debug("Skipped by robots.txt: %s", url)
                return CrawlResult.skipped(url)
            status = await self.fetcher.fetch_status(url, user_agent=agent)
        except Exception as e:
            logger.warning("Failed %s: %s", url, e)
            return CrawlResult.failed(url)
        return CrawlResult(url=url, ok=200 <= status < 300, status=status)
