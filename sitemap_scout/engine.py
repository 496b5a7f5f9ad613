# File: sitemap_scout/engine.py
"""sitemap_scout.engine: операции верхнего уровня (preview, crawl, обработка доставленных пачек)."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.crawler import CrawlDispatcher
from sitemap_scout.crawler.fetcher import DocumentFetcher
from sitemap_scout.crawler.models import CrawlResult
from sitemap_scout.dispatch import make_sink
from sitemap_scout.logger import logger
from sitemap_scout.resolver import SitemapResolver
from sitemap_scout.utils import limit_list

__all__ = [
    "PreviewSummary",
    "CrawlSummary",
    "infer_sitemap_url",
    "preview",
    "run_crawl",
    "consume_batch",
]


@dataclass(slots=True)
class PreviewSummary:
    sitemap: str
    total: int
    sample: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class CrawlSummary:
    sitemap: str
    discovered: int
    dispatched: int
    mode: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def infer_sitemap_url(
    config: CrawlerConfig,
    sitemap: Optional[str] = None,
    domain: Optional[str] = None,
) -> str:
    """Явный sitemap важнее домена; без обоих берётся default_sitemap из конфига."""
    if sitemap:
        return sitemap
    if domain:
        return f"https://{domain.rstrip('/')}/sitemap.xml"
    return str(config.default_sitemap)


def _fetcher(config: CrawlerConfig) -> DocumentFetcher:
    return DocumentFetcher(config.user_agent, timeout=config.request_timeout)


async def preview(
    config: CrawlerConfig,
    sitemap: Optional[str] = None,
    domain: Optional[str] = None,
    limit: Optional[int] = None,
) -> PreviewSummary:
    """Находит URL в sitemap и возвращает их число и первые *limit* штук."""
    sitemap_url = infer_sitemap_url(config, sitemap, domain)
    async with _fetcher(config) as fetcher:
        urls = await SitemapResolver(fetcher, config.max_sitemap_depth).resolve(sitemap_url)
    size = config.preview_limit if limit is None else limit
    return PreviewSummary(sitemap=sitemap_url, total=len(urls), sample=limit_list(urls, size))


async def run_crawl(
    config: CrawlerConfig,
    sitemap: Optional[str] = None,
    domain: Optional[str] = None,
    max_urls: Optional[int] = None,
    concurrency: Optional[int] = None,
) -> CrawlSummary:
    """Находит URL и отправляет первые max_urls_per_run из них в выбранный DispatchSink."""
    sitemap_url = infer_sitemap_url(config, sitemap, domain)
    per_run = config.max_urls_per_run if max_urls is None else max_urls
    async with _fetcher(config) as fetcher:
        urls = await SitemapResolver(fetcher, config.max_sitemap_depth).resolve(sitemap_url)
        batch = limit_list(urls, per_run)
        sink = make_sink(config, fetcher, concurrency)
        logger.info("Dispatching %d of %d urls (%s)", len(batch), len(urls), sink.mode)
        accepted = await sink.enqueue_many(batch)
    return CrawlSummary(
        sitemap=sitemap_url,
        discovered=len(urls),
        dispatched=accepted,
        mode=sink.mode,
    )


async def consume_batch(
    config: CrawlerConfig,
    urls: Sequence[str],
    concurrency: Optional[int] = None,
) -> List[CrawlResult]:
    """Обходит пачку, доставленную внешней очередью."""
    async with _fetcher(config) as fetcher:
        results = await CrawlDispatcher(fetcher).crawl(
            urls, config.user_agent, concurrency or config.max_concurrency
        )
    ok = sum(1 for r in results if r.ok)
    logger.info("Queue consumer crawled %d urls (ok=%d)", len(urls), ok)
    return results
