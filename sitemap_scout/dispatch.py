# File: sitemap_scout/dispatch.py
"""sitemap_scout.dispatch: выбор, куда отправлять найденные URL (обход сразу или внешняя очередь)."""

from __future__ import annotations

import abc
from typing import List, Sequence

from aiohttp import ClientSession

from sitemap_scout.config import CrawlerConfig
from sitemap_scout.crawler.crawler import CrawlDispatcher
from sitemap_scout.crawler.fetcher import DocumentFetcher
from sitemap_scout.logger import logger
from sitemap_scout.utils import chunked

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "BatchQueue",
    "HttpBatchQueue",
    "DispatchSink",
    "InlineSink",
    "ExternalSink",
    "make_sink",
]

DEFAULT_CHUNK_SIZE = 1000


class BatchQueue(abc.ABC):
    """Внешний сервис сообщений: принимает пачки строк-URL."""

    @abc.abstractmethod
    async def send_batch(self, bodies: List[str]) -> None:
        ...


class HttpBatchQueue(BatchQueue):
    """Отправляет пачку JSON-запросом ``{"messages": [{"body": url}, ...]}`` на endpoint."""

    def __init__(self, session: ClientSession, endpoint: str) -> None:
        self.session = session
        self.endpoint = endpoint

    async def send_batch(self, bodies: List[str]) -> None:
        payload = {"messages": [{"body": body} for body in bodies]}
        async with self.session.post(self.endpoint, json=payload) as resp:
            resp.raise_for_status()


class DispatchSink(abc.ABC):
    mode: str = ""

    @abc.abstractmethod
    async def enqueue_many(self, urls: Sequence[str]) -> int:
        """Принимает URL и возвращает число принятых (не успешно обойдённых)."""


class InlineSink(DispatchSink):
    """«Поставить в очередь» значит обойти прямо сейчас."""

    mode = "inline"

    def __init__(self, dispatcher: CrawlDispatcher, user_agent: str, concurrency: int) -> None:
        self.dispatcher = dispatcher
        self.user_agent = user_agent
        self.concurrency = concurrency

    async def enqueue_many(self, urls: Sequence[str]) -> int:
        results = await self.dispatcher.crawl(urls, self.user_agent, self.concurrency)
        ok = sum(1 for r in results if r.ok)
        logger.info("Crawled inline: %d urls (ok=%d)", len(urls), ok)
        return len(urls)


class ExternalSink(DispatchSink):
    """Режет список на пачки и отдаёт их внешней очереди."""

    mode = "queued"

    def __init__(self, queue: BatchQueue, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.queue = queue
        self.chunk_size = chunk_size

    async def enqueue_many(self, urls: Sequence[str]) -> int:
        batches = 0
        for chunk in chunked(urls, self.chunk_size):
            await self.queue.send_batch(chunk)
            batches += 1
        logger.info("Forwarded %d urls in %d batch(es)", len(urls), batches)
        return len(urls)


def make_sink(
    config: CrawlerConfig,
    fetcher: DocumentFetcher,
    concurrency: int | None = None,
) -> DispatchSink:
    """Выбирает вариант один раз: очередь, если задан queue_endpoint, иначе inline-обход."""
    if config.queue_endpoint is not None:
        queue = HttpBatchQueue(fetcher.session, str(config.queue_endpoint))
        return ExternalSink(queue, chunk_size=config.queue_chunk_size)
    return InlineSink(
        CrawlDispatcher(fetcher),
        user_agent=config.user_agent,
        concurrency=concurrency or config.max_concurrency,
    )
