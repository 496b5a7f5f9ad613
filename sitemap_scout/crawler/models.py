# sitemap_scout/crawler/models.py
"""
Data models for the SitemapScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

#: status recorded for a URL skipped because robots.txt disallows it
STATUS_SKIPPED_BY_ROBOTS = 999
#: status recorded when the request never produced an HTTP response
STATUS_TRANSPORT_FAILURE = 0


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Outcome of one crawl attempt: URL, success flag and HTTP status (or sentinel)."""

    url: str
    ok: bool
    status: int

    @classmethod
    def skipped(cls, url: str) -> CrawlResult:
        return cls(url=url, ok=True, status=STATUS_SKIPPED_BY_ROBOTS)

    @classmethod
    def failed(cls, url: str) -> CrawlResult:
        return cls(url=url, ok=False, status=STATUS_TRANSPORT_FAILURE)

    @property
    def was_skipped(self) -> bool:
        return self.status == STATUS_SKIPPED_BY_ROBOTS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
