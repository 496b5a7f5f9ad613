# File: sitemap_scout/utils.py
"""sitemap_scout.utils: Утилиты для работы с URL и списками URL."""

from __future__ import annotations

from typing import Iterator, List, Sequence, TypeVar
from urllib.parse import urlparse, urlunparse

__all__: Sequence[str] = (
    "GZIP_SUFFIX",
    "robots_url",
    "is_gzip_url",
    "chunked",
    "limit_list",
)

T = TypeVar("T")

GZIP_SUFFIX = ".gz"


def robots_url(url: str) -> str:
    """Возвращает адрес robots.txt для origin переданного URL.

    Бросает ValueError, если в URL нет схемы или хоста.
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"URL without origin: {url!r}")
    return urlunparse((parsed.scheme, parsed.netloc, "/robots.txt", "", "", ""))


def is_gzip_url(url: str) -> bool:
    """Проверяет, оканчивается ли путь URL на .gz (без учёта регистра)."""
    return urlparse(url).path.lower().endswith(GZIP_SUFFIX)


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Делит последовательность на куски фиксированного размера (последний может быть короче)."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def limit_list(items: Sequence[T], limit: int) -> List[T]:
    """Первые *limit* элементов; отрицательный лимит даёт пустой список."""
    return list(items[: max(0, limit)])
