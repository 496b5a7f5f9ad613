# File: sitemap_scout/parser/sitemap_parser.py
"""sitemap_scout.parser.sitemap_parser: Классификация sitemap-документов и извлечение <loc>."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional

from lxml import etree

#: how much of the document is sniffed for the root marker
SNIFF_LENGTH = 200

_INDEX_MARKER = "<sitemapindex"
_URLSET_MARKER = "<urlset"


class SitemapKind(str, enum.Enum):
    URLSET = "urlset"
    INDEX = "sitemapindex"


@dataclass(frozen=True, slots=True)
class SitemapDocument:
    """Текст sitemap и его тип, определённый по корневому элементу."""

    text: str
    kind: SitemapKind

    @classmethod
    def from_text(cls, text: str) -> SitemapDocument:
        return cls(text=text, kind=classify(text))

    def locations(self) -> List[str]:
        """URL страниц для urlset или ссылки на дочерние sitemap для index."""
        if self.kind is SitemapKind.INDEX:
            return extract_child_sitemaps(self.text)
        return extract_urls(self.text)


def _parse_root(text: str) -> Optional[etree._Element]:
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False)
    try:
        return etree.fromstring(text.encode("utf-8"), parser=parser)
    except (etree.XMLSyntaxError, ValueError):
        return None


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname.lower()


def classify(text: str) -> SitemapKind:
    """Определяет тип документа; неизвестный корень трактуется как urlset.

    Пример:
    ```python
    classify('<sitemapindex><sitemap><loc>https://a/s.xml</loc></sitemap></sitemapindex>')
    # SitemapKind.INDEX
    ```
    """
    head = text[:SNIFF_LENGTH].lower()
    if _INDEX_MARKER in head:
        return SitemapKind.INDEX
    if _URLSET_MARKER in head:
        return SitemapKind.URLSET

    root = _parse_root(text)
    if root is not None and _local_name(root) == SitemapKind.INDEX.value:
        return SitemapKind.INDEX
    return SitemapKind.URLSET


def _child_locs(text: str, root_name: str, entry_name: str) -> List[str]:
    root = _parse_root(text)
    if root is None or _local_name(root) != root_name:
        return []
    locs: List[str] = []
    for entry in root.iterfind(f"{{*}}{entry_name}"):
        loc = entry.find("{*}loc")
        value = (loc.text or "").strip() if loc is not None else ""
        if value:
            locs.append(value)
    return locs


def extract_urls(text: str) -> List[str]:
    """Все непустые <url>/<loc> документа urlset в порядке следования."""
    return _child_locs(text, "urlset", "url")


def extract_child_sitemaps(text: str) -> List[str]:
    """Все непустые <sitemap>/<loc> документа sitemapindex в порядке следования."""
    return _child_locs(text, "sitemapindex", "sitemap")


__all__ = [
    "SitemapKind",
    "SitemapDocument",
    "classify",
    "extract_urls",
    "extract_child_sitemaps",
]
