# sitemap_scout/crawler/robots.py
"""
Minimal robots.txt interpreter: ``User-agent`` and ``Disallow`` only.

Any failure to fetch or read the policy is treated as "allowed".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List
from urllib.parse import urlparse

from sitemap_scout.crawler.fetcher import DocumentFetcher
from sitemap_scout.logger import logger
from sitemap_scout.utils import robots_url

ROOT_PREFIX = "/"


@dataclass
class RobotsRuleSet:
    """Disallow prefixes collected for one agent from one robots.txt."""

    agent: str
    disallowed: List[str] = field(default_factory=list)

    def blocks(self, path: str) -> bool:
        # a bare "Disallow: /" is not honored by this interpreter
        return any(rule != ROOT_PREFIX and path.startswith(rule) for rule in self.disallowed)


def parse_robots(text: str, agent: str) -> RobotsRuleSet:
    """Collect the Disallow values that apply to *agent* (or to ``*``)."""
    rules = RobotsRuleSet(agent=agent)
    active = False
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, val = line.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        val = val.strip()
        if key == "user-agent":
            active = val == "*" or val.lower() == agent.lower()
        elif key == "disallow" and active and val:
            rules.disallowed.append(val)
    return rules


class RobotsChecker:
    """Answers whether a URL may be fetched. Re-fetches robots.txt on every check."""

    def __init__(self, fetcher: DocumentFetcher) -> None:
        self.fetcher = fetcher

    async def load_rules(self, url: str, agent: str) -> RobotsRuleSet:
        text = await self.fetcher.fetch_text(robots_url(url), user_agent=agent)
        return parse_robots(text, agent)

    async def is_allowed(self, url: str, agent: str) -> bool:
        try:
            rules = await self.load_rules(url, agent)
            allowed = not rules.blocks(urlparse(url).path)
        except Exception as exc:
            logger.debug("robots.txt unavailable for %s (%s), allowing", url, exc)
            return True
        logger.debug("robots.txt verdict for %s: %s", url, "allow" if allowed else "disallow")
        return allowed
