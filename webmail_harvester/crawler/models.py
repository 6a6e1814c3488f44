# webmail_harvester/crawler/models.py
"""
Data models for the Webmail Harvester crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set


@dataclass(slots=True)
class PageData:
    """Holds the URL and decoded HTML of a fetched page."""

    url: str
    content: str


@dataclass(slots=True, frozen=True)
class LinkCandidate:
    """An absolute link found on a page, with its lower-cased anchor text."""

    url: str
    anchor_text: str


@dataclass(slots=True)
class CrawlStats:
    """Bookkeeping for a single seed crawl."""

    seed_url: str
    fetched_urls: List[str] = field(default_factory=list)
    empty_pages: int = 0
    emails: Set[str] = field(default_factory=set)

    @property
    def pages_fetched(self) -> int:
        return len(self.fetched_urls)
