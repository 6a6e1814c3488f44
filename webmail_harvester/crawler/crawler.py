# === FILE: webmail_harvester/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from webmail_harvester.config import BreadthFirstMode, DepthBoundedMode, HarvestConfig
from webmail_harvester.crawler.email_extractor import extract_emails
from webmail_harvester.crawler.fetcher import Fetcher
from webmail_harvester.crawler.link_extractor import canonicalize, extract_links
from webmail_harvester.crawler.models import CrawlStats, PageData
from webmail_harvester.crawler.policy import hostname_of, is_eligible
from webmail_harvester.logger import LOGGER_NAME

__all__ = ("EmailCrawler",)


@dataclass(slots=True)
class _SeedState:
    """Mutable state owned by one seed crawl; never shared between seeds."""
    hostname: str
    stats: CrawlStats
    fetch_slots: asyncio.Semaphore
    visited: Set[str] = field(default_factory=set)


class EmailCrawler:
    """
    Асинхронный сборщик адресов: одна сессия на пакет, один вызов crawl() на сайт.

    Режим обхода берётся из ``config.mode``: рекурсивный обход по ключевым
    словам (DepthBoundedMode) или обход в ширину с бюджетом страниц
    (BreadthFirstMode).
    """

    def __init__(self, config: HarvestConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.mode = config.mode
        self.session = session
        self._owns_session = session is None
        self.fetcher: Optional[Fetcher] = self._make_fetcher(session) if session is not None else None
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> EmailCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = self._make_fetcher(self.session)
        return self

    def _make_fetcher(self, session: ClientSession) -> Fetcher:
        # timeout and User-Agent also apply to a session supplied by the caller
        return Fetcher(
            session,
            retry_times=self.config.retry_times,
            timeout=ClientTimeout(total=self.config.timeout),
            user_agent=self.config.user_agent,
        )

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed_url: str) -> Set[str]:
        """Crawl one seed and return the distinct emails found on its pages."""
        stats = await self.run(seed_url)
        return stats.emails

    async def run(self, seed_url: str) -> CrawlStats:
        """Crawl one seed and return its full statistics."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        stats = CrawlStats(seed_url=seed_url)
        hostname = hostname_of(seed_url)
        if hostname is None:
            self.logger.warning("Некорректный URL, пропуск: %r", seed_url)
            return stats
        seed_url = canonicalize(seed_url)

        state = _SeedState(
            hostname=hostname,
            stats=stats,
            fetch_slots=asyncio.Semaphore(self.config.max_concurrent_fetches),
        )
        self.logger.info("Старт обхода: %s (режим %s)", seed_url, self.mode.kind)
        start = time.monotonic()
        if isinstance(self.mode, DepthBoundedMode):
            state.visited.add(seed_url)
            await self._crawl_depth(state, seed_url, self.mode.depth)
        else:
            await self._crawl_breadth(state, seed_url, self.mode)
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено %s: %d страниц за %.2f с, адресов: %d",
            seed_url, stats.pages_fetched, duration, len(stats.emails),
        )
        return stats

    async def _process(self, state: _SeedState, url: str) -> Optional[PageData]:
        """Fetch *url* under the per-seed fetch limit and collect its emails."""
        assert self.fetcher is not None
        async with state.fetch_slots:
            page = await self.fetcher.fetch(url)
        state.stats.fetched_urls.append(url)
        if page is None:
            state.stats.empty_pages += 1
            return None
        found = extract_emails(page.content)
        if found:
            self.logger.debug("%s: %d адресов", url, len(found))
            state.stats.emails.update(found)
        return page

    async def _crawl_depth(self, state: _SeedState, url: str, depth: int) -> None:
        # url is already in state.visited: links are marked when scheduled, before any await
        assert isinstance(self.mode, DepthBoundedMode)
        page = await self._process(state, url)
        if page is None or depth <= 0:
            return
        children = []
        for link in extract_links(page.content, page.url):
            if is_eligible(
                link.url,
                link.anchor_text,
                state.hostname,
                state.visited,
                depth,
                keywords=self.mode.keywords,
            ):
                state.visited.add(link.url)
                children.append(self._crawl_depth(state, link.url, depth - 1))
        if children:
            await asyncio.gather(*children)

    async def _crawl_breadth(self, state: _SeedState, start: str, mode: BreadthFirstMode) -> None:
        queue: Deque[str] = deque([start])
        queued: Set[str] = {start}
        while queue and len(state.visited) < mode.max_pages:
            url = queue.popleft()
            queued.discard(url)
            if url in state.visited:
                continue
            state.visited.add(url)
            page = await self._process(state, url)
            if page is not None:
                for link in extract_links(page.content, page.url):
                    remaining = mode.max_pages - len(state.visited) - len(queue)
                    if is_eligible(
                        link.url,
                        link.anchor_text,
                        state.hostname,
                        state.visited,
                        remaining,
                        keywords=None,
                        queued=queued,
                    ):
                        queue.append(link.url)
                        queued.add(link.url)
            if queue and len(state.visited) < mode.max_pages and mode.delay > 0:
                await asyncio.sleep(mode.delay)
