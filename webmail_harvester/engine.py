# File: webmail_harvester/engine.py
"""webmail_harvester.engine: пакетный запуск обхода по списку сайтов и сборка строк результата."""

from __future__ import annotations

import asyncio
import re
from typing import Iterator, List, Optional, Protocol, Sequence, Set

from webmail_harvester.config import HarvestConfig
from webmail_harvester.crawler.crawler import EmailCrawler
from webmail_harvester.logger import logger
from webmail_harvester.models import ResultRow

__all__ = ["SeedCrawler", "chunked", "normalize_seed_url", "parse_url_list", "scrape_all"]

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")


class SeedCrawler(Protocol):
    """Всё, что умеет обойти один сайт и вернуть найденные адреса."""

    async def crawl(self, seed_url: str) -> Set[str]: ...


def parse_url_list(raw_text: str) -> List[str]:
    """Разбивает текст на строки, обрезает пробелы и отбрасывает пустые строки."""
    return [line.strip() for line in raw_text.splitlines() if line.strip()]


def normalize_seed_url(url: str) -> str:
    """Добавляет ``https://``, если у адреса нет схемы."""
    url = url.strip()
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def chunked(items: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    """Делит последовательность на куски по ``size`` элементов."""
    if size < 1:
        raise ValueError("size must be >= 1")
    for start in range(0, len(items), size):
        yield items[start:start + size]


async def _harvest_seed(crawler: SeedCrawler, seed: str) -> Set[str]:
    """Обходит один сайт; любая ошибка превращается в пустой результат."""
    try:
        return await crawler.crawl(normalize_seed_url(seed))
    except Exception:
        logger.exception("Ошибка при обработке %s", seed)
        return set()


async def scrape_all(
    seeds: Sequence[str],
    config: HarvestConfig,
    crawler: Optional[SeedCrawler] = None,
) -> List[ResultRow]:
    """
    Обходит все сайты пакетами по ``config.batch_size`` и возвращает строки (сайт, адрес).

    Пакеты выполняются последовательно, сайты внутри пакета — параллельно.
    Порядок строк: пакет, сайт внутри пакета, адреса сайта по алфавиту.

    Parameters
    ----------
    seeds : Sequence[str]
        Адреса сайтов в том виде, в каком их ввёл пользователь.
    config : HarvestConfig
        Конфигурация запуска.
    crawler : SeedCrawler, optional
        Готовый обходчик; по умолчанию создаётся EmailCrawler со своей сессией.
    """
    if crawler is None:
        async with EmailCrawler(config) as owned:
            return await scrape_all(seeds, config, owned)

    rows: List[ResultRow] = []
    for index, chunk in enumerate(chunked(seeds, config.batch_size), start=1):
        logger.info("Пакет %d: %d сайтов", index, len(chunk))
        found = await asyncio.gather(*(_harvest_seed(crawler, seed) for seed in chunk))
        for seed, emails in zip(chunk, found):
            rows.extend(ResultRow(website=seed, email=email) for email in sorted(emails))
    logger.info("Всего сайтов: %d, строк: %d", len(seeds), len(rows))
    return rows
