# File: webmail_harvester/actions.py
"""webmail_harvester.actions: действия верхнего уровня для CLI и внешних вызовов.

Ни одно действие не бросает исключений наружу: ошибки ввода и сбои
форматирования возвращаются как ``ActionResult(success=False, error=...)``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from webmail_harvester.config import HarvestConfig
from webmail_harvester.engine import SeedCrawler, parse_url_list, scrape_all
from webmail_harvester.formatter import EmailFormatter
from webmail_harvester.logger import logger
from webmail_harvester.models import ActionResult, ResultRow

__all__ = ["EMPTY_INPUT", "NO_URLS", "NO_EMAILS", "FORMAT_FAILED", "scrape", "format_results"]

EMPTY_INPUT = "The uploaded file is empty."
NO_URLS = "No valid URLs found in the file."
NO_EMAILS = "No emails to format."
FORMAT_FAILED = "AI formatting failed. Please try again."


async def scrape(
    raw_text: Optional[str],
    config: Optional[HarvestConfig] = None,
    crawler: Optional[SeedCrawler] = None,
) -> ActionResult:
    """Собирает адреса со всех сайтов из текста (один URL на строку)."""
    if not raw_text:
        return ActionResult.fail(EMPTY_INPUT)

    urls = parse_url_list(raw_text)
    if not urls:
        return ActionResult.fail(NO_URLS)

    rows = await scrape_all(urls, config or HarvestConfig(), crawler=crawler)
    return ActionResult.ok(rows)


def format_results(rows: Sequence[ResultRow], formatter: EmailFormatter) -> ActionResult:
    """
    Пропускает уникальные адреса через formatter и оставляет только строки,
    чей адрес вернулся из него без изменений. Исходные строки не меняются.
    """
    if not rows:
        return ActionResult.fail(NO_EMAILS)

    unique_emails = list(dict.fromkeys(row.email for row in rows))
    try:
        kept = set(formatter(unique_emails))
    except Exception as exc:
        logger.error("AI formatting failed: %s", exc)
        return ActionResult.fail(FORMAT_FAILED)

    return ActionResult.ok([row for row in rows if row.email in kept])
