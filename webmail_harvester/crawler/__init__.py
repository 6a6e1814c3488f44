"""webmail_harvester.crawler: обход сайтов и извлечение адресов."""

from .crawler import EmailCrawler
from .email_extractor import extract_emails
from .link_extractor import extract_links
from .models import CrawlStats, LinkCandidate, PageData
from .policy import is_eligible

__all__ = [
    "CrawlStats",
    "EmailCrawler",
    "LinkCandidate",
    "PageData",
    "extract_emails",
    "extract_links",
    "is_eligible",
]
