# webmail_harvester/crawler/policy.py
"""
Crawl policy: decides whether a discovered link may be traversed.
"""
from __future__ import annotations

import re
from typing import Container, Final, Iterable, Optional, Sequence
from urllib.parse import urlsplit

from webmail_harvester.config import DEFAULT_KEYWORDS

__all__ = ("hostname_of", "matches_keywords", "is_eligible")

# Characters allowed in a host component after urlsplit() (IPv6 brackets are stripped).
_HOST_RE: Final[re.Pattern[str]] = re.compile(r"[\w.\-:%]+")


def hostname_of(url: str) -> Optional[str]:
    """Return the lower-cased host of *url*, or None when it has no usable host."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return None
    if not host or not _HOST_RE.fullmatch(host):
        return None
    return host


def matches_keywords(url: str, anchor_text: str, keywords: Iterable[str]) -> bool:
    """Plain substring match of any keyword against the URL or the anchor text."""
    return any(k in url or k in anchor_text for k in keywords)


def is_eligible(
    candidate_url: str,
    anchor_text: str,
    seed_hostname: str,
    visited: Container[str],
    remaining: int,
    keywords: Optional[Sequence[str]] = DEFAULT_KEYWORDS,
    queued: Container[str] = (),
) -> bool:
    """
    Return True when *candidate_url* may be crawled.

    *remaining* is the depth left in depth-bounded mode and the page budget
    left in breadth-first mode. Pass ``keywords=None`` to disable the
    keyword relevance gate.
    """
    if hostname_of(candidate_url) != seed_hostname:
        return False
    if candidate_url in visited or candidate_url in queued:
        return False
    if remaining <= 0:
        return False
    if keywords is not None and not matches_keywords(candidate_url, anchor_text, keywords):
        return False
    return True
