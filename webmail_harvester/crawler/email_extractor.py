# webmail_harvester/crawler/email_extractor.py
"""
Email extraction from raw page text.

The pattern runs over the raw HTML, not the DOM, so addresses inside scripts,
attributes and comments are picked up too. Validation of the result is left
to the formatting step.
"""
from __future__ import annotations

import re
from typing import Final, Set

EMAIL_RE: Final[re.Pattern[str]] = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def extract_emails(html: str) -> Set[str]:
    """Return the distinct email-like substrings of *html* (case-sensitive)."""
    if not html:
        return set()
    return set(EMAIL_RE.findall(html))
