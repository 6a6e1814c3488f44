# webmail_harvester/crawler/link_extractor.py
"""
Link extraction utilities for Webmail Harvester.
"""
from __future__ import annotations

from typing import Dict, Final, List, Tuple
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from webmail_harvester.crawler.models import LinkCandidate

#: href prefixes that never point at a page
SKIP_SCHEMES: Final[Tuple[str, ...]] = ("mailto:", "javascript:", "tel:")

DEFAULT_PORTS: Final[Dict[str, int]] = {"http": 80, "https": 443}


def canonicalize(url: str) -> str:
    """
    Normalise an absolute URL the way browsers serialise it.

    Scheme and host are lower-cased, a default port is dropped and an empty
    path becomes ``/``. Path, query and fragment are kept as is. URLs without
    a host or with an unparsable port are returned unchanged.
    """
    parts = urlsplit(url)
    if not parts.netloc:
        return url
    try:
        port = parts.port
    except ValueError:
        return url
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{host}"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        netloc = f"{netloc}:{port}"
    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def extract_links(html: str, base_url: str) -> List[LinkCandidate]:
    """
    Extract every navigable ``<a href>`` of *html* as an absolute URL.

    ``mailto:``, ``javascript:`` and ``tel:`` hrefs are dropped before
    resolution; hrefs that cannot be resolved against *base_url* are skipped.
    Domain filtering is left to the crawl policy.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[LinkCandidate] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.startswith(SKIP_SCHEMES):
            continue
        try:
            absolute = canonicalize(urljoin(base_url, raw))
        except ValueError:
            continue
        links.append(LinkCandidate(url=absolute, anchor_text=tag.get_text().lower()))
    return links
