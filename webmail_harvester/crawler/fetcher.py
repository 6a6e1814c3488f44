# webmail_harvester/crawler/fetcher.py
"""
Fetcher module: single-page HTTP GET with timeout and optional retry/backoff.

Every failure (network error, timeout, bad status, non-HTML body) is mapped
to ``None`` so a broken page never aborts the crawl.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout, InvalidURL

from webmail_harvester.crawler.models import PageData
from webmail_harvester.logger import LOGGER_NAME

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)


class Fetcher:
    """Fetches HTML pages through a shared aiohttp session."""

    def __init__(
        self,
        session: ClientSession,
        retry_times: int = 0,
        retry_status: Sequence[int] = RETRY_STATUS,
        timeout: Optional[ClientTimeout] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.session = session
        self.retry_times = retry_times
        self._retry_status = retry_status
        # per-request options override the session defaults; unset ones leave them alone
        self._request_options: Dict[str, Any] = {}
        if timeout is not None:
            self._request_options["timeout"] = timeout
        if user_agent:
            self._request_options["headers"] = {"User-Agent": user_agent}
        self.logger = logging.getLogger(LOGGER_NAME)

    async def fetch(self, url: str) -> Optional[PageData]:
        """
        GET *url* and return its HTML.

        Returns None on failure, non-2xx status or a non ``text/html`` response.
        The returned page carries the final URL, after redirects.
        """
        attempts = 0
        while True:
            try:
                async with self.session.get(
                    url, raise_for_status=False, **self._request_options
                ) as resp:
                    if resp.status in self._retry_status:
                        raise ClientError(f"Retryable status {resp.status}")
                    if not 200 <= resp.status < 300:
                        self.logger.debug("Skip %s: HTTP %s", url, resp.status)
                        return None
                    ctype = resp.headers.get("Content-Type", "").lower()
                    if "text/html" not in ctype:
                        self.logger.debug("Skip %s: content-type %r", url, ctype)
                        return None
                    text = await resp.text(errors="replace")
                    return PageData(str(resp.url), text)
            except InvalidURL:
                self.logger.debug("Skip %s: invalid URL", url)
                return None
            except asyncio.TimeoutError:
                # no retry on timeout
                self.logger.debug("Timeout fetching %s", url)
                return None
            except ClientError as exc:
                attempts += 1
                if attempts > self.retry_times:
                    self.logger.debug("Failed %s: %s", url, exc)
                    return None
                backoff = min(2**attempts, 60)
                self.logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.retry_times, url, backoff
                )
                await asyncio.sleep(backoff)
            except (ValueError, LookupError) as exc:
                # unsupported scheme, unknown charset
                self.logger.debug("Failed %s: %s", url, exc)
                return None
