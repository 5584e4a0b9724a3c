"""
HTML Fetcher
============

Async retrieval of raw HTML with an optional public-proxy fallback chain.
"""

import asyncio
import logging
from typing import List, Optional, Tuple
from urllib.parse import quote

import aiohttp
from aiohttp import ClientTimeout

from ..config.settings import FetchConfig
from ..core.exceptions import FetchError

logger = logging.getLogger(__name__)


class HtmlFetcher:
    """
    Fetch HTML pages over HTTP.

    Strategies are tried in order: the URL itself, then each configured
    proxy template when proxies are enabled. The first strategy returning
    a 2xx response with a non-blank body wins.

    Usage:
        async with HtmlFetcher(config) as fetcher:
            html = await fetcher.fetch("https://example.com/docs")
    """

    def __init__(self, config: Optional[FetchConfig] = None):
        self.config = config or FetchConfig()
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "HtmlFetcher":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        """Create the underlying HTTP session if it is not open yet."""
        if self._session is None or self._session.closed:
            timeout = ClientTimeout(total=self.config.timeout)
            headers = {"User-Agent": self.config.user_agent}
            self._session = aiohttp.ClientSession(timeout=timeout, headers=headers)

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    def strategies(self, url: str) -> List[Tuple[str, str]]:
        """(label, request URL) pairs in the order they are attempted."""
        attempts = [("direct", url)]
        if self.config.use_proxies:
            encoded = quote(url, safe="")
            for template in self.config.proxy_templates:
                attempts.append((template.split("?")[0], template.format(url=encoded)))
        return attempts

    async def fetch(self, url: str) -> str:
        """
        Retrieve the HTML text of a URL.

        Raises:
            FetchError: every strategy failed
        """
        await self.open()
        failures = []
        for label, request_url in self.strategies(url):
            try:
                async with self._session.get(request_url, allow_redirects=True) as resp:
                    if not 200 <= resp.status < 300:
                        failures.append(f"{label}: HTTP {resp.status}")
                        continue
                    text = await resp.text(errors="ignore")
            except asyncio.TimeoutError:
                failures.append(f"{label}: timed out after {self.config.timeout}s")
                continue
            except aiohttp.ClientError as e:
                failures.append(f"{label}: {e.__class__.__name__}: {e}")
                continue

            if not text.strip():
                failures.append(f"{label}: empty response")
                continue
            if label != "direct":
                logger.info("Fetched %s via proxy %s", url, label)
            return text

        logger.warning("Fetch failed for %s (%s)", url, "; ".join(failures))
        raise FetchError(url, "; ".join(failures))


async def fetch_html(url: str, config: Optional[FetchConfig] = None) -> str:
    """Fetch a single page with a short-lived session."""
    async with HtmlFetcher(config) as fetcher:
        return await fetcher.fetch(url)
