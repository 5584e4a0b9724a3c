"""
Site Crawler
============

Breadth-first same-site crawl that extracts Markdown from every page.
"""

import asyncio
import logging
import time
from collections import deque
from typing import Callable, Deque, List, Optional, Set
from urllib.parse import urlparse

from ..config.settings import CrawlConfig
from ..core.exceptions import Web2RagError
from ..core.models import CrawlResult, CrawlStatus
from ..extraction import PageExtractor, extract_title, parse_html
from .fetcher import HtmlFetcher
from .url_utils import (
    crawl_scope,
    extract_links,
    file_name_from_url,
    has_skipped_extension,
    is_in_scope,
    normalize_url,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, CrawlResult], None]


class SiteCrawler:
    """
    Crawl pages below a start URL.

    Features:
    - Breadth-first order with visited/queued bookkeeping on normalized URLs
    - Scope limited to the start URL's origin and path prefix
    - Page budget, politeness delay and cooperative stop
    - Per-page failures recorded as error results, never raised
    """

    def __init__(
        self,
        fetcher: HtmlFetcher,
        config: Optional[CrawlConfig] = None,
        extractor: Optional[PageExtractor] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.fetcher = fetcher
        self.config = config or CrawlConfig()
        self.extractor = extractor or PageExtractor()
        self.on_progress = on_progress

        self.results: List[CrawlResult] = []
        self.visited: Set[str] = set()
        self.queued: Set[str] = set()
        self.to_visit: Deque[str] = deque()
        self._stopped = False

    def stop(self) -> None:
        """Ask the crawl loop to finish after the current page."""
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped

    async def crawl(self, start_url: str) -> List[CrawlResult]:
        """
        Crawl from start_url and return one result per visited page.

        Raises:
            ValueError: start_url is not an http(s) URL
        """
        start_key = normalize_url(start_url)
        if not start_key:
            raise ValueError(f"Not a crawlable URL: {start_url!r}")

        origin, base_path = crawl_scope(start_url)
        self.results = []
        self.visited.clear()
        self.queued = {start_key}
        self.to_visit = deque([start_url])
        self._stopped = False
        started = time.time()

        logger.info("Crawling %s (scope %s%s, max %d pages)", start_url, origin, base_path, self.config.max_pages)

        while self.to_visit and not self._stopped and len(self.visited) < self.config.max_pages:
            url = self.to_visit.popleft()
            key = normalize_url(url)
            self.queued.discard(key)
            if key in self.visited:
                continue
            self.visited.add(key)

            if self.results and self.config.delay > 0:
                await asyncio.sleep(self.config.delay)

            result = await self._process(url, origin, base_path)
            self.results.append(result)

            total = min(self.config.max_pages, len(self.visited) + len(self.to_visit))
            if self.on_progress is not None:
                self.on_progress(len(self.results), total, result)

        done = sum(1 for r in self.results if r.ok)
        logger.info(
            "Crawl finished: %d done, %d errors (%.1fs)%s",
            done,
            len(self.results) - done,
            time.time() - started,
            " [stopped]" if self._stopped else "",
        )
        return self.results

    async def _process(self, url: str, origin: str, base_path: str) -> CrawlResult:
        """Fetch, extract and enqueue links for a single URL."""
        try:
            html = await self.fetcher.fetch(url)
        except Web2RagError as e:
            return CrawlResult(url=url, title=file_name_from_url(url), status=CrawlStatus.ERROR, error=str(e))

        queued = self._enqueue_links(url, html, origin, base_path)
        logger.debug("Queued %d new links from %s", queued, url)

        try:
            page = self.extractor.extract(html, url=url)
        except Web2RagError as e:
            logger.warning("Extraction failed for %s: %s", url, e)
            return self._error_result(url, html, e)
        except Exception as e:
            logger.exception("Error processing %s: %s", url, e)
            return self._error_result(url, html, e)

        title = page.title or file_name_from_url(url)
        logger.info("Fetched [%d/%d] %s (%d chars)", len(self.visited), self.config.max_pages, url, page.char_count)
        return CrawlResult(url=url, title=title, status=CrawlStatus.DONE, markdown=page.markdown)

    def _error_result(self, url: str, html: str, error: Exception) -> CrawlResult:
        title = extract_title(parse_html(html)) or file_name_from_url(url)
        return CrawlResult(url=url, title=title, status=CrawlStatus.ERROR, error=str(error))

    def _enqueue_links(self, page_url: str, html: str, origin: str, base_path: str) -> int:
        added = 0
        for link in extract_links(page_url, html):
            key = normalize_url(link)
            if not key or key in self.visited or key in self.queued:
                continue
            if not is_in_scope(link, origin, base_path):
                continue
            if has_skipped_extension(urlparse(key).path):
                continue
            self.queued.add(key)
            self.to_visit.append(link)
            added += 1
        return added


async def crawl_site(
    start_url: str,
    fetcher: HtmlFetcher,
    config: Optional[CrawlConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> List[CrawlResult]:
    """Crawl a site with a fresh SiteCrawler."""
    return await SiteCrawler(fetcher, config, on_progress=on_progress).crawl(start_url)
