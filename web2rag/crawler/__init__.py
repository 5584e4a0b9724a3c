# Crawler Module
"""Fetching, URL scoping and same-site crawling."""

from .config import SKIP_EXTENSIONS
from .url_utils import (
    normalize_url,
    crawl_scope,
    is_in_scope,
    has_skipped_extension,
    extract_links,
    file_name_from_url,
)
from .fetcher import HtmlFetcher, fetch_html
from .crawler import SiteCrawler, crawl_site

__all__ = [
    "SKIP_EXTENSIONS",
    "normalize_url",
    "crawl_scope",
    "is_in_scope",
    "has_skipped_extension",
    "extract_links",
    "file_name_from_url",
    "HtmlFetcher",
    "fetch_html",
    "SiteCrawler",
    "crawl_site",
]
