# Core Models Module
"""Data models for extraction and crawl results."""

from .chunk import Chunk
from .page import PageExtraction, CrawlResult, CrawlStatus

__all__ = [
    "Chunk",
    "PageExtraction",
    "CrawlResult",
    "CrawlStatus",
]
