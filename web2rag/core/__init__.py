# Core Module
"""Shared data models and error types."""

from .exceptions import Web2RagError, NoContentError, EmptyContentError, FetchError
from .models import Chunk, PageExtraction, CrawlResult, CrawlStatus

__all__ = [
    "Web2RagError",
    "NoContentError",
    "EmptyContentError",
    "FetchError",
    "Chunk",
    "PageExtraction",
    "CrawlResult",
    "CrawlStatus",
]
