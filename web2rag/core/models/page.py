"""
Page Models
===========

Per-page extraction output and crawl bookkeeping.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .chunk import Chunk


class CrawlStatus(str, Enum):
    """Outcome of processing one crawled URL."""

    DONE = "done"
    ERROR = "error"


@dataclass
class PageExtraction:
    """Markdown and chunks extracted from a single HTML document."""
    url: Optional[str]
    title: str
    markdown: str
    chunks: List[Chunk] = field(default_factory=list)

    @property
    def char_count(self) -> int:
        return len(self.markdown)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "title": self.title,
            "markdown": self.markdown,
            "char_count": self.char_count,
            "chunks": [c.to_dict() for c in self.chunks],
        }


@dataclass
class CrawlResult:
    """Result of crawling a single page."""
    url: str
    title: str
    status: CrawlStatus
    markdown: str = ""
    error: str = ""

    @property
    def char_count(self) -> int:
        return len(self.markdown)

    @property
    def ok(self) -> bool:
        return self.status is CrawlStatus.DONE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "title": self.title,
            "status": self.status.value,
            "char_count": self.char_count,
            "error": self.error,
        }
