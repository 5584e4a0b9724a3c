"""
Configuration Settings for web2rag
==================================

Centralized configuration using dataclasses for type safety and easy management.
"""

from dataclasses import dataclass, field
from typing import Tuple


DEFAULT_USER_AGENT = "web2rag/1.0 (+https://pypi.org/project/web2rag/)"

# URL templates for the proxy fallback chain; "{url}" receives the percent-encoded target
DEFAULT_PROXY_TEMPLATES: Tuple[str, ...] = (
    "https://api.codetabs.com/v1/proxy?quest={url}",
    "https://corsproxy.io/?{url}",
    "https://api.allorigins.win/raw?url={url}",
)


@dataclass
class ExtractionConfig:
    """Tuning knobs for locating, rendering and splitting."""

    # Main content candidates must carry more text than this
    min_main_content_chars: int = 50

    # Chunks shorter than this (after trimming) are dropped
    min_chunk_length: int = 20

    # Deepest heading level that starts a new chunk
    split_heading_level: int = 2


@dataclass
class FetchConfig:
    """Configuration for retrieving raw HTML."""

    timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT

    # Fall back to public proxies when the direct request fails
    use_proxies: bool = False
    proxy_templates: Tuple[str, ...] = DEFAULT_PROXY_TEMPLATES


@dataclass
class CrawlConfig:
    """Configuration for the same-site crawl loop."""

    max_pages: int = 30
    delay: float = 0.5  # seconds between page requests


@dataclass
class ExportConfig:
    """File names and limits used when writing results to disk."""

    markdown_file_name: str = "extracted_data.md"
    chunks_file_name: str = "rag_chunks.txt"
    archive_file_name: str = "web2rag_export.zip"
    max_file_name_length: int = 100


@dataclass
class AppConfig:
    """Complete application configuration."""

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    crawl: CrawlConfig = field(default_factory=CrawlConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    @classmethod
    def from_args(cls, args) -> "AppConfig":
        """Create configuration from command line arguments."""
        return cls(
            fetch=FetchConfig(
                timeout=getattr(args, "timeout", 15.0),
                use_proxies=getattr(args, "use_proxies", False),
            ),
            crawl=CrawlConfig(
                max_pages=getattr(args, "max_pages", 30),
                delay=getattr(args, "delay", 0.5),
            ),
        )
