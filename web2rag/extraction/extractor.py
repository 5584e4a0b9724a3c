"""
Page Extractor
==============

Single-page pipeline: raw HTML -> located content -> Markdown -> chunks.
"""

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup

from ..config.settings import ExtractionConfig
from ..core.exceptions import EmptyContentError
from ..core.models import PageExtraction
from .chunk_splitter import ChunkSplitter
from .content_locator import ContentLocator, parse_html
from .markdown_renderer import render_markdown

logger = logging.getLogger(__name__)


def extract_title(document: Union[str, BeautifulSoup]) -> str:
    """Trimmed <title> text of a document, or ""."""
    soup = document if isinstance(document, BeautifulSoup) else parse_html(document)
    title = soup.find("title")
    return " ".join(title.get_text().split()) if title else ""


class PageExtractor:
    """
    Runs locate, render and split over one HTML document.

    Treats an empty rendering as a failed extraction.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        locator: Optional[ContentLocator] = None,
        splitter: Optional[ChunkSplitter] = None,
    ):
        self.config = config or ExtractionConfig()
        self.locator = locator or ContentLocator(min_chars=self.config.min_main_content_chars)
        self.splitter = splitter or ChunkSplitter(
            min_length=self.config.min_chunk_length,
            max_level=self.config.split_heading_level,
        )

    def extract(self, html: str, url: Optional[str] = None) -> PageExtraction:
        """
        Extract Markdown and chunks from raw HTML.

        Args:
            html: Raw HTML text
            url: Page URL, used to resolve relative links and images

        Returns:
            PageExtraction with title, markdown and chunks

        Raises:
            NoContentError: the document has no body
            EmptyContentError: nothing renderable was found
        """
        soup = parse_html(html)
        title = extract_title(soup)
        root = self.locator.locate(soup, in_place=True)
        markdown = render_markdown(root, base_url=url)
        if not markdown:
            raise EmptyContentError(f"No content could be extracted from {url or 'document'}")

        chunks = self.splitter.split(markdown)
        logger.debug("Extracted %d chars, %d chunks from %s", len(markdown), len(chunks), url or "document")
        return PageExtraction(url=url, title=title, markdown=markdown, chunks=chunks)


def extract_page(
    html: str,
    url: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
) -> PageExtraction:
    """Extract Markdown and chunks from raw HTML."""
    return PageExtractor(config).extract(html, url=url)
