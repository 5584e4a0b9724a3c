"""
Content Locator
===============

Noise removal and main-content container selection.
"""

import copy
import logging
from typing import Iterable, Optional, Sequence, Union

from bs4 import BeautifulSoup, Comment, Tag
from soupsieve import SelectorSyntaxError

from ..core.exceptions import NoContentError
from .config import MAIN_CONTENT_SELECTORS, MIN_MAIN_CONTENT_CHARS, REMOVE_SELECTORS

logger = logging.getLogger(__name__)


def parse_html(html: str) -> BeautifulSoup:
    """Parse HTML text into a document tree."""
    return BeautifulSoup(html or "", "lxml")


def remove_noise(soup: BeautifulSoup, selectors: Iterable[str] = REMOVE_SELECTORS) -> int:
    """
    Drop comments and every subtree matching a noise selector, in place.

    Invalid selectors are skipped. Returns the number of removed elements.
    """
    for c in soup.find_all(string=lambda s: isinstance(s, Comment)):
        c.extract()

    removed = 0
    for selector in selectors:
        try:
            matches = soup.select(selector)
        except SelectorSyntaxError:
            logger.debug("Skipping invalid noise selector: %r", selector)
            continue
        for node in matches:
            # An ancestor matched by an earlier selector may already be gone
            if node.decomposed:
                continue
            node.decompose()
            removed += 1
    return removed


def select_main_container(
    soup: BeautifulSoup,
    selectors: Sequence[str] = MAIN_CONTENT_SELECTORS,
    min_chars: int = MIN_MAIN_CONTENT_CHARS,
) -> Optional[Tag]:
    """
    Choose the main content container.
    Strategy:
      1) Try known CSS selectors in order; the first match with enough text wins.
      2) Fallback to <body> (None when the document has none).
    """
    for selector in selectors:
        try:
            found = soup.select_one(selector)
        except SelectorSyntaxError:
            logger.debug("Skipping invalid content selector: %r", selector)
            continue
        if found is not None and len(found.get_text().strip()) > min_chars:
            return found

    logger.debug("No main content selector matched; falling back to <body>")
    return soup.body


def locate_main_content(
    html: Union[str, BeautifulSoup],
    remove_selectors: Iterable[str] = REMOVE_SELECTORS,
    content_selectors: Sequence[str] = MAIN_CONTENT_SELECTORS,
    min_chars: int = MIN_MAIN_CONTENT_CHARS,
    in_place: bool = False,
) -> Tag:
    """
    Return the element holding the page's primary content.

    A parsed document passed in is copied first unless ``in_place`` is set;
    noise removal then only touches the copy. Raises NoContentError when
    there is no usable root.
    """
    if isinstance(html, BeautifulSoup):
        soup = html if in_place else copy.copy(html)
    else:
        soup = parse_html(html)

    remove_noise(soup, remove_selectors)
    container = select_main_container(soup, content_selectors, min_chars)
    if container is None:
        raise NoContentError("Document has no main content region and no <body>")
    return container


class ContentLocator:
    """
    High-level content location interface.

    Holds a tunable selector policy and applies it to HTML documents.
    """

    def __init__(
        self,
        remove_selectors: Optional[Sequence[str]] = None,
        content_selectors: Optional[Sequence[str]] = None,
        min_chars: int = MIN_MAIN_CONTENT_CHARS,
    ):
        """
        Initialize content locator.

        Args:
            remove_selectors: Custom noise selectors (optional)
            content_selectors: Custom main content selectors (optional)
            min_chars: Text length a candidate must exceed
        """
        self.remove_selectors = tuple(remove_selectors or REMOVE_SELECTORS)
        self.content_selectors = tuple(content_selectors or MAIN_CONTENT_SELECTORS)
        self.min_chars = min_chars

    def locate(self, html: Union[str, BeautifulSoup], in_place: bool = False) -> Tag:
        """Locate the main content element."""
        return locate_main_content(
            html,
            in_place=in_place,
            remove_selectors=self.remove_selectors,
            content_selectors=self.content_selectors,
            min_chars=self.min_chars,
        )
