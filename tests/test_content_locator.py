"""Tests for noise removal and main content selection."""

import pytest
from bs4 import BeautifulSoup

from web2rag.core.exceptions import NoContentError
from web2rag.extraction import ContentLocator, locate_main_content, remove_noise, render_markdown
from web2rag.extraction.content_locator import select_main_container

LONG_TEXT = "This paragraph has comfortably more than fifty characters of real text."


class TestSelectMainContainer:
    """Tests for main container selection order and thresholds."""

    def test_prefers_main_element(self):
        """A <main> with enough text is chosen."""
        html = f"<body><div>Preamble</div><main><p>{LONG_TEXT}</p></main></body>"
        root = locate_main_content(html)
        assert root.name == "main"

    def test_short_candidate_falls_through_to_next_selector(self):
        """A candidate at or under the threshold is skipped in favour of the next one."""
        html = f"<body><main>Too short</main><article><p>{LONG_TEXT}</p></article></body>"
        root = locate_main_content(html)
        assert root.name == "article"

    def test_threshold_is_strict(self):
        """Exactly fifty characters is not enough."""
        html = f"<body><main>{'x' * 50}</main><p>Other body text</p></body>"
        root = locate_main_content(html)
        assert root.name == "body"

    def test_class_based_documentation_layout(self):
        """Known documentation containers are recognised by class."""
        html = f'<body><div class="markdown-body"><p>{LONG_TEXT}</p></div><p>Other</p></body>'
        root = locate_main_content(html)
        assert "markdown-body" in root.get("class")

    def test_invalid_content_selector_is_skipped(self):
        """A malformed selector does not abort the search."""
        soup = BeautifulSoup(f"<body><article><p>{LONG_TEXT}</p></article></body>", "lxml")
        root = select_main_container(soup, selectors=["[[broken", "article"])
        assert root.name == "article"


class TestBodyFallback:
    """Tests for the <body> fallback and missing roots."""

    def test_body_fallback_renders_only_paragraph(self):
        """A body holding a nav and one short paragraph yields only the paragraph."""
        html = '<html><body><nav><a href="/a">Menu link</a></nav><p>Just one line.</p></body></html>'
        root = locate_main_content(html)
        assert root.name == "body"
        assert render_markdown(root) == "Just one line."

    def test_no_body_raises(self):
        """An empty document has no usable root."""
        with pytest.raises(NoContentError):
            locate_main_content("")


class TestRemoveNoise:
    """Tests for denylist removal."""

    def test_nested_noise_inside_main_is_removed(self):
        """Denylisted elements nested in the content region contribute nothing."""
        html = (
            f"<body><main><p>{LONG_TEXT}</p>"
            "<div><nav><p>Secret navigation text</p></nav></div>"
            '<div class="cookie-banner">Accept cookies</div></main></body>'
        )
        markdown = render_markdown(locate_main_content(html))
        assert LONG_TEXT in markdown
        assert "Secret" not in markdown
        assert "cookies" not in markdown

    def test_comments_are_removed(self):
        """HTML comments never survive noise removal."""
        soup = BeautifulSoup("<body><p>Kept<!-- dropped --></p></body>", "lxml")
        remove_noise(soup)
        assert "dropped" not in str(soup)

    def test_returns_removed_count(self):
        """Each removed subtree is counted once."""
        soup = BeautifulSoup("<body><footer><nav>x</nav></footer><aside>y</aside><p>z</p></body>", "lxml")
        assert remove_noise(soup, ["footer", "nav", "aside"]) == 2

    def test_invalid_noise_selector_is_skipped(self):
        """Remaining selectors still apply after a malformed one."""
        soup = BeautifulSoup("<body><nav>menu</nav><p>text</p></body>", "lxml")
        remove_noise(soup, ["[[broken", "nav"])
        assert soup.find("nav") is None


class TestContentLocator:
    """Tests for the ContentLocator class."""

    def test_parsed_document_is_not_mutated_by_default(self):
        """Locating from a parsed document works on a copy."""
        soup = BeautifulSoup(f"<body><nav>menu</nav><main><p>{LONG_TEXT}</p></main></body>", "lxml")
        root = ContentLocator().locate(soup)
        assert root.name == "main"
        assert soup.find("nav") is not None

    def test_in_place_mutates_document(self):
        """in_place=True removes noise from the given document."""
        soup = BeautifulSoup(f"<body><nav>menu</nav><main><p>{LONG_TEXT}</p></main></body>", "lxml")
        ContentLocator().locate(soup, in_place=True)
        assert soup.find("nav") is None

    def test_custom_selectors(self):
        """Custom policies replace the defaults."""
        html = f'<body><main><p>{LONG_TEXT}</p></main><div id="docs"><p>{LONG_TEXT}</p></div></body>'
        locator = ContentLocator(content_selectors=["#docs"], min_chars=10)
        root = locator.locate(html)
        assert root.get("id") == "docs"
