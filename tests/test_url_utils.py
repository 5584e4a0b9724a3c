"""Tests for URL normalization, scoping and link extraction."""

from web2rag.crawler import (
    crawl_scope,
    extract_links,
    file_name_from_url,
    has_skipped_extension,
    is_in_scope,
    normalize_url,
)


class TestNormalizeUrl:
    """Tests for normalize_url."""

    def test_lowercases_host_and_drops_default_port_and_fragment(self):
        """Equivalent spellings of a URL share one key."""
        assert normalize_url("HTTPS://Example.COM:443/docs/#intro") == "https://example.com/docs"

    def test_root_path(self):
        """An empty path becomes a single slash."""
        assert normalize_url("https://example.com") == "https://example.com/"
        assert normalize_url("https://example.com///") == "https://example.com/"

    def test_keeps_query_and_custom_port(self):
        """Queries and non-default ports are significant."""
        assert normalize_url("http://example.com:8080/a/?x=1") == "http://example.com:8080/a?x=1"

    def test_default_port_only_for_matching_scheme(self):
        """Port 443 on plain HTTP is not a default port."""
        assert normalize_url("http://example.com:443/") == "http://example.com:443/"

    def test_non_http_urls(self):
        """Anything but http(s) with a host normalizes to an empty string."""
        assert normalize_url("mailto:someone@example.com") == ""
        assert normalize_url("ftp://example.com/file") == ""
        assert normalize_url("not a url") == ""
        assert normalize_url("") == ""


class TestCrawlScope:
    """Tests for crawl_scope and is_in_scope."""

    def test_scope_from_start_url(self):
        """Origin and base path come from the normalized start URL."""
        assert crawl_scope("https://Example.com/docs/") == ("https://example.com", "/docs")

    def test_paths_below_base_are_in_scope(self):
        """The base itself and anything beneath it are in scope."""
        origin, base = crawl_scope("https://example.com/docs/")
        assert is_in_scope("https://example.com/docs", origin, base)
        assert is_in_scope("https://example.com/docs/guide/setup", origin, base)

    def test_prefix_must_end_on_segment_boundary(self):
        """Sibling paths sharing a prefix are out of scope."""
        origin, base = crawl_scope("https://example.com/docs/")
        assert not is_in_scope("https://example.com/docs-old/page", origin, base)
        assert not is_in_scope("https://example.com/blog", origin, base)

    def test_other_origin_is_out_of_scope(self):
        """Other hosts and schemes never match."""
        origin, base = crawl_scope("https://example.com/")
        assert is_in_scope("https://example.com/anything", origin, base)
        assert not is_in_scope("https://other.org/anything", origin, base)
        assert not is_in_scope("http://example.com/anything", origin, base)


class TestSkippedExtensions:
    """Tests for has_skipped_extension."""

    def test_assets_are_skipped(self):
        """Images, archives and scripts are not pages."""
        assert has_skipped_extension("/img/logo.PNG")
        assert has_skipped_extension("/files/report.pdf")
        assert has_skipped_extension("/static/app.js")

    def test_pages_are_kept(self):
        """HTML pages and extensionless paths are crawlable."""
        assert not has_skipped_extension("/docs/page.html")
        assert not has_skipped_extension("/docs/")
        assert not has_skipped_extension("/docs/v1.2/intro")


class TestExtractLinks:
    """Tests for extract_links."""

    def test_resolves_filters_and_deduplicates(self):
        """Links are absolute, fragment-free, de-duplicated and in order."""
        html = """
        <a href="setup">Setup</a>
        <a href="/docs/api#methods">API</a>
        <a href="#top">Top</a>
        <a href="mailto:team@example.com">Mail</a>
        <a href="javascript:void(0)">JS</a>
        <a href="/docs/api/">API again</a>
        <a href="https://other.org/">Other</a>
        <a>No href</a>
        """
        links = extract_links("https://example.com/docs/intro", html)
        assert links == [
            "https://example.com/docs/setup",
            "https://example.com/docs/api",
            "https://other.org/",
        ]


class TestFileNameFromUrl:
    """Tests for file_name_from_url."""

    def test_last_segment(self):
        assert file_name_from_url("https://example.com/docs/intro.html") == "intro.html"

    def test_host_for_root(self):
        assert file_name_from_url("https://example.com/") == "example.com"

    def test_fallback(self):
        assert file_name_from_url("") == "page"
