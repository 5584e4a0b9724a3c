# web2rag - Web pages to RAG-ready Markdown
"""
Convert web pages into clean Markdown and heading-delimited chunks.

This package provides four main components:
- extraction: main content location, Markdown rendering and chunk splitting
- crawler: HTML fetching and breadth-first same-site crawling
- export: single-page files and ZIP archives
- cli: the ``web2rag`` command

Typical use:
    from web2rag import extract_page
    page = extract_page(html, url="https://example.com/docs/")
"""

__version__ = "1.0.0"


# Lazy imports keep ``import web2rag`` light
def __getattr__(name):
    if name in ("extract_page", "extract_title", "PageExtractor"):
        from .extraction import extractor
        return getattr(extractor, name)
    elif name in ("locate_main_content", "ContentLocator"):
        from .extraction import content_locator
        return getattr(content_locator, name)
    elif name in ("render_markdown", "MarkdownRenderer"):
        from .extraction import markdown_renderer
        return getattr(markdown_renderer, name)
    elif name in ("split_into_chunks", "format_chunks_text", "ChunkSplitter"):
        from .extraction import chunk_splitter
        return getattr(chunk_splitter, name)
    elif name in ("HtmlFetcher", "SiteCrawler"):
        from . import crawler
        return getattr(crawler, name)
    elif name == "write_archive":
        from .export import write_archive
        return write_archive
    raise AttributeError(f"module 'web2rag' has no attribute '{name}'")


__all__ = [
    "extract_page",
    "extract_title",
    "PageExtractor",
    "locate_main_content",
    "ContentLocator",
    "render_markdown",
    "MarkdownRenderer",
    "split_into_chunks",
    "format_chunks_text",
    "ChunkSplitter",
    "HtmlFetcher",
    "SiteCrawler",
    "write_archive",
]
