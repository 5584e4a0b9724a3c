# Extraction Module
"""Main content location, Markdown rendering and chunk splitting."""

from .config import (
    REMOVE_SELECTORS,
    MAIN_CONTENT_SELECTORS,
    MIN_MAIN_CONTENT_CHARS,
    SKIP_TAGS,
    VALID_LANGUAGES,
    MIN_CHUNK_LENGTH,
)
from .content_locator import ContentLocator, locate_main_content, parse_html, remove_noise
from .code_blocks import detect_language, extract_code_text, is_code_table
from .markdown_renderer import MarkdownRenderer, RenderContext, cleanup_markdown, render_markdown
from .chunk_splitter import ChunkSplitter, split_into_chunks, format_chunks_text
from .extractor import PageExtractor, extract_page, extract_title

__all__ = [
    # Config
    "REMOVE_SELECTORS",
    "MAIN_CONTENT_SELECTORS",
    "MIN_MAIN_CONTENT_CHARS",
    "SKIP_TAGS",
    "VALID_LANGUAGES",
    "MIN_CHUNK_LENGTH",
    # Locator
    "ContentLocator",
    "locate_main_content",
    "parse_html",
    "remove_noise",
    # Renderer
    "MarkdownRenderer",
    "RenderContext",
    "cleanup_markdown",
    "render_markdown",
    "detect_language",
    "extract_code_text",
    "is_code_table",
    # Splitter
    "ChunkSplitter",
    "split_into_chunks",
    "format_chunks_text",
    # Pipeline
    "PageExtractor",
    "extract_page",
    "extract_title",
]
