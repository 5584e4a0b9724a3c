"""
Archive Export
==============

Write extraction results to disk: single-page files and a ZIP of a crawl.
"""

import logging
import re
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union
from urllib.parse import unquote, urlparse

from ..core.models import Chunk, CrawlResult
from ..crawler.url_utils import crawl_scope
from ..extraction import format_chunks_text, split_into_chunks

logger = logging.getLogger(__name__)

EXPORT_FORMATS = {"markdown": ".md", "chunks": ".txt"}

_UNSAFE_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f]')
_WHITESPACE_RE = re.compile(r"\s+")
_UNDERSCORES_RE = re.compile(r"_+")


def sanitize_file_name(name: str, max_length: int = 100) -> str:
    """Make a string safe to use as a single path segment."""
    name = _UNSAFE_CHARS_RE.sub("_", name or "")
    name = _WHITESPACE_RE.sub("_", name)
    name = _UNDERSCORES_RE.sub("_", name).strip("_")
    name = name[:max_length].rstrip("_")
    return name or "untitled"


def _replace_extension(segment: str, extension: str) -> str:
    stem, dot, _ = segment.rpartition(".")
    if dot and stem:
        segment = stem
    return segment + extension


def archive_path_for(url: str, base_url: str, extension: str = ".md", max_name_length: int = 100) -> str:
    """
    Archive member path for a crawled URL.

    Segments are taken relative to the crawl base path and sanitized one by
    one; the base page itself becomes "index".
    """
    _, base_path = crawl_scope(base_url)
    path = unquote(urlparse(url).path).rstrip("/")
    base = base_path.rstrip("/")
    if base and (path == base or path.startswith(base + "/")):
        path = path[len(base):]

    segments = []
    for raw in path.split("/"):
        if not raw:
            continue
        segment = sanitize_file_name(raw, max_name_length)
        if not segment.strip("."):
            segment = "_"
        segments.append(segment)
    if not segments:
        segments = ["index"]

    segments[-1] = _replace_extension(segments[-1], extension)
    return "/".join(segments)


def _unique_path(path: str, taken: Dict[str, int]) -> str:
    if path not in taken:
        taken[path] = 1
        return path
    stem, dot, ext = path.rpartition(".")
    if not dot or "/" in ext:
        stem, ext = path, ""
    n = taken[path] + 1
    while True:
        candidate = f"{stem}_{n}.{ext}" if ext else f"{stem}_{n}"
        if candidate not in taken:
            taken[path] = n
            taken[candidate] = 1
            return candidate
        n += 1


def build_archive_entries(
    results: Iterable[CrawlResult],
    base_url: str,
    fmt: str = "markdown",
    max_name_length: int = 100,
) -> List[Tuple[str, str]]:
    """
    Map successful crawl results to (archive path, file content) pairs.

    Args:
        results: Crawl results; only completed pages are exported
        base_url: URL the crawl started from
        fmt: "markdown" for rendered Markdown, "chunks" for chunk text
        max_name_length: Longest allowed path segment

    Returns:
        Entries with unique paths, in result order
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt!r} (expected one of {sorted(EXPORT_FORMATS)})")
    extension = EXPORT_FORMATS[fmt]

    taken: Dict[str, int] = {}
    entries = []
    for result in results:
        if not result.ok:
            continue
        path = _unique_path(archive_path_for(result.url, base_url, extension, max_name_length), taken)
        if fmt == "chunks":
            content = format_chunks_text(split_into_chunks(result.markdown))
        else:
            content = result.markdown
        entries.append((path, content))
    return entries


def write_archive(
    results: Iterable[CrawlResult],
    base_url: str,
    output_path: Union[str, Path],
    fmt: str = "markdown",
    max_name_length: int = 100,
) -> int:
    """
    Write successful crawl results into a deflated ZIP archive.

    Returns:
        Number of files written

    Raises:
        ValueError: there is no successful result to export
    """
    entries = build_archive_entries(results, base_url, fmt, max_name_length)
    if not entries:
        raise ValueError("No successfully crawled pages to export")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path, content in entries:
            zf.writestr(path, content)

    logger.info("Saved %d files to %s", len(entries), output_path)
    return len(entries)


def write_markdown_file(markdown: str, output_path: Union[str, Path]) -> Path:
    """Write rendered Markdown to a UTF-8 file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(markdown, encoding="utf-8")
    logger.info("Saved Markdown (%d chars) to %s", len(markdown), output_path)
    return output_path


def write_chunks_file(chunks: List[Chunk], output_path: Union[str, Path]) -> Path:
    """Write chunks in plain-text export form to a UTF-8 file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(format_chunks_text(chunks), encoding="utf-8")
    logger.info("Saved %d chunks to %s", len(chunks), output_path)
    return output_path
