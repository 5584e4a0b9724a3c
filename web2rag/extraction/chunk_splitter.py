"""
Chunk Splitter
==============

Heading-delimited chunking of rendered Markdown for embedding.
"""

import re
from typing import List, Sequence, Tuple

from ..core.models import Chunk
from .config import MIN_CHUNK_LENGTH, SPLIT_HEADING_LEVEL

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)")


def _parse_sections(markdown: str, max_level: int) -> List[Tuple[str, str]]:
    """Cut markdown into (title, content) sections at headings of level <= max_level."""
    sections: List[Tuple[str, str]] = []
    title = ""
    lines: List[str] = []

    def flush():
        content = "\n".join(lines)
        if content.strip():
            sections.append((title, content))

    for line in markdown.split("\n"):
        m = _HEADING_RE.match(line)
        if m and len(m.group(1)) <= max_level:
            flush()
            title = m.group(2).strip()
            lines = [line]
        else:
            lines.append(line)

    flush()
    return sections


def split_into_chunks(
    markdown: str,
    min_length: int = MIN_CHUNK_LENGTH,
    max_level: int = SPLIT_HEADING_LEVEL,
) -> List[Chunk]:
    """
    Split Markdown into titled chunks at H1/H2 boundaries.

    Content before the first heading forms an untitled chunk. Chunks whose
    trimmed content is shorter than ``min_length`` are dropped, and ordinals
    are assigned densely over the retained chunks.

    Args:
        markdown: Rendered Markdown
        min_length: Minimum trimmed characters for a chunk to be kept
        max_level: Deepest heading level that opens a new chunk

    Returns:
        Chunks in document order
    """
    if not markdown or not markdown.strip():
        return []

    retained = [
        (title, content.strip())
        for title, content in _parse_sections(markdown, max_level)
        if len(content.strip()) >= min_length
    ]
    return [Chunk.build(i, title, content) for i, (title, content) in enumerate(retained)]


def format_chunks_text(chunks: Sequence[Chunk]) -> str:
    """Serialize chunks as plain text blocks for export."""
    return "\n\n".join(
        f"--- Chunk {i}: {chunk.display_title} ---\n{chunk.content}"
        for i, chunk in enumerate(chunks, 1)
    )


class ChunkSplitter:
    """
    Heading-based Markdown chunker.

    Produces deterministic, self-describing chunks whose boundaries depend
    only on heading positions.
    """

    def __init__(self, min_length: int = MIN_CHUNK_LENGTH, max_level: int = SPLIT_HEADING_LEVEL):
        """
        Initialize chunk splitter.

        Args:
            min_length: Drop chunks shorter than this
            max_level: Deepest heading level that starts a chunk
        """
        self.min_length = min_length
        self.max_level = max_level

    def split(self, markdown: str) -> List[Chunk]:
        """Split Markdown into chunks."""
        return split_into_chunks(markdown, min_length=self.min_length, max_level=self.max_level)
