"""
Chunk Model
===========

A titled, heading-delimited slice of rendered Markdown.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Chunk:
    """
    One retrieval unit produced by the chunk splitter.

    Attributes:
        ordinal: 0-based position among the retained chunks
        title: Heading text that opened the chunk ("" for a preamble)
        content: Trimmed Markdown, starting with its heading line when it has one
        char_count: len(content)
    """
    ordinal: int
    title: str
    content: str
    char_count: int

    @classmethod
    def build(cls, ordinal: int, title: str, content: str) -> "Chunk":
        """Create a chunk from raw content, trimming it and counting characters."""
        content = content.strip()
        return cls(ordinal=ordinal, title=title, content=content, char_count=len(content))

    @property
    def display_title(self) -> str:
        """Title used in plain-text exports."""
        return self.title or "Untitled"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
