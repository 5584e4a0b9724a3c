# Export Module
"""Single-page files and crawl archives."""

from .archive import (
    EXPORT_FORMATS,
    sanitize_file_name,
    archive_path_for,
    build_archive_entries,
    write_archive,
    write_markdown_file,
    write_chunks_file,
)

__all__ = [
    "EXPORT_FORMATS",
    "sanitize_file_name",
    "archive_path_for",
    "build_archive_entries",
    "write_archive",
    "write_markdown_file",
    "write_chunks_file",
]
