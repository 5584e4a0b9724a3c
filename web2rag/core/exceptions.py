"""
Errors
======

Exception hierarchy shared by extraction, fetching and export.
"""


class Web2RagError(Exception):
    """Base class for every error raised by web2rag."""


class NoContentError(Web2RagError):
    """The document has neither a main content region nor a body."""


class EmptyContentError(Web2RagError):
    """Extraction succeeded but produced no Markdown."""


class FetchError(Web2RagError):
    """Every retrieval strategy failed for a URL."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
