"""
Crawler Configuration
=====================

URL filtering constants for the same-site crawler.
"""

CRAWLABLE_SCHEMES = ("http", "https")

# Default ports dropped during normalization
DEFAULT_PORTS = {"http": 80, "https": 443}

# Link targets that never lead to another page
NON_PAGE_HREF_PREFIXES = ("#", "javascript:", "mailto:", "tel:", "data:")

# Static assets and downloads are never crawled
SKIP_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".ico",
    ".pdf", ".zip", ".tar", ".gz",
    ".css", ".js",
    ".woff", ".woff2", ".ttf", ".eot",
    ".mp4", ".mp3", ".wav", ".avi", ".mov",
})
