"""
URL Utilities
=============

URL normalization, crawl scoping, and link extraction functions.
"""

from pathlib import PurePosixPath
from typing import List, Set, Tuple
from urllib.parse import urldefrag, urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup

from .config import CRAWLABLE_SCHEMES, DEFAULT_PORTS, NON_PAGE_HREF_PREFIXES, SKIP_EXTENSIONS


def remove_default_port(scheme: str, netloc: str) -> str:
    """Remove the port when it is the scheme's default (80 for HTTP, 443 for HTTPS)."""
    port = DEFAULT_PORTS.get(scheme)
    suffix = f":{port}"
    if port and netloc.endswith(suffix):
        return netloc[:-len(suffix)]
    return netloc


def normalize_url(url: str) -> str:
    """
    Normalize URLs into the key used for visited/queued bookkeeping.
    - Only http(s) with a host; anything else normalizes to "".
    - Lowercase host, drop default port and fragment.
    - Strip trailing slashes from the path ("/" for the root); keep the query.
    """
    try:
        parsed = urlparse((url or "").strip())
    except ValueError:
        return ""
    scheme = parsed.scheme.lower()
    if scheme not in CRAWLABLE_SCHEMES or not parsed.netloc:
        return ""

    netloc = remove_default_port(scheme, parsed.netloc.lower())
    path = parsed.path.rstrip("/") or "/"
    return urlunparse((scheme, netloc, path, parsed.params, parsed.query, ""))


def crawl_scope(start_url: str) -> Tuple[str, str]:
    """Return (origin, base_path) bounding a crawl that starts at start_url."""
    parsed = urlparse(normalize_url(start_url))
    return f"{parsed.scheme}://{parsed.netloc}", parsed.path or "/"


def is_in_scope(url: str, origin: str, base_path: str) -> bool:
    """
    Allow if:
      - the origin (scheme, host, port) matches
      - the path is base_path itself or lies below it on a segment boundary
    """
    norm = normalize_url(url)
    if not norm:
        return False
    parsed = urlparse(norm)
    if f"{parsed.scheme}://{parsed.netloc}" != origin:
        return False
    if base_path == "/":
        return True
    return parsed.path == base_path or parsed.path.startswith(base_path + "/")


def has_skipped_extension(path: str) -> bool:
    """Check if a URL path points at a static asset or download."""
    return PurePosixPath(path).suffix.lower() in SKIP_EXTENSIONS


def extract_links(page_url: str, html: str) -> List[str]:
    """
    Extract absolute page links from HTML.
    - Resolve against the page URL and drop fragments.
    - Skip non-page targets (mailto:, javascript:, in-page anchors).
    - De-duplicate on the normalized form while preserving order.
    """
    soup = BeautifulSoup(html or "", "lxml")
    seen: Set[str] = set()
    links: List[str] = []

    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if not href or href.lower().startswith(NON_PAGE_HREF_PREFIXES):
            continue
        try:
            absolute, _ = urldefrag(urljoin(page_url, href))
        except ValueError:
            continue
        key = normalize_url(absolute)
        if key and key not in seen:
            seen.add(key)
            links.append(absolute)
    return links


def file_name_from_url(url: str) -> str:
    """Last path segment of a URL, else its host, else "page"."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "page"
    segments = [seg for seg in parsed.path.split("/") if seg]
    if segments:
        return segments[-1]
    return parsed.hostname or "page"
