"""
Code Blocks
===========

Code text reconstruction for <pre> elements and highlighted code tables,
plus best-effort language detection.

Syntax highlighters (Prism, Shiki, Monaco, Pygments, Rouge, highlight.js)
frequently wrap every source line in its own element without literal
newlines between them; extraction restores those line breaks.
"""

import re
from typing import Iterable, List, Optional

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .config import (
    CODE_BLOCK_TAGS,
    CODE_LINE_CLASSES,
    CODE_SKIP_TAGS,
    CODE_TABLE_CLASSES,
    CODE_TABLE_MARKER_SELECTOR,
    LANGUAGE_CLASS_PREFIXES,
    LANGUAGE_DATA_ATTRIBUTES,
    LINE_MARKER_SELECTOR,
    LINE_NUMBER_CLASS_FRAGMENTS,
    VALID_LANGUAGES,
)

_DATA_LANGUAGE_RE = re.compile(r"^[\w+#.-]+$")
_NUMERIC_RE = re.compile(r"^[\d\s]*$")
_BACKTICKS_RE = re.compile(r"`+")


def class_tokens(node: Optional[Tag]) -> List[str]:
    """Lowercased class names of an element."""
    if not isinstance(node, Tag):
        return []
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return [c.lower() for c in classes]


def is_line_number_node(node: Tag) -> bool:
    """Check if an element is a line-number gutter."""
    joined = " ".join(class_tokens(node))
    return any(fragment in joined for fragment in LINE_NUMBER_CLASS_FRAGMENTS)


def _is_excluded(node: Tag) -> bool:
    return node.name in CODE_SKIP_TAGS or is_line_number_node(node)


def _inside_excluded(node: Tag, root: Tag) -> bool:
    for parent in node.parents:
        if parent is root:
            return False
        if _is_excluded(parent):
            return True
    return False


def _raw_text(node: Tag) -> str:
    """Concatenated text of a line element, skipping gutters and buttons."""
    parts = []
    for child in node.children:
        if isinstance(child, NavigableString):
            if not isinstance(child, PreformattedString):
                parts.append(str(child))
        elif isinstance(child, Tag) and not _is_excluded(child):
            parts.append(_raw_text(child))
    return "".join(parts)


def _line_markers(root: Tag) -> List[Tag]:
    """Outermost per-line elements below root."""
    markers = [
        m for m in root.select(LINE_MARKER_SELECTOR)
        if not _is_excluded(m) and not _inside_excluded(m, root)
    ]
    marker_ids = {id(m) for m in markers}
    outermost = []
    for marker in markers:
        nested = False
        for parent in marker.parents:
            if parent is root:
                break
            if id(parent) in marker_ids:
                nested = True
                break
        if not nested:
            outermost.append(marker)
    return outermost


def _walk_code(node) -> str:
    if isinstance(node, NavigableString):
        return "" if isinstance(node, PreformattedString) else str(node)
    if not isinstance(node, Tag):
        return ""
    if node.name == "br":
        return "\n"
    if _is_excluded(node):
        return ""

    text = "".join(_walk_code(child) for child in node.children)
    is_line = bool(CODE_LINE_CLASSES.intersection(class_tokens(node)))
    if (is_line or node.name in CODE_BLOCK_TAGS) and text and not text.endswith("\n"):
        text += "\n"
    return text


def trim_blank_lines(text: str) -> str:
    """Drop leading and trailing blank lines, keeping indentation and inner blank lines."""
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def extract_code_text(root: Tag) -> str:
    """
    Reconstruct the source text of a code element.

    When per-line marker elements exist, each marker is one line. Otherwise
    text is collected recursively, with <br> and block-level or line-wrapper
    elements ending a line.
    """
    markers = _line_markers(root)
    if markers:
        text = "\n".join(_raw_text(m).rstrip("\r\n") for m in markers)
    else:
        text = "".join(_walk_code(child) for child in root.children)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return trim_blank_lines(text)


def detect_language(*elements: Optional[Tag]) -> str:
    """
    Best-effort language identifier for a code block.

    Class tokens (language-/lang-/highlight- prefixes) are checked on every
    element first and must be in the allow-list; data-language/data-lang
    attributes are the fallback.
    """
    candidates = [e for e in elements if isinstance(e, Tag)]
    for element in candidates:
        for cls in class_tokens(element):
            for prefix in LANGUAGE_CLASS_PREFIXES:
                if cls.startswith(prefix):
                    lang = cls[len(prefix):]
                    if lang in VALID_LANGUAGES:
                        return lang
    for element in candidates:
        for attr in LANGUAGE_DATA_ATTRIBUTES:
            value = (element.get(attr) or "").strip().lower()
            if value and _DATA_LANGUAGE_RE.match(value):
                return value
    return ""


def fenced_block(code: str, lang: str = "") -> str:
    """Wrap code in a fence longer than any backtick run it contains."""
    longest = max((len(run) for run in _BACKTICKS_RE.findall(code)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"\n\n{fence}{lang}\n{code}\n{fence}\n\n"


# ---------------- Code Tables ----------------

def own_rows(table: Tag) -> List[Tag]:
    """<tr> elements of this table, excluding those of nested tables."""
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def is_code_table(table: Tag) -> bool:
    """
    Decide whether a table lays out source code rather than data.

    Known highlighter table classes always qualify. Otherwise the table
    must have no header cells and contain a code-like descendant.
    """
    if CODE_TABLE_CLASSES.intersection(class_tokens(table)):
        return True
    if table.find("th") is not None:
        return False
    return table.select_one(CODE_TABLE_MARKER_SELECTOR) is not None


def _is_numeric(text: str) -> bool:
    return bool(_NUMERIC_RE.match(text))


def _row_code_source(row: Tag) -> Optional[Tag]:
    fallback = None
    for cell in row.find_all(["td", "th"], recursive=False):
        if is_line_number_node(cell) or _is_numeric(cell.get_text()):
            continue
        inner = cell.select_one("pre, code")
        if inner is not None:
            return inner
        fallback = cell
    return fallback


def _first_tag(nodes: Iterable[Optional[Tag]]) -> Optional[Tag]:
    for node in nodes:
        if node is not None:
            return node
    return None


def render_code_table(table: Tag) -> str:
    """Render a code table as one fenced block holding only the code column."""
    rows = own_rows(table)
    sources = [_row_code_source(row) for row in rows]
    if len(rows) == 1:
        code = extract_code_text(sources[0]) if sources[0] is not None else ""
    else:
        # One table row per source line (e.g. highlight.js line numbers)
        code = trim_blank_lines("\n".join(
            extract_code_text(src) if src is not None else "" for src in sources
        ))
    if not code.strip():
        return ""

    source = _first_tag(sources)
    code_child = source.find("code") if source is not None and source.name == "pre" else None
    lang = detect_language(code_child, source, table)
    return fenced_block(code, lang)
