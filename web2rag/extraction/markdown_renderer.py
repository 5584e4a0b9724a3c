"""
Markdown Renderer
=================

Convert a located content element to Markdown suitable for RAG ingestion.

The renderer is a recursive, pre-order walk. Each handler returns a string
fragment; block elements carry their own surrounding newlines and a final
cleanup pass squashes blank-line runs.
"""

import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .code_blocks import (
    detect_language,
    extract_code_text,
    fenced_block,
    is_code_table,
    own_rows,
    render_code_table,
)
from .config import HEADING_TAGS, SKIP_TAGS, UNSAFE_LINK_SCHEMES

_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_BACKTICKS_RE = re.compile(r"`+")


@dataclass(frozen=True)
class RenderContext:
    """Traversal state handed down the tree by value."""
    list_depth: int = 0


def _squash(text: str) -> str:
    return " ".join(text.split())


def cleanup_markdown(text: str) -> str:
    """Strip trailing whitespace per line, cap blank-line runs at one, trim the whole."""
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


def _inline_code(text: str) -> str:
    longest = max((len(run) for run in _BACKTICKS_RE.findall(text)), default=0)
    ticks = "`" * (longest + 1)
    if longest and (text.startswith("`") or text.endswith("`")):
        text = f" {text} "
    return f"{ticks}{text}{ticks}"


def _table_row(cells) -> str:
    return "| " + " | ".join(cells) + " |"


class MarkdownRenderer:
    """
    High-level interface for element to Markdown conversion.

    Relative link and image targets are resolved against ``base_url``
    when one is given.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url
        self._handlers: Dict[str, Callable[[Tag, RenderContext], str]] = {
            "p": self._render_paragraph,
            "ul": self._render_list,
            "ol": self._render_list,
            "li": self._render_list_item,
            "br": lambda node, ctx: "\n",
            "strong": self._render_strong,
            "b": self._render_strong,
            "em": self._render_emphasis,
            "i": self._render_emphasis,
            "code": self._render_code,
            "pre": self._render_pre,
            "a": self._render_link,
            "img": self._render_image,
            "blockquote": self._render_blockquote,
            "hr": lambda node, ctx: "\n\n---\n\n",
            "dl": self._render_definition_list,
            "table": self._render_table,
        }
        for tag in HEADING_TAGS:
            self._handlers[tag] = self._render_heading

    def render(self, root: Optional[Tag]) -> str:
        """Render an element subtree to cleaned Markdown ("" for None)."""
        if root is None:
            return ""
        return cleanup_markdown(self._render_node(root, RenderContext()))

    # ---------------- Dispatch ----------------

    def _render_node(self, node, ctx: RenderContext) -> str:
        if isinstance(node, NavigableString):
            if isinstance(node, PreformattedString):
                return ""
            text = _WHITESPACE_RE.sub(" ", str(node))
            return "" if text == " " else text
        if not isinstance(node, Tag):
            return ""

        name = (node.name or "").lower()
        if name in SKIP_TAGS:
            return ""
        handler = self._handlers.get(name)
        if handler is None:
            return self._render_children(node, ctx)
        return handler(node, ctx)

    def _render_children(self, node: Tag, ctx: RenderContext) -> str:
        return "".join(self._render_node(child, ctx) for child in node.children)

    def _resolve(self, target: str) -> str:
        return urljoin(self.base_url, target) if self.base_url else target

    # ---------------- Blocks ----------------

    def _render_heading(self, node: Tag, ctx: RenderContext) -> str:
        text = _squash(self._render_children(node, ctx))
        if not text:
            return ""
        level = int(node.name[1])
        return f"\n\n{'#' * level} {text}\n\n"

    def _render_paragraph(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        return f"\n\n{text}\n\n" if text else ""

    def _render_list(self, node: Tag, ctx: RenderContext) -> str:
        ordered = node.name == "ol"
        indent = "  " * ctx.list_depth
        nested_ctx = replace(ctx, list_depth=ctx.list_depth + 1)
        lines = []
        index = 1
        for child in node.children:
            if not isinstance(child, Tag):
                continue
            if child.name == "li":
                marker = f"{index}." if ordered else "-"
                item = self._render_item(child, marker, indent, nested_ctx)
                if not item:
                    continue
                lines.append(item)
                index += 1
            elif child.name in ("ul", "ol"):
                # Malformed but common: a list nested directly in a list
                nested = self._render_list(child, nested_ctx).strip("\n")
                if nested:
                    lines.append(nested + "\n")
        return "\n" + "".join(lines) + "\n"

    def _render_item(self, item: Tag, marker: str, indent: str, ctx: RenderContext) -> str:
        """
        Render one <li> of a list.

        Later lines of a multi-block item are aligned under the text after the
        marker. Nested lists keep the indentation they were rendered with.
        """
        segments: List[Tuple[str, bool]] = []
        pending: List[str] = []
        for child in item.children:
            if isinstance(child, Tag) and child.name in ("ul", "ol"):
                segments.append(("".join(pending), False))
                pending = []
                segments.append((self._render_list(child, ctx).strip("\n"), True))
            else:
                pending.append(self._render_node(child, ctx))
        segments.append(("".join(pending), False))

        pad = indent + " " * (len(marker) + 1)
        lines: List[str] = []
        for text, nested in segments:
            if nested:
                if text:
                    if not lines:
                        lines.append(f"{indent}{marker}")
                    lines.append(text)
                continue
            text = text.strip()
            if not text:
                continue
            for line in text.split("\n"):
                if not lines:
                    lines.append(f"{indent}{marker} {line}")
                else:
                    lines.append(f"{pad}{line}" if line.strip() else "")
        return "\n".join(lines) + "\n" if lines else ""

    def _render_list_item(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        return f"- {text}\n" if text else ""

    def _render_blockquote(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        if not text:
            return ""
        quoted = "\n".join(f"> {line}" for line in text.split("\n"))
        return f"\n\n{quoted}\n\n"

    def _render_definition_list(self, node: Tag, ctx: RenderContext) -> str:
        parts = []
        for child in node.find_all(["dt", "dd"]):
            # Only terms of this list (possibly wrapped in <div>), not nested lists
            if child.find_parent("dl") is not node:
                continue
            text = self._render_children(child, ctx).strip()
            if not text:
                continue
            if child.name == "dt":
                parts.append(f"\n\n**{_squash(text)}**\n")
            else:
                parts.append(f"  {text}\n")
        return "".join(parts) + "\n" if parts else ""

    def _render_pre(self, node: Tag, ctx: RenderContext) -> str:
        code = extract_code_text(node)
        if not code.strip():
            return ""
        lang = detect_language(node.find("code"), node, node.parent)
        return fenced_block(code, lang)

    def _render_table(self, node: Tag, ctx: RenderContext) -> str:
        if is_code_table(node):
            return render_code_table(node)

        rows = []
        for tr in own_rows(node):
            cells = [self._render_cell(cell, ctx) for cell in tr.find_all(["th", "td"], recursive=False)]
            if cells:
                rows.append(cells)
        if not rows:
            return ""

        width = max(len(row) for row in rows)
        rows = [row + [" "] * (width - len(row)) for row in rows]
        lines = [_table_row(rows[0]), _table_row(["---"] * width)]
        lines.extend(_table_row(row) for row in rows[1:])
        return "\n\n" + "\n".join(lines) + "\n\n"

    def _render_cell(self, cell: Tag, ctx: RenderContext) -> str:
        text = _squash(self._render_children(cell, ctx))
        return text.replace("|", "\\|") or " "

    # ---------------- Inline ----------------

    def _render_strong(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        return f"**{text}**" if text else ""

    def _render_emphasis(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        return f"*{text}*" if text else ""

    def _render_code(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        return _inline_code(text) if text else ""

    def _render_link(self, node: Tag, ctx: RenderContext) -> str:
        text = self._render_children(node, ctx).strip()
        if not text:
            return ""
        href = (node.get("href") or "").strip()
        if not href or href.startswith("#") or href.lower().startswith(UNSAFE_LINK_SCHEMES):
            return text
        return f"[{text}]({self._resolve(href)})"

    def _render_image(self, node: Tag, ctx: RenderContext) -> str:
        src = (node.get("src") or "").strip()
        if not src:
            return ""
        alt = _squash(node.get("alt") or "")
        return f"![{alt}]({self._resolve(src)})"


def render_markdown(root: Optional[Tag], base_url: Optional[str] = None) -> str:
    """Render an element subtree to Markdown."""
    return MarkdownRenderer(base_url=base_url).render(root)
