"""
Extraction Configuration
========================

Selector tables and tag sets driving content location, Markdown rendering
and chunk splitting. Order matters wherever a sequence is used: earlier
entries win.
"""

# -----------------------
# Content Locator
# -----------------------

# Removed from the working copy before the main content search
REMOVE_SELECTORS = (
    "nav", "footer", "header", "aside",
    "script", "style", "noscript", "svg",
    "button", "iframe", "form",
    '[role="navigation"]',
    '[role="banner"]',
    '[role="contentinfo"]',
    '[aria-hidden="true"]',
    ".sidebar", ".nav", ".menu", ".toc",
    ".breadcrumb", ".pagination", ".footer",
    ".header", ".cookie-banner", ".ad",
    ".advertisement", ".social-share",
)

# Main content candidates, most specific documentation layouts after the semantic tags
MAIN_CONTENT_SELECTORS = (
    "main",
    "article",
    ".md-content",
    ".theme-doc-markdown",
    ".markdown-body",
    ".post-content",
    ".entry-content",
    ".article-content",
    ".content-body",
    '[role="main"]',
    "#content",
    "#main-content",
    ".prose",
)

# A candidate needs strictly more trimmed text than this
MIN_MAIN_CONTENT_CHARS = 50


# -----------------------
# Markdown Renderer
# -----------------------

# Never rendered, children included
SKIP_TAGS = frozenset({
    "script", "style", "nav", "footer", "header", "aside",
    "svg", "noscript", "button", "form", "iframe", "template",
})

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Link schemes that execute or embed instead of navigating
UNSAFE_LINK_SCHEMES = ("javascript:", "vbscript:", "data:")


# -----------------------
# Code Blocks
# -----------------------

# Highlighters that emit one element per source line
LINE_MARKER_SELECTOR = '.token-line, [class*="token-line"], .line, .view-line, [data-line]'

# Elements that end a code line when extracted as plain text
CODE_BLOCK_TAGS = frozenset({"div", "p", "tr", "li"})
CODE_LINE_CLASSES = frozenset({"token-line", "line", "view-line"})

# Class fragments marking line-number gutters (never part of the code text)
LINE_NUMBER_CLASS_FRAGMENTS = ("lineno", "line-number", "linenumber", "line-num", "ln-numbers", "gutter")

# Elements inside a <pre> that never contribute code text
CODE_SKIP_TAGS = frozenset({"script", "style", "button"})

# Classes that always mark a table as a highlighted code listing
CODE_TABLE_CLASSES = frozenset({"highlighttable", "codehilitetable", "hljs-ln"})

# Any of these inside a header-less table makes it a code table
CODE_TABLE_MARKER_SELECTOR = 'code, pre, [class*="highlight"], [class*="line-number"], [class*="linenumber"], .line-num'

# class="language-xxx" / "lang-xxx" / "highlight-xxx"
LANGUAGE_CLASS_PREFIXES = ("language-", "lang-", "highlight-")
LANGUAGE_DATA_ATTRIBUTES = ("data-language", "data-lang")

VALID_LANGUAGES = frozenset({
    "javascript", "js", "typescript", "ts", "python", "py", "java", "c", "cpp",
    "csharp", "cs", "go", "rust", "ruby", "rb", "php", "swift", "kotlin",
    "html", "css", "scss", "sass", "less", "json", "yaml", "yml", "xml",
    "sql", "bash", "sh", "shell", "powershell", "ps1",
    "markdown", "md", "text", "txt", "plain",
    "jsx", "tsx", "vue", "svelte",
    "r", "matlab", "scala", "perl", "lua", "haskell", "elixir", "clojure",
    "docker", "dockerfile", "nginx", "graphql", "toml", "ini", "makefile",
})


# -----------------------
# Chunk Splitter
# -----------------------

MIN_CHUNK_LENGTH = 20
SPLIT_HEADING_LEVEL = 2
