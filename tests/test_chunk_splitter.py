"""Tests for heading-based chunk splitting."""

from web2rag.core.models import Chunk
from web2rag.extraction import ChunkSplitter, format_chunks_text, render_markdown, split_into_chunks
from tests.helpers import body_of

MARKDOWN = (
    "Intro text that is long enough\n"
    "## Section A\n"
    "content A is long enough here\n"
    "## B\n"
    "short"
)


class TestSplitIntoChunks:
    """Tests for split_into_chunks."""

    def test_preamble_and_sections(self):
        """Content before the first heading is untitled; short sections are dropped."""
        chunks = split_into_chunks(MARKDOWN)
        assert [(c.ordinal, c.title) for c in chunks] == [(0, ""), (1, "Section A")]
        assert chunks[0].content == "Intro text that is long enough"
        assert chunks[1].content == "## Section A\ncontent A is long enough here"

    def test_all_short_sections_dropped(self):
        """Sections under the minimum length disappear entirely."""
        assert split_into_chunks("Intro text\n## A\ncontent A\n## B\nshort") == []

    def test_ordinals_are_dense(self):
        """Dropping a middle chunk does not leave a gap in ordinals."""
        markdown = (
            "# First heading\nfirst body with plenty of text\n"
            "## Tiny\nx\n"
            "## Third heading\nthird body with plenty of text\n"
        )
        chunks = split_into_chunks(markdown)
        assert [c.ordinal for c in chunks] == [0, 1]
        assert [c.title for c in chunks] == ["First heading", "Third heading"]

    def test_char_count_matches_content(self):
        """Every chunk meets the minimum length and counts its own characters."""
        for chunk in split_into_chunks(MARKDOWN):
            assert chunk.char_count == len(chunk.content)
            assert chunk.char_count >= 20

    def test_deeper_headings_do_not_split(self):
        """H3 and below stay inside the enclosing chunk."""
        markdown = "## Guide\nOverview paragraph here.\n### Detail\nMore detail text.\n#### Deeper\nEven more."
        chunks = split_into_chunks(markdown)
        assert len(chunks) == 1
        assert "### Detail" in chunks[0].content

    def test_heading_pattern_applies_to_every_line(self):
        """Splitting is line based, so a '# ' line in a code listing also opens a chunk."""
        markdown = (
            "## Setup\n"
            "Install the tool first, then run it:\n"
            "```bash\n"
            "# install the package\n"
            "pip install web2rag\n"
            "```"
        )
        chunks = split_into_chunks(markdown)
        assert [c.title for c in chunks] == ["Setup", "install the package"]
        assert chunks[1].content == "# install the package\npip install web2rag\n```"

    def test_backtick_paragraph_does_not_suppress_splits(self):
        """A paragraph opening with inline code in triple backticks leaves later headings intact."""
        markdown = (
            "```x``` is how you quote things inline in a document\n"
            "## Section A\n"
            "content of section A is long enough\n"
            "## Section B\n"
            "content of section B is long enough"
        )
        chunks = split_into_chunks(markdown)
        assert [c.title for c in chunks] == ["", "Section A", "Section B"]

    def test_rendered_inline_code_with_backticks(self):
        """Renderer output that opens with a backtick-heavy code span still splits at each heading."""
        html = (
            "<main><p><code>a``b</code> quoting in markdown docs is tricky</p>"
            "<h2>Next</h2><p>The next section has enough text.</p>"
            "<h2>Last</h2><p>The last section has enough text too.</p></main>"
        )
        markdown = render_markdown(body_of(html))
        assert markdown.startswith("```a``b``` quoting")
        chunks = split_into_chunks(markdown)
        assert [c.title for c in chunks] == ["", "Next", "Last"]

    def test_hash_without_space_is_not_heading(self):
        """A hashtag is ordinary text."""
        chunks = split_into_chunks("#hashtag line that is long enough to keep")
        assert len(chunks) == 1
        assert chunks[0].title == ""

    def test_empty_input(self):
        """Empty and whitespace-only Markdown yield no chunks."""
        assert split_into_chunks("") == []
        assert split_into_chunks(" \n\t\n") == []

    def test_resplitting_is_stable(self):
        """Re-splitting joined chunk contents reproduces the same chunks."""
        chunks = split_into_chunks(MARKDOWN)
        again = split_into_chunks("\n\n".join(c.content for c in chunks))
        assert again == chunks

    def test_custom_levels_and_length(self):
        """The splitter honours its configured level and minimum length."""
        splitter = ChunkSplitter(min_length=1, max_level=3)
        chunks = splitter.split("## A\na\n### B\nb")
        assert [c.title for c in chunks] == ["A", "B"]


class TestFormatChunksText:
    """Tests for plain-text chunk export."""

    def test_format(self):
        """Chunks are numbered from one with an Untitled fallback."""
        text = format_chunks_text(split_into_chunks(MARKDOWN))
        assert text == (
            "--- Chunk 1: Untitled ---\n"
            "Intro text that is long enough\n\n"
            "--- Chunk 2: Section A ---\n"
            "## Section A\n"
            "content A is long enough here"
        )

    def test_empty(self):
        """No chunks format to an empty string."""
        assert format_chunks_text([]) == ""


class TestChunkModel:
    """Tests for the Chunk dataclass."""

    def test_build_trims_and_counts(self):
        """build() trims content and records its length."""
        chunk = Chunk.build(3, "T", "  body text  ")
        assert chunk.content == "body text"
        assert chunk.char_count == 9

    def test_to_dict(self):
        """to_dict() exposes all fields."""
        chunk = Chunk.build(0, "", "content")
        assert chunk.to_dict() == {"ordinal": 0, "title": "", "content": "content", "char_count": 7}
        assert chunk.display_title == "Untitled"
