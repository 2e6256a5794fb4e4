"""Tests for the text, link and heading extractors."""

import pytest

from portabletext.codec import decode
from portabletext.extract import (
    LinkInfo,
    TocEntry,
    extract_text,
    find_links,
    heading_level,
    render_outline,
    shift_headings,
    table_of_contents,
)
from portabletext.models import Node, new_block


@pytest.fixture
def article(article_json):
    return decode(article_json)


class TestHeadingLevel:
    """Parsing hN styles."""

    @pytest.mark.parametrize(
        "style,expected",
        [("h1", 1), ("h6", 6), ("h7", None), ("h0", None), ("normal", None), ("h12", None)],
    )
    def test_levels(self, style, expected):
        """Only h1 to h6 are headings."""
        assert heading_level(style) == expected


class TestExtractText:
    """Plain text per block."""

    def test_blocks_only(self, article):
        """Custom nodes are skipped."""
        assert extract_text(article) == ["Guide", "Read the docs first.", "Install", "pip install"]


class TestRenderOutline:
    """Outline rendering."""

    def test_article(self, article):
        """Headings, paragraphs, list items and custom nodes each render differently."""
        assert render_outline(article) == [
            "# Guide",
            "Read the docs first.",
            "[Custom node 2: image]",
            "## Install",
            "  • pip install",
        ]

    def test_nested_list_level(self):
        """List indentation follows the level."""
        node = new_block().add_span("deep")
        node.list_item = "number"
        node.level = 3

        assert render_outline([node]) == ["      • deep"]


class TestFindLinks:
    """Link annotations."""

    def test_article(self, article):
        """The link, its title and covered text are collected."""
        assert find_links(article) == [
            LinkInfo(key="lnk", href="https://docs.example.com", title="Docs", texts=["the docs"])
        ]

    def test_ignores_other_annotations(self):
        """Only markDefs of type "link" count."""
        node = new_block().add_span("x", "c1").add_mark_def("c1", "comment", {"text": "hi"})

        assert find_links([node]) == []

    def test_non_string_href(self):
        """A malformed href is reported as missing."""
        node = new_block().add_mark_def("l", "link", {"href": 42})

        assert find_links([node]) == [LinkInfo(key="l", href=None)]


class TestTableOfContents:
    """Heading extraction."""

    def test_article(self, article):
        """Headings are listed with document index and block number."""
        assert table_of_contents(article) == [
            TocEntry(index=0, block_number=0, level=1, text="Guide", key="a1"),
            TocEntry(index=3, block_number=2, level=2, text="Install", key="a4"),
        ]

    def test_no_headings(self):
        """A document without headings gives an empty list."""
        assert table_of_contents([new_block().add_span("x"), Node.custom("image")]) == []


class TestShiftHeadings:
    """Heading level changes."""

    def test_upgrade(self, article):
        """h2 becomes h1 and h1 stays at the limit."""
        shifted = shift_headings(article)

        assert [n.style for n in shifted] == ["h1", "normal", None, "h1", None]
        assert article[3].style == "h2"

    def test_downgrade(self, article):
        """h1 becomes h2 and h2 becomes h3."""
        shifted = shift_headings(article, downgrade=True)

        assert [n.style for n in shifted if n.is_block][:3] == ["h2", "normal", "h3"]

    def test_limit(self):
        """h6 is not downgraded further."""
        assert shift_headings([new_block("h6")], downgrade=True)[0].style == "h6"

    def test_other_fields_preserved(self, article):
        """Shifting keeps raw fields of every node."""
        shifted = shift_headings(article)

        assert shifted[2].raw == article[2].raw
        assert shifted[1] == article[1]
