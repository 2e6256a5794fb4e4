"""Pytest configuration and fixtures."""

import pytest

from portabletext.models import Node, Span, new_block


@pytest.fixture
def full_block_json():
    """A block using every typed field plus a link annotation."""
    return (
        '[{"_type":"block","_key":"key1","style":"h1",'
        '"children":[{"_type":"span","text":"Title","marks":["strong"]}],'
        '"markDefs":[{"_type":"link","_key":"link1","href":"https://example.com"}],'
        '"listItem":"bullet","level":2}]'
    )


@pytest.fixture
def article_json():
    """A short article: headings, a linked paragraph, a list item and a custom node."""
    return """[
  {"_type": "block", "_key": "a1", "style": "h1",
   "children": [{"_type": "span", "text": "Guide"}], "markDefs": []},
  {"_type": "block", "_key": "a2", "style": "normal",
   "children": [
     {"_type": "span", "text": "Read "},
     {"_type": "span", "text": "the docs", "marks": ["lnk"]},
     {"_type": "span", "text": " first."}
   ],
   "markDefs": [{"_type": "link", "_key": "lnk", "href": "https://docs.example.com", "title": "Docs"}]},
  {"_type": "image", "_key": "a3", "asset": {"_ref": "image-abc-200x200-png"}},
  {"_type": "block", "_key": "a4", "style": "h2",
   "children": [{"_type": "span", "text": "Install"}], "markDefs": []},
  {"_type": "block", "_key": "a5", "listItem": "bullet", "level": 1,
   "children": [{"_type": "span", "text": "pip install"}], "markDefs": []}
]"""


@pytest.fixture
def article_file(tmp_path, article_json):
    """Write the article to a temporary file."""
    path = tmp_path / "article.json"
    path.write_text(article_json, encoding="utf-8")
    return path


@pytest.fixture
def three_nodes():
    """Two blocks around a custom node."""
    return [
        new_block("h1").add_span("One"),
        Node.custom("divider"),
        new_block("normal").add_span("Two"),
    ]


@pytest.fixture
def linked_block():
    """A block whose markDefs carry a nested raw payload."""
    block = new_block("normal").add_span("see ").add_span("here", "l1")
    block.add_mark_def("l1", "link", {"href": "https://example.com", "meta": {"tags": ["a", "b"]}})
    block.key = "k1"
    block.raw["custom"] = {"nested": [1, 2, {"deep": True}]}
    block.children.append(Span(type="mention", raw={"user": "u1"}))
    return block
