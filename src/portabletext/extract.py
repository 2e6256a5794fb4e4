"""Convenience extractors built on the traversal operations.

These are illustrative helpers used by the CLI; they do not attempt full
rendering of rich text.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from portabletext.models import Document, Node
from portabletext.traversal import WalkContext, transform_nodes, walk, walk_with_context

LINK_TYPE = "link"
HEADING_STYLE = re.compile(r"h([1-6])")
MIN_HEADING = 1
MAX_HEADING = 6


@dataclass
class LinkInfo:
    """A link annotation and the text that uses it."""

    key: Optional[str]
    href: Optional[str]
    title: Optional[str] = None
    texts: list[str] = field(default_factory=list)


@dataclass
class TocEntry:
    """One heading in a table of contents."""

    index: int  # position in the document
    block_number: int  # zero-based position among blocks
    level: int
    text: str
    key: Optional[str] = None


def heading_level(style: str) -> Optional[int]:
    """Return N for an "hN" style, else None."""
    match = HEADING_STYLE.fullmatch(style)
    return int(match.group(1)) if match else None


def extract_text(doc: Document) -> list[str]:
    """Plain text of every block, in order."""
    return [node.plain_text for node in doc if node.is_block]


def render_outline(doc: Document) -> list[str]:
    """Render a rough text outline: headings as "#" lines, list items as bullets."""
    lines: list[str] = []

    def visit(node: Node, context: WalkContext) -> None:
        if not node.is_block:
            lines.append(f"[Custom node {context.index}: {node.type}]")
            return
        level = heading_level(node.resolved_style)
        if level is not None:
            lines.append(f"{'#' * level} {node.plain_text}")
        elif node.list_item is not None:
            lines.append(f"{'  ' * node.list_level}• {node.plain_text}")
        else:
            lines.append(node.plain_text)

    walk_with_context(doc, visit)
    return lines


def find_links(doc: Document) -> list[LinkInfo]:
    """Collect link annotations from every block."""
    links: list[LinkInfo] = []

    def visit(node: Node) -> None:
        for mark_def in node.mark_defs or ():
            if mark_def.type != LINK_TYPE:
                continue
            href = mark_def.raw.get("href")
            title = mark_def.raw.get("title")
            links.append(
                LinkInfo(
                    key=mark_def.key,
                    href=href if isinstance(href, str) else None,
                    title=title if isinstance(title, str) else None,
                    texts=[
                        span.text
                        for span in node.spans_with_mark(mark_def.key or "")
                        if span.text is not None
                    ],
                )
            )

    walk(doc, visit)
    return links


def table_of_contents(doc: Document) -> list[TocEntry]:
    """Heading blocks (h1-h6) in document order."""
    entries: list[TocEntry] = []

    def visit(node: Node, context: WalkContext) -> None:
        if not node.is_block:
            return
        level = heading_level(node.resolved_style)
        if level is not None:
            entries.append(
                TocEntry(
                    index=context.index,
                    block_number=context.block_count,
                    level=level,
                    text=node.plain_text,
                    key=node.key,
                )
            )

    walk_with_context(doc, visit)
    return entries


def shift_headings(doc: Document, downgrade: bool = False) -> Document:
    """Move every heading one level down (h1 -> h2) or up (h2 -> h1).

    Headings already at the limit (h6 when downgrading, h1 when upgrading)
    and all other nodes are copied unchanged.
    """
    step = 1 if downgrade else -1

    def shift(node: Node) -> Node:
        if not node.is_block:
            return node
        level = heading_level(node.resolved_style)
        if level is None:
            return node
        target = level + step
        if MIN_HEADING <= target <= MAX_HEADING:
            node.style = f"h{target}"
        return node

    return transform_nodes(doc, shift)
