"""Traversal and transform operations over top-level nodes.

``walk`` and ``walk_with_context`` hand the caller the document's own nodes,
so in-place edits are visible in the document. To stop early, raise from the
callback; the exception propagates to the caller unchanged.

``filter_nodes`` and ``transform_nodes`` never touch the source document:
results are built from deep copies, so they are safe to run concurrently
against the same source.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from portabletext.models import Document, Node


@dataclass(frozen=True)
class WalkContext:
    """Position information passed to walk_with_context callbacks."""

    index: int
    parent: Optional[Node] = None  # always None: only top-level nodes are walked
    depth: int = 0
    block_count: int = 0  # blocks visited before the current node


def walk(doc: Document, fn: Callable[[Node], None]) -> None:
    """Visit every top-level node in document order."""
    for node in doc:
        fn(node)


def walk_with_context(doc: Document, fn: Callable[[Node, WalkContext], None]) -> None:
    """Visit every top-level node in order with a WalkContext."""
    block_count = 0
    for index, node in enumerate(doc):
        context = WalkContext(index=index, parent=None, depth=0, block_count=block_count)
        if node.is_block:
            block_count += 1
        fn(node, context)


def filter_nodes(doc: Document, predicate: Callable[[Node], bool]) -> Document:
    """Return deep copies of the nodes that satisfy predicate, in order."""
    return [node.clone() for node in doc if predicate(node)]


def transform_nodes(doc: Document, fn: Callable[[Node], Optional[Node]]) -> Document:
    """Apply fn to a deep copy of each node.

    fn may modify and return its argument, return a replacement node, or
    return None to drop the node from the result.
    """
    result: Document = []
    for node in doc:
        transformed = fn(node.clone())
        if transformed is not None:
            result.append(transformed)
    return result
