"""In-memory model of a Portable Text document.

Model Hierarchy:
- Document (list) → Node → Span (children) / MarkDef (markDefs)

Every entity keeps a ``raw`` mapping for fields outside its typed schema,
including explicit nulls, so a decoded document can be re-encoded without
losing information.
"""

from .node import (
    BLOCK_TYPE,
    DEFAULT_LIST_LEVEL,
    DEFAULT_STYLE,
    KEY_FIELD,
    SPAN_TYPE,
    TYPE_FIELD,
    Document,
    MarkDef,
    Node,
    Span,
    new_block,
    new_node,
)
from .raw import (
    JSONNumber,
    RawFields,
    deep_copy_fields,
    deep_copy_value,
)

__all__ = [
    # Constants
    "BLOCK_TYPE",
    "SPAN_TYPE",
    "DEFAULT_STYLE",
    "DEFAULT_LIST_LEVEL",
    "TYPE_FIELD",
    "KEY_FIELD",
    # Entities
    "Document",
    "Node",
    "Span",
    "MarkDef",
    # Builders
    "new_block",
    "new_node",
    # Raw values
    "JSONNumber",
    "RawFields",
    "deep_copy_fields",
    "deep_copy_value",
]
