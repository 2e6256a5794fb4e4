"""Entity models: Node, Span and MarkDef.

Each entity has a few typed fields plus a ``raw`` mapping that holds every
other field of the source object. A field lives in exactly one place: the
typed slot when it was present with the expected shape, otherwise ``raw``
(unknown fields, explicit nulls, wrong-shape values). ``None`` in a typed slot
means the field is absent.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .raw import RawFields, deep_copy_fields

BLOCK_TYPE = "block"
SPAN_TYPE = "span"
DEFAULT_STYLE = "normal"
DEFAULT_LIST_LEVEL = 1

# Wire names of the typed fields
TYPE_FIELD = "_type"
KEY_FIELD = "_key"


class Span(BaseModel):
    """Inline content inside a block's children.

    Usually ``type == "span"`` with text, but inline objects are allowed
    too; for those ``text`` is typically absent and ``raw`` holds the
    object's fields.
    """

    type: str
    text: Optional[str] = None
    marks: Optional[list[str]] = Field(
        None, description="Decorators and markDef keys applied to this span"
    )
    raw: RawFields = Field(default_factory=dict)

    def has_mark(self, mark: str) -> bool:
        """Check if the span carries a mark."""
        return bool(self.marks) and mark in self.marks

    def clone(self) -> "Span":
        """Deep copy, including nested raw containers."""
        return Span(
            type=self.type,
            text=self.text,
            marks=list(self.marks) if self.marks is not None else None,
            raw=deep_copy_fields(self.raw),
        )


class MarkDef(BaseModel):
    """Annotation definition attached to a block (e.g. a link).

    The annotation payload, such as ``href``, lives in ``raw``.
    """

    key: Optional[str] = Field(None, description="Identity referenced by Span.marks")
    type: str
    raw: RawFields = Field(default_factory=dict)

    def clone(self) -> "MarkDef":
        """Deep copy, including nested raw containers."""
        return MarkDef(key=self.key, type=self.type, raw=deep_copy_fields(self.raw))


class Node(BaseModel):
    """
    Top-level document node: a ``block`` or an arbitrary custom object.

    Only ``type == "block"`` has structural meaning; any other non-empty
    discriminator is an opaque custom object whose fields live in ``raw``.
    """

    type: str
    key: Optional[str] = None

    # Block fields
    style: Optional[str] = None
    children: Optional[list[Span]] = None
    mark_defs: Optional[list[MarkDef]] = None

    # List metadata
    list_item: Optional[str] = None
    level: Optional[int] = None

    raw: RawFields = Field(default_factory=dict)

    @classmethod
    def block(cls, style: str = DEFAULT_STYLE) -> "Node":
        """Create an empty block with the given style."""
        return cls(type=BLOCK_TYPE, style=style, children=[], mark_defs=[])

    @classmethod
    def custom(cls, node_type: str) -> "Node":
        """Create a custom object node."""
        return cls(type=node_type)

    @property
    def is_block(self) -> bool:
        """Check if this node is a Portable Text block."""
        return self.type == BLOCK_TYPE

    @property
    def resolved_style(self) -> str:
        """Get the style, or ``"normal"`` when none is set."""
        if self.style is not None:
            return self.style
        return DEFAULT_STYLE

    @property
    def plain_text(self) -> str:
        """Concatenated text of all children."""
        return "".join(child.text for child in self.children or () if child.text is not None)

    @property
    def list_level(self) -> int:
        """Get the list level, or 1 when none is set."""
        if self.level is not None:
            return self.level
        return DEFAULT_LIST_LEVEL

    def add_span(self, text: str, *marks: str) -> "Node":
        """Append a text span with zero or more marks. Returns self for chaining."""
        if self.children is None:
            self.children = []
        self.children.append(
            Span(type=SPAN_TYPE, text=text, marks=list(marks) if marks else None)
        )
        return self

    def add_mark_def(
        self,
        key: str,
        mark_type: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> "Node":
        """Append a mark definition. Returns self for chaining.

        Args:
            key: Key that spans reference in their marks.
            mark_type: Annotation type, e.g. "link".
            payload: Annotation fields (such as href), copied into raw.
        """
        if self.mark_defs is None:
            self.mark_defs = []
        self.mark_defs.append(
            MarkDef(key=key, type=mark_type, raw=deep_copy_fields(payload or {}))
        )
        return self

    def spans_with_mark(self, mark: str) -> list[Span]:
        """Children that carry the given mark, in order."""
        return [child for child in self.children or () if child.has_mark(mark)]

    def clone(self) -> "Node":
        """Deep copy, including children, markDefs and nested raw containers."""
        return Node(
            type=self.type,
            key=self.key,
            style=self.style,
            children=[c.clone() for c in self.children] if self.children is not None else None,
            mark_defs=(
                [m.clone() for m in self.mark_defs] if self.mark_defs is not None else None
            ),
            list_item=self.list_item,
            level=self.level,
            raw=deep_copy_fields(self.raw),
        )


Document = list[Node]
"""An ordered sequence of nodes; order is reading order."""


def new_block(style: str = DEFAULT_STYLE) -> Node:
    """Create an empty block with the given style."""
    return Node.block(style)


def new_node(node_type: str) -> Node:
    """Create a custom object node."""
    return Node.custom(node_type)
