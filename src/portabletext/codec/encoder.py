"""Encoder - in-memory model back to JSON Portable Text.

Each entity is written from its ``raw`` mapping with the populated typed
fields laid over it (typed values win on a key collision). Absent typed
fields with no raw entry are omitted; raw explicit nulls are written as
``null``. Numbers read by the decoder are written with their original text.
The input document is never modified.
"""

import io
import json
import logging
import re
from typing import IO, Any, Optional

from portabletext.errors import EncodeError
from portabletext.models import KEY_FIELD, TYPE_FIELD, Document, MarkDef, Node, Span
from portabletext.models.raw import is_number, number_text

logger = logging.getLogger(__name__)

_SURROGATE = re.compile("[\ud800-\udfff]")

# Writer task tags
_VALUE = 0
_TEXT = 1
_CLOSE = 2


def encode(doc: Document, indent: Optional[int] = None) -> bytes:
    """Encode a document as UTF-8 JSON bytes.

    Args:
        doc: Document to encode.
        indent: Spaces per nesting level; compact output when None.

    Raises:
        EncodeError: If a raw value cannot be represented in JSON.
    """
    return encode_string(doc, indent=indent).encode("utf-8")


def encode_string(doc: Document, indent: Optional[int] = None) -> str:
    """Encode a document as a JSON string."""
    text = _write(to_wire(doc), indent)
    logger.debug("Encoded %d nodes (%d chars)", len(doc), len(text))
    return text


def encode_to(fp: IO, doc: Document, indent: Optional[int] = None) -> None:
    """Encode a document to a text or binary stream."""
    if isinstance(fp, io.TextIOBase):
        fp.write(encode_string(doc, indent=indent))
    else:
        fp.write(encode(doc, indent=indent))


def to_wire(doc: Document) -> list[dict[str, Any]]:
    """Convert a document to plain JSON-shaped data using wire field names.

    Raw containers are shared with the document, not copied.
    """
    return [node_to_wire(node) for node in doc]


def node_to_wire(node: Node) -> dict[str, Any]:
    out: dict[str, Any] = {TYPE_FIELD: node.type}
    if node.key is not None:
        out[KEY_FIELD] = node.key
    if node.style is not None:
        out["style"] = node.style
    if node.children is not None:
        out["children"] = [span_to_wire(span) for span in node.children]
    if node.mark_defs is not None:
        out["markDefs"] = [mark_def_to_wire(md) for md in node.mark_defs]
    if node.list_item is not None:
        out["listItem"] = node.list_item
    if node.level is not None:
        out["level"] = node.level
    return _merge_raw(out, node.raw)


def span_to_wire(span: Span) -> dict[str, Any]:
    out: dict[str, Any] = {TYPE_FIELD: span.type}
    if span.text is not None:
        out["text"] = span.text
    if span.marks is not None:
        out["marks"] = list(span.marks)
    return _merge_raw(out, span.raw)


def mark_def_to_wire(mark_def: MarkDef) -> dict[str, Any]:
    out: dict[str, Any] = {TYPE_FIELD: mark_def.type}
    if mark_def.key is not None:
        out[KEY_FIELD] = mark_def.key
    return _merge_raw(out, mark_def.raw)


def _merge_raw(typed: dict[str, Any], raw: dict[str, Any]) -> dict[str, Any]:
    for name, value in raw.items():
        typed.setdefault(name, value)
    return typed


def _write(root: Any, indent: Optional[int]) -> str:
    """Serialize a JSON-shaped value, reporting the path of anything unsupported.

    Containers are expanded on an explicit stack, so nesting depth is bounded
    by memory rather than the interpreter's recursion limit.
    """
    sep = ": " if indent is not None else ":"
    chunks: list[str] = []
    active: set[int] = set()  # ids of containers currently being written
    stack: list[tuple] = [(_VALUE, root, "", 0)]

    while stack:
        task = stack.pop()
        if task[0] == _TEXT:
            chunks.append(task[1])
            continue
        if task[0] == _CLOSE:
            active.discard(task[2])
            chunks.append(task[1])
            continue

        _, value, path, depth = task
        if isinstance(value, dict):
            members = []
            for key, item in value.items():
                if not isinstance(key, str):
                    raise EncodeError(path, f"object key {key!r} is not a string")
                members.append((_string(key) + sep, item, f"{path}.{key}"))
            _push_container(stack, active, value, path, "{", members, "}", indent, depth)
        elif isinstance(value, (list, tuple)):
            members = [("", item, f"{path}[{i}]") for i, item in enumerate(value)]
            _push_container(stack, active, value, path, "[", members, "]", indent, depth)
        else:
            chunks.append(_scalar(value, path))

    return "".join(chunks)


def _push_container(
    stack: list[tuple],
    active: set[int],
    container: Any,
    path: str,
    open_: str,
    members: list[tuple[str, Any, str]],
    close: str,
    indent: Optional[int],
    depth: int,
) -> None:
    if id(container) in active:
        raise EncodeError(path, "encountered a cycle")
    if not members:
        stack.append((_TEXT, open_ + close))
        return

    if indent is None:
        first, inner, outer = "", ",", ""
    else:
        first = "\n" + " " * (indent * (depth + 1))
        inner = "," + first
        outer = "\n" + " " * (indent * depth)

    active.add(id(container))
    stack.append((_CLOSE, outer + close, id(container)))
    # Pushed in reverse so members pop in order, each after its prefix
    for i in range(len(members) - 1, -1, -1):
        prefix, item, item_path = members[i]
        stack.append((_VALUE, item, item_path, depth + 1))
        stack.append((_TEXT, (first if i == 0 else inner) + prefix))
    stack.append((_TEXT, open_))


def _scalar(value: Any, path: str) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return _string(value)
    if is_number(value):
        try:
            return number_text(value)
        except ValueError as e:
            raise EncodeError(path, str(e)) from e
    raise EncodeError(path, f"unsupported value of type {type(value).__name__}")


def _string(value: str) -> str:
    # ensure_ascii=False keeps text readable; <, > and & are never escaped.
    # Lone surrogates have no UTF-8 form and are written as \u escapes.
    return _SURROGATE.sub(_escape_surrogate, json.dumps(value, ensure_ascii=False))


def _escape_surrogate(match: re.Match) -> str:
    return f"\\u{ord(match.group()):04x}"
