"""Decoder - JSON Portable Text to the in-memory model.

The top-level array is consumed one element at a time and each element is
classified immediately, so decoding stops at the first failing node even if
the remainder of the input is malformed. For every object:

- ``_type`` is mandatory and must be a non-empty string
- an explicit null goes to ``raw``, never to a typed slot
- a correctly shaped known field goes to its typed slot
- a wrong-shape known field goes to ``raw``, except span ``marks``
  (InvalidMarks) and a non-integer numeric ``level`` (InvalidNumber)
- unknown fields go to ``raw``

Numbers are read as ``JSONNumber`` so their literal text survives a round trip.
"""

import json
import logging
import re
from typing import IO, Any, Callable, Iterator, Union

from portabletext.errors import (
    ExpectedArrayError,
    ExpectedObjectError,
    InvalidMarksError,
    InvalidNumberError,
    InvalidTypeError,
    MissingTypeError,
    Op,
    UnexpectedTokenError,
)
from portabletext.models import (
    KEY_FIELD,
    TYPE_FIELD,
    Document,
    JSONNumber,
    MarkDef,
    Node,
    Span,
)
from portabletext.models.raw import parse_int64

logger = logging.getLogger(__name__)

Source = Union[str, bytes, bytearray, IO[str], IO[bytes]]

# Known string-valued fields: wire name -> model attribute
NODE_STRING_FIELDS = {
    KEY_FIELD: "key",
    "style": "style",
    "listItem": "list_item",
}
SPAN_STRING_FIELDS = {
    "text": "text",
}
MARK_DEF_STRING_FIELDS = {
    KEY_FIELD: "key",
}

_WHITESPACE = re.compile(r"[ \t\n\r]*")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid literal {name}")


_json = json.JSONDecoder(
    parse_int=JSONNumber,
    parse_float=JSONNumber,
    parse_constant=_reject_constant,
)


def decode(source: Source) -> Document:
    """Decode a Portable Text document.

    Args:
        source: JSON text, UTF-8 bytes, or a readable text/binary stream.

    Returns:
        The decoded document (a list of nodes in source order).

    Raises:
        DecodeError: On the first structural failure; no partial document
            is returned.
    """
    text = _read_source(source)
    doc: Document = []
    for index, value in _iter_array(text):
        doc.append(parse_node(value, f"[{index}]"))
    logger.debug("Decoded %d nodes", len(doc))
    return doc


def decode_string(text: str) -> Document:
    """Decode a Portable Text document from a string."""
    return decode(text)


def _read_source(source: Source) -> str:
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, (bytes, bytearray)):
        try:
            return bytes(source).decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnexpectedTokenError(Op.DECODE, detail="input is not valid UTF-8") from e
    if not isinstance(source, str):
        raise TypeError(f"cannot decode {type(source).__name__}, expected str, bytes or a stream")
    return source


def _skip_whitespace(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _iter_array(text: str) -> Iterator[tuple[int, Any]]:
    """Yield (index, value) for each element of a top-level JSON array."""
    pos = _skip_whitespace(text, 0)
    if not text.startswith("[", pos):
        raise UnexpectedTokenError(Op.DECODE, detail="expected '['")
    pos = _skip_whitespace(text, pos + 1)

    index = 0
    if text.startswith("]", pos):
        _expect_end(text, pos + 1)
        return

    while True:
        try:
            value, pos = _json.raw_decode(text, pos)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the json scanner supports
            raise UnexpectedTokenError(Op.DECODE, f"[{index}]", str(e)) from e
        yield index, value
        index += 1

        pos = _skip_whitespace(text, pos)
        if text.startswith(",", pos):
            pos = _skip_whitespace(text, pos + 1)
            continue
        if text.startswith("]", pos):
            _expect_end(text, pos + 1)
            return
        raise UnexpectedTokenError(Op.DECODE, detail="expected ',' or ']'")


def _expect_end(text: str, pos: int) -> None:
    if _skip_whitespace(text, pos) != len(text):
        raise UnexpectedTokenError(Op.DECODE, detail="unexpected data after ']'")


def _discriminator(obj: dict, op: Op, path: str) -> str:
    """Extract the mandatory ``_type`` value."""
    if TYPE_FIELD not in obj:
        raise MissingTypeError(op, path)
    value = obj[TYPE_FIELD]
    if not isinstance(value, str) or not value:
        raise InvalidTypeError(op, path)
    return value


def _classify_string(
    fields: dict[str, Any],
    raw: dict[str, Any],
    attr: str,
    name: str,
    value: Any,
) -> None:
    if isinstance(value, str):
        fields[attr] = value
    else:
        raw[name] = value


def parse_node(value: Any, path: str) -> Node:
    """Classify one top-level element into a Node."""
    if not isinstance(value, dict):
        raise ExpectedObjectError(Op.NODE, path)
    node_type = _discriminator(value, Op.NODE, path)

    fields: dict[str, Any] = {}
    raw: dict[str, Any] = {}
    for name, item in value.items():
        if name == TYPE_FIELD:
            continue
        if item is None:
            # Explicit null is kept apart from an absent field
            raw[name] = None
        elif name in NODE_STRING_FIELDS:
            _classify_string(fields, raw, NODE_STRING_FIELDS[name], name, item)
        elif name == "children":
            fields["children"] = _parse_array(item, f"{path}.children", parse_span)
        elif name == "markDefs":
            fields["mark_defs"] = _parse_array(item, f"{path}.markDefs", parse_mark_def)
        elif name == "level":
            if isinstance(item, JSONNumber):
                try:
                    fields["level"] = parse_int64(item)
                except ValueError as e:
                    raise InvalidNumberError(Op.NODE, f"{path}.level", str(e)) from e
            else:
                raw[name] = item
        else:
            raw[name] = item

    return Node(type=node_type, raw=raw, **fields)


def parse_span(value: Any, path: str) -> Span:
    """Classify one element of a block's children into a Span."""
    if not isinstance(value, dict):
        raise ExpectedObjectError(Op.SPAN, path)
    span_type = _discriminator(value, Op.SPAN, path)

    fields: dict[str, Any] = {}
    raw: dict[str, Any] = {}
    for name, item in value.items():
        if name == TYPE_FIELD:
            continue
        if item is None:
            raw[name] = None
        elif name in SPAN_STRING_FIELDS:
            _classify_string(fields, raw, SPAN_STRING_FIELDS[name], name, item)
        elif name == "marks":
            fields["marks"] = _parse_marks(item, f"{path}.marks")
        else:
            raw[name] = item

    return Span(type=span_type, raw=raw, **fields)


def parse_mark_def(value: Any, path: str) -> MarkDef:
    """Classify one element of a block's markDefs into a MarkDef."""
    if not isinstance(value, dict):
        raise ExpectedObjectError(Op.MARK_DEF, path)
    mark_type = _discriminator(value, Op.MARK_DEF, path)

    fields: dict[str, Any] = {}
    raw: dict[str, Any] = {}
    for name, item in value.items():
        if name == TYPE_FIELD:
            continue
        if item is None:
            raw[name] = None
        elif name in MARK_DEF_STRING_FIELDS:
            _classify_string(fields, raw, MARK_DEF_STRING_FIELDS[name], name, item)
        else:
            raw[name] = item

    return MarkDef(type=mark_type, raw=raw, **fields)


def _parse_marks(value: Any, path: str) -> list[str]:
    # marks are cross-referenced against markDefs, so a bad shape is fatal
    if not isinstance(value, list):
        raise InvalidMarksError(Op.SPAN, path)
    for mark in value:
        if not isinstance(mark, str):
            raise InvalidMarksError(Op.SPAN, path)
    return list(value)


def _parse_array(value: Any, path: str, parse_item: Callable[[Any, str], Any]) -> list:
    if not isinstance(value, list):
        raise ExpectedArrayError(Op.NODE, path)
    return [parse_item(item, f"{path}[{i}]") for i, item in enumerate(value)]
