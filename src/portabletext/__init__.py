"""Portable Text toolkit.

Decode, validate, traverse and re-encode Portable Text: a JSON array of
blocks and custom objects with inline spans and mark annotations. Fields
outside the typed schema, explicit nulls included, are preserved so a
decode/encode round trip loses nothing.

Quick start:

    doc = portabletext.decode('[{"_type":"block","children":[{"_type":"span","text":"Hi"}]}]')
    for node in doc:
        if node.is_block:
            print(node.plain_text)
    print(portabletext.encode_string(doc))
"""

__version__ = "0.1.0"

from .codec import decode, decode_string, encode, encode_string, encode_to
from .errors import (
    DecodeError,
    EncodeError,
    ErrorKind,
    ExpectedArrayError,
    ExpectedObjectError,
    InvalidMarksError,
    InvalidNumberError,
    InvalidTypeError,
    MissingTypeError,
    Op,
    PortableTextError,
    UnexpectedTokenError,
)
from .models import Document, JSONNumber, MarkDef, Node, Span, new_block, new_node
from .traversal import WalkContext, filter_nodes, transform_nodes, walk, walk_with_context
from .validation import Diagnostic, ValidationOptions, validate, validate_with_options

__all__ = [
    # Model
    "Document",
    "Node",
    "Span",
    "MarkDef",
    "JSONNumber",
    "new_block",
    "new_node",
    # Codec
    "decode",
    "decode_string",
    "encode",
    "encode_string",
    "encode_to",
    # Validation
    "Diagnostic",
    "ValidationOptions",
    "validate",
    "validate_with_options",
    # Traversal
    "WalkContext",
    "walk",
    "walk_with_context",
    "filter_nodes",
    "transform_nodes",
    # Errors
    "ErrorKind",
    "Op",
    "PortableTextError",
    "DecodeError",
    "EncodeError",
    "MissingTypeError",
    "InvalidTypeError",
    "ExpectedObjectError",
    "ExpectedArrayError",
    "InvalidMarksError",
    "InvalidNumberError",
    "UnexpectedTokenError",
]
