"""JSON codec for Portable Text.

Decoder and encoder are symmetric: anything ``encode`` produces decodes back
to an equal document, explicit nulls and unknown fields included.
"""

from .decoder import decode, decode_string, parse_mark_def, parse_node, parse_span
from .encoder import encode, encode_string, encode_to, to_wire

__all__ = [
    # Decoder
    "decode",
    "decode_string",
    "parse_node",
    "parse_span",
    "parse_mark_def",
    # Encoder
    "encode",
    "encode_string",
    "encode_to",
    "to_wire",
]
