"""Raw value store for fields the typed models do not cover.

Raw values are plain JSON-shaped Python data: ``dict`` (string keys),
``list``, ``str``, ``bool``, ``None`` for an explicit JSON null, and
``JSONNumber`` for numbers read from a document. ``JSONNumber`` keeps the
literal text of the number so large integers and high-precision decimals are
written back exactly as they were read.
"""

import math
import re
from decimal import Decimal
from typing import Any, Union

# Grammar of a JSON number literal (RFC 8259, section 6)
_NUMBER_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"-?(?:0|[1-9]\d*)")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

RawFields = dict[str, Any]


class JSONNumber:
    """A JSON number that remembers its exact source text."""

    __slots__ = ("_text",)

    def __init__(self, text: Union[str, int, Decimal, "JSONNumber"]):
        if isinstance(text, JSONNumber):
            text = text.text
        elif isinstance(text, bool):
            raise TypeError("bool is not a JSON number")
        elif isinstance(text, (int, Decimal)):
            text = str(text)
        if not isinstance(text, str) or not _NUMBER_RE.fullmatch(text):
            raise ValueError(f"not a JSON number literal: {text!r}")
        object.__setattr__(self, "_text", text)

    def __setattr__(self, name, value):
        raise AttributeError("JSONNumber is immutable")

    @property
    def text(self) -> str:
        """Literal text as it appears in JSON."""
        return self._text

    @property
    def is_integer_literal(self) -> bool:
        """True when the text has no fraction or exponent part."""
        return _INTEGER_RE.fullmatch(self._text) is not None

    def to_decimal(self) -> Decimal:
        return Decimal(self._text)

    def __int__(self) -> int:
        if self.is_integer_literal:
            return int(self._text)
        return int(self.to_decimal())

    def __float__(self) -> float:
        return float(self._text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JSONNumber):
            return self.to_decimal() == other.to_decimal()
        if isinstance(other, bool):
            return False
        if isinstance(other, (int, Decimal)):
            return self.to_decimal() == other
        if isinstance(other, float):
            return math.isfinite(other) and self.to_decimal() == Decimal(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.to_decimal())

    def __repr__(self) -> str:
        return f"JSONNumber({self._text!r})"

    def __str__(self) -> str:
        return self._text

    def __copy__(self) -> "JSONNumber":
        return self

    def __deepcopy__(self, memo) -> "JSONNumber":
        return self


def parse_int64(number: JSONNumber) -> int:
    """Convert a number literal to a signed 64-bit integer.

    Raises:
        ValueError: If the literal is not a base-10 integer or is out of range.
    """
    if not number.is_integer_literal:
        raise ValueError(f"not an integer: {number.text}")
    value = int(number.text)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"integer out of range: {number.text}")
    return value


def deep_copy_value(value: Any) -> Any:
    """Return a structurally independent copy of a raw value.

    Containers are rebuilt (tuples become lists) using an explicit stack, so
    arbitrarily deep values can be copied. Scalars, including ``JSONNumber``,
    are immutable and shared.
    """
    if not isinstance(value, (dict, list, tuple)):
        return value
    root: Any = {} if isinstance(value, dict) else []
    pending = [(value, root)]
    while pending:
        source, target = pending.pop()
        items = source.items() if isinstance(source, dict) else enumerate(source)
        for key, item in items:
            if isinstance(item, (dict, list, tuple)):
                copy: Any = {} if isinstance(item, dict) else []
                pending.append((item, copy))
            else:
                copy = item
            if isinstance(target, dict):
                target[key] = copy
            else:
                target.append(copy)
    return root


def deep_copy_fields(fields: RawFields) -> RawFields:
    """Deep-copy a raw field mapping."""
    return {k: deep_copy_value(v) for k, v in fields.items()}


def is_number(value: Any) -> bool:
    """True for values the encoder writes as a JSON number."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (JSONNumber, int, float, Decimal))


def number_text(value: Any) -> str:
    """Render a numeric raw value as a JSON number literal.

    Raises:
        ValueError: For NaN and infinite values.
    """
    if isinstance(value, JSONNumber):
        return value.text
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"non-finite number {value!r}")
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"non-finite number {value!r}")
        return str(value)
    raise TypeError(f"not a number: {type(value).__name__}")
