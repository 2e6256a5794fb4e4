"""Error types for decoding and encoding Portable Text.

Decode failures are fatal and raised as a ``DecodeError`` subclass that
carries the entity kind being parsed (``op``) and the structural path of
the offending value, e.g. ``[2].children[1].marks``. Each error kind has its
own subclass so callers can catch a single kind.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of decode failure."""

    MISSING_TYPE = "missing _type"
    INVALID_TYPE = "invalid _type"
    EXPECTED_OBJECT = "expected JSON object"
    EXPECTED_ARRAY = "expected JSON array"
    INVALID_MARKS = "marks must be an array of strings"
    INVALID_NUMBER = "invalid number"
    UNEXPECTED_TOKEN = "unexpected JSON token"


class Op(str, Enum):
    """Operation or entity kind active when an error occurred."""

    DECODE = "decode"
    NODE = "node"
    SPAN = "span"
    MARK_DEF = "markDef"
    ENCODE = "encode"


class PortableTextError(Exception):
    """Base class for all errors raised by this package."""


class DecodeError(PortableTextError, ValueError):
    """A document could not be decoded."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, op: Op, path: str = "", detail: Optional[str] = None):
        self.op = Op(op)
        self.path = path
        self.detail = detail
        super().__init__(str(self))

    @property
    def reason(self) -> str:
        """Kind description, extended with the detail when present."""
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value

    def __str__(self) -> str:
        if not self.path:
            return f"portabletext {self.op.value}: {self.reason}"
        return f"portabletext {self.op.value} at {self.path}: {self.reason}"

    def __reduce__(self):
        return (type(self), (self.op, self.path, self.detail))


class MissingTypeError(DecodeError):
    kind = ErrorKind.MISSING_TYPE


class InvalidTypeError(DecodeError):
    kind = ErrorKind.INVALID_TYPE


class ExpectedObjectError(DecodeError):
    kind = ErrorKind.EXPECTED_OBJECT


class ExpectedArrayError(DecodeError):
    kind = ErrorKind.EXPECTED_ARRAY


class InvalidMarksError(DecodeError):
    kind = ErrorKind.INVALID_MARKS


class InvalidNumberError(DecodeError):
    kind = ErrorKind.INVALID_NUMBER


class UnexpectedTokenError(DecodeError):
    kind = ErrorKind.UNEXPECTED_TOKEN


class EncodeError(PortableTextError, TypeError):
    """A value in the document tree cannot be written as JSON."""

    def __init__(self, path: str, message: str):
        self.op = Op.ENCODE
        self.path = path
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if not self.path:
            return f"portabletext encode: {self.message}"
        return f"portabletext encode at {self.path}: {self.message}"

    def __reduce__(self):
        return (type(self), (self.path, self.message))
