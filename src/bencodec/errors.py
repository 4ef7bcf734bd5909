"""
Exceptions raised while decoding or constructing Bencode values.
"""
from enum import Enum
from typing import Optional

__all__ = [
    "DecodeErrorKind",
    "BencodeError",
    "BencodeDecodeError",
    "BencodeValueError",
]


class DecodeErrorKind(Enum):
    """Every way a Bencode buffer can be rejected."""
    EMPTY_INPUT = "empty input"
    UNRECOGNIZED_TYPE = "unrecognized type"
    EMPTY_INTEGER = "empty integer"
    MALFORMED_INTEGER = "malformed integer"
    INVALID_LENGTH_PREFIX = "invalid length prefix"
    TRUNCATED_STRING = "truncated string"
    TRUNCATED_DICTIONARY = "truncated dictionary"
    NON_STRING_KEY = "non-string key"
    DUPLICATE_KEY = "duplicate key"
    UNORDERED_KEYS = "unordered keys"
    NESTING_TOO_DEEP = "nesting too deep"


class BencodeError(Exception):
    """Base class for all bencodec errors."""


class BencodeDecodeError(BencodeError, ValueError):
    """
    Raised when a buffer is not valid Bencode.
    `offset` is the absolute byte position where the problem was detected.
    """
    def __init__(self, kind: DecodeErrorKind, offset: int, detail: str = ""):
        self.kind = kind
        self.offset = offset
        self.detail = detail
        message = f"{kind.value} at offset {offset}"
        if detail:
            message += f": {detail}"
        super().__init__(message)

    def __reduce__(self):
        return type(self), (self.kind, self.offset, self.detail)


class BencodeValueError(BencodeError, ValueError):
    """Raised when a value cannot be built or interpreted as requested."""
    def __init__(self, message: str, kind: Optional[DecodeErrorKind] = None):
        self.kind = kind
        super().__init__(message)
