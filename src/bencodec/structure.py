"""
Data structures for representing Bencoded types.
"""
from types import MappingProxyType

from .errors import BencodeValueError, DecodeErrorKind

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "to_bencode",
    "to_key_bytes",
]

_BYTES_LIKE = (bytes, bytearray, memoryview)


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ("_value",)

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, val):
        if name == "_value" and not hasattr(self, "_value"):
            object.__setattr__(self, name, val)
            return
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._value == other._value

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ()

    def __init__(self, value: int):
        # bool is an int subclass but has no Bencode meaning
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("BencodeInt requires an integer.")
        self._value = int(value)

    def __hash__(self):
        return hash((BencodeInt, self._value))

    def __int__(self):
        return self._value


class BencodeString(BencodeType):
    """
    Represents a Bencoded byte string.

    The payload is always raw bytes. Use `text()` to interpret it as text;
    decoding never does that on the caller's behalf.
    """
    __slots__ = ()

    def __init__(self, value):
        if isinstance(value, str):
            value = value.encode("utf-8")
        elif not isinstance(value, _BYTES_LIKE):
            raise TypeError("BencodeString requires bytes.")
        self._value = bytes(value)

    def text(self, encoding: str = "utf-8") -> str:
        """Interpret the raw bytes as text, failing loudly on invalid data."""
        try:
            return self._value.decode(encoding)
        except UnicodeDecodeError as exc:
            raise BencodeValueError(f"string is not valid {encoding}: {exc.reason}") from exc

    def __hash__(self):
        return hash((BencodeString, self._value))

    def __len__(self):
        return len(self._value)

    def __bytes__(self):
        return self._value


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __slots__ = ()
    __hash__ = None

    def __init__(self, value=()):
        if isinstance(value, (str, _BYTES_LIKE, dict)):
            raise TypeError("BencodeList requires a sequence of Bencode values.")
        try:
            items = tuple(value)
        except TypeError as exc:
            raise TypeError("BencodeList requires a sequence of Bencode values.") from exc
        for item in items:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode values, got {type(item).__name__}.")
        self._value = items

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __getitem__(self, index):
        return self._value[index]

    def __repr__(self):
        return f"BencodeList({list(self._value)!r})"


def to_key_bytes(key) -> bytes:
    """Normalizes a dictionary key (bytes, BencodeString or str) to raw bytes."""
    if isinstance(key, BencodeString):
        return key.value
    if isinstance(key, _BYTES_LIKE):
        return bytes(key)
    if isinstance(key, str):
        return key.encode("utf-8")
    raise TypeError(f"BencodeDict keys must be byte strings, got {type(key).__name__}.")


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are normalized to bytes, must be unique, and are kept sorted by raw
    byte value so iteration order is always the canonical encoding order.
    """
    __slots__ = ()
    __hash__ = None

    def __init__(self, value=()):
        pairs = value.items() if hasattr(value, "items") else value
        entries = {}
        for k, v in pairs:
            key = to_key_bytes(k)
            if key in entries:
                raise BencodeValueError(f"duplicate dictionary key {key!r}", DecodeErrorKind.DUPLICATE_KEY)
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode values, got {type(v).__name__}.")
            entries[key] = v
        self._value = MappingProxyType(dict(sorted(entries.items())))

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return dict(self._value) == dict(other._value)

    def __len__(self):
        return len(self._value)

    def __iter__(self):
        return iter(self._value)

    def __contains__(self, key):
        try:
            return to_key_bytes(key) in self._value
        except TypeError:
            return False

    def __getitem__(self, key):
        return self._value[to_key_bytes(key)]

    def get(self, key, default=None):
        return self._value.get(to_key_bytes(key), default)

    def keys(self):
        return self._value.keys()

    def values(self):
        return self._value.values()

    def items(self):
        return self._value.items()

    def __repr__(self):
        return f"BencodeDict({dict(self._value)!r})"


def to_bencode(obj) -> BencodeType:
    """Wraps plain Python data (int, bytes, str, list, dict) into Bencode types."""
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode object of type <class 'bool'>")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (str,) + _BYTES_LIKE):
        return BencodeString(obj)

    if isinstance(obj, (list, tuple)):
        return BencodeList(to_bencode(x) for x in obj)

    if isinstance(obj, dict):
        return BencodeDict((k, to_bencode(v)) for k, v in obj.items())

    raise TypeError(f"Cannot bencode object of type {type(obj)}")
