"""
Bencode decoder for BitTorrent metainfo, tracker responses and DHT messages.
"""
from typing import Dict, Optional, Tuple

from .errors import BencodeDecodeError, DecodeErrorKind
from .options import COLON, DICT_BEGIN, END, INT_BEGIN, LIST_BEGIN, DecoderOptions, KeyOrder
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, to_key_bytes

__all__ = ["BencodeDecoder", "decode", "decode_all", "raw_value"]

_SCAN_CHUNK = 4096


class BencodeDecoder:
    """
    Decodes one Bencoded value from the start of a byte buffer.

    The buffer is held as a memoryview, so string bodies and raw value spans
    are sliced out of it without copying the whole input.
    """
    def __init__(self, data, options: Optional[DecoderOptions] = None):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Cannot decode object of type {type(data)}, expected bytes.")
        view = memoryview(data)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
        self.data = view
        self.options = options if options is not None else DecoderOptions()
        self.i = 0  # cursor index
        # key -> (start, end) of each value in a top-level dictionary
        self.spans: Dict[bytes, Tuple[int, int]] = {}

    def decode(self) -> Tuple[BencodeType, int]:
        """Decodes a single value and returns it with the number of bytes consumed."""
        if not self.data:
            raise self._error(DecodeErrorKind.EMPTY_INPUT, 0, "no data to decode")
        self.i = 0
        self.spans = {}
        try:
            value = self._parse_value(0)
        except RecursionError:
            # max_depth set above what the interpreter stack allows
            raise self._error(
                DecodeErrorKind.NESTING_TOO_DEEP, self.i, "interpreter recursion limit reached",
            ) from None
        return value, self.i

    # --------------------------
    # Low-level utilities
    # --------------------------

    @staticmethod
    def _error(kind: DecodeErrorKind, offset: int, detail: str = "") -> BencodeDecodeError:
        return BencodeDecodeError(kind, offset, detail)

    def _peek(self, kind: DecodeErrorKind) -> bytes:
        """Returns the byte at the cursor, or raises `kind` if the input ran out."""
        if self.i >= len(self.data):
            raise self._error(kind, self.i, "unexpected end of input")
        return bytes(self.data[self.i:self.i+1])

    def _find(self, delim: bytes, start: int, kind: DecodeErrorKind) -> int:
        """Scans forward from `start` for `delim` without running past the buffer."""
        data = self.data
        for chunk_start in range(start, len(data), _SCAN_CHUNK):
            # bounded copy so bytes.find can do the search
            pos = bytes(data[chunk_start:chunk_start + _SCAN_CHUNK]).find(delim)
            if pos != -1:
                return chunk_start + pos
        raise self._error(kind, len(data), f"missing {delim!r} terminator")

    def _at_end(self, kind: DecodeErrorKind) -> bool:
        """
        Either consumes a container's closing 'e' and reports True, or leaves
        the cursor on the next element and reports False.
        """
        if self._peek(kind) == END:
            self.i += 1
            return True
        return False

    def _enter(self, depth: int):
        if depth >= self.options.max_depth:
            raise self._error(
                DecodeErrorKind.NESTING_TOO_DEEP, self.i,
                f"more than {self.options.max_depth} nested containers",
            )

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, depth: int) -> BencodeType:
        ch = self._peek(DecodeErrorKind.EMPTY_INPUT)

        if ch == INT_BEGIN:
            return self._parse_int()

        if ch.isdigit():  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == LIST_BEGIN:
            return self._parse_list(depth)

        if ch == DICT_BEGIN:
            return self._parse_dict(depth)

        raise self._error(DecodeErrorKind.UNRECOGNIZED_TYPE, self.i, f"unexpected byte {ch!r}")

    def _parse_int(self) -> BencodeInt:
        """Parses i<digits>e, rejecting leading zeros and negative zero."""
        start = self.i + 1  # skip 'i'
        end = self._find(END, start, DecodeErrorKind.MALFORMED_INTEGER)
        span = bytes(self.data[start:end])

        if not span:
            raise self._error(DecodeErrorKind.EMPTY_INTEGER, start, "no digits between 'i' and 'e'")

        negative = span[:1] == b"-"
        digits = span[1:] if negative else span

        if not digits:
            raise self._error(DecodeErrorKind.MALFORMED_INTEGER, start, "sign without digits")
        if negative and digits[:1] == b"0":
            raise self._error(DecodeErrorKind.MALFORMED_INTEGER, start, "negative zero or leading zero")
        if digits[:1] == b"0" and len(digits) > 1:
            raise self._error(DecodeErrorKind.MALFORMED_INTEGER, start, "leading zero")
        if not digits.isdigit():
            raise self._error(DecodeErrorKind.MALFORMED_INTEGER, start, f"invalid integer literal {span!r}")

        try:
            num = int(span)
        except ValueError as exc:
            # only reachable past the interpreter's int/str conversion limit
            raise self._error(DecodeErrorKind.MALFORMED_INTEGER, start, str(exc)) from exc

        if not self.options.int_in_range(num):
            raise self._error(DecodeErrorKind.MALFORMED_INTEGER, start, "integer out of range")

        self.i = end + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self) -> BencodeString:
        """Parses a length-prefixed byte string."""
        start = self.i
        colon = self._find(COLON, start, DecodeErrorKind.INVALID_LENGTH_PREFIX)
        length_bytes = bytes(self.data[start:colon])

        if not length_bytes.isdigit():
            raise self._error(
                DecodeErrorKind.INVALID_LENGTH_PREFIX, start, f"invalid string length {length_bytes!r}",
            )

        body = colon + 1
        available = len(self.data) - body
        significant = length_bytes.lstrip(b"0") or b"0"
        # compare digit counts first so int() never sees an oversized prefix
        if len(significant) > len(str(available)) or int(significant) > available:
            raise self._error(
                DecodeErrorKind.TRUNCATED_STRING, len(self.data),
                f"declared {significant.decode()[:20]} bytes, {available} available",
            )

        length = int(significant)
        self.i = body + length
        return BencodeString(self.data[body:self.i])

    def _parse_list(self, depth: int) -> BencodeList:
        """Parses a list from the Bencoded data."""
        self._enter(depth)
        self.i += 1  # skip 'l'
        items = []

        while not self._at_end(DecodeErrorKind.EMPTY_INPUT):
            items.append(self._parse_value(depth + 1))

        return BencodeList(items)

    def _parse_dict(self, depth: int) -> BencodeDict:
        """Parses a dictionary, enforcing string keys, uniqueness and key order."""
        self._enter(depth)
        self.i += 1  # skip 'd'
        obj = {}
        last_key = None
        strict = self.options.key_order is KeyOrder.STRICT

        while not self._at_end(DecodeErrorKind.TRUNCATED_DICTIONARY):
            key_offset = self.i
            # keys MUST be strings
            key = self._parse_value(depth + 1)
            if not isinstance(key, BencodeString):
                raise self._error(
                    DecodeErrorKind.NON_STRING_KEY, key_offset, f"{type(key).__name__} used as key",
                )

            raw_key = key.value
            if raw_key in obj:
                raise self._error(DecodeErrorKind.DUPLICATE_KEY, key_offset, f"key {raw_key!r} repeated")
            if strict and last_key is not None and raw_key < last_key:
                raise self._error(
                    DecodeErrorKind.UNORDERED_KEYS, key_offset, f"key {raw_key!r} follows {last_key!r}",
                )
            last_key = raw_key

            if self.i >= len(self.data) or self.data[self.i] == END[0]:
                raise self._error(
                    DecodeErrorKind.TRUNCATED_DICTIONARY, self.i, f"key {raw_key!r} has no value",
                )

            value_start = self.i
            obj[raw_key] = self._parse_value(depth + 1)
            if depth == 0:
                self.spans[raw_key] = (value_start, self.i)

        return BencodeDict(obj)


def decode(data, options: Optional[DecoderOptions] = None) -> Tuple[BencodeType, int]:
    """
    Decodes one value from the start of `data`.
    Returns (value, consumed) where `consumed` is the number of bytes it spanned.
    """
    return BencodeDecoder(data, options).decode()


def decode_all(data, options: Optional[DecoderOptions] = None) -> BencodeType:
    """Decodes `data`, requiring that it holds exactly one value and nothing else."""
    decoder = BencodeDecoder(data, options)
    value, consumed = decoder.decode()
    if consumed != len(decoder.data):
        raise BencodeDecodeError(DecodeErrorKind.UNRECOGNIZED_TYPE, consumed, "trailing data after value")
    return value


def raw_value(data, key, options: Optional[DecoderOptions] = None) -> memoryview:
    """
    Returns the exact encoded bytes of `key`'s value in a top-level dictionary,
    as a zero-copy slice of `data`. Useful for hashing an embedded dictionary
    (e.g. a torrent's info dictionary) without re-encoding it.
    """
    decoder = BencodeDecoder(data, options)
    root, _ = decoder.decode()
    if not isinstance(root, BencodeDict):
        raise TypeError(f"top-level value is {type(root).__name__}, not BencodeDict")

    start, end = decoder.spans[to_key_bytes(key)]
    return decoder.data[start:end]
