"""
Bencode encoder producing canonical output (sorted keys, minimal integers).
"""
from .errors import BencodeValueError, DecodeErrorKind
from .options import COLON, DICT_BEGIN, END, INT_BEGIN, LIST_BEGIN
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, to_key_bytes

__all__ = ["encode", "encode_int", "encode_bytes", "encode_str", "encode_list", "encode_dict"]


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""

    if isinstance(obj, bool):
        raise TypeError(f"Cannot bencode object of type {type(obj)}")

    if isinstance(obj, (int, BencodeInt)):
        value = obj if isinstance(obj, int) else obj.value
        return encode_int(value)

    if isinstance(obj, BencodeString):
        return encode_bytes(obj.value)

    if isinstance(obj, str):
        return encode_str(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return encode_bytes(obj)

    if isinstance(obj, (list, tuple, BencodeList)):
        return encode_list(obj)

    if isinstance(obj, (dict, BencodeDict)):
        return encode_dict(obj)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return INT_BEGIN + str(int(n)).encode() + END


def encode_bytes(b) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    b = bytes(b)
    return str(len(b)).encode() + COLON + b


def encode_str(s: str) -> bytes:
    """Encodes a string as UTF-8 bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode("utf-8"))


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    return LIST_BEGIN + b"".join(encode(x) for x in lst) + END


def encode_dict(d) -> bytes:
    """
    Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse).
    Keys are always emitted in ascending raw-byte order, whatever order the
    mapping holds them in.
    """
    entries = {}
    for key, value in d.items():
        key_bytes = to_key_bytes(key)
        if key_bytes in entries:
            raise BencodeValueError(f"duplicate dictionary key {key_bytes!r}", DecodeErrorKind.DUPLICATE_KEY)
        entries[key_bytes] = value

    parts = [DICT_BEGIN]
    for key_bytes in sorted(entries):
        parts.append(encode_bytes(key_bytes))
        parts.append(encode(entries[key_bytes]))
    parts.append(END)
    return b"".join(parts)
